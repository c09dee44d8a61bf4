"""Bookshelf API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure → {"error": "<message>"}
    - CORS configured from settings (any origin by default)
    - Database manager built on startup and disposed on shutdown via lifespan;
      uvicorn runs the shutdown half on SIGTERM/SIGINT

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Manager on app.state instead of a module global: routes get it injected
      through get_db, tests replace it with dependency_overrides
"""

import asyncio
import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bookshelf.api.error_handlers import register_error_handlers
from bookshelf.api.routes import books, health
from bookshelf.config import get_settings
from bookshelf.infrastructure.database import DatabaseSessionManager
from bookshelf.infrastructure.observability import (
    install_exception_hooks, log_loop_exception, setup_logging,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    install_exception_hooks()
    asyncio.get_running_loop().set_exception_handler(log_loop_exception)

    db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_schema:
        try:
            await db_manager.create_schema()
        except Exception:
            logger.critical("Failed to prepare database schema", exc_info=True)
            await db_manager.close()
            raise
    app.state.db_manager = db_manager
    logger.info(f"Bookshelf API started on port {settings.port}")
    try:
        yield
    finally:
        logger.info("Bookshelf API shutting down")
        await db_manager.close()
        app.state.db_manager = None


app = FastAPI(title="Bookshelf API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(books.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = get_settings()
    try:
        uvicorn.run(app, host=settings.host, port=settings.port)
    except Exception:
        logger.critical("Failed to start server", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    run()
