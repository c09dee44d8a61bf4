"""Structured Logging — JSON formatter, logging setup, and process-level exception hooks.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (book_id, error_code, path, operation, method) surfaced when present
    - Unhandled exceptions outside a request are logged, never re-raised

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging called once on startup via lifespan
"""

import asyncio
import json
import logging
import sys
import threading
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

_EXTRA_FIELDS = ("book_id", "error_code", "path", "operation", "method")


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "text"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))


def install_exception_hooks() -> None:
    """Log uncaught exceptions from the main thread and worker threads."""

    def _log_uncaught(exc_type, exc_value, exc_tb):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_tb)
            return
        logger.critical(
            "Uncaught exception", exc_info=(exc_type, exc_value, exc_tb),
        )

    def _log_thread_exception(args: threading.ExceptHookArgs):
        logger.critical(
            f"Uncaught exception in thread {args.thread.name if args.thread else '?'}",
            exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
        )

    sys.excepthook = _log_uncaught
    threading.excepthook = _log_thread_exception


def log_loop_exception(loop: asyncio.AbstractEventLoop, context: dict) -> None:
    """Event-loop exception handler: unretrieved task errors are logged and dropped."""
    exc = context.get("exception")
    message = context.get("message", "Unhandled exception in event loop")
    if exc is not None:
        logger.error(
            f"Unhandled rejection: {message}",
            exc_info=(type(exc), exc, exc.__traceback__),
        )
    else:
        logger.error(f"Unhandled rejection: {message}")
