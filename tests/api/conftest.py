"""API test fixtures — FastAPI test client over the in-memory test DB.

Invariants:
    - get_db dependency overridden to use the test session factory
    - app.state.db_manager points at the test engine (readiness probe)
    - failing_books swaps the gateway for one whose every call raises

Design Decisions:
    - httpx ASGITransport does not run the lifespan: fixtures wire the store by hand
"""

import pytest
from httpx import ASGITransport, AsyncClient

from bookshelf.core.errors import DatabaseError
from bookshelf.infrastructure.book_repository import get_book_repository
from bookshelf.infrastructure.database import get_db, DatabaseSessionManager
from bookshelf.main import app


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    app.state.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    app.state.db_manager = None


class FailingBookRepository:
    """Gateway whose every operation fails like an unreachable store."""

    def __init__(self, error: Exception | None = None):
        self.error = error or DatabaseError(
            "Connection or operational error", "execute",
        )
        self.calls: list[str] = []

    async def create(self, record):
        self.calls.append("create")
        raise self.error

    async def list_all(self):
        self.calls.append("list_all")
        raise self.error

    async def find_by_id(self, book_id):
        self.calls.append("find_by_id")
        raise self.error

    async def update(self, book_id, changes):
        self.calls.append("update")
        raise self.error

    async def delete_by_id(self, book_id):
        self.calls.append("delete_by_id")
        raise self.error


@pytest.fixture
def failing_books(client):
    """Replace the gateway with FailingBookRepository; returns the instance."""
    repo = FailingBookRepository()
    app.dependency_overrides[get_book_repository] = lambda: repo
    return repo
