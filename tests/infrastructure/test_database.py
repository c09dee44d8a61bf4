"""Database Session Manager — schema creation, health check, disposal, error mapping."""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from bookshelf.core.errors import DatabaseError
from bookshelf.infrastructure.database import (
    DatabaseSessionManager, translate_db_error,
)


@pytest.fixture
async def manager():
    m = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    yield m
    await m.close()


async def test_create_schema_creates_books_table(manager):
    await manager.create_schema()
    async with manager.session() as db:
        result = await db.execute(text("SELECT COUNT(*) FROM books"))
        assert result.scalar_one() == 0


async def test_create_schema_is_idempotent(manager):
    await manager.create_schema()
    await manager.create_schema()


async def test_health_check_ok(manager):
    assert await manager.health_check() is True


async def test_session_maps_sqlalchemy_errors(manager):
    with pytest.raises(DatabaseError):
        async with manager.session() as db:
            await db.execute(text("SELECT * FROM missing_table"))


def test_translate_integrity_error():
    err = translate_db_error(IntegrityError("INSERT", {}, Exception("dup")), "create")
    assert err.message == "Database create failed: Integrity constraint violated"
    assert err.http_status == 500


def test_translate_operational_error():
    err = translate_db_error(OperationalError("SELECT", {}, Exception("down")), "list")
    assert err.message == "Database list failed: Connection or operational error"


def test_translate_generic_error():
    err = translate_db_error(SQLAlchemyError("boom"), "read")
    assert err.message == "Database read failed: Database operation failed"


def test_server_database_gets_pool_settings():
    m = DatabaseSessionManager(
        "postgresql+asyncpg://u:p@localhost/db", pool_size=3, max_overflow=1,
    )
    assert m.engine.pool.size() == 3
