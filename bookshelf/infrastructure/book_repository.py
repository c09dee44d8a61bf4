"""Book Repository — SQLAlchemy implementation of the BookRepository gateway.

Invariants:
    - No validation or business rules here: records arrive already validated
    - find_by_id returns None for a missing row; update/delete raise RecordNotFoundError
    - Every SQLAlchemyError rolls the session back and surfaces as DatabaseError

Design Decisions:
    - One repository per request session (built by get_book_repository)
    - list_all orders by id: stable, insertion-ordered output across backends
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Sequence

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.core.errors import RecordNotFoundError
from bookshelf.core.repository_protocols import BookRepository
from bookshelf.infrastructure.database import get_db, translate_db_error
from bookshelf.models.book import Book
from bookshelf.schemas.book import BookCreate, BookUpdate

logger = logging.getLogger(__name__)


class SqlAlchemyBookRepository:
    """Persists books through an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def create(self, record: BookCreate) -> Book:
        book = Book(**record.model_dump())
        async with self._translate_errors("create"):
            self._db.add(book)
            await self._db.commit()
            await self._db.refresh(book)
        return book

    async def list_all(self) -> Sequence[Book]:
        async with self._translate_errors("list"):
            result = await self._db.execute(select(Book).order_by(Book.id))
            return result.scalars().all()

    async def find_by_id(self, book_id: int) -> Book | None:
        async with self._translate_errors("read"):
            return await self._db.get(Book, book_id)

    async def update(self, book_id: int, changes: BookUpdate) -> Book:
        async with self._translate_errors("update"):
            book = await self._db.get(Book, book_id)
            if book is None:
                raise RecordNotFoundError(book_id, "update")
            for field, value in changes.changes().items():
                setattr(book, field, value)
            await self._db.commit()
        return book

    async def delete_by_id(self, book_id: int) -> None:
        async with self._translate_errors("delete"):
            book = await self._db.get(Book, book_id)
            if book is None:
                raise RecordNotFoundError(book_id, "delete")
            await self._db.delete(book)
            await self._db.commit()

    @asynccontextmanager
    async def _translate_errors(self, operation: str) -> AsyncGenerator[None, None]:
        try:
            yield
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise translate_db_error(e, operation) from e


def get_book_repository(
    db: AsyncSession = Depends(get_db),
) -> BookRepository:
    """FastAPI dependency for the book gateway."""
    return SqlAlchemyBookRepository(db)
