"""Book Routes — create, list, read, partial update, and delete over /books.

Invariants:
    - Request bodies are validated (core/validate_book.py) before the store is touched
    - Validation failures → 400 with the field-level message, nothing persisted
    - Only GET /books/{id} distinguishes not-found (404)
    - Any gateway failure → 500: create echoes the underlying message,
      every other operation uses a fixed message
    - Routes never build SQL; they only call the BookRepository gateway

Design Decisions:
    - Path id taken as str and converted by parse_book_id: a non-numeric id is a
      lookup that cannot match (404 on read, gateway failure on update/delete)
    - Update/delete of a missing id stays 500 for compatibility; the gateway's
      RecordNotFoundError keeps it distinguishable in logs
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status

from bookshelf.core.errors import (
    RecordNotFoundError, ResourceNotFoundError, StorageFailureError,
)
from bookshelf.core.repository_protocols import BookRepository
from bookshelf.core.validate_book import (
    parse_book_create, parse_book_id, parse_book_update,
)
from bookshelf.infrastructure.book_repository import get_book_repository
from bookshelf.schemas.book import BookResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/books", tags=["books"])


@router.post(
    "", response_model=BookResponse, status_code=status.HTTP_201_CREATED,
)
async def create_book(
    payload: dict[str, Any] | None = Body(None),
    books: BookRepository = Depends(get_book_repository),
):
    """Create a book from {title, author, published}."""
    record = parse_book_create(payload or {})
    try:
        book = await books.create(record)
    except Exception as e:
        logger.error(f"Error creating book: {e}", exc_info=True)
        raise StorageFailureError(
            str(e) or "Failed to create book", "create",
        ) from e
    logger.info("Book created", extra={"book_id": book.id})
    return BookResponse.model_validate(book)


@router.get("", response_model=list[BookResponse])
async def list_books(
    books: BookRepository = Depends(get_book_repository),
):
    """Every stored book, in store order."""
    try:
        rows = await books.list_all()
    except Exception as e:
        logger.error(f"Error listing books: {e}", exc_info=True)
        raise StorageFailureError("Failed to fetch books", "list") from e
    return [BookResponse.model_validate(row) for row in rows]


@router.get("/{book_id}", response_model=BookResponse)
async def get_book(
    book_id: str,
    books: BookRepository = Depends(get_book_repository),
):
    """Single book by id, 404 when nothing matches."""
    key = parse_book_id(book_id)
    book = None
    if key is not None:
        try:
            book = await books.find_by_id(key)
        except Exception as e:
            logger.error(
                f"Error fetching book {book_id!r}: {e}", exc_info=True,
            )
            raise StorageFailureError("Failed to fetch book", "read") from e
    if book is None:
        raise ResourceNotFoundError("Book", book_id)
    return BookResponse.model_validate(book)


@router.put("/{book_id}", response_model=BookResponse)
async def update_book(
    book_id: str,
    payload: dict[str, Any] | None = Body(None),
    books: BookRepository = Depends(get_book_repository),
):
    """Partial update: only the fields present in the body change."""
    changes = parse_book_update(payload or {})
    try:
        book = await books.update(_require_key(book_id, "update"), changes)
    except Exception as e:
        logger.error(
            f"Error updating book {book_id!r}: {e}",
            exc_info=not isinstance(e, RecordNotFoundError),
            extra={"operation": "update"},
        )
        raise StorageFailureError("Failed to update book", "update") from e
    logger.info("Book updated", extra={"book_id": book.id})
    return BookResponse.model_validate(book)


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_book(
    book_id: str,
    books: BookRepository = Depends(get_book_repository),
):
    """Remove a book. 204 with an empty body on success."""
    try:
        key = _require_key(book_id, "delete")
        await books.delete_by_id(key)
    except Exception as e:
        logger.error(
            f"Error deleting book {book_id!r}: {e}",
            exc_info=not isinstance(e, RecordNotFoundError),
            extra={"operation": "delete"},
        )
        raise StorageFailureError("Failed to delete book", "delete") from e
    logger.info("Book deleted", extra={"book_id": key})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _require_key(book_id: str, operation: str) -> int:
    """Numeric key for a write; a non-numeric id can never match a row."""
    key = parse_book_id(book_id)
    if key is None:
        raise RecordNotFoundError(book_id, operation)
    return key
