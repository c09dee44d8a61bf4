"""Boundary Protocols — contract between the HTTP routes and the persistence gateway.

Invariants:
    - Routes only talk to storage through BookRepository
    - find_by_id returns None when no row matches (not an error)
    - update/delete_by_id raise RecordNotFoundError when the id does not exist
    - Every other storage failure surfaces as DatabaseError

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async methods: implementations do IO; the routes await them
"""

from typing import Protocol, Sequence

from bookshelf.models.book import Book
from bookshelf.schemas.book import BookCreate, BookUpdate


class BookRepository(Protocol):
    """Contract for book persistence — implemented by infrastructure."""
    async def create(self, record: BookCreate) -> Book: ...
    async def list_all(self) -> Sequence[Book]: ...
    async def find_by_id(self, book_id: int) -> Book | None: ...
    async def update(self, book_id: int, changes: BookUpdate) -> Book: ...
    async def delete_by_id(self, book_id: int) -> None: ...
