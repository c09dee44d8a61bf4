"""Book Schemas — typed records produced by validation and returned by the API.

Invariants:
    - BookCreate carries all three fields, strings already trimmed
    - BookUpdate only has the fields the caller sent (model_fields_set)
    - BookResponse mirrors a stored row: id, title, author, published

Design Decisions:
    - BookUpdate uses exclude_unset instead of truthiness: published=0 is a real update
    - strict=True on the records: once validated, nothing gets coerced silently
"""

from pydantic import BaseModel, ConfigDict


class BookCreate(BaseModel):
    """Validated input for creating a book."""
    model_config = ConfigDict(strict=True)

    title: str
    author: str
    published: int


class BookUpdate(BaseModel):
    """Validated partial update — only explicitly provided fields are set."""
    model_config = ConfigDict(strict=True)

    title: str | None = None
    author: str | None = None
    published: int | None = None

    def changes(self) -> dict:
        """Fields to forward to the store; absent fields are left out."""
        return self.model_dump(exclude_unset=True)


class BookResponse(BaseModel):
    """Public representation of a stored book."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    author: str
    published: int
