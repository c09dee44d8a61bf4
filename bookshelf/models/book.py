"""Book ORM — the single persisted entity.

Invariants:
    - id is an integer primary key assigned by the store, never mutated
    - title/author are non-nullable; the routes guarantee they are non-empty and trimmed
    - published is a non-nullable integer (no range constraint)

Design Decisions:
    - Integer autoincrement key over UUID: ids are part of the public URL (/books/1)
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from bookshelf.db.base import Base


class Book(Base):
    """Book entity."""
    __tablename__ = "books"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    title: Mapped[str] = mapped_column(String, nullable=False)
    author: Mapped[str] = mapped_column(String, nullable=False)
    published: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"Book(id={self.id!r}, title={self.title!r})"
