"""ORM Models — SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - Models imported here so Base.metadata is populated before create_all runs
"""

from bookshelf.models.book import Book  # noqa: F401
