"""Book Validation — turns untyped JSON maps into typed BookCreate / BookUpdate records.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - check_* functions return an error message on violation, None on success
    - parse_* functions fail fast on the first violation (title, then author, then published)
    - title/author are trimmed before they leave this module; never stored empty
    - published is a mathematical integer; bool is never accepted as one

Design Decisions:
    - Three-way optional fields on update (absent / present & valid / present & invalid):
      presence is tested with `in`, never with truthiness, so published=0 is a valid update
    - Integral floats (1965.0) are accepted and narrowed to int — JSON does not distinguish them
"""

import math
import re
from typing import Any

from bookshelf.core.errors import BookValidationError
from bookshelf.schemas.book import BookCreate, BookUpdate


TITLE_REQUIRED = "Title is required and must be a non-empty string"
AUTHOR_REQUIRED = "Author is required and must be a non-empty string"
TITLE_INVALID = "Title must be a non-empty string"
AUTHOR_INVALID = "Author must be a non-empty string"
PUBLISHED_INVALID = "Published must be an integer value"

# Ids outside the 32-bit INTEGER key column can never match a stored row
MAX_BOOK_ID = 2**31 - 1

# Stripped from titles, authors and ids: Unicode spaces, line terminators, and the BOM
TRIM_CHARS = (
    "\t\n\x0b\x0c\r \xa0\u1680\u2000\u2001\u2002\u2003\u2004\u2005"
    "\u2006\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)

_INTEGER_LITERAL = re.compile(r"[+-]?[0-9]+", re.ASCII)
_DECIMAL_LITERAL = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?", re.ASCII,
)
# Digits in MAX_BOOK_ID; longer integer literals are out of range
_MAX_ID_DIGITS = len(str(MAX_BOOK_ID))


# ─── Field checks ────────────────────────────────────────────────

def as_integer(value: Any) -> int | None:
    """Return value as int if it is a mathematical integer, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return None


def as_text(value: Any) -> str | None:
    """Return the trimmed string if value is a string with content, else None."""
    if not isinstance(value, str):
        return None
    trimmed = value.strip(TRIM_CHARS)
    return trimmed or None


def check_required_text(payload: dict, field: str, message: str) -> str | None:
    """Field must be present, a string, and non-empty after trimming."""
    if as_text(payload.get(field)) is None:
        return message
    return None


def check_optional_text(payload: dict, field: str, message: str) -> str | None:
    """If present, field must be a non-empty string after trimming."""
    if field in payload and as_text(payload[field]) is None:
        return message
    return None


def check_published(payload: dict, required: bool) -> str | None:
    """published must be an integer; absence is only allowed on update."""
    if "published" not in payload:
        return PUBLISHED_INVALID if required else None
    if as_integer(payload["published"]) is None:
        return PUBLISHED_INVALID
    return None


# ─── Record parsing ──────────────────────────────────────────────

def parse_book_create(payload: dict) -> BookCreate:
    """Validate a create body. Raises BookValidationError on the first violation."""
    _raise_first(
        ("title", check_required_text(payload, "title", TITLE_REQUIRED)),
        ("author", check_required_text(payload, "author", AUTHOR_REQUIRED)),
        ("published", check_published(payload, required=True)),
    )
    return BookCreate(
        title=as_text(payload["title"]),
        author=as_text(payload["author"]),
        published=as_integer(payload["published"]),
    )


def parse_book_update(payload: dict) -> BookUpdate:
    """Validate a partial update body. Only provided fields end up set."""
    _raise_first(
        ("title", check_optional_text(payload, "title", TITLE_INVALID)),
        ("author", check_optional_text(payload, "author", AUTHOR_INVALID)),
        ("published", check_published(payload, required=False)),
    )
    fields: dict[str, Any] = {}
    for name in ("title", "author"):
        if name in payload:
            fields[name] = as_text(payload[name])
    if "published" in payload:
        fields["published"] = as_integer(payload["published"])
    return BookUpdate(**fields)


def parse_book_id(raw: str) -> int | None:
    """Convert a path segment to a lookup key the way a numeric cast would.

    Surrounding whitespace is ignored and integral numerals such as "7.0" map to 7.
    Only plain ASCII decimal numerals are numbers: no digit separators, no
    non-ASCII digits. Anything that is not an integer in the storable range
    yields None.
    """
    text = raw.strip(TRIM_CHARS)
    if _INTEGER_LITERAL.fullmatch(text):
        if len(text.lstrip("+-").lstrip("0")) > _MAX_ID_DIGITS:
            return None
        number = int(text)
    elif _DECIMAL_LITERAL.fullmatch(text):
        number = as_integer(float(text))
        if number is None:
            return None
    else:
        return None
    if abs(number) > MAX_BOOK_ID:
        return None
    return number


def _raise_first(*checks: tuple[str, str | None]) -> None:
    for field, error in checks:
        if error is not None:
            raise BookValidationError(error, field)
