"""Error Hierarchy — typed, categorized exceptions for all Bookshelf failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), http_status (int)
    - Client errors (400/404) are raised before or instead of touching the store
    - Gateway errors (DatabaseError and subclasses) always map to 500
    - to_response() produces the {"error": "<message>"} envelope used by every endpoint

Design Decisions:
    - Single hierarchy with BookshelfError base: one global handler renders all of them
    - RecordNotFoundError subclasses DatabaseError: update/delete of a missing id stays
      a gateway failure at the HTTP level, but logs carry a distinct code
"""

from enum import Enum


class ErrorCategory(str, Enum):
    """High-level error categories for logging and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


class BookshelfError(Exception):
    """Base exception for all Bookshelf errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        return {"error": self.message}


# ─── Client Errors (400-level) ──────────────────────────────────

class BookValidationError(BookshelfError):
    """Request body failed field validation."""
    def __init__(self, message: str, field: str):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION, 400,
        )
        self.field = field


class ResourceNotFoundError(BookshelfError):
    """Requested resource does not exist."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Server Errors (500-level) ──────────────────────────────────

class StorageFailureError(BookshelfError):
    """A route could not complete because the persistence gateway failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            message, "STORAGE_FAILURE", ErrorCategory.DATABASE, 500,
        )
        self.operation = operation


class DatabaseError(BookshelfError):
    """Database operation failed (raised by the persistence gateway)."""
    def __init__(self, message: str, operation: str, code: str = "DATABASE_ERROR"):
        super().__init__(
            f"Database {operation} failed: {message}",
            code, ErrorCategory.DATABASE, 500,
        )
        self.operation = operation


class RecordNotFoundError(DatabaseError):
    """Update or delete targeted a row that does not exist."""
    def __init__(self, resource_id: object, operation: str):
        super().__init__(
            f"no record with id {resource_id!r}", operation, "RECORD_NOT_FOUND",
        )
        self.resource_id = resource_id
