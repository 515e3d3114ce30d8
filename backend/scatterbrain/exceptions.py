"""
ScatterBrain Backend - Exception Hierarchy
==========================================

What:  Application-specific exceptions and the storage error taxonomy.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the mapped HTTP status.
Who:   Raised by identifiers and storage; caught by the handlers in main.py.

Exception Hierarchy:
    ScatterBrainError (base)
    ├── ValidationError                     → 400 Bad Request
    └── StorageError(kind=...)
        ├── ErrorKind.NOT_FOUND             → 404 Not Found
        ├── ErrorKind.NO_ROW_UPDATED        → 404 Not Found
        └── ErrorKind.INTERNAL              → 500 Internal Server Error

Storage failures share one exception type and are told apart by `kind`.
Callers branch on the enum value, never on a particular exception instance.
"""

import enum
from typing import Any, Dict, Optional


class ScatterBrainError(Exception):
    """
    Base exception for all ScatterBrain application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned for 5xx errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ScatterBrainError):
    """
    Raised when client input fails validation.

    When:    A path identifier is not a valid UUID.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class ErrorKind(str, enum.Enum):
    """Outcome classes a storage operation can fail with."""

    NOT_FOUND = "not_found"
    NO_ROW_UPDATED = "no_row_updated"
    INTERNAL = "internal"


class StorageError(ScatterBrainError):
    """
    Raised by the storage layer.

    NOT_FOUND and NO_ROW_UPDATED are expected conditions the client caused
    by naming an identifier that does not exist. INTERNAL wraps any driver or
    SQL failure; the original exception is chained as `__cause__`.

    Example:
        try:
            await storage.update_thought(thought_id, title, content)
        except StorageError as e:
            if e.kind is ErrorKind.NO_ROW_UPDATED:
                ...
    """

    _DEFAULT_MESSAGES = {
        ErrorKind.NOT_FOUND: "Unable to locate the record.",
        ErrorKind.NO_ROW_UPDATED: "No row updated.",
        ErrorKind.INTERNAL: "A database error occurred.",
    }

    def __init__(
        self,
        kind: ErrorKind,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message or self._DEFAULT_MESSAGES[kind],
            context=context,
        )
        self.kind = kind

    @classmethod
    def not_found(cls, resource: str, resource_id: Any) -> "StorageError":
        return cls(
            ErrorKind.NOT_FOUND,
            f"{resource} with ID '{resource_id}' was not found",
            context={"resource": resource, "resource_id": str(resource_id)},
        )
