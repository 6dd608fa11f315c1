"""
ITR API: Custom Exception Hierarchy
===================================

What:  Application-specific exceptions for the three failure classes the
       API distinguishes.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{"error": message}` bodies with the matching status code.
Who:   Raised by the record store and the request handlers.

Exception Hierarchy:
    ITRError (base)
    ├── ValidationError    → 400 Bad Request (client can fix the input)
    ├── NotFoundError      → 404 Not Found
    └── PersistenceError   → 500 Internal Server Error

Only `message` is ever returned to the client. `context` is logged
server-side and may contain identifiers or the original exception type.
"""

from typing import Any, Dict, Optional


class ITRError(Exception):
    """
    Base exception for all ITR API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ITRError):
    """
    Raised when client input is malformed or incomplete.

    When:    Unparseable employee ID, missing or empty required field.
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


class NotFoundError(ITRError):
    """
    Raised when a requested record does not exist.

    When:    GET /v1/find/{id} for an unknown ID, or an update/delete that
             affected zero rows.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows; the store converts that into
    this exception so HTTP concerns stay out of the store.
    """

    def __init__(
        self,
        resource: str = "Employee",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class PersistenceError(ITRError):
    """
    Raised when a database operation fails.

    When:    Connection lost mid-query, constraint violation, statement error.
    HTTP:    500 Internal Server Error

    The message sent to the client is always generic. Driver messages and
    SQL text are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
