"""
QuickNotes Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the different error scenarios.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the right status code.
Who:   Raised by the service layer and the readiness gate.

Exception Hierarchy:
    QuickNotesError (base)
    ├── ValidationError        → 400 Bad Request
    ├── NotFoundError          → 404 Not Found
    ├── DatabaseError          → 500 Internal Server Error
    └── StoreUnavailableError  → startup only, fatal
"""

from typing import Any, Dict, Optional


class QuickNotesError(Exception):
    """
    Base exception for all QuickNotes application errors.

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


class ValidationError(QuickNotesError):
    """
    Raised when client input fails a business rule.

    When:    Missing or blank note title.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Title is required",
            "details": {"field": "title"}
        }
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


class NotFoundError(QuickNotesError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PUT/DELETE /api/notes/{id} with an id that has no row.
    HTTP:    404 Not Found

    The store signals absence with None/False; the service layer converts
    that into this exception.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)


class DatabaseError(QuickNotesError):
    """
    Raised when a store operation fails unexpectedly.

    When:    Connection lost mid-query, query error, pool checkout timeout.
    HTTP:    500 Internal Server Error

    The message is a fixed, generic sentence chosen by the service layer.
    Driver details (SQL text, constraint names) only go into `context`,
    which is logged server-side and never returned.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreUnavailableError(QuickNotesError):
    """
    Raised by the readiness gate when the store never became reachable.

    When:    Every attempt allowed by the RetryPolicy failed.
    Effect:  Application startup aborts and the process exits non-zero.
    """

    def __init__(
        self,
        attempts: int,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"Failed to connect to database after {attempts} attempts"
        ctx = context or {}
        ctx["attempts"] = attempts
        super().__init__(message=message, context=ctx)
        self.attempts = attempts
