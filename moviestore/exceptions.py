"""
Movie Store — Custom Exception Hierarchy
=========================================

What:  Application-specific exceptions for the few error scenarios the
       service has.
Why:   Services raise; global exception handlers (registered in main.py)
       map each type to an HTTP status and a structured JSON body.
How:   Each exception carries a user-facing message and an optional context
       dict that is logged but never returned to the client.

Exception Hierarchy:
    MovieStoreError (base)   → 500 Internal Server Error
    ├── ValidationError      → 400 Bad Request (only raised in strict body mode)
    ├── NotFoundError        → 404 Not Found (only raised in strict not-found mode)
    └── IdGenerationError    → 500 Internal Server Error

In the default configuration none of these are raised by the movie routes:
bad bodies are absorbed and unknown ids answer with an empty 200.
"""

from typing import Any, Dict, Optional


class MovieStoreError(Exception):
    """
    Base exception for all Movie Store application errors.

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


class ValidationError(MovieStoreError):
    """
    Raised when a request body cannot be decoded into a movie.

    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Field 'title' must be a string",
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


class NotFoundError(MovieStoreError):
    """
    Raised when a requested movie does not exist.

    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class IdGenerationError(MovieStoreError):
    """
    Raised when no unused id could be drawn within the attempt limit.

    Only possible with collision-checked ids enabled and a collection that
    has nearly exhausted the id space.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        attempts: int,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["attempts"] = attempts
        super().__init__(
            message=f"Could not generate an unused movie ID after {attempts} attempts",
            context=ctx,
        )
        self.attempts = attempts
