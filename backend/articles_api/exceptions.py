"""
Articles API — Custom Exception Hierarchy
==========================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes, without try/except blocks in every route.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON error responses with the correct HTTP status code.
Who:   Raised by repositories and services; caught by global handlers.

Exception Hierarchy:
    ArticlesAPIError (base)
    ├── DecodeError              → 400 Bad Request (malformed body or path)
    ├── ValidationError          → 400 Bad Request (required fields missing)
    ├── NotFoundError            → 404 Not Found
    └── StorageError             → 500 Internal Server Error
        └── FatalStorageError    → aborts startup (schema cannot be ensured)
"""

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

if TYPE_CHECKING:
    from articles_api.services.validation import FieldError


class ArticlesAPIError(Exception):
    """
    Base exception for all Articles API errors.

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


class DecodeError(ArticlesAPIError):
    """
    Raised when the request body (or a path parameter) cannot be decoded
    into the expected shape.

    HTTP: 400 Bad Request, body {"message": ...}
    """

    def __init__(
        self,
        message: str = "Request body could not be decoded",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ValidationError(ArticlesAPIError):
    """
    Raised when one or more required fields are missing on create.

    Carries every field error found, not just the first, so the client can
    fix the whole payload in one round trip.

    HTTP: 400 Bad Request, body [{"key": ..., "error": ...}, ...]
    """

    def __init__(
        self,
        errors: Sequence["FieldError"],
        context: Optional[Dict[str, Any]] = None,
    ):
        self.errors: List["FieldError"] = list(errors)
        ctx = context or {}
        ctx["fields"] = [error.field for error in self.errors]
        super().__init__(message="Validation failed", context=ctx)


class NotFoundError(ArticlesAPIError):
    """
    Raised when no article matches the requested id.

    SQLAlchemy returns None (or a zero rowcount) for missing records rather
    than raising, so the conversion happens in the repository or service.

    HTTP: 404 Not Found, body {"message": "Article not found"}
    """

    def __init__(
        self,
        resource_id: Optional[int] = None,
        message: str = "Article not found",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class StorageError(ArticlesAPIError):
    """
    Raised when a storage operation fails (connection lost, query error).

    Security Note:
        The response body is always empty. Driver messages, SQL text and
        constraint names stay in the server log.

    HTTP: 500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A storage error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class FatalStorageError(StorageError):
    """
    Raised when the articles table cannot be ensured at startup.

    Not handled by any exception handler: it propagates out of the lifespan
    and uvicorn refuses to start serving.
    """

    def __init__(
        self,
        message: str = "Could not ensure the articles schema",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
