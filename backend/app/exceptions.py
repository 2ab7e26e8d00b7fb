"""
Daybook Backend — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the error scenarios of the API.
Why:   Services raise these; global handlers registered in main.py turn them
       into `{"error": ...}` responses with the right status code, so route
       handlers never carry try/except blocks.
How:   Each exception carries a user-facing message and an optional context
       dict that is logged but never returned to the client.

Exception Hierarchy:
    DaybookError (base)
    ├── UnauthenticatedError  → 401 Unauthorized
    ├── ValidationError       → 400 Bad Request
    ├── NotFoundError         → 404 Not Found
    └── DatabaseError         → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class DaybookError(Exception):
    """
    Base exception for all Daybook application errors.

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


class UnauthenticatedError(DaybookError):
    """
    Raised when the bearer credential is missing or cannot be verified.

    HTTP: 401 Unauthorized, with a `WWW-Authenticate: Bearer` header.
    The message never says which check failed (expiry, signature, claims);
    that detail goes to the context for the server log.
    """

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ValidationError(DaybookError):
    """
    Raised when client input fails validation.

    When:  Missing required field, wrong type, value outside an enum,
           unparseable datetime.
    HTTP:  400 Bad Request

    Example response:
        {"error": "dateTime is required", "request_id": "1f0c2a9b"}
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


class NotFoundError(DaybookError):
    """
    Raised when a requested resource does not exist.

    HTTP: 404 Not Found

    Also raised for an id that belongs to another user while ownership is
    enforced, and for an empty list while EMPTY_LIST_IS_NOT_FOUND is on.
    A custom `message` overrides the generated one.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(DaybookError):
    """
    Raised when database operations fail unexpectedly.

    HTTP: 500 Internal Server Error

    Security Note:
        The message returned to the client is always generic. The SQLAlchemy
        error type and the operation are kept in the context for the log.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
