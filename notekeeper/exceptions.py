"""
Notekeeper Backend - Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the authentication and note flows.
How:   Each exception carries a user-facing message and an optional context
       dict. Global exception handlers (registered in main.py) catch these and
       return `{"error": <message>, ...}` JSON with the matching status code.
Who:   Raised by stores and services; caught by the handlers in main.py.

Exception Hierarchy:
    NotekeeperError (base)
    ├── ValidationError      → 400 Bad Request (client can fix the input)
    ├── DuplicateUserError   → 400 Bad Request (email already registered)
    ├── AuthenticationError  → 401 Unauthorized (re-authenticate)
    ├── NotFoundError        → 404 Not Found (absent or not owned by caller)
    └── DatabaseError        → 500 Internal Server Error

None of these are fatal to the process; each request fails on its own.
"""

from typing import Any, Dict, Optional


class NotekeeperError(Exception):
    """
    Base exception for all Notekeeper application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotekeeperError):
    """
    Raised when client input fails validation.

    When:    Missing email/password, blank note text, malformed identifiers.
    HTTP:    400 Bad Request
    """

    code = "validation_error"

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


class DuplicateUserError(NotekeeperError):
    """
    Raised when registering an email that already has an account.

    HTTP:    400 Bad Request
    The email is kept in the server-side context only.
    """

    code = "duplicate_user"

    def __init__(
        self,
        email: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if email:
            ctx["email"] = email
        super().__init__(message="Email already registered", context=ctx)


class AuthenticationError(NotekeeperError):
    """
    Raised for bad credentials and for absent, malformed, mis-signed or
    expired session tokens.

    HTTP:    401 Unauthorized

    The message never says which check failed: an unknown email and a wrong
    password read the same, as do a missing token and a forged one. The
    reason goes into `context` for the server log.
    """

    code = "authentication_error"

    def __init__(
        self,
        message: str = "Please authenticate",
        reason: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if reason:
            ctx["reason"] = reason
        super().__init__(message=message, context=ctx)
        self.reason = reason


class NotFoundError(NotekeeperError):
    """
    Raised when a requested resource does not exist for the caller.

    HTTP:    404 Not Found

    A note owned by somebody else is reported exactly like a note that does
    not exist.
    """

    code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(NotekeeperError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the original
    exception type is recorded in `context` and logged server-side.
    """

    code = "server_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
