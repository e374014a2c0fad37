"""
Logo Designer Backend — Custom Exception Hierarchy
====================================================

What:  Defines application-specific exceptions for the error scenarios of the
       mobile read path.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and localized messages, instead of generic exceptions
       that would leak internal details to the client.
How:   Each exception carries a `message_key` (looked up in the localized
       message catalog at response time, once the request language is known),
       an English `message` for logs, and an optional context dict.
       Global exception handlers (registered in main.py) turn them into the
       failure envelope `{success, message, language, direction}`.

Exception Hierarchy:
    LogoAPIError (base)
    ├── ValidationError                  → 400 Bad Request
    │   ├── InvalidLogoIdError           → 400 (malformed UUID, no DB access)
    │   └── LegacyFormatUnsupportedError → 400 (logo opted out of legacy format)
    ├── NotFoundError                    → 404 Not Found
    ├── DatabaseError                    → 500 Internal Server Error
    └── RateLimitExceededError           → 429 Too Many Requests
"""

from typing import Any, Dict, Optional


class LogoAPIError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:      English description, used in server logs
        message_key:  Key into the localized message catalog for the client
        context:      Additional debug info (logged but NOT returned to client)
    """

    status_code = 500
    default_message_key = "serverError"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        message_key: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.message_key = message_key or self.default_message_key
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(LogoAPIError):
    """
    Raised when client input fails validation.

    HTTP: 400 Bad Request. The client can fix the request and retry.
    """

    status_code = 400
    default_message_key = "validationError"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        message_key: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, message_key=message_key, context=ctx)
        self.field = field


class InvalidLogoIdError(ValidationError):
    """
    Raised when a logo id does not match the canonical UUID text pattern.

    Detected before any query runs, so a malformed id never costs a database
    round-trip.
    """

    default_message_key = "invalidLogoId"

    def __init__(self, logo_id: Optional[str] = None):
        super().__init__(
            message=f"Invalid logo ID format: {logo_id!r}",
            field="id",
            context={"logo_id": logo_id},
        )


class LegacyFormatUnsupportedError(ValidationError):
    """
    Raised when the legacy document is requested for a logo whose
    `legacy_format_supported` flag is false.

    The same id still succeeds on the canonical endpoint.
    """

    default_message_key = "legacyNotSupported"

    def __init__(self, logo_id: Optional[str] = None):
        super().__init__(
            message=f"Logo {logo_id} does not support legacy format",
            context={"logo_id": logo_id},
        )


class NotFoundError(LogoAPIError):
    """
    Raised when a requested resource does not exist.

    HTTP: 404 Not Found. The data layer returns None for missing rows; the
    assembler converts that into this exception.
    """

    status_code = 404
    default_message_key = "logoNotFound"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message_key: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, message_key=message_key, context=ctx)


class DatabaseError(LogoAPIError):
    """
    Raised when database operations fail unexpectedly.

    HTTP: 500 Internal Server Error.

    Security Note:
        The message returned to the client is always the generic localized
        server error. SQL text, table names and driver errors are logged
        server-side only.
    """

    status_code = 500
    default_message_key = "serverError"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        message_key: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, message_key=message_key, context=context)


class RateLimitExceededError(LogoAPIError):
    """
    Raised when a client exceeds the per-IP request rate limit.

    HTTP: 429 Too Many Requests, with a Retry-After header.
    """

    status_code = 429
    default_message_key = "rateLimited"

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
