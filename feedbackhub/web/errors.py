"""Application exception types.

Every error a handler can raise maps to an HTTP status, a stable ``error``
code and a client-safe message. The conversion to JSON happens in a single
exception handler registered in :mod:`feedbackhub.web.main`.
"""

from typing import Optional

from ..shared.schemas.error import ErrorResponse


class ApiError(Exception):
    """Structured API error that maps directly to an error payload."""

    status_code: int = 500
    code: str = "INTERNAL"
    default_message: str = "Server error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def payload(self) -> ErrorResponse:
        return ErrorResponse(message=self.message, error=self.code)


class Unauthenticated(ApiError):
    """No credential was presented."""

    status_code = 401
    code = "UNAUTHENTICATED"
    default_message = "No token, authorization denied"


class InvalidToken(ApiError):
    """Signature, expiry or format check failed, or the token was revoked."""

    status_code = 401
    code = "INVALID_TOKEN"
    default_message = "Token is not valid"


class MalformedPrincipal(ApiError):
    """Token verified but carries no recognised identity shape."""

    status_code = 401
    code = "MALFORMED_PRINCIPAL"
    default_message = "Invalid token structure"


class Forbidden(ApiError):
    status_code = 403
    code = "FORBIDDEN"
    default_message = "Not authorized"


class NotFound(ApiError):
    status_code = 404
    code = "NOT_FOUND"
    default_message = "Resource not found"


class ValidationError(ApiError):
    status_code = 400
    code = "VALIDATION_ERROR"
    default_message = "Invalid request"


class Conflict(ApiError):
    """Duplicate unique field. Existing clients expect 400 here."""

    status_code = 400
    code = "CONFLICT"
    default_message = "Resource already exists"


class Internal(ApiError):
    status_code = 500
    code = "INTERNAL"
    default_message = "Server error"


__all__ = [
    "ApiError",
    "Unauthenticated",
    "InvalidToken",
    "MalformedPrincipal",
    "Forbidden",
    "NotFound",
    "ValidationError",
    "Conflict",
    "Internal",
]
