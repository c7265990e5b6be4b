"""
Base exception classes for the Neoflix backend.

Each module should define its own exceptions that inherit from these bases.
The API error handler maps each base class to an HTTP status code, so
callers never need to inspect message text.
"""

from typing import Optional, Any


class NeoflixError(Exception):
    """
    Base exception for all Neoflix errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(NeoflixError):
    """Resource not found."""

    pass


class ValidationError(NeoflixError):
    """Input validation failed (unsupported argument or malformed identifier)."""

    pass


class AuthenticationError(NeoflixError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(NeoflixError):
    """Authorization failed (authenticated, but not entitled)."""

    pass


class ConflictError(NeoflixError):
    """A unique field collided with an existing record."""

    def __init__(
        self,
        field: str,
        reason: str = "already exists",
        code: Optional[str] = None,
    ):
        super().__init__(
            f"{field} {reason}",
            code=code or "CONFLICT",
            details={"field": field, "reason": reason},
        )
        self.field = field


class ExternalServiceError(NeoflixError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service


class TransientError(ExternalServiceError):
    """
    Temporary failure of a backing service.

    Safe for the caller to retry; not a business-rule failure.
    """

    def __init__(self, service: str, message: str = "Service temporarily unavailable"):
        super().__init__(message, service=service, code="TRANSIENT_ERROR")
