"""
Base exception classes for the All Access Artist backend.

Each module should define its own exceptions that inherit from these bases.
Every exception carries a stable machine-readable ``code`` and the HTTP
status it maps to, so the API layer renders all of them with one handler.
"""

from typing import Optional, Any


class AllAccessError(Exception):
    """
    Base exception for all All Access Artist errors.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to the error body used in API responses."""
        error: dict[str, Any] = {
            "message": self.message,
            "code": self.code,
        }
        if self.details:
            error["details"] = self.details
        return error


class ValidationError(AllAccessError):
    """Input validation failed."""

    status_code = 400


class AuthenticationError(AllAccessError):
    """Authentication failed (invalid or missing credentials)."""

    status_code = 401


class AuthorizationError(AllAccessError):
    """Authorization failed (insufficient permissions)."""

    status_code = 403


class NotFoundError(AllAccessError):
    """Resource not found."""

    status_code = 404


class ConflictError(AllAccessError):
    """Resource state conflicts with the request."""

    status_code = 409


class ConfigurationError(AllAccessError):
    """Required server configuration is missing."""

    status_code = 500


class ExternalServiceError(AllAccessError):
    """Error communicating with an external service."""

    status_code = 500

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


class DatabaseConfigError(ConfigurationError):
    """Raised when the Supabase connection settings are absent."""

    def __init__(self, missing: list[str]):
        super().__init__(
            "Database configuration missing",
            code="DATABASE_CONFIG_ERROR",
            details={"missing": missing},
        )
