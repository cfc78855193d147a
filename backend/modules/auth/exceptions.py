"""
Authentication module exceptions.

These exceptions are raised by the auth module and rendered by the API
error handlers with their status code and machine code.
"""

from typing import Optional

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ExternalServiceError,
)


class AuthHeaderInvalidError(AuthenticationError):
    """Raised when the Authorization header is missing or not a bearer token."""

    def __init__(self, message: str = "Missing or invalid authorization header"):
        super().__init__(message, code="AUTH_HEADER_INVALID")


class MissingTokenError(AuthHeaderInvalidError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class AuthConfigError(ConfigurationError):
    """Raised when the JWT secret is not configured."""

    def __init__(self):
        super().__init__(
            "Server authentication not configured",
            code="AUTH_CONFIG_ERROR",
        )


class SubscriptionRequiredError(AuthorizationError):
    """
    Raised when a caller without an active subscription or trial
    attempts an operation that requires one.

    The UI keys off the code and sends the user to ``upgrade_url``.
    """

    def __init__(self, upgrade_url: str, strict: bool = False):
        message = (
            "Active subscription required"
            if strict
            else "Active subscription required for this action"
        )
        super().__init__(
            message,
            code="SUBSCRIPTION_REQUIRED",
            details={"upgrade_url": upgrade_url},
        )
        self.upgrade_url = upgrade_url

    def to_dict(self) -> dict:
        error = super().to_dict()
        error["upgrade_url"] = self.upgrade_url
        return error


class SubscriptionVerifyFailedError(ExternalServiceError):
    """Raised when the subscription state cannot be read from the database."""

    def __init__(self, user_id: Optional[str] = None):
        super().__init__(
            "Failed to verify subscription",
            service="supabase",
            code="SUBSCRIPTION_VERIFY_FAILED",
        )
        if user_id:
            self.details["user_id"] = user_id


class AdminRequiredError(AuthorizationError):
    """Raised when a non-admin account calls an admin-only endpoint."""

    def __init__(self):
        super().__init__("Admin access required", code="ADMIN_REQUIRED")
