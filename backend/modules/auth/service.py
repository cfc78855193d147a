"""
Authentication service implementation.

Validates Supabase JWT tokens and provides user authentication.
"""

from typing import Optional
import jwt
from pydantic import ValidationError as PydanticValidationError

from shared.config import Settings, get_settings
from shared.exceptions import AuthenticationError
from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .models import JWTPayload
from .exceptions import (
    AuthConfigError,
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Uses Supabase JWT tokens (HS256, audience "authenticated") for
    authentication. Token validation is local; no database round trip.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        This implementation validates Supabase JWTs using the JWT secret.
        """
        if not token:
            raise MissingTokenError()

        if not self._settings.supabase_jwt_secret:
            raise AuthConfigError()

        try:
            payload = jwt.decode(
                token,
                self._settings.supabase_jwt_secret,
                algorithms=["HS256"],
                audience="authenticated",
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e))

        try:
            jwt_payload = JWTPayload(**payload)
        except PydanticValidationError:
            raise InvalidTokenError("Token is missing required claims")

        return AuthenticatedUser(
            id=jwt_payload.sub,
            email=jwt_payload.email,
            raw_claims=payload,
        )

    async def try_validate_token(self, token: Optional[str]) -> Optional[AuthenticatedUser]:
        """
        Validate a token, returning None instead of raising.

        Used where authentication is optional, e.g. to pick the
        rate-limit identity before route dependencies run.
        """
        if not token or not self._settings.supabase_jwt_secret:
            return None
        try:
            return await self.validate_token(token)
        except AuthenticationError:
            return None


# Module-level instance getter
_service_instance: Optional[AuthService] = None


def get_auth_service() -> AuthService:
    """Get the auth service singleton."""
    global _service_instance
    if _service_instance is None:
        _service_instance = AuthService()
    return _service_instance


def reset_auth_service() -> None:
    """Reset the auth service singleton (for testing)."""
    global _service_instance
    _service_instance = None
