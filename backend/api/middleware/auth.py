"""
JWT Authentication dependencies.

Validates Supabase JWT tokens and extracts user information.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from api.dependencies import get_auth_service
from modules.auth.exceptions import AuthHeaderInvalidError
from modules.auth.interfaces import IAuthService
from shared.models import AuthenticatedUser

# Bearer token extractor; yields None for a missing or non-bearer header
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user. The user is also
    stored on ``request.state.user`` for downstream dependencies.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}

    Raises:
        AuthHeaderInvalidError: Header missing or not ``Bearer <token>``
        InvalidTokenError / ExpiredTokenError: Token rejected
    """
    if credentials is None or not credentials.credentials:
        raise AuthHeaderInvalidError()

    user = await auth.validate_token(credentials.credentials)
    request.state.user = user
    return user

