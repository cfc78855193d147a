"""
Rate limiting middleware.

Runs before routing, so the caller is identified opportunistically: a
valid bearer token keys the request by user id, anything else by client
address. Authentication itself is still enforced by the route dependencies.
"""

import logging
from typing import Callable, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from modules.auth.interfaces import IAuthService
from modules.ratelimit import RateLimiter, identity_key

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests, please try again later."


def _bearer_token(request: Request) -> Optional[str]:
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Applies the global and per-identity ceilings to every request.

    Args:
        app: ASGI application
        limiter_provider: Returns the RateLimiter to use (resolved per request)
        auth_provider: Returns the auth service used to read the bearer token
    """

    def __init__(
        self,
        app,
        limiter_provider: Callable[[], RateLimiter],
        auth_provider: Callable[[], IAuthService],
    ):
        super().__init__(app)
        self.limiter_provider = limiter_provider
        self.auth_provider = auth_provider

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # CORS preflight never counts
        if request.method == "OPTIONS":
            return await call_next(request)

        limiter = self.limiter_provider()
        user = await self.auth_provider().try_validate_token(_bearer_token(request))
        key = identity_key(user, request.headers)

        result = await limiter.check(key)
        if not result.allowed:
            retry_after = result.retry_after(limiter.clock())
            logger.warning(
                "Rate limit exceeded for %s (%s scope) on %s %s",
                key,
                result.scope.value,
                request.method,
                request.url.path,
            )
            return JSONResponse(
                status_code=429,
                content={"error": RATE_LIMIT_MESSAGE, "retryAfter": retry_after},
                headers={**result.headers(), "Retry-After": str(retry_after)},
            )

        response = await call_next(request)
        response.headers.update(result.headers())
        return response
