"""
Rate limiter.

Two fixed-window ceilings checked in order for every request: a global
one shared by all callers, then one per identity (user id or client IP).
"""

import time
from dataclasses import replace
from typing import Callable, Mapping, Optional

from shared.models import AuthenticatedUser

from .interfaces import RateLimitStore
from .models import GLOBAL_KEY, RateLimitConfig, RateLimitResult, RateLimitScope


def current_time_ms() -> int:
    return int(time.time() * 1000)


def identity_key(
    user: Optional[AuthenticatedUser],
    headers: Mapping[str, str],
) -> str:
    """
    Derive the per-identity counter key.

    Authenticated callers are keyed by user id so that users behind one
    address do not share a bucket. Anonymous callers are keyed by the
    forwarded client address, falling back to the literal "unknown".
    """
    if user is not None and user.id:
        return f"user:{user.id}"

    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        client_ip = forwarded.split(",")[0].strip()
    else:
        client_ip = headers.get("x-real-ip") or ""
    return f"ip:{client_ip or 'unknown'}"


class RateLimiter:
    """Applies the global and per-identity ceilings against one store."""

    def __init__(
        self,
        store: RateLimitStore,
        config: RateLimitConfig,
        clock: Callable[[], int] = current_time_ms,
    ) -> None:
        self.store = store
        self.config = config
        self.clock = clock

    async def check(self, key: str, now_ms: Optional[int] = None) -> RateLimitResult:
        """
        Count one request for ``key``.

        Returns the first rejecting result (global before identity), or the
        identity-scope result when both ceilings allow the request.
        """
        now_ms = self.clock() if now_ms is None else now_ms

        global_result = await self.store.hit(
            GLOBAL_KEY,
            self.config.global_max_requests,
            self.config.global_window_ms,
            now_ms,
        )
        if not global_result.allowed:
            return replace(global_result, scope=RateLimitScope.GLOBAL)

        identity_result = await self.store.hit(
            key,
            self.config.user_max_requests,
            self.config.user_window_ms,
            now_ms,
        )
        return replace(identity_result, scope=RateLimitScope.IDENTITY)
