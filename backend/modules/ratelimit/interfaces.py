"""
Rate limit module interface.

The limiter depends on RateLimitStore only; the primary/fallback policy is
itself a store (FallbackStore), so tests swap in a failing primary without
touching the limiter.
"""

from typing import Protocol, runtime_checkable

from .models import RateLimitResult


@runtime_checkable
class RateLimitStore(Protocol):
    """Atomic increment-and-check over a fixed window."""

    async def hit(
        self,
        key: str,
        max_requests: int,
        window_ms: int,
        now_ms: int,
    ) -> RateLimitResult:
        """
        Count one request for ``key`` and report whether it is allowed.

        A new or expired counter restarts at 1 with reset ``now + window``.
        A counter already at ``max_requests`` rejects without incrementing.

        Raises:
            RateLimitError: If the backing store cannot be used
        """
        ...
