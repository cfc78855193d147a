"""
Rate limit module data models.
"""

import math
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field

from shared.config import Settings


class RateLimitScope(str, Enum):
    """Which ceiling a result belongs to."""

    GLOBAL = "global"
    IDENTITY = "identity"


GLOBAL_KEY = "global"


def is_window_expired(now_ms: int, window_reset_at_ms: int) -> bool:
    """
    Fixed-window reset rule shared by every store.

    A counter is discarded once the clock has passed its reset time. The
    SQL in migrations/002_rate_limits.sql applies the same comparison.
    """
    return now_ms > window_reset_at_ms


class RateLimitConfig(BaseModel):
    """Ceilings and windows for the global and per-identity checks."""

    global_max_requests: int = Field(default=1000, ge=1)
    global_window_ms: int = Field(default=60_000, ge=1)
    user_max_requests: int = Field(default=100, ge=1)
    user_window_ms: int = Field(default=60_000, ge=1)
    cleanup_interval_ms: int = Field(default=300_000, ge=1)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RateLimitConfig":
        return cls(
            global_max_requests=settings.rate_limit_global_max_requests,
            global_window_ms=settings.rate_limit_global_window_ms,
            user_max_requests=settings.rate_limit_user_max_requests,
            user_window_ms=settings.rate_limit_user_window_ms,
            cleanup_interval_ms=settings.rate_limit_cleanup_interval_ms,
        )


@dataclass
class RateLimitCounter:
    """Requests seen for one key in the current window."""

    key: str
    count: int
    window_reset_at: int  # epoch ms


@dataclass
class RateLimitResult:
    """
    Result of a rate limit check.

    Attributes:
        allowed:   Whether the request is allowed.
        limit:     Maximum number of requests allowed per window.
        remaining: Requests remaining in the current window.
        reset_at:  Epoch milliseconds when the current window resets.
        scope:     Which ceiling produced this result.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: int
    scope: RateLimitScope = RateLimitScope.IDENTITY

    def retry_after(self, now_ms: int) -> int:
        """Seconds until the window resets, rounded up."""
        return max(0, math.ceil((self.reset_at - now_ms) / 1000))

    def headers(self) -> dict[str, str]:
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.reset_at),
        }
