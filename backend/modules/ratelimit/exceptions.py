"""
Rate limit module exceptions.

None of these reach the client: store failures are absorbed by the
fallback store, and rejections are rendered by the middleware as 429.
"""

from shared.exceptions import AllAccessError


class RateLimitError(AllAccessError):
    """Base exception for rate limiting errors."""

    pass


class RateLimitStoreUnavailable(RateLimitError):
    """Raised when the persistent store is unconfigured or unreachable."""

    def __init__(self, reason: str):
        super().__init__(
            f"Rate limit store unavailable: {reason}",
            code="RATE_LIMIT_STORE_UNAVAILABLE",
            details={"reason": reason},
        )
