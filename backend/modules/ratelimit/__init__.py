"""
Rate limit module.

Fixed-window request ceilings, global and per identity, with a persistent
Postgres-backed store and an in-memory fallback.

Public API:
- RateLimiter: Applies both ceilings
- RateLimitStore: Store interface
- InMemoryStore, PersistentStore, FallbackStore: Store implementations
- RateLimitConfig, RateLimitResult: Models
"""

from .interfaces import RateLimitStore
from .models import (
    GLOBAL_KEY,
    RateLimitConfig,
    RateLimitCounter,
    RateLimitResult,
    RateLimitScope,
    is_window_expired,
)
from .store import InMemoryStore, PersistentStore, FallbackStore
from .service import RateLimiter, identity_key, current_time_ms
from .exceptions import RateLimitError, RateLimitStoreUnavailable

__all__ = [
    # Interface
    "RateLimitStore",
    # Service
    "RateLimiter",
    "identity_key",
    "current_time_ms",
    # Stores
    "InMemoryStore",
    "PersistentStore",
    "FallbackStore",
    # Models
    "GLOBAL_KEY",
    "RateLimitConfig",
    "RateLimitCounter",
    "RateLimitResult",
    "RateLimitScope",
    "is_window_expired",
    # Exceptions
    "RateLimitError",
    "RateLimitStoreUnavailable",
]
