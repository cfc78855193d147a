"""
Rate limit stores.

- InMemoryStore: process-local dict, not shared across instances and lost
  on restart. Used only when the persistent store cannot be.
- PersistentStore: Supabase RPC doing the increment-and-check inside one
  Postgres statement, safe across concurrent callers and instances.
- FallbackStore: tries the primary once, falls back on any error.

All three apply the same fixed-window rule (models.is_window_expired).
"""

import asyncio
import contextlib
import logging
from typing import Any, Callable, Optional

from supabase import Client

from .exceptions import RateLimitStoreUnavailable
from .interfaces import RateLimitStore
from .models import RateLimitCounter, RateLimitResult, is_window_expired

logger = logging.getLogger(__name__)


class InMemoryStore(RateLimitStore):
    """Keyed counters held in this process."""

    def __init__(self) -> None:
        self._counters: dict[str, RateLimitCounter] = {}
        self._sweeper: Optional[asyncio.Task] = None

    async def hit(
        self,
        key: str,
        max_requests: int,
        window_ms: int,
        now_ms: int,
    ) -> RateLimitResult:
        counter = self._counters.get(key)

        if counter is None or is_window_expired(now_ms, counter.window_reset_at):
            counter = RateLimitCounter(key=key, count=1, window_reset_at=now_ms + window_ms)
            self._counters[key] = counter
            return RateLimitResult(
                allowed=True,
                limit=max_requests,
                remaining=max_requests - 1,
                reset_at=counter.window_reset_at,
            )

        if counter.count >= max_requests:
            return RateLimitResult(
                allowed=False,
                limit=max_requests,
                remaining=0,
                reset_at=counter.window_reset_at,
            )

        counter.count += 1
        return RateLimitResult(
            allowed=True,
            limit=max_requests,
            remaining=max_requests - counter.count,
            reset_at=counter.window_reset_at,
        )

    def get(self, key: str) -> Optional[RateLimitCounter]:
        return self._counters.get(key)

    def __len__(self) -> int:
        return len(self._counters)

    def sweep(self, now_ms: int) -> int:
        """Delete counters whose window has expired. Returns how many were removed."""
        expired = [
            key
            for key, counter in self._counters.items()
            if is_window_expired(now_ms, counter.window_reset_at)
        ]
        for key in expired:
            del self._counters[key]
        return len(expired)

    def start_sweeper(self, interval_ms: int, clock: Callable[[], int]) -> None:
        """Run sweep() every ``interval_ms`` on the running event loop."""
        if self._sweeper is not None and not self._sweeper.done():
            return

        async def _run() -> None:
            while True:
                await asyncio.sleep(interval_ms / 1000)
                removed = self.sweep(clock())
                if removed:
                    logger.debug("Swept %d expired rate limit counters", removed)

        self._sweeper = asyncio.create_task(_run())

    async def stop_sweeper(self) -> None:
        if self._sweeper is None:
            return
        self._sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._sweeper
        self._sweeper = None


class PersistentStore(RateLimitStore):
    """
    Counters kept in Postgres, updated by the ``check_rate_limit`` function.

    The function returns ``{allowed, count, reset_at}`` for the key after
    applying the request.
    """

    def __init__(
        self,
        client_factory: Callable[[], Client],
        rpc_name: str = "check_rate_limit",
        timeout_s: float = 2.0,
    ) -> None:
        self._client_factory = client_factory
        self._rpc_name = rpc_name
        self._timeout_s = timeout_s

    async def hit(
        self,
        key: str,
        max_requests: int,
        window_ms: int,
        now_ms: int,
    ) -> RateLimitResult:
        try:
            client = self._client_factory()
        except Exception as e:
            raise RateLimitStoreUnavailable(str(e)) from e

        params = {
            "p_key": key,
            "p_max_requests": max_requests,
            "p_window_ms": window_ms,
            "p_now_ms": now_ms,
        }
        try:
            response = await asyncio.wait_for(
                asyncio.to_thread(lambda: client.rpc(self._rpc_name, params).execute()),
                timeout=self._timeout_s,
            )
        except asyncio.TimeoutError as e:
            raise RateLimitStoreUnavailable("timeout") from e

        row = self._parse_row(response.data)
        allowed = bool(row["allowed"])
        count = int(row["count"])
        return RateLimitResult(
            allowed=allowed,
            limit=max_requests,
            remaining=max(0, max_requests - count) if allowed else 0,
            reset_at=int(row["reset_at"]),
        )

    @staticmethod
    def _parse_row(data: Any) -> dict[str, Any]:
        if isinstance(data, list):
            if not data:
                raise RateLimitStoreUnavailable("empty RPC response")
            data = data[0]
        if not isinstance(data, dict) or not {"allowed", "count", "reset_at"} <= data.keys():
            raise RateLimitStoreUnavailable("malformed RPC response")
        return data


class FallbackStore(RateLimitStore):
    """
    Primary store with an in-memory fallback.

    The primary is attempted exactly once per hit. Any error switches that
    hit to the fallback; the error is logged at debug level and never
    surfaced to the caller.
    """

    def __init__(self, primary: RateLimitStore, fallback: InMemoryStore) -> None:
        self.primary = primary
        self.fallback = fallback

    async def hit(
        self,
        key: str,
        max_requests: int,
        window_ms: int,
        now_ms: int,
    ) -> RateLimitResult:
        try:
            return await self.primary.hit(key, max_requests, window_ms, now_ms)
        except Exception as e:
            logger.debug("Rate limit primary store failed for %s, using in-memory fallback: %s", key, e)
            return await self.fallback.hit(key, max_requests, window_ms, now_ms)
