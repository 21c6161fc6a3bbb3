"""Token-bucket rate limiter and bounded-concurrency request queue."""

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

from fairtrip.services.flight_provider import RateLimitExceeded

T = TypeVar("T")


class RateLimiter:
    """Token bucket: ``refill_rate`` tokens added every ``refill_interval`` seconds."""

    def __init__(self, max_tokens: int = 10, refill_rate: int = 1, refill_interval: float = 1.0):
        self.max_tokens = max_tokens
        self.refill_rate = refill_rate
        self.refill_interval = refill_interval
        self._tokens = float(max_tokens)
        self._last_refill = time.monotonic()
        self._lock = asyncio.Lock()

    def _refill(self) -> None:
        now = time.monotonic()
        elapsed = now - self._last_refill
        to_add = int(elapsed / self.refill_interval * self.refill_rate)
        if to_add > 0:
            self._tokens = min(self.max_tokens, self._tokens + to_add)
            self._last_refill = now

    def try_acquire(self) -> bool:
        self._refill()
        if self._tokens >= 1:
            self._tokens -= 1
            return True
        return False

    async def acquire(self, timeout: float = 30.0) -> bool:
        """Wait for a token; False if none became available within ``timeout``."""
        deadline = time.monotonic() + timeout
        while True:
            async with self._lock:
                if self.try_acquire():
                    return True
            if time.monotonic() >= deadline:
                return False
            await asyncio.sleep(min(0.1, self.refill_interval))

    async def run(self, fn: Callable[[], Awaitable[T]], timeout: float = 30.0) -> T:
        if not await self.acquire(timeout):
            raise RateLimitExceeded("Rate limit exceeded - could not acquire token")
        return await fn()

    def status(self) -> dict:
        self._refill()
        return {
            "available_tokens": int(self._tokens),
            "max_tokens": self.max_tokens,
            "utilization_percent": (self.max_tokens - self._tokens) / self.max_tokens * 100,
        }


class RequestQueue:
    """Runs coroutines with at most ``max_concurrent`` in flight."""

    def __init__(self, max_concurrent: int = 5):
        self.max_concurrent = max_concurrent
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self._running = 0

    async def add(self, fn: Callable[[], Awaitable[T]]) -> T:
        async with self._semaphore:
            self._running += 1
            try:
                return await fn()
            finally:
                self._running -= 1

    def status(self) -> dict:
        return {"running": self._running, "max_concurrent": self.max_concurrent}
