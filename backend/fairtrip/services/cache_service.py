"""Two-tier cache — in-process memory in front of Redis, with per-key TTLs."""

import json
import logging
import time
from typing import Any

import redis.asyncio as redis

from fairtrip.services.api_tracker import ApiCallTracker

logger = logging.getLogger(__name__)

MINUTE = 60


class CacheService:
    """Memory + Redis cache. Redis being down degrades to memory only."""

    def __init__(
        self,
        redis_url: str | None = None,
        tracker: ApiCallTracker | None = None,
        max_memory_entries: int = 1000,
    ):
        self._redis_url = redis_url
        self._redis: redis.Redis | None = None
        self._redis_failed = False
        self._memory: dict[str, tuple[float, Any]] = {}
        self._tracker = tracker
        self._max_memory_entries = max_memory_entries

    async def _get_redis(self) -> redis.Redis | None:
        if not self._redis_url or self._redis_failed:
            return None
        if self._redis is None:
            try:
                self._redis = redis.from_url(
                    self._redis_url,
                    encoding="utf-8",
                    decode_responses=True,
                )
                await self._redis.ping()
            except Exception as e:
                logger.warning(f"Redis unavailable, using memory cache only: {e}")
                self._redis = None
                self._redis_failed = True
                return None
        return self._redis

    @staticmethod
    def make_key(endpoint: str, params: dict) -> str:
        return f"{endpoint}:{json.dumps(params, sort_keys=True, default=str)}"

    async def get(self, key: str) -> Any | None:
        """Get a value from cache. Returns None on miss or error."""
        item = self._memory.get(key)
        if item is not None:
            expiry, value = item
            if expiry > time.monotonic():
                logger.debug(f"Cache HIT (memory): {key}")
                self._hit()
                return value
            del self._memory[key]

        try:
            r = await self._get_redis()
            if r is None:
                return None
            raw = await r.get(key)
            if raw is None:
                logger.debug(f"Cache MISS: {key}")
                return None
            value = json.loads(raw)
            ttl = await r.ttl(key)
            if ttl and ttl > 0:
                self._remember(key, value, ttl)
            logger.debug(f"Cache HIT (redis): {key}")
            self._hit()
            return value
        except Exception as e:
            logger.warning(f"Cache read error for {key}: {e}")
            return None

    async def set(self, key: str, value: Any, ttl: int = 30 * MINUTE) -> bool:
        """Set a value with TTL in seconds. Returns False if only memory was written."""
        self._remember(key, value, ttl)
        try:
            r = await self._get_redis()
            if r is None:
                return False
            await r.set(key, json.dumps(value, default=str), ex=ttl)
            return True
        except Exception as e:
            logger.warning(f"Cache write error for {key}: {e}")
            return False

    async def delete(self, key: str) -> bool:
        self._memory.pop(key, None)
        try:
            r = await self._get_redis()
            if r is None:
                return False
            await r.delete(key)
            return True
        except Exception:
            return False

    def _remember(self, key: str, value: Any, ttl: float) -> None:
        now = time.monotonic()
        self._memory.pop(key, None)
        self._prune_memory(now)
        self._memory[key] = (now + ttl, value)

    def _prune_memory(self, now: float) -> None:
        """Drop expired entries, then the soonest-expiring ones while at capacity."""
        for key in [k for k, (expiry, _) in self._memory.items() if expiry <= now]:
            del self._memory[key]
        overflow = len(self._memory) - self._max_memory_entries + 1
        if overflow > 0:
            soonest = sorted(self._memory, key=lambda k: self._memory[k][0])[:overflow]
            for key in soonest:
                del self._memory[key]

    def clear_memory(self) -> None:
        self._memory.clear()

    def _hit(self) -> None:
        if self._tracker is not None:
            self._tracker.track_cache_hit()

    async def close(self):
        if self._redis:
            await self._redis.aclose()
            self._redis = None
