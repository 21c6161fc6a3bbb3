from datetime import date

from fairtrip.services.api_tracker import ApiCallTracker
from fairtrip.services.cache_service import CacheService


async def test_memory_tier_round_trip():
    tracker = ApiCallTracker()
    cache = CacheService(redis_url=None, tracker=tracker)

    assert await cache.set("k", {"a": 1}, ttl=60) is False  # memory only
    assert await cache.get("k") == {"a": 1}
    assert tracker.cache_hits == 1


async def test_expired_entries_miss():
    cache = CacheService()
    await cache.set("k", [1, 2], ttl=0)

    assert await cache.get("k") is None


async def test_delete_and_clear():
    cache = CacheService()
    await cache.set("a", 1)
    await cache.set("b", 2)

    await cache.delete("a")
    assert await cache.get("a") is None
    cache.clear_memory()
    assert await cache.get("b") is None


async def test_unreachable_redis_degrades_to_memory():
    cache = CacheService(redis_url="redis://127.0.0.1:1/0")

    assert await cache.set("k", "v", ttl=60) is False
    assert await cache.get("k") == "v"
    assert cache._redis_failed
    await cache.close()


async def test_expired_entries_pruned_on_write():
    cache = CacheService()
    await cache.set("old", 1, ttl=0)
    await cache.set("new", 2, ttl=60)

    assert list(cache._memory) == ["new"]


async def test_memory_tier_is_capped():
    cache = CacheService(max_memory_entries=2)
    await cache.set("a", 1, ttl=10)
    await cache.set("b", 2, ttl=60)
    await cache.set("c", 3, ttl=120)

    assert set(cache._memory) == {"b", "c"}
    await cache.set("b", 4, ttl=60)
    assert set(cache._memory) == {"b", "c"}
    assert await cache.get("b") == 4


def test_make_key_is_order_independent():
    a = CacheService.make_key("flights", {"origin": "EMA", "date": date(2026, 6, 12)})
    b = CacheService.make_key("flights", {"date": date(2026, 6, 12), "origin": "EMA"})

    assert a == b
    assert a.startswith("flights:")
    assert "2026-06-12" in a


def test_tracker_snapshot_and_reset():
    tracker = ApiCallTracker()
    tracker.track_call("flights")
    tracker.track_call("flights")
    tracker.track_call("airports")
    tracker.track_cache_hit()

    assert tracker.snapshot() == {"total": 3, "cache_hits": 1, "by_endpoint": {"flights": 2, "airports": 1}}
    tracker.reset()
    assert tracker.snapshot() == {"total": 0, "cache_hits": 0, "by_endpoint": {}}
