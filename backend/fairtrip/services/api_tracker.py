"""Per-session counters for provider calls and cache hits."""

from collections import Counter


class ApiCallTracker:
    def __init__(self):
        self.total_calls = 0
        self.cache_hits = 0
        self.calls_by_endpoint: Counter[str] = Counter()

    def track_call(self, endpoint: str) -> None:
        self.total_calls += 1
        self.calls_by_endpoint[endpoint] += 1

    def track_cache_hit(self) -> None:
        self.cache_hits += 1

    def reset(self) -> None:
        self.total_calls = 0
        self.cache_hits = 0
        self.calls_by_endpoint.clear()

    def snapshot(self) -> dict:
        return {
            "total": self.total_calls,
            "cache_hits": self.cache_hits,
            "by_endpoint": dict(self.calls_by_endpoint),
        }
