import asyncio

import httpx
import pytest

from fairtrip.services.flight_provider import ProviderUnavailable, RateLimitExceeded
from fairtrip.services.rate_limiter import RateLimiter, RequestQueue
from fairtrip.services.retry import is_retryable, retry_with_backoff

NO_WAIT = {"initial_delay": 0, "max_delay": 0}


def flaky(failures: list[Exception], result="ok"):
    calls = []

    async def fn():
        calls.append(1)
        if failures:
            raise failures.pop(0)
        return result

    return fn, calls


class TestRetry:
    @pytest.mark.parametrize("exc,expected", [
        (ProviderUnavailable("down", 503), True),
        (ProviderUnavailable("throttled", 429), True),
        (ProviderUnavailable("timeout", 408), True),
        (ProviderUnavailable("no status"), True),
        (ProviderUnavailable("bad request", 400), False),
        (ProviderUnavailable("auth", 401), False),
        (RateLimitExceeded("no token"), False),
        (httpx.ConnectError("refused"), True),
        (asyncio.TimeoutError(), True),
        (ValueError("bug"), False),
    ])
    def test_classification(self, exc, expected):
        assert is_retryable(exc) is expected

    def test_http_status_errors(self):
        request = httpx.Request("GET", "https://example.test")
        for status, expected in ((502, True), (404, False)):
            exc = httpx.HTTPStatusError("err", request=request, response=httpx.Response(status, request=request))
            assert is_retryable(exc) is expected

    async def test_succeeds_after_transient_failures(self):
        fn, calls = flaky([ProviderUnavailable("a", 503), ProviderUnavailable("b", 500)])

        assert await retry_with_backoff(fn, max_retries=3, **NO_WAIT) == "ok"
        assert len(calls) == 3

    async def test_gives_up_after_max_retries(self):
        fn, calls = flaky([ProviderUnavailable(str(i), 503) for i in range(5)])

        with pytest.raises(ProviderUnavailable, match="2"):
            await retry_with_backoff(fn, max_retries=2, **NO_WAIT)
        assert len(calls) == 3

    async def test_non_retryable_raises_immediately(self):
        fn, calls = flaky([ProviderUnavailable("bad", 400)])

        with pytest.raises(ProviderUnavailable):
            await retry_with_backoff(fn, max_retries=3, **NO_WAIT)
        assert len(calls) == 1


class TestRateLimiter:
    def test_bucket_empties(self):
        limiter = RateLimiter(max_tokens=2, refill_rate=1, refill_interval=60)

        assert limiter.try_acquire()
        assert limiter.try_acquire()
        assert not limiter.try_acquire()
        assert limiter.status()["available_tokens"] == 0

    async def test_acquire_times_out(self):
        limiter = RateLimiter(max_tokens=1, refill_rate=1, refill_interval=60)
        assert await limiter.acquire(timeout=0.05)

        assert await limiter.acquire(timeout=0.05) is False

    async def test_run_raises_when_exhausted(self):
        limiter = RateLimiter(max_tokens=1, refill_rate=1, refill_interval=60)

        async def call():
            return 42

        assert await limiter.run(call, timeout=0.01) == 42
        with pytest.raises(RateLimitExceeded):
            await limiter.run(call, timeout=0.01)

    async def test_refills_over_time(self):
        limiter = RateLimiter(max_tokens=1, refill_rate=1, refill_interval=0.01)
        assert limiter.try_acquire()

        assert await limiter.acquire(timeout=1.0)


class TestRequestQueue:
    async def test_limits_concurrency(self):
        queue = RequestQueue(max_concurrent=2)
        running = 0
        peak = 0

        async def job(i):
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            await asyncio.sleep(0.01)
            running -= 1
            return i

        results = await asyncio.gather(*(queue.add(lambda i=i: job(i)) for i in range(6)))

        assert results == list(range(6))
        assert peak == 2
        assert queue.status()["running"] == 0

    async def test_errors_propagate_and_release_slot(self):
        queue = RequestQueue(max_concurrent=1)

        async def boom():
            raise ValueError("boom")

        async def fine():
            return "fine"

        with pytest.raises(ValueError):
            await queue.add(boom)
        assert await queue.add(fine) == "fine"
