"""Retry with exponential backoff for provider calls."""

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from typing import TypeVar

import httpx

from fairtrip.services.flight_provider import ProviderUnavailable, RateLimitExceeded

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRYABLE_STATUS = {408, 429, 500, 502, 503, 504}


def is_retryable(exc: BaseException) -> bool:
    """Transport errors, timeouts and transient HTTP statuses are retried."""
    if isinstance(exc, RateLimitExceeded):
        return False
    if isinstance(exc, (httpx.TransportError, asyncio.TimeoutError)):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in RETRYABLE_STATUS
    if isinstance(exc, ProviderUnavailable):
        return exc.status_code is None or exc.status_code in RETRYABLE_STATUS
    return False


async def retry_with_backoff(
    fn: Callable[[], Awaitable[T]],
    *,
    max_retries: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 10.0,
    backoff_factor: float = 2.0,
    label: str = "provider call",
) -> T:
    """Run ``fn`` until it succeeds, retrying transient failures.

    Non-retryable errors propagate immediately; after ``max_retries`` retries
    the last error is re-raised.
    """
    delay = initial_delay
    for attempt in range(max_retries + 1):
        try:
            return await fn()
        except Exception as e:
            if attempt == max_retries or not is_retryable(e):
                raise
            logger.warning(
                f"Retry {attempt + 1}/{max_retries} for {label} after {delay:.1f}s: {e}"
            )
            await asyncio.sleep(delay)
            delay = min(delay * backoff_factor + random.uniform(0, 1), max_delay)
    raise AssertionError("unreachable")
