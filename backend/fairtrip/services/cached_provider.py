"""Cached provider — wraps a FlightProvider with caching, rate limiting, tracking and retry.

Every provider call made by the search engine goes through this wrapper. The
core only ever sees a result list or an exception; throttling and retries
happen here.
"""

import logging
from datetime import date

import httpx

from fairtrip.config import Settings
from fairtrip.models import FlightFilters, FlightOffer
from fairtrip.services.amadeus_client import AmadeusClient
from fairtrip.services.api_tracker import ApiCallTracker
from fairtrip.services.cache_service import MINUTE, CacheService
from fairtrip.services.flight_provider import FlightProvider, apply_stop_filter
from fairtrip.services.mock_provider import MockFlightProvider
from fairtrip.services.rate_limiter import RateLimiter
from fairtrip.services.retry import retry_with_backoff
from fairtrip.services.travelpayouts_client import TravelpayoutsClient

logger = logging.getLogger(__name__)


class CachedFlightProvider:
    """FlightProvider decorator: cache → rate limit → track → retry → provider."""

    def __init__(
        self,
        provider: FlightProvider,
        cache: CacheService,
        tracker: ApiCallTracker,
        rate_limiter: RateLimiter | None = None,
        ttl_minutes: dict[str, int] | None = None,
        max_retries: int = 3,
        initial_delay: float = 2.0,
        max_delay: float = 16.0,
    ):
        self._provider = provider
        self._cache = cache
        self._tracker = tracker
        self._rate_limiter = rate_limiter or RateLimiter()
        self._ttl_minutes = {"airports": 60, "flights": 30, "destinations": 60, **(ttl_minutes or {})}
        self._max_retries = max_retries
        self._initial_delay = initial_delay
        self._max_delay = max_delay

    @property
    def name(self) -> str:
        return self._provider.name

    async def _call(self, endpoint: str, fn):
        async def attempt():
            self._tracker.track_call(endpoint)
            return await self._rate_limiter.run(fn)

        return await retry_with_backoff(
            attempt,
            max_retries=self._max_retries,
            initial_delay=self._initial_delay,
            max_delay=self._max_delay,
            label=f"{self.name} {endpoint}",
        )

    def _ttl(self, endpoint: str) -> int:
        return self._ttl_minutes[endpoint] * MINUTE

    async def search_airports(self, city_name: str) -> list[dict]:
        key = self._cache.make_key(f"airports:{self.name}", {"keyword": city_name.lower()})
        cached = await self._cache.get(key)
        if cached is not None:
            return cached

        locations = await self._call("airports", lambda: self._provider.search_airports(city_name))
        await self._cache.set(key, locations, ttl=self._ttl("airports"))
        return locations

    async def search_flights(
        self,
        origin: str,
        destination: str,
        departure_date: date,
        adults: int = 1,
        return_date: date | None = None,
        filters: FlightFilters | None = None,
    ) -> list[FlightOffer]:
        key = self._cache.make_key(
            f"flights:{self.name}",
            {
                "origin": origin,
                "destination": destination,
                "departure_date": departure_date,
                "return_date": return_date,
                "adults": adults,
                **(filters.to_dict() if filters else {}),
            },
        )
        cached = await self._cache.get(key)
        if cached is not None:
            return [FlightOffer.from_dict(o) for o in cached]

        offers = await self._call(
            "flights",
            lambda: self._provider.search_flights(
                origin, destination, departure_date, adults, return_date, filters
            ),
        )
        offers = apply_stop_filter(offers, filters)
        await self._cache.set(key, [o.to_dict() for o in offers], ttl=self._ttl("flights"))
        return offers

    async def search_destinations(self, origin: str) -> list[dict]:
        key = self._cache.make_key(f"destinations:{self.name}", {"origin": origin})
        cached = await self._cache.get(key)
        if cached is not None:
            return cached

        destinations = await self._call(
            "destinations", lambda: self._provider.search_destinations(origin)
        )
        await self._cache.set(key, destinations, ttl=self._ttl("destinations"))
        return destinations

    async def close(self):
        await self._provider.close()


def get_flight_provider(
    settings: Settings,
    cache: CacheService,
    tracker: ApiCallTracker,
    http_client: httpx.AsyncClient | None = None,
) -> CachedFlightProvider:
    """Select the configured adapter and wrap it for use by the search engine.

    Amadeus without credentials falls back to the mock provider (demo mode).
    Travelpayouts has no airport search, so it borrows Amadeus (or the mock).
    """
    choice = settings.flight_api_provider.lower()
    amadeus = None
    if settings.amadeus_configured and choice != "mock":
        amadeus = AmadeusClient(
            client_id=settings.amadeus_client_id,
            client_secret=settings.amadeus_client_secret,
            base_url=settings.amadeus_base_url,
            http_client=http_client,
        )

    ttl_minutes = {
        "airports": settings.cache_ttl_airports,
        "flights": settings.cache_ttl_flights,
        "destinations": settings.cache_ttl_destinations,
    }

    if choice == "travelpayouts":
        provider: FlightProvider = TravelpayoutsClient(
            token=settings.travelpayouts_token,
            marker=settings.travelpayouts_marker,
            base_url=settings.travelpayouts_base_url,
            currency=settings.travelpayouts_currency,
            http_client=http_client,
            airport_provider=amadeus or MockFlightProvider(),
            max_poll_attempts=settings.travelpayouts_poll_attempts,
        )
        ttl_minutes["flights"] = settings.cache_ttl_travelpayouts_flights
        ttl_minutes["destinations"] = settings.cache_ttl_travelpayouts_destinations
    elif choice == "amadeus" and amadeus is not None:
        provider = amadeus
    else:
        if choice != "mock":
            logger.warning(f"Provider '{choice}' not configured, using mock flight data")
        provider = MockFlightProvider()

    logger.info(f"Flight provider: {provider.name}")
    rate_limiter = RateLimiter(
        max_tokens=settings.rate_limit_max_tokens,
        refill_rate=1,
        refill_interval=settings.rate_limit_refill_interval_ms / 1000,
    )
    return CachedFlightProvider(
        provider,
        cache,
        tracker,
        rate_limiter=rate_limiter,
        ttl_minutes=ttl_minutes,
        max_retries=settings.retry_max_retries,
        initial_delay=settings.retry_initial_delay,
        max_delay=settings.retry_max_delay,
    )
