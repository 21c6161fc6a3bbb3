"""Flight provider contract shared by the Amadeus, Travelpayouts and mock adapters."""

import logging
from datetime import date
from typing import Protocol

from fairtrip.models import FlightFilters, FlightOffer

logger = logging.getLogger(__name__)


class ProviderUnavailable(Exception):
    """Network failure, non-2xx response or malformed payload from a provider."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class RateLimitExceeded(ProviderUnavailable):
    """A rate-limit token could not be acquired in time."""


class FlightProvider(Protocol):
    """Narrow contract the search engine consumes.

    Implementations return a (possibly empty) list or raise; they never
    swallow failures into empty results themselves.
    """

    name: str

    async def search_airports(self, city_name: str) -> list[dict]:
        """Locations for a city: dicts with iataCode, name, subType."""
        ...

    async def search_flights(
        self,
        origin: str,
        destination: str,
        departure_date: date,
        adults: int = 1,
        return_date: date | None = None,
        filters: FlightFilters | None = None,
    ) -> list[FlightOffer]:
        ...

    async def search_destinations(self, origin: str) -> list[dict]:
        """Reachable destinations: dicts with at least a destination code."""
        ...

    async def close(self) -> None:
        ...


def apply_stop_filter(offers: list[FlightOffer], filters: FlightFilters | None) -> list[FlightOffer]:
    """Post-filter offers the provider could not restrict natively.

    An offer survives only if every itinerary (outbound and return) has at
    most ``max_stops`` stops; ``non_stop`` keeps single-segment itineraries.
    """
    if filters is None:
        return offers
    if filters.wants_non_stop:
        return [o for o in offers if o.within_stops(0)]
    if filters.max_stops is not None:
        kept = [o for o in offers if o.within_stops(filters.max_stops)]
        if len(kept) != len(offers):
            logger.debug(f"Filtered to {len(kept)} offers with max {filters.max_stops} stops")
        return kept
    return offers
