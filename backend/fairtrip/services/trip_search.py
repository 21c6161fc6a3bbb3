"""Trip search — coordinates the full group search for one chosen destination."""

import asyncio
import logging
import re
import time
from datetime import date

from fairtrip.data.airports import DESTINATION_AIRPORTS
from fairtrip.models import FlightFilters, Traveler, TravelerShortlist, TripSearchResult
from fairtrip.services.airport_selection import select_airports
from fairtrip.services.booking_links import build_booking_links
from fairtrip.services.combination_engine import compute_combinations
from fairtrip.services.fairness import fairness_details
from fairtrip.services.flight_provider import FlightProvider
from fairtrip.services.traveler_aggregator import PerTravelerAggregator

logger = logging.getLogger(__name__)

IATA_CODE_RE = re.compile(r"[A-Z]{3}")

NO_FLIGHTS_MESSAGE = "No flights found for any traveler. Try different dates or airports."


class DestinationNotFound(Exception):
    """A destination name could not be resolved to an airport code."""


class TripSearchService:
    """Resolves the destination, searches every traveler and packages the results."""

    def __init__(self, provider: FlightProvider, aggregator: PerTravelerAggregator, booking_marker: str = ""):
        self._provider = provider
        self._aggregator = aggregator
        self._booking_marker = booking_marker

    async def resolve_destination(self, destination: str) -> str:
        """Airport code for a destination: IATA code as given, curated table, then provider search."""
        destination = destination.strip()
        if IATA_CODE_RE.fullmatch(destination):
            return destination
        if destination in DESTINATION_AIRPORTS:
            return DESTINATION_AIRPORTS[destination]
        for city, code in DESTINATION_AIRPORTS.items():
            if city.lower() == destination.lower():
                return code

        locations = await self._provider.search_airports(destination)
        airports = [loc for loc in locations if loc.get("subType") == "AIRPORT" and loc.get("iataCode")]
        if not airports:
            raise DestinationNotFound(f"No airports found for {destination}")
        return airports[0]["iataCode"]

    async def _traveler_shortlist(
        self,
        traveler: Traveler,
        destination: str,
        date_from: date,
        date_to: date | None,
        filters: FlightFilters,
        check_all: bool,
    ) -> TravelerShortlist | None:
        airports = select_airports(traveler, check_all)
        if not airports:
            return None

        scored = await self._aggregator.search_airports(airports, destination, date_from, date_to, filters)
        if not scored and filters.non_stop:
            # No direct flights anywhere; connecting flights beat no flights
            logger.info(f"No direct flights for traveler {traveler.id}, retrying with connections")
            scored = await self._aggregator.search_airports(
                airports, destination, date_from, date_to, filters.relaxed()
            )
        return self._aggregator.rank(traveler, scored)

    async def search(
        self,
        travelers: list[Traveler],
        destination: str,
        date_from: date,
        date_to: date | None = None,
        filters: FlightFilters | None = None,
        check_all: bool = False,
    ) -> TripSearchResult:
        """
        Search flights for every traveler to one destination.

        Returns per-traveler shortlists, the labeled combinations, the
        fairness of everyone's best pick and booking links per offer.
        """
        start_time = time.monotonic()
        filters = filters or FlightFilters()
        code = await self.resolve_destination(destination)

        results = await asyncio.gather(
            *(self._traveler_shortlist(t, code, date_from, date_to, filters, check_all) for t in travelers)
        )
        shortlists = {t.id: s for t, s in zip(travelers, results) if s is not None}

        combinations = compute_combinations(shortlists, travelers)
        fairness = fairness_details(travelers, {tid: s.best for tid, s in shortlists.items()})
        booking_links = {
            o.ref: build_booking_links(o.offer, o.departure_airport.code, code, self._booking_marker)
            for s in shortlists.values()
            for o in s.offers
        }

        elapsed_ms = int((time.monotonic() - start_time) * 1000)
        logger.info(
            f"Trip search to {code}: {len(shortlists)}/{len(travelers)} travelers with flights, "
            f"{len(combinations)} combinations in {elapsed_ms}ms"
        )
        return TripSearchResult(
            destination_code=code,
            shortlists=shortlists,
            combinations=tuple(combinations),
            fairness=fairness,
            travelers_with_flights=len(shortlists),
            message=None if shortlists else NO_FLIGHTS_MESSAGE,
            booking_links=booking_links,
        )
