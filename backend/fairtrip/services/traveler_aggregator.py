"""Per-traveler aggregator — fans out over a traveler's airports and ranks the offers."""

import asyncio
import logging
from datetime import date

from fairtrip.models import Airport, FlightFilters, ScoredOffer, Traveler, TravelerShortlist
from fairtrip.services.airport_selection import select_airports
from fairtrip.services.fairness import weighted_score
from fairtrip.services.flight_provider import FlightProvider
from fairtrip.services.search_config import search_config

logger = logging.getLogger(__name__)


class PerTravelerAggregator:
    """Builds one traveler's best-first shortlist for a destination."""

    def __init__(self, provider: FlightProvider):
        self._provider = provider

    async def search_airports(
        self,
        airports: list[Airport],
        destination: str,
        date_from: date,
        date_to: date | None,
        filters: FlightFilters | None,
    ) -> list[ScoredOffer]:
        """Query every airport concurrently; a failing airport contributes nothing."""
        results = await asyncio.gather(
            *(
                self._provider.search_flights(a.code, destination, date_from, 1, date_to, filters)
                for a in airports
            ),
            return_exceptions=True,
        )

        scored: list[ScoredOffer] = []
        for airport, result in zip(airports, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.warning(f"Flight search failed for {airport.code}->{destination}: {result}")
                continue
            scored.extend(
                ScoredOffer(
                    offer=offer,
                    departure_airport=airport,
                    weighted_score=weighted_score(offer.price_total, airport.distance_miles),
                )
                for offer in result
            )
        return scored

    @staticmethod
    def rank(traveler: Traveler, scored: list[ScoredOffer]) -> TravelerShortlist | None:
        if not scored:
            return None
        # Stable sort keeps arrival order between equal scores
        ranked = sorted(scored, key=lambda s: s.weighted_score)
        return TravelerShortlist(
            traveler_id=traveler.id,
            offers=tuple(ranked[: search_config.shortlist.shortlist_size]),
        )

    async def aggregate(
        self,
        traveler: Traveler,
        destination: str,
        date_from: date,
        date_to: date | None = None,
        filters: FlightFilters | None = None,
        check_all: bool = False,
    ) -> TravelerShortlist | None:
        """
        Shortlist for one traveler, or None.

        None covers both "no selectable airports" and "no offers anywhere";
        the provider is not called at all in the first case.
        """
        airports = select_airports(traveler, check_all)
        if not airports:
            logger.info(f"Traveler {traveler.id} has no selectable airports")
            return None

        scored = await self.search_airports(airports, destination, date_from, date_to, filters)
        return self.rank(traveler, scored)
