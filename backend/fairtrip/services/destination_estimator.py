"""Destination price estimator — cheap per-destination summaries for ranking before a full search."""

import asyncio
import logging
from datetime import date

from fairtrip.data.airports import DESTINATION_AIRPORTS, city_for_destination_code, get_destination_types
from fairtrip.models import DestinationCandidate, FlightFilters, PriceSummary, Traveler
from fairtrip.services.airport_selection import select_airports
from fairtrip.services.fairness import ensure_single_currency, fairness_score, round_half_up
from fairtrip.services.flight_provider import FlightProvider
from fairtrip.services.rate_limiter import RequestQueue
from fairtrip.services.traveler_aggregator import PerTravelerAggregator

logger = logging.getLogger(__name__)

SORT_KEYS = {
    "avg_price": lambda c: c.summary.avg_price,
    "deviation": lambda c: c.summary.deviation,
    "min_price": lambda c: c.summary.min_price,
}


class DestinationPriceEstimator:
    """Summarises what the group would pay to reach one destination."""

    def __init__(self, aggregator: PerTravelerAggregator):
        self._aggregator = aggregator

    async def estimate(
        self,
        destination: str,
        travelers: list[Traveler],
        date_from: date,
        date_to: date | None = None,
        filters: FlightFilters | None = None,
        check_all: bool = False,
    ) -> PriceSummary | None:
        """Average/min/max of each traveler's best actual price, or None if nobody has flights.

        Prices are the offers' real totals; the distance penalty only chose
        which offer is best.
        """
        shortlists = await asyncio.gather(
            *(
                self._aggregator.aggregate(t, destination, date_from, date_to, filters, check_all)
                for t in travelers
            )
        )
        bests = [s.best for s in shortlists if s is not None]
        if not bests:
            return None

        ensure_single_currency(bests)
        prices = [b.price for b in bests]
        return PriceSummary(
            avg_price=round_half_up(sum(prices) / len(prices)),
            min_price=round_half_up(min(prices)),
            max_price=round_half_up(max(prices)),
            deviation=round_half_up(max(prices) - min(prices)),
            fairness_score=fairness_score(prices),
        )


class DestinationRanker:
    """Discovers candidate destinations for a group and prices each one."""

    def __init__(
        self,
        provider: FlightProvider,
        estimator: DestinationPriceEstimator,
        max_destinations: int = 15,
        max_origins: int = 3,
        concurrency: int = 5,
    ):
        self._provider = provider
        self._estimator = estimator
        self._max_destinations = max_destinations
        self._max_origins = max_origins
        self._concurrency = concurrency

    async def _api_destinations(self, travelers: list[Traveler], check_all: bool) -> list[tuple[str, str]]:
        origins = list(dict.fromkeys(
            a.code for t in travelers for a in select_airports(t, check_all)
        ))[: self._max_origins]
        logger.info(f"Fetching destinations from {len(origins)} airports: {origins}")

        async def fetch(origin: str) -> list[dict]:
            try:
                return await self._provider.search_destinations(origin)
            except Exception as e:
                logger.warning(f"Failed to fetch destinations for {origin}: {e}")
                return []

        results = await asyncio.gather(*(fetch(o) for o in origins))
        found: list[tuple[str, str]] = []
        for dest in (d for batch in results for d in batch):
            code = dest.get("destination", "")
            city = city_for_destination_code(code)
            if city is not None:
                found.append((city, code))
        return found

    async def candidates(
        self,
        travelers: list[Traveler],
        trip_types: list[str] | None = None,
        check_all: bool = False,
    ) -> list[tuple[str, str, list[str]]]:
        """(city, code, types) to price: provider results first, then the curated list."""
        api: dict[str, tuple[str, str, list[str]]] = {}
        for city, code in await self._api_destinations(travelers, check_all):
            api.setdefault(code, (city, code, get_destination_types(city)))
        # Curated cities sharing an airport (Palma/Mallorca) stay separate entries
        curated = [
            (city, code, get_destination_types(city))
            for city, code in DESTINATION_AIRPORTS.items()
            if code not in api
        ]

        destinations = [*api.values(), *curated]
        wanted = set(trip_types or [])
        if wanted and "all" not in wanted:
            destinations = [d for d in destinations if wanted.intersection(d[2])]
            logger.info(f"Filtered to {len(destinations)} destinations matching: {sorted(wanted)}")
        return destinations[: self._max_destinations]

    async def rank(
        self,
        travelers: list[Traveler],
        date_from: date,
        date_to: date | None = None,
        filters: FlightFilters | None = None,
        trip_types: list[str] | None = None,
        check_all: bool = False,
        sort_by: str = "avg_price",
    ) -> list[DestinationCandidate]:
        """Price each candidate destination and return those with flights, sorted."""
        to_price = await self.candidates(travelers, trip_types, check_all)
        logger.info(f"Calculating prices for {len(to_price)} destinations")
        queue = RequestQueue(self._concurrency)

        async def price(city: str, code: str, types: list[str]) -> DestinationCandidate | None:
            try:
                summary = await queue.add(
                    lambda: self._estimator.estimate(code, travelers, date_from, date_to, filters, check_all)
                )
            except Exception as e:
                logger.warning(f"Failed to price {city}: {e}")
                return None
            if summary is None:
                logger.debug(f"{city}: no flights found")
                return None
            return DestinationCandidate(code=code, city=city, trip_types=tuple(types), summary=summary)

        priced = await asyncio.gather(*(price(*d) for d in to_price))
        ranked = [c for c in priced if c is not None]
        logger.info(f"Priced {len(ranked)}/{len(to_price)} destinations")
        return sorted(ranked, key=SORT_KEYS.get(sort_by, SORT_KEYS["avg_price"]))
