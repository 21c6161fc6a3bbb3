"""Airport resolver — maps a free-text origin city to candidate departure airports."""

import logging
import re

from fairtrip.data.airports import CITY_AIRPORTS, DEFAULT_AIRPORT_DISTANCE
from fairtrip.models import Airport
from fairtrip.services.flight_provider import FlightProvider

logger = logging.getLogger(__name__)

MAX_SEARCHED_AIRPORTS = 5


def normalize_city(city: str) -> str:
    """Strip and collapse whitespace; keep letters, spaces, hyphens, apostrophes and dots."""
    cleaned = re.sub(r"[^\w\s'.-]", "", city, flags=re.UNICODE)
    return re.sub(r"\s+", " ", cleaned).strip()


class AirportResolver:
    """Predefined table lookup first, live provider search otherwise."""

    def __init__(self, provider: FlightProvider):
        self._provider = provider

    @staticmethod
    def lookup_predefined(city: str) -> list[Airport] | None:
        key = city.lower()
        for name, airports in CITY_AIRPORTS.items():
            if name.lower() == key:
                return [Airport(a["code"], a["name"], a["distance"]) for a in airports]
        return None

    async def resolve(self, city: str) -> list[Airport]:
        """Candidate airports for a city, nearest-known first.

        Names shorter than 3 characters resolve to nothing. Airports found
        through the provider get a placeholder distance since the real one
        is unknown.
        """
        city = normalize_city(city)
        if len(city) < 3:
            return []

        predefined = self.lookup_predefined(city)
        if predefined is not None:
            logger.debug(f"Using predefined airports for {city}: {[a.code for a in predefined]}")
            return predefined

        locations = await self._provider.search_airports(city)
        airports = [
            Airport(loc["iataCode"], loc.get("name", ""), DEFAULT_AIRPORT_DISTANCE)
            for loc in locations
            if loc.get("subType") == "AIRPORT" and loc.get("iataCode")
        ][:MAX_SEARCHED_AIRPORTS]
        if not airports:
            logger.info(f"No airports found for {city}")
        return airports
