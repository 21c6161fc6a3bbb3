"""Airport selection policy — which of a traveler's airports to actually query."""

from fairtrip.data.airports import MAJOR_HUB_CITIES
from fairtrip.models import Airport, Traveler
from fairtrip.services.search_config import search_config


def is_major_hub(origin: str) -> bool:
    origin = origin.lower()
    return any(hub.lower() in origin for hub in MAJOR_HUB_CITIES)


def select_airports(traveler: Traveler, check_all: bool = False) -> list[Airport]:
    """Airports to search for a traveler, after exclusions.

    Hub cities and ``check_all`` keep every remaining airport. Other origins
    are capped to the closest few by distance. An all-excluded traveler gets
    an empty list.
    """
    remaining = [a for a in traveler.candidate_airports if a.code not in traveler.excluded_airports]
    if check_all or is_major_hub(traveler.origin):
        return remaining
    remaining.sort(key=lambda a: a.distance_miles)
    return remaining[: search_config.airports.non_hub_max_airports]
