"""Airport router — resolve a traveler's origin city to candidate airports."""

from fastapi import APIRouter, Depends, Query

from fairtrip.dependencies import get_airport_resolver
from fairtrip.services.airport_resolver import AirportResolver

router = APIRouter()


@router.get("/resolve")
async def resolve_airports(
    city: str = Query(..., min_length=1),
    resolver: AirportResolver = Depends(get_airport_resolver),
):
    """Candidate departure airports for a city, with the default selection."""
    airports = await resolver.resolve(city)
    return {
        "city": city,
        "airports": [a.to_dict() for a in airports],
        "selected_airport": airports[0].code if airports else None,
    }
