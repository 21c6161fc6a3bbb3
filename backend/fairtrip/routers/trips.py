"""Trip search router — flight combinations for the group at one destination."""

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException

from fairtrip.config import Settings
from fairtrip.dependencies import get_settings, get_trip_search
from fairtrip.models import Traveler
from fairtrip.schemas.trip import GroupSearchRequest, TripSearchRequest
from fairtrip.services.trip_search import DestinationNotFound, TripSearchService

logger = logging.getLogger(__name__)

router = APIRouter()


def check_group(req: GroupSearchRequest, settings: Settings) -> None:
    if len(req.travelers) > settings.max_group_size:
        raise HTTPException(
            status_code=422,
            detail=f"Groups are limited to {settings.max_group_size} travelers",
        )


def to_travelers(req: GroupSearchRequest) -> list[Traveler]:
    try:
        return req.domain_travelers()
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/search")
async def search_trip(
    req: TripSearchRequest,
    service: TripSearchService = Depends(get_trip_search),
    settings: Settings = Depends(get_settings),
):
    """Search every traveler's flights and build cheapest/fairest/balanced packages."""
    check_group(req, settings)
    travelers = to_travelers(req)
    try:
        result = await asyncio.wait_for(
            service.search(
                travelers,
                req.destination,
                req.date_from,
                req.date_to,
                req.filters,
                req.check_all_airports,
            ),
            timeout=settings.search_timeout_seconds,
        )
    except DestinationNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except asyncio.TimeoutError:
        logger.error(f"Trip search to {req.destination} timed out after {settings.search_timeout_seconds}s")
        raise HTTPException(status_code=504, detail="Flight search timed out")

    return result.to_dict()
