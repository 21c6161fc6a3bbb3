"""Destination router — price and rank candidate destinations for a group."""

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException

from fairtrip.config import Settings
from fairtrip.dependencies import get_destination_ranker, get_estimator, get_settings
from fairtrip.routers.trips import check_group, to_travelers
from fairtrip.schemas.trip import EstimateRequest, RankDestinationsRequest
from fairtrip.services.destination_estimator import DestinationPriceEstimator, DestinationRanker

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/rank")
async def rank_destinations(
    req: RankDestinationsRequest,
    ranker: DestinationRanker = Depends(get_destination_ranker),
    settings: Settings = Depends(get_settings),
):
    """Discover destinations reachable by the group and rank them by price."""
    check_group(req, settings)
    travelers = to_travelers(req)
    try:
        candidates = await asyncio.wait_for(
            ranker.rank(
                travelers,
                req.date_from,
                req.date_to,
                req.filters,
                trip_types=req.trip_types,
                check_all=req.check_all_airports,
                sort_by=req.sort_by,
            ),
            timeout=settings.search_timeout_seconds,
        )
    except asyncio.TimeoutError:
        logger.error(f"Destination ranking timed out after {settings.search_timeout_seconds}s")
        raise HTTPException(status_code=504, detail="Destination search timed out")

    return {
        "destinations": [c.to_dict() for c in candidates],
        "message": None if candidates else (
            "Unable to fetch destination prices. Please try entering a custom destination."
        ),
    }


@router.post("/estimate")
async def estimate_destination(
    req: EstimateRequest,
    estimator: DestinationPriceEstimator = Depends(get_estimator),
    settings: Settings = Depends(get_settings),
):
    """Price summary for one destination, or null when nobody has flights."""
    check_group(req, settings)
    travelers = to_travelers(req)
    try:
        summary = await asyncio.wait_for(
            estimator.estimate(
                req.destination,
                travelers,
                req.date_from,
                req.date_to,
                req.filters,
                req.check_all_airports,
            ),
            timeout=settings.search_timeout_seconds,
        )
    except asyncio.TimeoutError:
        logger.error(f"Estimate for {req.destination} timed out after {settings.search_timeout_seconds}s")
        raise HTTPException(status_code=504, detail="Destination estimate timed out")
    return {"destination": req.destination, "summary": summary.to_dict() if summary else None}
