"""API usage router — provider call counters for this process."""

from fastapi import APIRouter, Depends

from fairtrip.dependencies import get_flight_provider, get_tracker
from fairtrip.services.api_tracker import ApiCallTracker
from fairtrip.services.flight_provider import FlightProvider

router = APIRouter()


@router.get("")
async def get_usage(
    tracker: ApiCallTracker = Depends(get_tracker),
    provider: FlightProvider = Depends(get_flight_provider),
):
    return {"provider": provider.name, **tracker.snapshot()}


@router.post("/reset")
async def reset_usage(tracker: ApiCallTracker = Depends(get_tracker)):
    tracker.reset()
    return tracker.snapshot()
