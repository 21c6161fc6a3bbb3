"""FastAPI dependencies — services built in the lifespan and stored on app.state."""

from fastapi import Depends, Request

from fairtrip.config import Settings
from fairtrip.services.airport_resolver import AirportResolver
from fairtrip.services.api_tracker import ApiCallTracker
from fairtrip.services.destination_estimator import DestinationPriceEstimator, DestinationRanker
from fairtrip.services.flight_provider import FlightProvider
from fairtrip.services.traveler_aggregator import PerTravelerAggregator
from fairtrip.services.trip_search import TripSearchService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_flight_provider(request: Request) -> FlightProvider:
    return request.app.state.flight_provider


def get_tracker(request: Request) -> ApiCallTracker:
    return request.app.state.tracker


def get_airport_resolver(provider: FlightProvider = Depends(get_flight_provider)) -> AirportResolver:
    return AirportResolver(provider)


def get_aggregator(provider: FlightProvider = Depends(get_flight_provider)) -> PerTravelerAggregator:
    return PerTravelerAggregator(provider)


def get_estimator(aggregator: PerTravelerAggregator = Depends(get_aggregator)) -> DestinationPriceEstimator:
    return DestinationPriceEstimator(aggregator)


def get_destination_ranker(
    provider: FlightProvider = Depends(get_flight_provider),
    estimator: DestinationPriceEstimator = Depends(get_estimator),
    settings: Settings = Depends(get_settings),
) -> DestinationRanker:
    return DestinationRanker(
        provider,
        estimator,
        max_destinations=settings.max_destinations_to_price,
        max_origins=settings.max_discovery_origins,
        concurrency=settings.request_queue_concurrency,
    )


def get_trip_search(
    provider: FlightProvider = Depends(get_flight_provider),
    aggregator: PerTravelerAggregator = Depends(get_aggregator),
    settings: Settings = Depends(get_settings),
) -> TripSearchService:
    marker = settings.travelpayouts_marker if provider.name == "travelpayouts" else ""
    return TripSearchService(provider, aggregator, booking_marker=marker)
