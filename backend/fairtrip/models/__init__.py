from fairtrip.models.trip import Airport, Luggage, Traveler
from fairtrip.models.flight import (
    FlightFilters,
    FlightOffer,
    FlightPoint,
    Itinerary,
    ScoredOffer,
    Segment,
    TravelerShortlist,
)
from fairtrip.models.result import (
    Combination,
    DestinationCandidate,
    FairnessDetail,
    PriceSummary,
    Selection,
    TravelerFairness,
    TripSearchResult,
)

__all__ = [
    "Airport",
    "Combination",
    "DestinationCandidate",
    "FairnessDetail",
    "FlightFilters",
    "FlightOffer",
    "FlightPoint",
    "Itinerary",
    "Luggage",
    "PriceSummary",
    "ScoredOffer",
    "Segment",
    "Selection",
    "Traveler",
    "TravelerFairness",
    "TravelerShortlist",
    "TripSearchResult",
]
