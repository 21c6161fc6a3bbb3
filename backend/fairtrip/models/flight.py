"""Flight offer types — normalized at the provider boundary, immutable afterwards."""

import re
from dataclasses import dataclass, field

from fairtrip.models.trip import Airport

_DURATION_RE = re.compile(r"^P(?:(\d+)D)?T?(?:(\d+)H)?(?:(\d+)M)?")


@dataclass(frozen=True)
class FlightFilters:
    """Stop-count filters passed through to the provider."""

    non_stop: bool = False
    max_stops: int | None = None   # 0 | 1 | 2 | None

    @classmethod
    def from_preferences(cls, direct_only: bool = False, max_stops: int | None = None) -> "FlightFilters":
        if direct_only:
            return cls(non_stop=True)
        if max_stops is not None:
            return cls(max_stops=max_stops)
        return cls()

    @property
    def wants_non_stop(self) -> bool:
        return self.non_stop or self.max_stops == 0

    def relaxed(self) -> "FlightFilters":
        """Same filters with the direct-only restriction lifted."""
        return FlightFilters(non_stop=False, max_stops=self.max_stops)

    def to_dict(self) -> dict:
        return {"non_stop": self.non_stop, "max_stops": self.max_stops}


@dataclass(frozen=True)
class FlightPoint:
    airport_code: str
    at: str                    # ISO timestamp as returned by the provider


@dataclass(frozen=True)
class Segment:
    departure: FlightPoint
    arrival: FlightPoint
    carrier_code: str
    flight_number: str

    def to_dict(self) -> dict:
        return {
            "departure": {"airport": self.departure.airport_code, "at": self.departure.at},
            "arrival": {"airport": self.arrival.airport_code, "at": self.arrival.at},
            "carrier_code": self.carrier_code,
            "flight_number": self.flight_number,
        }


@dataclass(frozen=True)
class Itinerary:
    duration: str              # ISO 8601, e.g. PT2H30M
    segments: tuple[Segment, ...] = ()

    @property
    def stops(self) -> int:
        return max(len(self.segments) - 1, 0)

    @property
    def duration_minutes(self) -> int:
        """Parse ISO 8601 duration (PT2H30M) to minutes."""
        match = _DURATION_RE.match(self.duration or "")
        if not match:
            return 0
        days, hours, minutes = (int(g) if g else 0 for g in match.groups())
        return days * 24 * 60 + hours * 60 + minutes

    def to_dict(self) -> dict:
        return {
            "duration": self.duration,
            "duration_minutes": self.duration_minutes,
            "stops": self.stops,
            "segments": [s.to_dict() for s in self.segments],
        }


@dataclass(frozen=True)
class FlightOffer:
    """A priced itinerary offer: 1 itinerary = one-way, 2 = outbound + return."""

    id: str
    price_total: float
    currency: str
    itineraries: tuple[Itinerary, ...] = ()
    source: str = ""

    @property
    def is_round_trip(self) -> bool:
        return len(self.itineraries) > 1

    @property
    def max_stops(self) -> int:
        return max((i.stops for i in self.itineraries), default=0)

    def within_stops(self, max_stops: int) -> bool:
        return all(i.stops <= max_stops for i in self.itineraries)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "price": round(self.price_total, 2),
            "currency": self.currency,
            "source": self.source,
            "itineraries": [i.to_dict() for i in self.itineraries],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FlightOffer":
        """Rebuild an offer serialized with ``to_dict`` (e.g. from cache)."""
        return cls(
            id=data["id"],
            price_total=float(data["price"]),
            currency=data["currency"],
            source=data.get("source", ""),
            itineraries=tuple(
                Itinerary(
                    duration=itin["duration"],
                    segments=tuple(
                        Segment(
                            departure=FlightPoint(seg["departure"]["airport"], seg["departure"]["at"]),
                            arrival=FlightPoint(seg["arrival"]["airport"], seg["arrival"]["at"]),
                            carrier_code=seg["carrier_code"],
                            flight_number=seg["flight_number"],
                        )
                        for seg in itin["segments"]
                    ),
                )
                for itin in data["itineraries"]
            ),
        )


@dataclass(frozen=True)
class ScoredOffer:
    """An offer decorated with the airport it departs from and its weighted score."""

    offer: FlightOffer
    departure_airport: Airport
    weighted_score: float

    @property
    def id(self) -> str:
        return self.offer.id

    @property
    def ref(self) -> str:
        """Provider ids are only unique per request, so qualify them by airport."""
        return f"{self.departure_airport.code}:{self.offer.id}"

    @property
    def price(self) -> float:
        return self.offer.price_total

    @property
    def currency(self) -> str:
        return self.offer.currency

    def to_dict(self) -> dict:
        return {
            **self.offer.to_dict(),
            "ref": self.ref,
            "departure_airport": self.departure_airport.to_dict(),
            "weighted_score": round(self.weighted_score, 2),
        }


@dataclass(frozen=True)
class TravelerShortlist:
    """Best-first offers for one traveler at one destination."""

    traveler_id: str
    offers: tuple[ScoredOffer, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.offers:
            raise ValueError(f"Shortlist for traveler {self.traveler_id} is empty")

    @property
    def best(self) -> ScoredOffer:
        return self.offers[0]

    def to_dict(self) -> dict:
        return {
            "traveler_id": self.traveler_id,
            "flights": [o.to_dict() for o in self.offers],
            "cheapest": self.best.to_dict(),
        }
