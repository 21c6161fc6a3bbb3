"""Derived search results — rebuilt on every search, never mutated in place."""

from dataclasses import dataclass, field

from fairtrip.models.flight import ScoredOffer, TravelerShortlist
from fairtrip.models.trip import Traveler


@dataclass(frozen=True)
class TravelerFairness:
    name: str
    airport_label: str
    cost: float
    diff_from_avg: float

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "airport": self.airport_label,
            "cost": round(self.cost, 2),
            "diff_from_avg": round(self.diff_from_avg, 2),
        }


@dataclass(frozen=True)
class FairnessDetail:
    score: int                 # 0-100, higher = costs closer together
    avg_cost: float
    per_traveler: tuple[TravelerFairness, ...]

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "avg_cost": round(self.avg_cost, 2),
            "travelers": [t.to_dict() for t in self.per_traveler],
        }


@dataclass(frozen=True)
class Selection:
    """One traveler's chosen offer inside a combination."""

    traveler: Traveler
    offer: ScoredOffer

    def to_dict(self) -> dict:
        return {
            "traveler_id": self.traveler.id,
            "traveler_name": self.traveler.display_name,
            "flight": self.offer.to_dict(),
        }


@dataclass(frozen=True)
class Combination:
    """A labeled group package: one offer per traveler with results."""

    id: str                    # "cheapest" | "fairest" | "balanced"
    title: str
    description: str
    selections: tuple[Selection, ...]
    total_cost: float
    fairness: FairnessDetail
    recommended: bool = False

    def offer_key(self) -> tuple[tuple[str, str], ...]:
        """Canonical (traveler id, offer ref) pairs in traveler order."""
        return tuple((s.traveler.id, s.offer.ref) for s in self.selections)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "flights": [s.to_dict() for s in self.selections],
            "total_cost": round(self.total_cost, 2),
            "fairness": self.fairness.to_dict(),
            "recommended": self.recommended,
        }


@dataclass(frozen=True)
class PriceSummary:
    """Cheap per-destination summary used to rank destinations before committing."""

    avg_price: int
    min_price: int
    max_price: int
    deviation: int             # max - min, not the percentage fairness score
    fairness_score: int

    def to_dict(self) -> dict:
        return {
            "avg_price": self.avg_price,
            "min_price": self.min_price,
            "max_price": self.max_price,
            "deviation": self.deviation,
            "fairness_score": self.fairness_score,
        }


@dataclass(frozen=True)
class DestinationCandidate:
    code: str
    city: str
    trip_types: tuple[str, ...]
    summary: PriceSummary

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "city": self.city,
            "types": list(self.trip_types),
            **self.summary.to_dict(),
        }


@dataclass(frozen=True)
class TripSearchResult:
    destination_code: str
    shortlists: dict[str, TravelerShortlist]
    combinations: tuple[Combination, ...]
    fairness: FairnessDetail | None
    travelers_with_flights: int
    message: str | None = None
    booking_links: dict[str, dict] = field(default_factory=dict)   # offer ref → links

    def to_dict(self) -> dict:
        return {
            "destination": self.destination_code,
            "flights": {tid: s.to_dict() for tid, s in self.shortlists.items()},
            "combinations": [c.to_dict() for c in self.combinations],
            "fairness": self.fairness.to_dict() if self.fairness else None,
            "travelers_with_flights": self.travelers_with_flights,
            "message": self.message,
            "booking_links": self.booking_links,
        }
