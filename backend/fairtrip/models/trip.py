"""Traveler and airport domain types — session-scoped, edited by the caller."""

from dataclasses import dataclass, field
from enum import Enum


class Luggage(str, Enum):
    HAND = "hand"
    CABIN = "cabin"
    CHECKED = "checked"


@dataclass(frozen=True)
class Airport:
    """A candidate departure airport for a traveler."""

    code: str                  # 3-letter IATA
    name: str
    distance_miles: float      # from the traveler's stated city, approximate

    def __post_init__(self):
        if self.distance_miles < 0:
            raise ValueError(f"Airport {self.code} has negative distance")

    @property
    def label(self) -> str:
        return f"{self.name} ({self.code})"

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "name": self.name,
            "distance": self.distance_miles,
        }


@dataclass(frozen=True)
class Traveler:
    """One member of the group, departing from their own city."""

    id: str
    origin: str
    name: str = ""
    luggage: Luggage = Luggage.HAND
    candidate_airports: tuple[Airport, ...] = ()
    selected_airport: str = ""
    excluded_airports: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self):
        codes = {a.code for a in self.candidate_airports}
        if self.selected_airport and self.selected_airport not in codes:
            raise ValueError(
                f"Traveler {self.id}: selected airport {self.selected_airport} "
                f"is not one of {sorted(codes)}"
            )

    @property
    def display_name(self) -> str:
        return self.name or f"From {self.origin}"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "origin": self.origin,
            "luggage": self.luggage.value,
            "airports": [a.to_dict() for a in self.candidate_airports],
            "selected_airport": self.selected_airport,
            "excluded_airports": sorted(self.excluded_airports),
        }
