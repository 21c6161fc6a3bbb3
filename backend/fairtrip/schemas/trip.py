from datetime import date
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from fairtrip.data.airports import TRIP_TYPES
from fairtrip.models import Airport, FlightFilters, Luggage, Traveler


class AirportIn(BaseModel):
    code: str = Field(..., pattern=r"^[A-Z]{3}$")
    name: str = ""
    distance: float = Field(15, ge=0)

    def to_domain(self) -> Airport:
        return Airport(code=self.code, name=self.name or self.code, distance_miles=self.distance)


class TravelerIn(BaseModel):
    id: str
    origin: str
    name: str = ""
    luggage: Luggage = Luggage.HAND
    airports: list[AirportIn] = []
    selected_airport: str = ""
    excluded_airports: list[str] = []

    def to_domain(self) -> Traveler:
        return Traveler(
            id=self.id,
            origin=self.origin,
            name=self.name,
            luggage=self.luggage,
            candidate_airports=tuple(a.to_domain() for a in self.airports),
            selected_airport=self.selected_airport,
            excluded_airports=frozenset(self.excluded_airports),
        )


class GroupSearchRequest(BaseModel):
    travelers: list[TravelerIn] = Field(..., min_length=1)
    date_from: date
    date_to: date | None = None
    direct_only: bool = False
    max_stops: int | None = Field(None, ge=0, le=2)
    check_all_airports: bool = False

    @model_validator(mode="after")
    def check_dates(self):
        if self.date_to is not None and self.date_to < self.date_from:
            raise ValueError("date_to must not be before date_from")
        return self

    @property
    def filters(self) -> FlightFilters:
        return FlightFilters.from_preferences(self.direct_only, self.max_stops)

    def domain_travelers(self) -> list[Traveler]:
        return [t.to_domain() for t in self.travelers]


class EstimateRequest(GroupSearchRequest):
    destination: str = Field(..., pattern=r"^[A-Z]{3}$")


class RankDestinationsRequest(GroupSearchRequest):
    trip_types: list[str] = []
    sort_by: Literal["avg_price", "deviation", "min_price"] = "avg_price"

    @field_validator("trip_types")
    @classmethod
    def check_trip_types(cls, v: list[str]) -> list[str]:
        unknown = sorted(set(v) - {*TRIP_TYPES, "all"})
        if unknown:
            raise ValueError(f"Unknown trip types: {unknown}; expected any of {list(TRIP_TYPES)} or \"all\"")
        return v


class TripSearchRequest(GroupSearchRequest):
    destination: str = Field(..., min_length=2)
