from datetime import date

import pytest

from fairtrip.models import (
    Airport,
    FlightFilters,
    FlightOffer,
    FlightPoint,
    Itinerary,
    ScoredOffer,
    Segment,
    Traveler,
    TravelerShortlist,
)

DEPART = date(2026, 6, 12)
RETURN = date(2026, 6, 15)


def make_offer(
    offer_id: str,
    price: float,
    currency: str = "GBP",
    stops: int = 0,
    origin: str = "EMA",
    destination: str = "BCN",
    round_trip: bool = False,
) -> FlightOffer:
    def itinerary(frm: str, to: str, day: str) -> Itinerary:
        points = [frm] + [f"X{i}X" for i in range(stops)] + [to]
        segments = tuple(
            Segment(
                departure=FlightPoint(a, f"{day}T08:00:00"),
                arrival=FlightPoint(b, f"{day}T10:00:00"),
                carrier_code="FR",
                flight_number=str(100 + i),
            )
            for i, (a, b) in enumerate(zip(points, points[1:]))
        )
        return Itinerary(duration="PT2H", segments=segments)

    itineraries = [itinerary(origin, destination, DEPART.isoformat())]
    if round_trip:
        itineraries.append(itinerary(destination, origin, RETURN.isoformat()))
    return FlightOffer(
        id=offer_id,
        price_total=price,
        currency=currency,
        itineraries=tuple(itineraries),
        source="fake",
    )


def make_traveler(
    traveler_id: str,
    origin: str = "Leicester",
    airports: list[tuple[str, float]] | None = None,
    excluded: tuple[str, ...] = (),
    name: str = "",
) -> Traveler:
    airports = airports if airports is not None else [("EMA", 20)]
    return Traveler(
        id=traveler_id,
        origin=origin,
        name=name,
        candidate_airports=tuple(Airport(code, f"{code} Airport", dist) for code, dist in airports),
        selected_airport=airports[0][0] if airports else "",
        excluded_airports=frozenset(excluded),
    )


def scored(offer_id: str, price: float, weighted: float | None = None, airport: str = "EMA",
           currency: str = "GBP") -> ScoredOffer:
    return ScoredOffer(
        offer=make_offer(offer_id, price, currency=currency, origin=airport),
        departure_airport=Airport(airport, f"{airport} Airport", 10),
        weighted_score=price if weighted is None else weighted,
    )


def shortlist(traveler_id: str, *offers: ScoredOffer) -> TravelerShortlist:
    return TravelerShortlist(traveler_id=traveler_id, offers=tuple(offers))


class FakeFlightProvider:
    """Scripted provider: offers per (origin, destination); an Exception value is raised."""

    name = "fake"

    def __init__(self, offers=None, locations=None, destinations=None):
        self.offers: dict[tuple[str, str], list[FlightOffer] | Exception] = offers or {}
        self.locations: dict[str, list[dict]] = locations or {}
        self.destinations: dict[str, list[dict] | Exception] = destinations or {}
        self.flight_calls: list[tuple[str, str, FlightFilters | None]] = []
        self.airport_calls: list[str] = []
        self.destination_calls: list[str] = []
        self.closed = False

    async def search_airports(self, city_name: str) -> list[dict]:
        self.airport_calls.append(city_name)
        return self.locations.get(city_name, [])

    async def search_flights(self, origin, destination, departure_date, adults=1, return_date=None, filters=None):
        self.flight_calls.append((origin, destination, filters))
        result = self.offers.get((origin, destination), [])
        if isinstance(result, Exception):
            raise result
        if filters and filters.wants_non_stop:
            return [o for o in result if o.within_stops(0)]
        return list(result)

    async def search_destinations(self, origin: str) -> list[dict]:
        self.destination_calls.append(origin)
        result = self.destinations.get(origin, [])
        if isinstance(result, Exception):
            raise result
        return result

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_provider() -> FakeFlightProvider:
    return FakeFlightProvider()
