"""Deterministic mock provider for demo mode (no provider credentials configured)."""

import hashlib
import random
from datetime import date, datetime, timedelta, timezone

from fairtrip.data.airports import DESTINATION_AIRPORTS
from fairtrip.models import FlightFilters, FlightOffer, FlightPoint, Itinerary, Segment
from fairtrip.services.flight_provider import apply_stop_filter

MOCK_CARRIERS = ["BA", "U2", "FR", "W6", "LS", "VY", "IB", "KL"]
MOCK_HUBS = ["AMS", "CDG", "FRA", "MAD", "DUB", "ZRH"]


def _rng(*parts: str) -> random.Random:
    # Deterministic seed based on the request for consistency across calls
    seed = int(hashlib.md5("".join(parts).encode()).hexdigest()[:8], 16)
    return random.Random(seed)


class MockFlightProvider:
    """Generates plausible seeded offers so the app works without API keys."""

    name = "mock"

    def __init__(self, currency: str = "GBP"):
        self._currency = currency

    async def search_airports(self, city_name: str) -> list[dict]:
        code = "".join(c for c in city_name.upper() if c.isalpha())[:3]
        if len(code) < 3:
            return []
        return [
            {"iataCode": code, "name": f"{city_name.title()} Airport", "subType": "AIRPORT"},
            {"iataCode": code, "name": city_name.title(), "subType": "CITY"},
        ]

    def _itinerary(self, rng: random.Random, origin: str, destination: str, day: date) -> Itinerary:
        stops = rng.choices([0, 1, 2], weights=[60, 30, 10])[0]
        carrier = rng.choice(MOCK_CARRIERS)
        dep = datetime(day.year, day.month, day.day, rng.randint(6, 21), rng.choice([0, 15, 30, 45]),
                       tzinfo=timezone.utc)
        points = [origin] + rng.sample([h for h in MOCK_HUBS if h not in (origin, destination)], stops) + [destination]
        segments = []
        at = dep
        for a, b in zip(points, points[1:]):
            leg_minutes = rng.randint(75, 180)
            arr = at + timedelta(minutes=leg_minutes)
            segments.append(Segment(
                departure=FlightPoint(a, at.isoformat()),
                arrival=FlightPoint(b, arr.isoformat()),
                carrier_code=carrier,
                flight_number=str(rng.randint(100, 9999)),
            ))
            at = arr + timedelta(minutes=rng.randint(45, 90))
        total = int((arr - dep).total_seconds() // 60)
        return Itinerary(duration=f"PT{total // 60}H{total % 60}M", segments=tuple(segments))

    async def search_flights(
        self,
        origin: str,
        destination: str,
        departure_date: date,
        adults: int = 1,
        return_date: date | None = None,
        filters: FlightFilters | None = None,
    ) -> list[FlightOffer]:
        rng = _rng(origin, destination, departure_date.isoformat(), str(return_date))
        base = rng.uniform(40, 220) * (1.8 if return_date else 1.0)
        offers = []
        for i in range(rng.randint(3, 8)):
            itineraries = [self._itinerary(rng, origin, destination, departure_date)]
            if return_date:
                itineraries.append(self._itinerary(rng, destination, origin, return_date))
            offers.append(FlightOffer(
                id=f"mock_{origin}_{destination}_{i}",
                price_total=round(base * rng.uniform(0.8, 1.8) * adults, 2),
                currency=self._currency,
                itineraries=tuple(itineraries),
                source=self.name,
            ))
        offers.sort(key=lambda o: o.price_total)
        return apply_stop_filter(offers, filters)

    async def search_destinations(self, origin: str) -> list[dict]:
        rng = _rng(origin, "destinations")
        codes = sorted(set(DESTINATION_AIRPORTS.values()))
        return [
            {"origin": origin, "destination": code, "price": round(rng.uniform(30, 300), 2)}
            for code in rng.sample(codes, min(10, len(codes)))
        ]

    async def close(self):
        return None
