import pytest

from conftest import DEPART, RETURN, FakeFlightProvider, make_offer, make_traveler
from fairtrip.models import FlightFilters
from fairtrip.services.booking_links import build_booking_links
from fairtrip.services.traveler_aggregator import PerTravelerAggregator
from fairtrip.services.trip_search import NO_FLIGHTS_MESSAGE, DestinationNotFound, TripSearchService


def service_for(provider, marker=""):
    return TripSearchService(provider, PerTravelerAggregator(provider), booking_marker=marker)


class TestResolveDestination:
    async def test_curated_city(self, fake_provider):
        assert await service_for(fake_provider).resolve_destination("barcelona") == "BCN"
        assert fake_provider.airport_calls == []

    async def test_provider_airport_search(self):
        provider = FakeFlightProvider(locations={"Lyon": [
            {"iataCode": "LYS", "name": "Lyon", "subType": "CITY"},
            {"iataCode": "LYS", "name": "Saint Exupery", "subType": "AIRPORT"},
        ]})

        assert await service_for(provider).resolve_destination("Lyon") == "LYS"

    async def test_iata_code_used_as_given(self, fake_provider):
        service = service_for(fake_provider)

        assert await service.resolve_destination("BCN") == "BCN"
        assert await service.resolve_destination(" OPO ") == "OPO"
        assert fake_provider.airport_calls == []

    async def test_unknown_destination(self, fake_provider):
        with pytest.raises(DestinationNotFound):
            await service_for(fake_provider).resolve_destination("Atlantis")


class TestSearch:
    async def test_builds_shortlists_combinations_and_fairness(self):
        travelers = [
            make_traveler("t1", airports=[("EMA", 0)]),
            make_traveler("t2", airports=[("BHX", 0)]),
            make_traveler("t3", airports=[("MAN", 0)], excluded=("MAN",)),
        ]
        provider = FakeFlightProvider(offers={
            ("EMA", "BCN"): [make_offer("a", 100, origin="EMA"), make_offer("b", 140, origin="EMA")],
            ("BHX", "BCN"): [make_offer("c", 200, origin="BHX"), make_offer("d", 150, origin="BHX")],
        })

        result = await service_for(provider).search(travelers, "Barcelona", DEPART)

        assert result.destination_code == "BCN"
        assert result.travelers_with_flights == 2
        assert list(result.shortlists) == ["t1", "t2"]
        assert result.fairness.score == 80
        assert [c.id for c in result.combinations] == ["fairest", "cheapest"]
        assert result.message is None
        assert set(result.booking_links) == {"EMA:a", "EMA:b", "BHX:c", "BHX:d"}

        body = result.to_dict()
        assert body["flights"]["t1"]["cheapest"]["id"] == "a"
        assert body["combinations"][0]["recommended"] is True

    async def test_no_flights_message(self, fake_provider):
        result = await service_for(fake_provider).search([make_traveler("t1")], "BCN", DEPART)

        assert result.combinations == ()
        assert result.fairness is None
        assert result.travelers_with_flights == 0
        assert result.message == NO_FLIGHTS_MESSAGE

    async def test_direct_only_falls_back_to_connections(self):
        provider = FakeFlightProvider(offers={("EMA", "BCN"): [make_offer("conn", 90, stops=1)]})

        result = await service_for(provider).search(
            [make_traveler("t1")], "BCN", DEPART, filters=FlightFilters(non_stop=True)
        )

        assert result.shortlists["t1"].best.id == "conn"
        assert [call[2].non_stop for call in provider.flight_calls] == [True, False]

    async def test_no_fallback_when_direct_flights_exist(self):
        provider = FakeFlightProvider(offers={("EMA", "BCN"): [make_offer("direct", 120)]})

        await service_for(provider).search([make_traveler("t1")], "BCN", DEPART, filters=FlightFilters(non_stop=True))

        assert len(provider.flight_calls) == 1


class TestBookingLinks:
    def test_round_trip_links_with_marker(self):
        offer = make_offer("a", 100, origin="EMA", destination="BCN", round_trip=True)

        links = build_booking_links(offer, "EMA", "BCN", marker="12345")

        assert links["primary"] == "aviasales"
        assert links["aviasales"] == "https://www.aviasales.com/search/EMABCN20260612202606151?marker=12345"
        assert links["skyscanner"] == "https://www.skyscanner.net/transport/flights/EMA/BCN/2026-06-12/2026-06-15"
        assert links["kayak"] == "https://www.kayak.com/flights/EMA-BCN/2026-06-12/2026-06-15"
        assert "returning%202026-06-15" in links["google_flights"]

    def test_one_way_without_marker(self):
        links = build_booking_links(make_offer("a", 100), "EMA", "BCN")

        assert links["primary"] == "skyscanner"
        assert "aviasales" not in links
        assert links["kayak"].endswith("/2026-06-12")
        assert RETURN.isoformat() not in links["skyscanner"]
