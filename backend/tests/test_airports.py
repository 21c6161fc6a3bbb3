from conftest import FakeFlightProvider, make_traveler
from fairtrip.services.airport_resolver import AirportResolver, normalize_city
from fairtrip.services.airport_selection import is_major_hub, select_airports

FIVE_AIRPORTS = [("LHR", 100), ("EMA", 20), ("MAN", 75), ("BHX", 35), ("LGW", 110)]


class TestSelectAirports:
    def test_non_hub_capped_to_three_closest(self):
        traveler = make_traveler("t1", origin="Leicester", airports=FIVE_AIRPORTS)

        selected = select_airports(traveler)

        assert [a.code for a in selected] == ["EMA", "BHX", "MAN"]

    def test_hub_city_keeps_every_airport(self):
        traveler = make_traveler("t1", origin="Greater London", airports=FIVE_AIRPORTS)

        assert [a.code for a in select_airports(traveler)] == ["LHR", "EMA", "MAN", "BHX", "LGW"]

    def test_check_all_keeps_every_airport(self):
        traveler = make_traveler("t1", origin="Leicester", airports=FIVE_AIRPORTS)

        assert len(select_airports(traveler, check_all=True)) == 5

    def test_exclusions_applied_before_cap(self):
        traveler = make_traveler("t1", airports=FIVE_AIRPORTS, excluded=("EMA", "BHX"))

        assert [a.code for a in select_airports(traveler)] == ["MAN", "LHR", "LGW"]

    def test_all_excluded_yields_nothing(self):
        traveler = make_traveler("t1", airports=[("EMA", 20), ("BHX", 35)], excluded=("EMA", "BHX"))

        assert select_airports(traveler) == []
        assert select_airports(traveler, check_all=True) == []

    def test_does_not_reorder_traveler(self):
        traveler = make_traveler("t1", airports=FIVE_AIRPORTS)
        select_airports(traveler)
        assert traveler.candidate_airports[0].code == "LHR"

    def test_hub_match_is_case_insensitive_substring(self):
        assert is_major_hub("new york city")
        assert is_major_hub("PARIS")
        assert not is_major_hub("Leicester")


class TestAirportResolver:
    async def test_predefined_city_is_case_insensitive(self, fake_provider):
        airports = await AirportResolver(fake_provider).resolve("  leicester ")

        assert [a.code for a in airports] == ["EMA", "BHX", "LHR", "LGW", "MAN"]
        assert airports[0].distance_miles == 20
        assert fake_provider.airport_calls == []

    async def test_short_names_resolve_to_nothing(self, fake_provider):
        assert await AirportResolver(fake_provider).resolve("Ab") == []
        assert fake_provider.airport_calls == []

    async def test_provider_fallback_keeps_airports_only(self):
        provider = FakeFlightProvider(locations={
            "Lyon": [
                {"iataCode": "LYS", "name": "Lyon", "subType": "CITY"},
                *({"iataCode": f"A{i}A", "name": f"Airport {i}", "subType": "AIRPORT"} for i in range(7)),
            ]
        })

        airports = await AirportResolver(provider).resolve("Lyon")

        assert [a.code for a in airports] == ["A0A", "A1A", "A2A", "A3A", "A4A"]
        assert all(a.distance_miles == 15 for a in airports)

    def test_normalize_city(self):
        assert normalize_city("  St.  Albans<script> ") == "St. Albansscript"
        assert normalize_city("Newcastle-upon-Tyne") == "Newcastle-upon-Tyne"
