"""Static airport and destination tables used by airport resolution and discovery."""

# Predefined origin cities → candidate departure airports with approximate
# road distance (miles) from the city centre.
CITY_AIRPORTS: dict[str, list[dict]] = {
    "Leicester": [
        {"code": "EMA", "name": "East Midlands", "distance": 20},
        {"code": "BHX", "name": "Birmingham", "distance": 35},
        {"code": "LHR", "name": "London Heathrow", "distance": 100},
        {"code": "LGW", "name": "London Gatwick", "distance": 110},
        {"code": "MAN", "name": "Manchester", "distance": 75},
    ],
    "London": [
        {"code": "LHR", "name": "Heathrow", "distance": 15},
        {"code": "LGW", "name": "Gatwick", "distance": 28},
        {"code": "STN", "name": "Stansted", "distance": 35},
        {"code": "LTN", "name": "Luton", "distance": 30},
        {"code": "LCY", "name": "City", "distance": 6},
    ],
    "Manchester": [
        {"code": "MAN", "name": "Manchester", "distance": 10},
        {"code": "LPL", "name": "Liverpool", "distance": 35},
        {"code": "LBA", "name": "Leeds Bradford", "distance": 45},
    ],
    "Birmingham": [
        {"code": "BHX", "name": "Birmingham", "distance": 8},
        {"code": "EMA", "name": "East Midlands", "distance": 40},
        {"code": "BRS", "name": "Bristol", "distance": 85},
    ],
    "Leeds": [
        {"code": "LBA", "name": "Leeds Bradford", "distance": 8},
        {"code": "MAN", "name": "Manchester", "distance": 45},
        {"code": "EMA", "name": "East Midlands", "distance": 75},
    ],
    "Liverpool": [
        {"code": "LPL", "name": "Liverpool", "distance": 8},
        {"code": "MAN", "name": "Manchester", "distance": 35},
    ],
    "Bristol": [
        {"code": "BRS", "name": "Bristol", "distance": 8},
        {"code": "CWL", "name": "Cardiff", "distance": 45},
        {"code": "BHX", "name": "Birmingham", "distance": 85},
    ],
    "Newcastle": [
        {"code": "NCL", "name": "Newcastle", "distance": 8},
        {"code": "EDI", "name": "Edinburgh", "distance": 105},
    ],
    "Glasgow": [
        {"code": "GLA", "name": "Glasgow", "distance": 8},
        {"code": "PIK", "name": "Prestwick", "distance": 30},
        {"code": "EDI", "name": "Edinburgh", "distance": 45},
    ],
    "Edinburgh": [
        {"code": "EDI", "name": "Edinburgh", "distance": 8},
        {"code": "GLA", "name": "Glasgow", "distance": 45},
    ],
    "Belfast": [
        {"code": "BFS", "name": "Belfast International", "distance": 13},
        {"code": "BHD", "name": "Belfast City", "distance": 3},
    ],
    "Cardiff": [
        {"code": "CWL", "name": "Cardiff", "distance": 12},
        {"code": "BRS", "name": "Bristol", "distance": 45},
    ],
    "Nottingham": [
        {"code": "EMA", "name": "East Midlands", "distance": 14},
        {"code": "BHX", "name": "Birmingham", "distance": 50},
        {"code": "MAN", "name": "Manchester", "distance": 70},
    ],
    "Sheffield": [
        {"code": "LBA", "name": "Leeds Bradford", "distance": 35},
        {"code": "EMA", "name": "East Midlands", "distance": 40},
        {"code": "MAN", "name": "Manchester", "distance": 38},
    ],
    "Oxford": [
        {"code": "LHR", "name": "Heathrow", "distance": 40},
        {"code": "LGW", "name": "Gatwick", "distance": 80},
        {"code": "BHX", "name": "Birmingham", "distance": 60},
    ],
    "Cambridge": [
        {"code": "STN", "name": "Stansted", "distance": 28},
        {"code": "LTN", "name": "Luton", "distance": 40},
        {"code": "LHR", "name": "Heathrow", "distance": 60},
    ],
    "Brighton": [
        {"code": "LGW", "name": "Gatwick", "distance": 25},
        {"code": "LHR", "name": "Heathrow", "distance": 55},
    ],
    "Southampton": [
        {"code": "SOU", "name": "Southampton", "distance": 5},
        {"code": "LHR", "name": "Heathrow", "distance": 65},
        {"code": "LGW", "name": "Gatwick", "distance": 70},
    ],
}

# Distance assigned to airports found through live provider search
DEFAULT_AIRPORT_DISTANCE = 15

# Cities with enough airport diversity that every airport is searched
MAJOR_HUB_CITIES: list[str] = [
    "London", "Paris", "New York", "NYC", "Moscow", "Los Angeles", "LA",
    "Tokyo", "Manila", "Stockholm", "San Francisco", "Dubai", "Boston",
]

# Curated destination city → primary airport
DESTINATION_AIRPORTS: dict[str, str] = {
    # Major Cities - Western Europe
    "Barcelona": "BCN", "Amsterdam": "AMS", "Prague": "PRG",
    "Berlin": "BER", "Budapest": "BUD", "Lisbon": "LIS", "Paris": "CDG",
    "Rome": "FCO", "Dublin": "DUB", "Edinburgh": "EDI", "Madrid": "MAD",
    "Vienna": "VIE", "Brussels": "BRU", "Copenhagen": "CPH",
    "Stockholm": "ARN", "Oslo": "OSL", "Helsinki": "HEL",
    "Reykjavik": "KEF",
    # Spanish Cities & Beach Destinations
    "Palma": "PMI", "Mallorca": "PMI", "Ibiza": "IBZ", "Menorca": "MAH",
    "Alicante": "ALC", "Benidorm": "ALC", "Malaga": "AGP",
    "Tenerife": "TFS", "Gran Canaria": "LPA", "Lanzarote": "ACE",
    "Fuerteventura": "FUE", "Seville": "SVQ", "Valencia": "VLC",
    "Bilbao": "BIO", "Granada": "GRX", "Santiago de Compostela": "SCQ",
    # Portuguese Destinations
    "Porto": "OPO", "Faro": "FAO", "Algarve": "FAO",
    # Greek Destinations
    "Athens": "ATH", "Santorini": "JTR", "Mykonos": "JMK", "Rhodes": "RHO",
    "Corfu": "CFU", "Heraklion": "HER", "Crete": "HER", "Chania": "CHQ",
    "Kos": "KGS", "Zakynthos": "ZTH", "Thessaloniki": "SKG",
    # Italian Cities & Islands
    "Venice": "VCE", "Milan": "MXP", "Florence": "FLR", "Naples": "NAP",
    "Bologna": "BLQ", "Turin": "TRN", "Verona": "VRN", "Genoa": "GOA",
    "Pisa": "PSA", "Bergamo": "BGY", "Catania": "CTA", "Palermo": "PMO",
    "Cagliari": "CAG", "Olbia": "OLB", "Bari": "BRI", "Brindisi": "BDS",
    # French Cities
    "Nice": "NCE", "Lyon": "LYS", "Marseille": "MRS", "Bordeaux": "BOD",
    "Toulouse": "TLS", "Strasbourg": "SXB", "Nantes": "NTE",
    "Montpellier": "MPL",
    # German Cities
    "Munich": "MUC", "Hamburg": "HAM", "Frankfurt": "FRA",
    "Cologne": "CGN", "Dusseldorf": "DUS", "Stuttgart": "STR",
    "Dresden": "DRS", "Nuremberg": "NUE", "Bremen": "BRE",
    "Hannover": "HAJ", "Leipzig": "LEJ",
    # Eastern European Cities (Budget)
    "Warsaw": "WAW", "Krakow": "KRK", "Gdansk": "GDN", "Wroclaw": "WRO",
    "Poznan": "POZ", "Zagreb": "ZAG", "Belgrade": "BEG",
    "Bucharest": "OTP", "Sofia": "SOF", "Riga": "RIX", "Tallinn": "TLL",
    "Vilnius": "VNO", "Bratislava": "BTS", "Ljubljana": "LJU",
    "Sarajevo": "SJJ", "Skopje": "SKP", "Tirana": "TIA",
    # Croatian Coast
    "Dubrovnik": "DBV", "Split": "SPU", "Zadar": "ZAD", "Pula": "PUY",
    # Ski Destinations
    "Zurich": "ZRH", "Geneva": "GVA", "Innsbruck": "INN",
    "Salzburg": "SZG", "Grenoble": "GNB", "Chambery": "CMF",
    # Scandinavia
    "Bergen": "BGO", "Tromso": "TOS", "Gothenburg": "GOT", "Aarhus": "AAR",
    "Turku": "TKU",
    # Other
    "Luxembourg": "LUX", "Malta": "MLA", "Eindhoven": "EIN",
    "Rotterdam": "RTM", "Antalya": "AYT", "Bodrum": "BJV",
}

# Destination city → trip-type tags
DESTINATION_TYPES: dict[str, list[str]] = {
    # Major Western European Cities
    "Barcelona": ["city", "beach"],
    "Amsterdam": ["city"],
    "Prague": ["city", "cheap"],
    "Berlin": ["city"],
    "Budapest": ["city", "cheap"],
    "Lisbon": ["city", "beach"],
    "Paris": ["city", "luxury"],
    "Rome": ["city"],
    "Dublin": ["city"],
    "Edinburgh": ["city"],
    "Madrid": ["city"],
    "Vienna": ["city", "luxury"],
    "Brussels": ["city"],
    "Copenhagen": ["city"],
    "Stockholm": ["city"],
    "Oslo": ["city"],
    "Helsinki": ["city"],
    # Spanish Beach Destinations (very popular from UK)
    "Palma": ["beach", "cheap"],
    "Mallorca": ["beach", "cheap"],
    "Ibiza": ["beach", "luxury"],
    "Menorca": ["beach", "cheap"],
    "Alicante": ["beach", "cheap"],
    "Benidorm": ["beach", "cheap"],
    "Malaga": ["beach", "cheap"],
    "Tenerife": ["beach", "cheap"],
    "Gran Canaria": ["beach", "cheap"],
    "Lanzarote": ["beach", "cheap"],
    "Fuerteventura": ["beach", "cheap"],
    # Spanish Cities
    "Seville": ["city", "cheap"],
    "Valencia": ["city", "beach", "cheap"],
    "Bilbao": ["city"],
    "Granada": ["city", "cheap"],
    "Santiago de Compostela": ["city"],
    # Portuguese Destinations
    "Porto": ["city", "cheap"],
    "Faro": ["beach", "cheap"],
    "Algarve": ["beach", "cheap"],
    # Greek Destinations (popular & cheap)
    "Athens": ["city", "beach", "cheap"],
    "Santorini": ["beach", "luxury"],
    "Mykonos": ["beach", "luxury"],
    "Rhodes": ["beach", "cheap"],
    "Corfu": ["beach", "cheap"],
    "Heraklion": ["beach", "cheap"],
    "Crete": ["beach", "cheap"],
    "Chania": ["beach", "cheap"],
    "Kos": ["beach", "cheap"],
    "Zakynthos": ["beach", "cheap"],
    "Thessaloniki": ["city", "beach", "cheap"],
    # Italian Cities
    "Venice": ["city", "luxury"],
    "Milan": ["city", "luxury"],
    "Florence": ["city"],
    "Naples": ["city", "beach", "cheap"],
    "Bologna": ["city"],
    "Turin": ["city", "ski"],
    "Verona": ["city"],
    "Genoa": ["city"],
    "Pisa": ["city"],
    "Bergamo": ["city"],
    # Italian Islands
    "Catania": ["beach", "cheap"],
    "Palermo": ["city", "beach", "cheap"],
    "Cagliari": ["beach", "cheap"],
    "Olbia": ["beach", "cheap"],
    "Bari": ["city", "beach", "cheap"],
    "Brindisi": ["beach", "cheap"],
    # French Cities
    "Nice": ["beach", "luxury"],
    "Lyon": ["city"],
    "Marseille": ["city", "beach"],
    "Bordeaux": ["city"],
    "Toulouse": ["city"],
    "Strasbourg": ["city"],
    "Nantes": ["city"],
    "Montpellier": ["city", "beach"],
    # German Cities
    "Munich": ["city"],
    "Hamburg": ["city"],
    "Frankfurt": ["city"],
    "Cologne": ["city"],
    "Dusseldorf": ["city"],
    "Stuttgart": ["city"],
    "Dresden": ["city"],
    "Nuremberg": ["city"],
    "Bremen": ["city"],
    "Hannover": ["city"],
    "Leipzig": ["city"],
    # Eastern European Budget Cities
    "Warsaw": ["city", "cheap"],
    "Krakow": ["city", "cheap"],
    "Gdansk": ["city", "cheap"],
    "Wroclaw": ["city", "cheap"],
    "Poznan": ["city", "cheap"],
    "Zagreb": ["city", "cheap"],
    "Belgrade": ["city", "cheap"],
    "Bucharest": ["city", "cheap"],
    "Sofia": ["city", "cheap"],
    "Riga": ["city", "cheap"],
    "Tallinn": ["city", "cheap"],
    "Vilnius": ["city", "cheap"],
    "Bratislava": ["city", "cheap"],
    "Ljubljana": ["city", "cheap"],
    "Sarajevo": ["city", "cheap"],
    "Skopje": ["city", "cheap"],
    "Tirana": ["city", "cheap"],
    # Croatian Coast (beach + budget)
    "Dubrovnik": ["beach", "city"],
    "Split": ["beach", "cheap"],
    "Zadar": ["beach", "cheap"],
    "Pula": ["beach", "cheap"],
    # Ski Destinations
    "Zurich": ["city", "luxury", "ski"],
    "Geneva": ["city", "luxury", "ski"],
    "Innsbruck": ["ski", "city"],
    "Salzburg": ["ski", "city"],
    "Grenoble": ["ski"],
    "Chambery": ["ski"],
    "Reykjavik": ["ski", "luxury"],
    # Scandinavia
    "Bergen": ["city", "ski"],
    "Tromso": ["ski"],
    "Gothenburg": ["city"],
    "Aarhus": ["city"],
    "Turku": ["city"],
    # Other Popular Destinations
    "Luxembourg": ["city"],
    "Malta": ["beach", "cheap"],
    "Eindhoven": ["city", "cheap"],
    "Rotterdam": ["city"],
    "Antalya": ["beach", "cheap"],
    "Bodrum": ["beach", "cheap"],
}

TRIP_TYPES = ("city", "beach", "cheap", "luxury", "ski")


def get_destination_types(city: str) -> list[str]:
    """Trip-type tags for a destination city, defaulting to city."""
    return DESTINATION_TYPES.get(city, ["city"])


def city_for_destination_code(code: str) -> str | None:
    """First curated city whose primary airport is the given code."""
    for city, iata in DESTINATION_AIRPORTS.items():
        if iata == code:
            return city
    return None
