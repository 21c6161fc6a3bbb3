"""Booking links — deep links to booking sites for a selected offer."""

from urllib.parse import quote

from fairtrip.models import FlightOffer


def _day(timestamp: str) -> str:
    return timestamp[:10]


def build_booking_links(offer: FlightOffer, origin: str, destination: str, marker: str = "") -> dict:
    """Links keyed by site, with ``primary`` naming the one to show first.

    Aviasales gets the Travelpayouts affiliate marker and is primary when a
    marker is configured; Skyscanner is primary otherwise.
    """
    if not offer.itineraries or not offer.itineraries[0].segments:
        return {}

    depart = _day(offer.itineraries[0].segments[0].departure.at)
    ret = ""
    if offer.is_round_trip and offer.itineraries[1].segments:
        ret = _day(offer.itineraries[1].segments[0].departure.at)

    query = f"flights from {origin} to {destination} on {depart}"
    if ret:
        query += f" returning {ret}"

    links = {
        "skyscanner": f"https://www.skyscanner.net/transport/flights/{origin}/{destination}/{depart}/{ret}",
        "google_flights": f"https://www.google.com/travel/flights?q={quote(query)}",
        "kayak": f"https://www.kayak.com/flights/{origin}-{destination}/{depart}" + (f"/{ret}" if ret else ""),
        "primary": "skyscanner",
    }
    if marker:
        route = f"{origin}{destination[:3].upper()}{depart.replace('-', '')}{ret.replace('-', '')}"
        links["aviasales"] = f"https://www.aviasales.com/search/{route}1?marker={quote(marker)}"
        links["primary"] = "aviasales"
    return links
