"""Amadeus API client — adapter for airport, flight and destination search with OAuth2."""

import asyncio
import logging
from datetime import date, datetime, timedelta, timezone

import httpx

from fairtrip.models import FlightFilters, FlightOffer, FlightPoint, Itinerary, Segment
from fairtrip.services.flight_provider import ProviderUnavailable

logger = logging.getLogger(__name__)


def parse_offer(raw: dict, source: str = "amadeus") -> FlightOffer:
    """Normalize an Amadeus-shaped offer into a FlightOffer.

    Defaults for optional fields are applied here and nowhere deeper.
    """
    try:
        price = raw.get("price", {})
        total = float(price.get("grandTotal") or price["total"])
        itineraries = tuple(
            Itinerary(
                duration=itin.get("duration", "PT0H0M"),
                segments=tuple(
                    Segment(
                        departure=FlightPoint(
                            airport_code=seg["departure"]["iataCode"],
                            at=seg["departure"].get("at", ""),
                        ),
                        arrival=FlightPoint(
                            airport_code=seg["arrival"]["iataCode"],
                            at=seg["arrival"].get("at", ""),
                        ),
                        carrier_code=seg.get("carrierCode", "XX"),
                        flight_number=str(seg.get("number", "0000")),
                    )
                    for seg in itin.get("segments", [])
                ),
            )
            for itin in raw.get("itineraries", [])
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ProviderUnavailable(f"Malformed {source} offer: {e}") from e

    return FlightOffer(
        id=str(raw.get("id", "")),
        price_total=total,
        currency=price.get("currency", "EUR"),
        itineraries=itineraries,
        source=source,
    )


class AmadeusClient:
    """Adapter for Amadeus Self-Service API."""

    name = "amadeus"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        base_url: str = "https://test.api.amadeus.com",
        http_client: httpx.AsyncClient | None = None,
        max_results: int = 5,
    ):
        self._client_id = client_id
        self._client_secret = client_secret
        self._base_url = base_url
        self._client = http_client
        self._owns_client = http_client is None
        self._token: str | None = None
        self._token_expires: datetime | None = None
        self._token_lock = asyncio.Lock()
        self._semaphore = asyncio.Semaphore(10)  # 10 req/s rate limit
        self._max_results = max_results

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self._base_url, timeout=30.0)
        return self._client

    async def _ensure_token(self) -> str:
        """Get or refresh the OAuth2 token, refreshing a minute early."""
        async with self._token_lock:
            if self._token and self._token_expires and datetime.now(timezone.utc) < self._token_expires:
                return self._token

            client = await self._get_client()
            try:
                resp = await client.post(
                    "/v1/security/oauth2/token",
                    data={
                        "grant_type": "client_credentials",
                        "client_id": self._client_id,
                        "client_secret": self._client_secret,
                    },
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                )
                resp.raise_for_status()
                data = resp.json()
            except httpx.HTTPStatusError as e:
                logger.error(f"Amadeus token request failed: {e.response.status_code}")
                raise ProviderUnavailable(
                    "Failed to get Amadeus access token", e.response.status_code
                ) from e
            except httpx.RequestError as e:
                raise ProviderUnavailable(f"Amadeus token request error: {e}") from e

            if "access_token" not in data:
                raise ProviderUnavailable(data.get("error_description", "Amadeus authentication failed"))

            self._token = data["access_token"]
            self._token_expires = datetime.now(timezone.utc) + timedelta(
                seconds=data.get("expires_in", 1799) - 60
            )
            logger.info("Amadeus token refreshed")
            return self._token

    async def _get(self, path: str, params: dict) -> dict:
        async with self._semaphore:
            token = await self._ensure_token()
            client = await self._get_client()
            try:
                resp = await client.get(
                    path,
                    params=params,
                    headers={"Authorization": f"Bearer {token}"},
                )
                resp.raise_for_status()
                data = resp.json()
            except httpx.HTTPStatusError as e:
                logger.error(f"Amadeus API error on {path}: {e.response.status_code}")
                raise ProviderUnavailable(
                    f"Amadeus API error: {e.response.status_code}", e.response.status_code
                ) from e
            except httpx.RequestError as e:
                logger.error(f"Amadeus request error on {path}: {e}")
                raise ProviderUnavailable(f"Amadeus request error: {e}") from e
            except ValueError as e:
                raise ProviderUnavailable(f"Amadeus returned invalid JSON: {e}") from e

        if data.get("errors"):
            raise ProviderUnavailable(f"Amadeus returned errors: {data['errors']}")
        return data

    async def search_airports(self, city_name: str) -> list[dict]:
        data = await self._get(
            "/v1/reference-data/locations",
            {"subType": "AIRPORT,CITY", "keyword": city_name, "page[limit]": 5},
        )
        return [
            {
                "iataCode": loc.get("iataCode", ""),
                "name": loc.get("name", ""),
                "subType": loc.get("subType", ""),
            }
            for loc in data.get("data", [])
        ]

    async def search_flights(
        self,
        origin: str,
        destination: str,
        departure_date: date,
        adults: int = 1,
        return_date: date | None = None,
        filters: FlightFilters | None = None,
    ) -> list[FlightOffer]:
        params = {
            "originLocationCode": origin,
            "destinationLocationCode": destination,
            "departureDate": departure_date.isoformat(),
            "adults": adults,
            "max": self._max_results,
        }
        if return_date:
            params["returnDate"] = return_date.isoformat()
        if filters and filters.wants_non_stop:
            params["nonStop"] = "true"

        data = await self._get("/v2/shopping/flight-offers", params)
        offers = [parse_offer(raw) for raw in data.get("data", [])]
        logger.debug(
            f"Amadeus {origin}->{destination} "
            f"({'round-trip' if return_date else 'one-way'}): {len(offers)} offers"
        )
        return offers

    async def search_destinations(self, origin: str) -> list[dict]:
        data = await self._get("/v1/shopping/flight-destinations", {"origin": origin, "max": 50})
        return [
            {
                "origin": item.get("origin", origin),
                "destination": item.get("destination", ""),
                "departure_date": item.get("departureDate"),
                "return_date": item.get("returnDate"),
                "price": float(item.get("price", {}).get("total", 0) or 0),
            }
            for item in data.get("data", [])
            if item.get("destination")
        ]

    async def close(self):
        if self._client and self._owns_client:
            await self._client.aclose()
        self._client = None
