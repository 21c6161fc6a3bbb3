"""Travelpayouts API client — real-time flight search and cached destination prices.

Two APIs with very different costs:
  v1/flight_search     real-time, 30-60s per search (initiate + poll), rate limited
  v2/prices/latest     cached prices from the last 48 hours, fast, for discovery

Travelpayouts has no airport search; that call is delegated to another provider.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import date

import httpx

from fairtrip.models import FlightFilters, FlightOffer, FlightPoint, Itinerary, Segment
from fairtrip.services.flight_provider import FlightProvider, ProviderUnavailable

logger = logging.getLogger(__name__)


def map_realtime_item(item: dict, index: int, default_currency: str) -> FlightOffer:
    """Map one real-time result row into a FlightOffer, defaulting missing fields."""
    try:
        value = float(item["value"])
    except (KeyError, TypeError, ValueError) as e:
        raise ProviderUnavailable(f"Malformed Travelpayouts result: {e}") from e

    raw_segments = item.get("segments") or [
        {
            "departure": {"iataCode": item.get("origin", ""), "at": item.get("departure_at", "")},
            "arrival": {
                "iataCode": item.get("destination", ""),
                "at": item.get("arrival_at") or item.get("departure_at", ""),
            },
            "carrierCode": item.get("airline") or "XX",
            "number": item.get("flight_number") or "0000",
        }
    ]
    segments = tuple(
        Segment(
            departure=FlightPoint(seg["departure"]["iataCode"], seg["departure"].get("at", "")),
            arrival=FlightPoint(seg["arrival"]["iataCode"], seg["arrival"].get("at", "")),
            carrier_code=seg.get("carrierCode", "XX"),
            flight_number=str(seg.get("number", "0000")),
        )
        for seg in raw_segments
    )
    return FlightOffer(
        id=f"tp_{index}",
        price_total=value,
        currency=(item.get("currency") or default_currency).upper(),
        itineraries=(Itinerary(duration=item.get("duration") or "PT2H", segments=segments),),
        source="travelpayouts",
    )


class TravelpayoutsClient:
    """Adapter for the Travelpayouts affiliate APIs."""

    name = "travelpayouts"

    def __init__(
        self,
        token: str,
        marker: str = "",
        base_url: str = "https://api.travelpayouts.com",
        currency: str = "EUR",
        http_client: httpx.AsyncClient | None = None,
        airport_provider: FlightProvider | None = None,
        max_poll_attempts: int = 20,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._token = token
        self._marker = marker
        self._base_url = base_url
        self._currency = currency
        self._client = http_client
        self._owns_client = http_client is None
        self._airport_provider = airport_provider
        self._max_poll_attempts = max_poll_attempts
        self._sleep = sleep

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self._base_url, timeout=30.0)
        return self._client

    async def _request(self, path: str, params: dict) -> dict:
        if not self._token:
            raise ProviderUnavailable("TRAVELPAYOUTS_TOKEN is not configured")

        client = await self._get_client()
        try:
            resp = await client.get(
                path,
                params=params,
                headers={"X-Access-Token": self._token, "Content-Type": "application/json"},
            )
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Travelpayouts API error ({e.response.status_code}) on {path}")
            raise ProviderUnavailable(
                f"Travelpayouts API error: {e.response.status_code}", e.response.status_code
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Travelpayouts request failed on {path}: {e}")
            raise ProviderUnavailable(f"Travelpayouts request error: {e}") from e
        except ValueError as e:
            raise ProviderUnavailable(f"Travelpayouts returned invalid JSON: {e}") from e

    async def search_airports(self, city_name: str) -> list[dict]:
        if self._airport_provider is None:
            logger.warning("No airport provider configured for Travelpayouts; skipping lookup")
            return []
        return await self._airport_provider.search_airports(city_name)

    async def _initiate_search(
        self, origin: str, destination: str, departure_date: date, adults: int, return_date: date | None
    ) -> str:
        data = await self._request(
            "/v1/flight_search",
            {
                "origin": origin,
                "destination": destination,
                "depart_date": departure_date.isoformat(),
                "return_date": return_date.isoformat() if return_date else "",
                "adults": adults,
                "children": 0,
                "infants": 0,
                "trip_class": 0,  # economy
                "marker": self._marker,
                "currency": self._currency,
                "host": "www.aviasales.com",
            },
        )
        search_id = data.get("search_id")
        if not search_id:
            raise ProviderUnavailable("Travelpayouts did not return a search_id")
        return search_id

    async def _poll_results(self, search_id: str) -> list[dict]:
        for attempt in range(1, self._max_poll_attempts + 1):
            try:
                data = await self._request(
                    "/v1/flight_search_results",
                    {"uuid": search_id, "currency": self._currency, "host": "www.aviasales.com"},
                )
            except ProviderUnavailable as e:
                if attempt == self._max_poll_attempts:
                    raise
                logger.warning(f"Travelpayouts poll attempt {attempt} failed: {e}")
                await self._sleep(2.0)
                continue

            if data.get("data"):
                return data["data"]

            if attempt < self._max_poll_attempts:
                await self._sleep(min(3.0 + attempt, 5.0))

        logger.warning(f"Travelpayouts search {search_id} timed out after {self._max_poll_attempts} polls")
        return []

    async def search_flights(
        self,
        origin: str,
        destination: str,
        departure_date: date,
        adults: int = 1,
        return_date: date | None = None,
        filters: FlightFilters | None = None,
    ) -> list[FlightOffer]:
        search_id = await self._initiate_search(origin, destination, departure_date, adults, return_date)
        rows = await self._poll_results(search_id)
        offers = [map_realtime_item(item, i, self._currency) for i, item in enumerate(rows)]
        if filters and filters.wants_non_stop:
            offers = [o for o in offers if o.within_stops(0)]
        return offers

    async def search_destinations(self, origin: str) -> list[dict]:
        data = await self._request(
            "/v2/prices/latest",
            {
                "currency": self._currency,
                "origin": origin,
                "limit": 50,
                "sorting": "price",
                "one_way": "false",
            },
        )
        currency = (data.get("currency") or self._currency).upper()
        return [
            {
                "origin": item.get("origin", origin),
                "destination": item.get("destination", ""),
                "departure_date": item.get("departure_at"),
                "return_date": item.get("return_at"),
                "price": float(item.get("value", 0) or 0),
                "currency": currency,
                "airline": item.get("airline"),
            }
            for item in data.get("data", [])
            if item.get("destination")
        ]

    async def close(self):
        if self._client and self._owns_client:
            await self._client.aclose()
        self._client = None
