"""
Nominatim (OpenStreetMap) geocoder.

Calls ``GET /search?q=<address>&format=json&limit=1`` with an explicit
timeout.  Nominatim's usage policy requires an identifying User-Agent.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from connectors.base import BaseGeocoder, Coordinates
from core.exceptions import UpstreamUnavailableError

logger = logging.getLogger(__name__)

NOMINATIM_SEARCH_URL = "https://nominatim.openstreetmap.org/search"


class NominatimGeocoder(BaseGeocoder):
    def __init__(
        self,
        search_url: str = NOMINATIM_SEARCH_URL,
        timeout: float = 10.0,
        user_agent: str = "exercita365-api/1.0",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.search_url = search_url
        self.timeout = timeout
        self.user_agent = user_agent
        self._transport = transport

    @property
    def provider_name(self) -> str:
        return "nominatim"

    async def geocode(self, address: str) -> Optional[Coordinates]:
        params = {"q": address, "format": "json", "limit": 1}
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                resp = await client.get(self.search_url, params=params, headers=headers)
                resp.raise_for_status()
                data = resp.json()
        except httpx.TimeoutException as exc:
            logger.warning("Nominatim lookup timed out after %.1fs", self.timeout)
            raise UpstreamUnavailableError("Geocoding service timed out") from exc
        except httpx.HTTPStatusError as exc:
            logger.warning("Nominatim returned HTTP %s", exc.response.status_code)
            raise UpstreamUnavailableError() from exc
        except httpx.HTTPError as exc:
            logger.warning("Nominatim request failed: %s", exc)
            raise UpstreamUnavailableError() from exc
        except ValueError as exc:
            logger.warning("Nominatim returned a non-JSON body")
            raise UpstreamUnavailableError() from exc

        if not isinstance(data, list):
            logger.warning("Unexpected Nominatim payload type: %s", type(data).__name__)
            raise UpstreamUnavailableError()
        if not data:
            logger.info("No geocoding match for address %r", address)
            return None

        first = data[0]
        if not isinstance(first, dict):
            raise UpstreamUnavailableError()
        lat, lon = first.get("lat"), first.get("lon")
        if lat is None or lon is None:
            raise UpstreamUnavailableError("Geocoding service returned an incomplete match")
        return Coordinates(lat=str(lat), lon=str(lon))
