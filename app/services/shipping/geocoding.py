"""
Free-text address to coordinate lookup.

The production geocoder talks to an OpenStreetMap Nominatim compatible search
endpoint. Lookups are best effort: one attempt, no retries.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from app.core.config import get_settings
from app.core.exceptions import UnavailableError
from app.schemas.shipping import GeoCoordinate

logger = logging.getLogger(__name__)


class Geocoder(ABC):

    @abstractmethod
    async def resolve(self, address: str) -> Optional[GeoCoordinate]:
        """
        Resolve a free-text address.

        Returns:
            The best match, or None when nothing matched

        Raises:
            UnavailableError: If the lookup service could not be used
        """


class NominatimGeocoder(Geocoder):

    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        settings = get_settings()
        self.base_url = base_url or settings.GEOCODER_URL
        self.user_agent = user_agent or settings.GEOCODER_USER_AGENT
        self.timeout = timeout if timeout is not None else settings.GEOCODER_TIMEOUT
        self.transport = transport

    def _get_headers(self):
        # Nominatim usage policy requires an identifying User-Agent
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

    async def resolve(self, address: str) -> Optional[GeoCoordinate]:
        if not address.strip():
            return None

        params = {"format": "json", "q": address, "limit": 1}
        logger.debug(f"Geocoding '{address}'")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.base_url, params=params, headers=self._get_headers())
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Geocoding network error for '{address}': {str(e)}")
            raise UnavailableError(f"Geocoding network error: {str(e)}")

        if response.status_code != 200:
            logger.warning(f"Geocoding failed for '{address}': HTTP {response.status_code}")
            raise UnavailableError(f"Geocoding failed with status {response.status_code}")

        try:
            results = response.json()
            if not results:
                logger.info(f"No geocoding match for '{address}'")
                return None
            best = results[0]
            return GeoCoordinate(latitude=float(best["lat"]), longitude=float(best["lon"]))
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.warning(f"Unexpected geocoding payload for '{address}': {str(e)}")
            raise UnavailableError(f"Unexpected geocoding payload: {str(e)}")
