"""
Purpose: Quote shipping for a package between two addresses.

Flow for estimate():
1. Geocode origin and destination concurrently. A failed or empty lookup
   falls back to the default distance (1000 km) instead of failing.
2. Haversine distance between the two coordinates.
3. Ask every rate provider for offers. A provider error is logged and the
   provider is skipped.
4. No offers at all -> single fallback offer.
5. Sort ascending by rate (stable, so ties keep provider order).

Only missing input is fatal (ValidationError).
"""

import asyncio
import logging
from typing import List, Optional, Sequence

from app.core.exceptions import ValidationError, UnavailableError
from app.schemas.shipping import (
    Address,
    PackageDescriptor,
    GeoCoordinate,
    ShippingOffer,
    ShippingRateRequest,
)
from app.services.shipping.base import RateProvider
from app.services.shipping.carriers.standard import DistanceRateProvider
from app.services.shipping.distance import distance_between
from app.services.shipping.geocoding import Geocoder
from app.services.shipping.rates import fallback_offer

logger = logging.getLogger(__name__)

DEFAULT_DISTANCE_KM = 1000.0


class RateEstimator:

    def __init__(
        self,
        geocoder: Geocoder,
        providers: Optional[Sequence[RateProvider]] = None,
        currency: str = "USD",
        default_distance_km: float = DEFAULT_DISTANCE_KM
    ):
        self.geocoder = geocoder
        self.providers: List[RateProvider] = (
            list(providers) if providers is not None else [DistanceRateProvider(currency)]
        )
        self.currency = currency
        self.default_distance_km = default_distance_km

    async def _safe_resolve(self, address: Address) -> Optional[GeoCoordinate]:
        try:
            return await self.geocoder.resolve(address.free_text)
        except UnavailableError as e:
            logger.warning(f"Geocoding unavailable for '{address.free_text}': {str(e)}")
            return None

    async def distance_km(self, origin: Address, destination: Address) -> float:
        origin_coords, destination_coords = await asyncio.gather(
            self._safe_resolve(origin),
            self._safe_resolve(destination),
        )
        if origin_coords is None or destination_coords is None:
            logger.info(f"Using default distance of {self.default_distance_km} km")
            return self.default_distance_km
        return distance_between(origin_coords, destination_coords)

    async def estimate(
        self,
        origin: Optional[Address],
        destination: Optional[Address],
        package: Optional[PackageDescriptor]
    ) -> List[ShippingOffer]:
        """
        Quote every available shipping service.

        Args:
            origin: Ship-from address
            destination: Ship-to address
            package: Package weight, dimensions and value

        Returns:
            At least one offer, ascending by rate

        Raises:
            ValidationError: If origin, destination or package is missing
        """
        if origin is None or destination is None or package is None:
            raise ValidationError("Missing required fields")

        request = ShippingRateRequest(origin=origin, destination=destination, package=package)
        distance = await self.distance_km(origin, destination)

        offers: List[ShippingOffer] = []
        for provider in self.providers:
            try:
                offers.extend(await provider.get_rates(request, distance))
            except Exception as e:
                logger.error(f"Rate provider '{provider.provider_code}' failed: {str(e)}", exc_info=True)

        if not offers:
            logger.warning("No shipping offers produced, using fallback rate")
            offers.append(fallback_offer(self.currency))

        return sorted(offers, key=lambda offer: offer.rate)
