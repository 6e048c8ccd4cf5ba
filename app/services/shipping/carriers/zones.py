"""
Zone Rate Provider

Turns the admin-configured shipping settings into offers:
- Global free shipping above a package value threshold
- Local pickup
- The enabled methods of the zone that lists the destination country

Method types:
- free: 0, optionally only above a threshold
- fixed: the method price
- weight_based: first matching weight band
- distance_based: first matching distance band
- calculated: 15.99 + 2.50 per kg
"""

import logging
from typing import List, Optional

from app.core.enums import ShippingMethodType
from app.schemas.shipping import (
    ShippingRateRequest,
    ShippingOffer,
    ShippingMethod,
    ShippingSettings,
    EstimatedDays,
)
from app.services.shipping.base import RateProvider

logger = logging.getLogger(__name__)

CALCULATED_BASE_RATE = 15.99
CALCULATED_RATE_PER_KG = 2.5


class ZoneRateProvider(RateProvider):

    provider_name = "Shipping Zones"
    provider_code = "zones"

    def __init__(self, settings: ShippingSettings):
        self.settings = settings

    def _offer(
        self,
        method: ShippingMethod,
        rate: float,
        description: Optional[str] = None
    ) -> ShippingOffer:
        days = method.estimated_days or EstimatedDays(min=3, max=7)
        return ShippingOffer(
            service_name=method.name,
            rate=rate,
            currency=self.settings.default_currency,
            estimated_days=days,
            carrier_label=self.provider_name,
            description=description,
        )

    def _global_offers(self, package_value: float) -> List[ShippingOffer]:
        offers = []
        global_settings = self.settings.global_settings
        currency = self.settings.default_currency

        if global_settings.enable_free_shipping and package_value >= global_settings.free_shipping_threshold:
            offers.append(
                ShippingOffer(
                    service_name="Free Shipping",
                    rate=0,
                    currency=currency,
                    estimated_days=EstimatedDays(min=3, max=7),
                    carrier_label=self.provider_name,
                    description=f"Free shipping on orders over {currency} {global_settings.free_shipping_threshold}",
                )
            )

        if global_settings.enable_local_pickup:
            offers.append(
                ShippingOffer(
                    service_name="Local Pickup",
                    rate=0,
                    currency=currency,
                    estimated_days=EstimatedDays(min=1, max=1),
                    carrier_label=self.provider_name,
                    description=global_settings.local_pickup_instructions or "Pick up at our location",
                )
            )

        return offers

    def price_method(
        self,
        method: ShippingMethod,
        weight: float,
        package_value: float,
        distance_km: float
    ) -> Optional[ShippingOffer]:
        """Offer for one method, or None when the method does not apply"""
        currency = self.settings.default_currency

        if method.type == ShippingMethodType.FREE:
            if not method.free_threshold or package_value >= method.free_threshold:
                description = (
                    f"Free shipping on orders over {currency} {method.free_threshold}"
                    if method.free_threshold else "Free shipping"
                )
                return self._offer(method, 0, description)
            return None

        if method.type == ShippingMethodType.FIXED:
            return self._offer(method, method.price or 0)

        if method.type == ShippingMethodType.WEIGHT_BASED:
            if not method.weight_rates:
                return self._offer(method, method.price or 0)
            band = next((b for b in method.weight_rates if b.contains(weight)), None)
            if band is None:
                return None
            return self._offer(
                method,
                band.rate,
                f"Based on {weight:.1f} {self.settings.weight_unit.value} total weight",
            )

        if method.type == ShippingMethodType.DISTANCE_BASED:
            if not method.distance_rates:
                return self._offer(method, method.price or 0)
            band = next((b for b in method.distance_rates if b.contains(distance_km)), None)
            if band is None:
                return None
            return self._offer(method, band.rate, f"Based on {distance_km:.0f} km distance")

        if method.type == ShippingMethodType.CALCULATED:
            rate = round(CALCULATED_BASE_RATE + weight * CALCULATED_RATE_PER_KG, 2)
            return self._offer(method, rate, "Calculated from package weight")

        return None

    async def get_rates(self, request: ShippingRateRequest, distance_km: float) -> List[ShippingOffer]:
        weight = request.package.weight
        package_value = request.package.value

        offers = self._global_offers(package_value)

        zone = self.settings.find_zone(request.destination.country)
        if not zone:
            logger.debug(f"No shipping zone for '{request.destination.country}'")
            return offers

        for method in zone.methods:
            if not method.enabled:
                continue
            offer = self.price_method(method, weight, package_value, distance_km)
            if offer:
                offers.append(offer)

        return offers
