"""
Base Rate Provider Interface

This module defines the abstract base class that every source of shipping
offers must implement.

The estimator resolves the distance once per request and hands it to every
provider, so providers only turn a request plus a distance into offers:
- The built-in distance tiers (Standard / Express)
- Admin-configured shipping zones
- Carrier API integrations added later (national postal services etc.)
"""

from abc import ABC, abstractmethod
from typing import List

from app.schemas.shipping import ShippingRateRequest, ShippingOffer


class RateProvider(ABC):
    """Base class for all shipping rate providers"""

    provider_name = "Generic Provider"
    provider_code = "generic"

    @abstractmethod
    async def get_rates(self, request: ShippingRateRequest, distance_km: float) -> List[ShippingOffer]:
        """Get shipping offers

        Args:
            request: Validated request with origin, destination and package
            distance_km: Distance between origin and destination

        Returns:
            Offers in any order; may be empty
        """
        pass
