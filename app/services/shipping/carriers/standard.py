"""
Built-in distance tiers: Standard and Express derived from one base rate.
"""

from typing import List

from app.schemas.shipping import ShippingRateRequest, ShippingOffer
from app.services.shipping.base import RateProvider
from app.services.shipping.rates import derive_base_rate, build_distance_offers


class DistanceRateProvider(RateProvider):
    """Prices by distance and package weight"""

    provider_name = "Distance Rates"
    provider_code = "distance"

    def __init__(self, currency: str = "USD"):
        self.currency = currency

    async def get_rates(self, request: ShippingRateRequest, distance_km: float) -> List[ShippingOffer]:
        base_rate = derive_base_rate(distance_km, request.package.weight)
        return build_distance_offers(base_rate, self.currency)
