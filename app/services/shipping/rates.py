"""
Distance and weight based pricing.

base = max(5.00 + 0.01 per km + 0.50 per kg, 2.00)
"""

from typing import List

from app.schemas.shipping import ShippingOffer, EstimatedDays

BASE_RATE = 5.0
RATE_PER_KM = 0.01
RATE_PER_KG = 0.5
MINIMUM_RATE = 2.0

EXPRESS_MULTIPLIER = 1.5

FALLBACK_RATE = 9.99


def derive_base_rate(distance_km: float, weight: float) -> float:
    return max(BASE_RATE + distance_km * RATE_PER_KM + weight * RATE_PER_KG, MINIMUM_RATE)


def build_distance_offers(base_rate: float, currency: str = "USD") -> List[ShippingOffer]:
    """Standard at the base rate, Express at 1.5x"""
    return [
        ShippingOffer(
            service_name="Standard",
            rate=round(base_rate, 2),
            currency=currency,
            estimated_days=EstimatedDays(min=3, max=7),
            carrier_label="Standard Delivery",
        ),
        ShippingOffer(
            service_name="Express",
            rate=round(base_rate * EXPRESS_MULTIPLIER, 2),
            currency=currency,
            estimated_days=EstimatedDays(min=1, max=3),
            carrier_label="Express Delivery",
        ),
    ]


def fallback_offer(currency: str = "USD") -> ShippingOffer:
    """Used when no provider produced anything"""
    return ShippingOffer(
        service_name="Standard Shipping",
        rate=FALLBACK_RATE,
        currency=currency,
        estimated_days=EstimatedDays(min=3, max=7),
        carrier_label="Standard",
    )
