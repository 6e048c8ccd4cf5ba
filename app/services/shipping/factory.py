"""
Rate provider factory to make provider selection easy
"""
from typing import Optional

from app.schemas.shipping import ShippingSettings
from app.services.shipping.base import RateProvider
from app.services.shipping.carriers.standard import DistanceRateProvider
from app.services.shipping.carriers.zones import ZoneRateProvider


def get_rate_provider(
    provider_code: str,
    currency: str = "USD",
    settings: Optional[ShippingSettings] = None
) -> RateProvider:
    """
    Factory function to get the appropriate rate provider by code

    Args:
        provider_code: The code of the provider to use
        currency: Currency for providers that price in a fixed currency
        settings: Shipping settings, used by the zones provider

    Returns:
        An instance of the appropriate provider class

    Raises:
        ValueError: If the provider code is not supported
    """
    if provider_code == DistanceRateProvider.provider_code:
        return DistanceRateProvider(currency)

    if provider_code == ZoneRateProvider.provider_code:
        return ZoneRateProvider(settings or ShippingSettings.default())

    raise ValueError(f"Rate provider '{provider_code}' is not supported")
