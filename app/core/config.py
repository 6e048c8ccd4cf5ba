# app/core/config.py

import os
from functools import lru_cache
from typing import Optional
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings.
    Loads values from environment variables (.env file)
    """
    # Database settings
    DATABASE_URL: str = "postgresql+asyncpg://localhost/jewelry_store"
    RUN_MIGRATIONS: bool = False

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # Basic Auth for the admin endpoints
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: Optional[str] = None

    # Geocoding (OpenStreetMap Nominatim compatible)
    GEOCODER_URL: str = "https://nominatim.openstreetmap.org/search"
    GEOCODER_USER_AGENT: str = "JewelryStore/1.0"
    GEOCODER_TIMEOUT: float = 10.0

    # Shipping
    SHIPPING_CURRENCY: str = "USD"
    SHIPPING_DEFAULT_DISTANCE_KM: float = 1000.0
    SHIPPING_ZONE_RATES_ENABLED: bool = False

    # Tax - IP based location fallback
    IP_LOCATOR_URL: str = "http://ip-api.com/json"
    IP_LOCATOR_TIMEOUT: float = 5.0

    # Cart persistence
    CART_COLLECTION: str = "carts"

    model_config = ConfigDict(
        env_file=os.environ.get('ENV_FILE', '.env') if os.path.exists('.env') else None,
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache()
def get_settings():
    """Cached settings to avoid loading .env file for every request"""
    return Settings()

def get_settings_no_cache():
    """Get settings without caching - useful for testing different environments"""
    return Settings()

def clear_settings_cache():
    """Clear the settings cache - useful when switching between environments"""
    get_settings.cache_clear()
