"""
Schema exports for the application.
"""

# Base schemas
from .base import BaseSchema

# Shipping schemas
from .shipping import (
    Address,
    OriginAddress,
    PackageDescriptor,
    GeoCoordinate,
    EstimatedDays,
    ShippingOffer,
    ShippingRateRequest,
    ShippingRateResponse,
    RateBand,
    ShippingMethod,
    ShippingZone,
    GlobalShippingSettings,
    ShippingSettings
)

# Cart schemas
from .cart import (
    ProductSnapshot,
    LineItem,
    CartTotals,
    CartRead,
    AddCartItemRequest,
    UpdateCartItemRequest
)

# Tax schemas
from .tax import (
    TaxLine,
    UserLocation,
    TaxCalculationRequest,
    TaxCalculationResponse
)

# Catalog schemas
from .product import (
    ProductRead,
    ProductListResponse
)

# Wishlist schemas
from .wishlist import (
    WishlistEntry,
    WishlistItem,
    WishlistRead,
    AddWishlistItemRequest,
    WishlistStatus
)
