"""
Shared enums and constants used across the application.
"""

from enum import Enum


class ShippingMethodType(str, Enum):
    """Pricing strategies a configured shipping method can use"""
    FREE = "free"
    FIXED = "fixed"
    CALCULATED = "calculated"
    WEIGHT_BASED = "weight_based"
    DISTANCE_BASED = "distance_based"


class WeightUnit(str, Enum):
    KG = "kg"
    LB = "lb"


class DimensionUnit(str, Enum):
    CM = "cm"
    IN = "in"


class TaxType(str, Enum):
    SALES = "sales"
    EXCISE = "excise"
    GROSS_RECEIPTS = "gross_receipts"
    GST = "gst"
    PST = "pst"
    HST = "hst"
    QST = "qst"


class Collection(str, Enum):
    """Document store collections"""
    PRODUCTS = "products"
    CATEGORIES = "categories"
    SETTINGS = "settings"
    CARTS = "carts"
    WISHLIST = "wishlist"
