"""
Core module exports.
"""
from .enums import (
    ShippingMethodType,
    WeightUnit,
    DimensionUnit,
    TaxType,
    Collection
)

from .exceptions import (
    BaseServiceError,
    ValidationError,
    UnavailableError,
    NotFoundError,
    OutOfStockError
)
