"""
Schemas for sales tax calculation.
"""

from typing import List, Optional

from app.core.enums import TaxType
from app.schemas.base import BaseSchema
from app.schemas.shipping import Address


class TaxLine(BaseSchema):
    name: str
    type: TaxType
    rate: float
    amount: float


class UserLocation(BaseSchema):
    country: str
    region: Optional[str] = None


class TaxCalculationRequest(BaseSchema):
    subtotal: Optional[float] = None
    shipping_address: Optional[Address] = None
    user_location: Optional[UserLocation] = None


class TaxCalculationResponse(BaseSchema):
    success: bool = True
    taxes: List[TaxLine]
    total_tax_rate: float
    total_tax_amount: float
    tax_location: str
    detected_location: str
    subtotal: float
    total: float
