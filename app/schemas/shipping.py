"""
Schemas for shipping rate estimation and shipping settings.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import ConfigDict, Field

from app.core.enums import ShippingMethodType, WeightUnit, DimensionUnit
from app.schemas.base import BaseSchema


class Address(BaseSchema):
    """Only presence of the address is checked; parts may be empty"""
    model_config = ConfigDict(frozen=True)

    country: str = ""
    state: str = ""
    city: str = ""
    postal_code: str = ""

    @property
    def free_text(self) -> str:
        """Geocoder query, e.g. 'Toronto, ON, Canada'"""
        return ", ".join(p for p in [self.city, self.state, self.country] if p)


class OriginAddress(Address):
    address: str = ""


class PackageDescriptor(BaseSchema):
    model_config = ConfigDict(frozen=True)

    weight: float = Field(0.0, ge=0, description="Weight in kg")
    length: float = Field(0.0, ge=0, description="Length in cm")
    width: float = Field(0.0, ge=0, description="Width in cm")
    height: float = Field(0.0, ge=0, description="Height in cm")
    value: float = Field(0.0, ge=0, description="Declared value in store currency")


class GeoCoordinate(BaseSchema):
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class EstimatedDays(BaseSchema):
    min: int = Field(..., ge=0)
    max: int = Field(..., ge=0)


class ShippingOffer(BaseSchema):
    """One priced shipping service quote"""
    service_name: str = Field(..., alias="service")
    rate: float = Field(..., ge=0)
    currency: str = "USD"
    estimated_days: EstimatedDays
    carrier_label: str = Field(..., alias="carrier")
    description: Optional[str] = None

    @property
    def estimated_days_min(self) -> int:
        return self.estimated_days.min

    @property
    def estimated_days_max(self) -> int:
        return self.estimated_days.max


class ShippingRateRequest(BaseSchema):
    # Optional so that a missing part is reported as a 400, not a schema error
    origin: Optional[Address] = None
    destination: Optional[Address] = None
    package: Optional[PackageDescriptor] = None
    service: Optional[str] = None


class ShippingRateResponse(BaseSchema):
    success: bool = True
    rates: List[ShippingOffer]


# --- Shipping settings (zones and methods) ---

class RateBand(BaseSchema):
    """Rate applied when min <= measure <= max; max of -1 means unbounded"""
    min: float
    max: float
    rate: float = Field(..., ge=0)

    def contains(self, measure: float) -> bool:
        return measure >= self.min and (self.max == -1 or measure <= self.max)


class ShippingMethod(BaseSchema):
    id: str
    name: str
    type: ShippingMethodType
    price: Optional[float] = Field(None, ge=0)
    free_threshold: Optional[float] = Field(None, ge=0)
    weight_rates: List[RateBand] = Field(default_factory=list)
    distance_rates: List[RateBand] = Field(default_factory=list)
    estimated_days: Optional[EstimatedDays] = None
    enabled: bool = True


class ShippingZone(BaseSchema):
    id: str
    name: str
    countries: List[str] = Field(default_factory=list)
    methods: List[ShippingMethod] = Field(default_factory=list)


class GlobalShippingSettings(BaseSchema):
    enable_free_shipping: bool = False
    free_shipping_threshold: float = 100.0
    enable_local_pickup: bool = False
    local_pickup_instructions: str = ""


class ShippingSettings(BaseSchema):
    default_currency: str = "USD"
    weight_unit: WeightUnit = WeightUnit.KG
    dimension_unit: DimensionUnit = DimensionUnit.CM
    origin_address: OriginAddress = Field(default_factory=OriginAddress)
    zones: List[ShippingZone] = Field(default_factory=list)
    global_settings: GlobalShippingSettings = Field(default_factory=GlobalShippingSettings)
    updated_at: Optional[datetime] = None

    @classmethod
    def default(cls) -> "ShippingSettings":
        """Settings used until an admin saves their own"""
        return cls(
            zones=[
                ShippingZone(
                    id="domestic",
                    name="Domestic",
                    countries=["United States"],
                    methods=[
                        ShippingMethod(
                            id="standard",
                            name="Standard Shipping",
                            type=ShippingMethodType.FIXED,
                            price=9.99,
                            estimated_days=EstimatedDays(min=3, max=7),
                        )
                    ],
                )
            ]
        )

    def find_zone(self, country: str) -> Optional[ShippingZone]:
        for zone in self.zones:
            if country in zone.countries:
                return zone
        return None
