"""
Sales tax calculation by jurisdiction.

Location is taken from, in order:
1. The shipping address (state/province name or code plus country)
2. The user's detected location (country plus region code)
3. An IP geolocation lookup

US states charge a single sales/excise tax. Canadian provinces charge GST,
PST, HST or QST separately. Everything else is tax free.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

import httpx

from app.core.config import get_settings
from app.core.enums import TaxType
from app.core.exceptions import ValidationError, UnavailableError
from app.schemas.shipping import Address
from app.schemas.tax import TaxLine, UserLocation, TaxCalculationResponse

logger = logging.getLogger(__name__)


def _sales(name: str, rate: float) -> Tuple[str, float, TaxType]:
    return (name, rate, TaxType.SALES)


GST = ("GST", 0.05, TaxType.GST)

US_STATE_TAXES: Dict[str, Dict] = {
    "AL": {"location": "Alabama", "taxes": [_sales("Alabama Sales Tax", 0.04)]},
    "AK": {"location": "Alaska", "taxes": []},
    "AZ": {"location": "Arizona", "taxes": [_sales("Arizona Sales Tax", 0.056)]},
    "AR": {"location": "Arkansas", "taxes": [_sales("Arkansas Sales Tax", 0.065)]},
    "CA": {"location": "California", "taxes": [_sales("California Sales Tax", 0.0725)]},
    "CO": {"location": "Colorado", "taxes": [_sales("Colorado Sales Tax", 0.029)]},
    "CT": {"location": "Connecticut", "taxes": [_sales("Connecticut Sales Tax", 0.0635)]},
    "DE": {"location": "Delaware", "taxes": []},
    "FL": {"location": "Florida", "taxes": [_sales("Florida Sales Tax", 0.06)]},
    "GA": {"location": "Georgia", "taxes": [_sales("Georgia Sales Tax", 0.04)]},
    "HI": {"location": "Hawaii", "taxes": [("Hawaii General Excise Tax", 0.04, TaxType.EXCISE)]},
    "ID": {"location": "Idaho", "taxes": [_sales("Idaho Sales Tax", 0.06)]},
    "IL": {"location": "Illinois", "taxes": [_sales("Illinois Sales Tax", 0.0625)]},
    "IN": {"location": "Indiana", "taxes": [_sales("Indiana Sales Tax", 0.07)]},
    "IA": {"location": "Iowa", "taxes": [_sales("Iowa Sales Tax", 0.06)]},
    "KS": {"location": "Kansas", "taxes": [_sales("Kansas Sales Tax", 0.065)]},
    "KY": {"location": "Kentucky", "taxes": [_sales("Kentucky Sales Tax", 0.06)]},
    "LA": {"location": "Louisiana", "taxes": [_sales("Louisiana Sales Tax", 0.0445)]},
    "ME": {"location": "Maine", "taxes": [_sales("Maine Sales Tax", 0.055)]},
    "MD": {"location": "Maryland", "taxes": [_sales("Maryland Sales Tax", 0.06)]},
    "MA": {"location": "Massachusetts", "taxes": [_sales("Massachusetts Sales Tax", 0.0625)]},
    "MI": {"location": "Michigan", "taxes": [_sales("Michigan Sales Tax", 0.06)]},
    "MN": {"location": "Minnesota", "taxes": [_sales("Minnesota Sales Tax", 0.06875)]},
    "MS": {"location": "Mississippi", "taxes": [_sales("Mississippi Sales Tax", 0.07)]},
    "MO": {"location": "Missouri", "taxes": [_sales("Missouri Sales Tax", 0.04225)]},
    "MT": {"location": "Montana", "taxes": []},
    "NE": {"location": "Nebraska", "taxes": [_sales("Nebraska Sales Tax", 0.055)]},
    "NV": {"location": "Nevada", "taxes": [_sales("Nevada Sales Tax", 0.0685)]},
    "NH": {"location": "New Hampshire", "taxes": []},
    "NJ": {"location": "New Jersey", "taxes": [_sales("New Jersey Sales Tax", 0.06625)]},
    "NM": {"location": "New Mexico", "taxes": [("New Mexico Gross Receipts Tax", 0.05125, TaxType.GROSS_RECEIPTS)]},
    "NY": {"location": "New York", "taxes": [_sales("New York Sales Tax", 0.08)]},
    "NC": {"location": "North Carolina", "taxes": [_sales("North Carolina Sales Tax", 0.0475)]},
    "ND": {"location": "North Dakota", "taxes": [_sales("North Dakota Sales Tax", 0.05)]},
    "OH": {"location": "Ohio", "taxes": [_sales("Ohio Sales Tax", 0.0575)]},
    "OK": {"location": "Oklahoma", "taxes": [_sales("Oklahoma Sales Tax", 0.045)]},
    "OR": {"location": "Oregon", "taxes": []},
    "PA": {"location": "Pennsylvania", "taxes": [_sales("Pennsylvania Sales Tax", 0.06)]},
    "RI": {"location": "Rhode Island", "taxes": [_sales("Rhode Island Sales Tax", 0.07)]},
    "SC": {"location": "South Carolina", "taxes": [_sales("South Carolina Sales Tax", 0.06)]},
    "SD": {"location": "South Dakota", "taxes": [_sales("South Dakota Sales Tax", 0.045)]},
    "TN": {"location": "Tennessee", "taxes": [_sales("Tennessee Sales Tax", 0.07)]},
    "TX": {"location": "Texas", "taxes": [_sales("Texas Sales Tax", 0.0625)]},
    "UT": {"location": "Utah", "taxes": [_sales("Utah Sales Tax", 0.0485)]},
    "VT": {"location": "Vermont", "taxes": [_sales("Vermont Sales Tax", 0.06)]},
    "VA": {"location": "Virginia", "taxes": [_sales("Virginia Sales Tax", 0.053)]},
    "WA": {"location": "Washington", "taxes": [_sales("Washington Sales Tax", 0.065)]},
    "WV": {"location": "West Virginia", "taxes": [_sales("West Virginia Sales Tax", 0.06)]},
    "WI": {"location": "Wisconsin", "taxes": [_sales("Wisconsin Sales Tax", 0.05)]},
    "WY": {"location": "Wyoming", "taxes": [_sales("Wyoming Sales Tax", 0.04)]},
    "DC": {"location": "District of Columbia", "taxes": [_sales("District of Columbia Sales Tax", 0.06)]},
}

CA_PROVINCE_TAXES: Dict[str, Dict] = {
    "AB": {"location": "Alberta", "taxes": [GST]},
    "BC": {"location": "British Columbia", "taxes": [GST, ("PST", 0.07, TaxType.PST)]},
    "MB": {"location": "Manitoba", "taxes": [GST, ("PST", 0.07, TaxType.PST)]},
    "NB": {"location": "New Brunswick", "taxes": [("HST", 0.15, TaxType.HST)]},
    "NL": {"location": "Newfoundland and Labrador", "taxes": [("HST", 0.15, TaxType.HST)]},
    "NS": {"location": "Nova Scotia", "taxes": [("HST", 0.15, TaxType.HST)]},
    "ON": {"location": "Ontario", "taxes": [("HST", 0.13, TaxType.HST)]},
    "PE": {"location": "Prince Edward Island", "taxes": [("HST", 0.15, TaxType.HST)]},
    "QC": {"location": "Quebec", "taxes": [GST, ("QST", 0.09975, TaxType.QST)]},
    "SK": {"location": "Saskatchewan", "taxes": [GST, ("PST", 0.06, TaxType.PST)]},
    "NT": {"location": "Northwest Territories", "taxes": [GST]},
    "NU": {"location": "Nunavut", "taxes": [GST]},
    "YT": {"location": "Yukon", "taxes": [GST]},
}

DEFAULT_US = {"location": "United States (Default)", "taxes": [_sales("US Sales Tax", 0.07)]}
DEFAULT_CA = {"location": "Canada (Default)", "taxes": [GST, ("PST", 0.07, TaxType.PST)]}
DEFAULT_INTERNATIONAL = {"location": "International (Tax Free)", "taxes": []}

US_COUNTRY_NAMES = {"US", "USA", "UNITED STATES"}
CA_COUNTRY_NAMES = {"CA", "CANADA"}

# Full names -> codes, e.g. "NEW YORK" -> "NY"
US_STATE_CODES = {entry["location"].upper(): code for code, entry in US_STATE_TAXES.items()}
CA_PROVINCE_CODES = {entry["location"].upper(): code for code, entry in CA_PROVINCE_TAXES.items()}


def get_state_code(state: str) -> Optional[str]:
    state = state.strip().upper()
    return US_STATE_CODES.get(state) or (state if len(state) == 2 else None)


def get_province_code(province: str) -> Optional[str]:
    province = province.strip().upper()
    return CA_PROVINCE_CODES.get(province) or (province if len(province) == 2 else None)


def jurisdiction_for(country: str, region_code: Optional[str]) -> Dict:
    """Tax table entry for a country and an already normalised region code"""
    country = country.strip().upper()
    if country in US_COUNTRY_NAMES:
        return US_STATE_TAXES.get(region_code or "", DEFAULT_US)
    if country in CA_COUNTRY_NAMES:
        return CA_PROVINCE_TAXES.get(region_code or "", DEFAULT_CA)
    return DEFAULT_INTERNATIONAL


class IpLocator(ABC):

    @abstractmethod
    async def locate(self, ip_address: str) -> Optional[UserLocation]:
        """Country code and region code for an IP, None if unknown. Raises UnavailableError."""


class IpApiLocator(IpLocator):
    """ip-api.com JSON endpoint"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.IP_LOCATOR_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.IP_LOCATOR_TIMEOUT
        self.transport = transport

    async def locate(self, ip_address: str) -> Optional[UserLocation]:
        url = f"{self.base_url}/{ip_address}"
        params = {"fields": "status,country,countryCode,region,regionName"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(url, params=params)
            data = response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            raise UnavailableError(f"IP lookup failed: {str(e)}")

        if not isinstance(data, dict):
            raise UnavailableError(f"Unexpected IP lookup payload: {type(data).__name__}")

        if data.get("status") != "success" or not data.get("countryCode"):
            return None
        return UserLocation(country=data["countryCode"], region=data.get("region"))


class TaxService:

    def __init__(self, ip_locator: Optional[IpLocator] = None):
        self.ip_locator = ip_locator

    async def _resolve(
        self,
        shipping_address: Optional[Address],
        user_location: Optional[UserLocation],
        client_ip: Optional[str]
    ) -> Tuple[Dict, str]:
        if shipping_address and shipping_address.state and shipping_address.country:
            country = shipping_address.country.strip().upper()
            if country in US_COUNTRY_NAMES:
                entry = jurisdiction_for(country, get_state_code(shipping_address.state))
            elif country in CA_COUNTRY_NAMES:
                entry = jurisdiction_for(country, get_province_code(shipping_address.state))
            else:
                return DEFAULT_INTERNATIONAL, "Shipping Address: International"
            return entry, f"Shipping Address: {entry['location']}"

        if user_location and user_location.country:
            return self._from_location(user_location, "Detected Location")

        if self.ip_locator is None or not client_ip:
            return DEFAULT_INTERNATIONAL, "Unknown"

        try:
            located = await self.ip_locator.locate(client_ip)
        except UnavailableError as e:
            logger.warning(f"Error getting location from IP: {str(e)}")
            return DEFAULT_INTERNATIONAL, "Location Detection Failed"

        if located is None:
            return DEFAULT_INTERNATIONAL, "Unknown"
        return self._from_location(located, "IP Location")

    def _from_location(self, location: UserLocation, source: str) -> Tuple[Dict, str]:
        region = location.region.strip().upper() if location.region else None
        entry = jurisdiction_for(location.country, region)
        if entry is DEFAULT_INTERNATIONAL:
            return entry, f"{source}: International"
        return entry, f"{source}: {entry['location']}"

    async def calculate(
        self,
        subtotal: Optional[float],
        shipping_address: Optional[Address] = None,
        user_location: Optional[UserLocation] = None,
        client_ip: Optional[str] = None
    ) -> TaxCalculationResponse:
        """
        Calculate the taxes owed on a subtotal.

        Raises:
            ValidationError: If subtotal is missing or not positive
        """
        if not subtotal or subtotal <= 0:
            raise ValidationError("Invalid subtotal")

        entry, detected_location = await self._resolve(shipping_address, user_location, client_ip)

        taxes: List[TaxLine] = [
            TaxLine(name=name, type=tax_type, rate=rate, amount=round(subtotal * rate, 2))
            for name, rate, tax_type in entry["taxes"]
        ]
        total_tax_amount = round(sum(tax.amount for tax in taxes), 2)

        return TaxCalculationResponse(
            taxes=taxes,
            total_tax_rate=round(sum(tax.rate for tax in taxes), 6),
            total_tax_amount=total_tax_amount,
            tax_location=entry["location"],
            detected_location=detected_location,
            subtotal=subtotal,
            total=round(subtotal + total_tax_amount, 2),
        )
