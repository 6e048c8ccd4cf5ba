# tests/unit/services/test_tax_service.py
import httpx
import pytest

from app.core.enums import TaxType
from app.core.exceptions import ValidationError, UnavailableError
from app.schemas.shipping import Address
from app.schemas.tax import UserLocation
from app.services.tax_service import (
    TaxService,
    IpApiLocator,
    get_state_code,
    get_province_code,
    jurisdiction_for,
    DEFAULT_US,
    DEFAULT_CA,
    DEFAULT_INTERNATIONAL,
)
from tests.mocks import FakeIpLocator


@pytest.mark.parametrize("state, expected", [
    ("New York", "NY"),
    ("ny", "NY"),
    (" california ", "CA"),
    ("Narnia", None),
])
def test_get_state_code(state, expected):
    assert get_state_code(state) == expected


@pytest.mark.parametrize("province, expected", [("Ontario", "ON"), ("qc", "QC"), ("British Columbia", "BC")])
def test_get_province_code(province, expected):
    assert get_province_code(province) == expected


def test_jurisdiction_lookup_stays_within_country():
    # "CA" is a US state code and a country code; as a region in Canada it is unknown
    assert jurisdiction_for("Canada", "CA") is DEFAULT_CA
    assert jurisdiction_for("US", "ZZ") is DEFAULT_US
    assert jurisdiction_for("France", "IDF") is DEFAULT_INTERNATIONAL
    assert jurisdiction_for("United States", "CA")["location"] == "California"


@pytest.mark.asyncio
@pytest.mark.parametrize("subtotal", [None, 0, -10])
async def test_invalid_subtotal(subtotal):
    with pytest.raises(ValidationError):
        await TaxService().calculate(subtotal)


@pytest.mark.asyncio
async def test_us_shipping_address_by_state_name():
    result = await TaxService().calculate(
        100.0,
        shipping_address=Address(country="United States", state="New York", city="New York"),
    )

    assert result.tax_location == "New York"
    assert result.detected_location == "Shipping Address: New York"
    assert [(t.name, t.type, t.rate, t.amount) for t in result.taxes] == [
        ("New York Sales Tax", TaxType.SALES, 0.08, 8.0)
    ]
    assert result.total_tax_amount == 8.0
    assert result.total == 108.0


@pytest.mark.asyncio
async def test_canadian_province_charges_each_tax_separately():
    result = await TaxService().calculate(
        200.0,
        shipping_address=Address(country="Canada", state="QC", city="Montreal"),
    )

    assert [(t.name, t.amount) for t in result.taxes] == [("GST", 10.0), ("QST", 19.95)]
    assert result.total_tax_rate == 0.14975
    assert result.total_tax_amount == 29.95
    assert result.total == 229.95


@pytest.mark.asyncio
async def test_state_without_sales_tax():
    result = await TaxService().calculate(50.0, shipping_address=Address(country="US", state="OR"))

    assert result.taxes == []
    assert result.total_tax_amount == 0
    assert result.total == 50.0


@pytest.mark.asyncio
async def test_unknown_state_uses_country_default():
    result = await TaxService().calculate(100.0, shipping_address=Address(country="USA", state="Narnia"))

    assert result.tax_location == "United States (Default)"
    assert result.total_tax_amount == 7.0


@pytest.mark.asyncio
async def test_international_shipping_address_is_tax_free():
    result = await TaxService().calculate(100.0, shipping_address=Address(country="France", state="IDF"))

    assert result.detected_location == "Shipping Address: International"
    assert result.taxes == []
    assert result.total == 100.0


@pytest.mark.asyncio
async def test_shipping_address_wins_over_detected_location():
    locator = FakeIpLocator(UserLocation(country="CA", region="ON"))
    result = await TaxService(locator).calculate(
        100.0,
        shipping_address=Address(country="United States", state="TX"),
        user_location=UserLocation(country="CA", region="BC"),
        client_ip="203.0.113.7",
    )

    assert result.tax_location == "Texas"
    assert locator.calls == []


@pytest.mark.asyncio
async def test_shipping_address_without_state_falls_through_to_user_location():
    result = await TaxService().calculate(
        100.0,
        shipping_address=Address(country="United States"),
        user_location=UserLocation(country="CA", region="ON"),
    )

    assert result.detected_location == "Detected Location: Ontario"
    assert result.total_tax_amount == 13.0


@pytest.mark.asyncio
async def test_ip_location_used_last():
    locator = FakeIpLocator(UserLocation(country="US", region="WA"))

    result = await TaxService(locator).calculate(100.0, client_ip="203.0.113.7")

    assert locator.calls == ["203.0.113.7"]
    assert result.detected_location == "IP Location: Washington"
    assert result.total_tax_amount == 6.5


@pytest.mark.asyncio
async def test_ip_lookup_failure_is_tax_free():
    result = await TaxService(FakeIpLocator(should_fail=True)).calculate(100.0, client_ip="203.0.113.7")

    assert result.detected_location == "Location Detection Failed"
    assert result.tax_location == "International (Tax Free)"
    assert result.total == 100.0


@pytest.mark.asyncio
async def test_no_location_at_all_is_unknown():
    result = await TaxService(FakeIpLocator()).calculate(100.0, client_ip="203.0.113.7")
    without_ip = await TaxService(FakeIpLocator()).calculate(100.0)

    assert result.detected_location == "Unknown"
    assert without_ip.detected_location == "Unknown"


@pytest.mark.asyncio
async def test_detected_location_outside_us_and_canada():
    result = await TaxService().calculate(80.0, user_location=UserLocation(country="DE", region="BE"))

    assert result.detected_location == "Detected Location: International"
    assert result.taxes == []


@pytest.mark.asyncio
async def test_response_wire_format():
    result = await TaxService().calculate(10.0, shipping_address=Address(country="Canada", state="Alberta"))

    assert result.to_document() == {
        "success": True,
        "taxes": [{"name": "GST", "type": "gst", "rate": 0.05, "amount": 0.5}],
        "totalTaxRate": 0.05,
        "totalTaxAmount": 0.5,
        "taxLocation": "Alberta",
        "detectedLocation": "Shipping Address: Alberta",
        "subtotal": 10.0,
        "total": 10.5,
    }


# --- IpApiLocator ---

def ip_api_transport(payload=None, error=None, seen=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if error:
            raise error
        return httpx.Response(200, json=payload)

    return httpx.MockTransport(handler)


@pytest.mark.asyncio
async def test_ip_api_locator_parses_success():
    seen = []
    locator = IpApiLocator(
        base_url="http://ip-api.test/json",
        transport=ip_api_transport(
            {"status": "success", "country": "Canada", "countryCode": "CA", "region": "ON", "regionName": "Ontario"},
            seen=seen,
        ),
    )

    location = await locator.locate("203.0.113.7")

    assert location == UserLocation(country="CA", region="ON")
    assert seen[0].url.path == "/json/203.0.113.7"
    assert "countryCode" in seen[0].url.params["fields"]


@pytest.mark.asyncio
async def test_ip_api_locator_failed_lookup_is_none():
    locator = IpApiLocator(
        base_url="http://ip-api.test/json",
        transport=ip_api_transport({"status": "fail", "message": "private range"}),
    )

    assert await locator.locate("10.0.0.1") is None


@pytest.mark.asyncio
async def test_ip_api_locator_network_error_is_unavailable():
    locator = IpApiLocator(
        base_url="http://ip-api.test/json",
        transport=ip_api_transport(error=httpx.ConnectError("refused")),
    )

    with pytest.raises(UnavailableError):
        await locator.locate("203.0.113.7")


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [["CA", "ON"], "success", None])
async def test_ip_api_locator_non_object_payload_is_unavailable(payload):
    locator = IpApiLocator(base_url="http://ip-api.test/json", transport=ip_api_transport(payload))

    with pytest.raises(UnavailableError):
        await locator.locate("203.0.113.7")


@pytest.mark.asyncio
async def test_non_object_ip_payload_falls_back_to_tax_free():
    locator = IpApiLocator(base_url="http://ip-api.test/json", transport=ip_api_transport(["CA", "ON"]))

    result = await TaxService(locator).calculate(100.0, client_ip="203.0.113.7")

    assert result.detected_location == "Location Detection Failed"
    assert result.total == 100.0
