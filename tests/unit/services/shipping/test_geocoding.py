# tests/unit/services/shipping/test_geocoding.py
import httpx
import pytest

from app.core.exceptions import UnavailableError
from app.schemas.shipping import GeoCoordinate
from app.services.shipping.estimator import RateEstimator
from app.services.shipping.geocoding import NominatimGeocoder

SEARCH_URL = "https://geocoder.test/search"


def make_geocoder(handler):
    return NominatimGeocoder(
        base_url=SEARCH_URL,
        user_agent="StoreTests/1.0",
        timeout=1.0,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_resolve_returns_first_match():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        seen["user_agent"] = request.headers.get("user-agent")
        return httpx.Response(200, json=[
            {"lat": "43.6532", "lon": "-79.3832", "display_name": "Toronto"},
            {"lat": "0", "lon": "0"},
        ])

    result = await make_geocoder(handler).resolve("Toronto, ON, Canada")

    assert result == GeoCoordinate(latitude=43.6532, longitude=-79.3832)
    assert seen["params"] == {"format": "json", "q": "Toronto, ON, Canada", "limit": "1"}
    assert seen["user_agent"] == "StoreTests/1.0"


@pytest.mark.asyncio
async def test_resolve_returns_none_when_nothing_matches():
    geocoder = make_geocoder(lambda request: httpx.Response(200, json=[]))

    assert await geocoder.resolve("Nowhere, Atlantis") is None


@pytest.mark.asyncio
async def test_blank_address_is_not_looked_up():
    def handler(request):
        raise AssertionError("no request expected")

    assert await make_geocoder(handler).resolve("   ") is None


@pytest.mark.asyncio
async def test_http_error_status_raises_unavailable():
    geocoder = make_geocoder(lambda request: httpx.Response(503, text="busy"))

    with pytest.raises(UnavailableError):
        await geocoder.resolve("Toronto, ON, Canada")


@pytest.mark.asyncio
async def test_network_error_raises_unavailable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UnavailableError):
        await make_geocoder(handler).resolve("Toronto, ON, Canada")


@pytest.mark.asyncio
async def test_unexpected_payload_raises_unavailable():
    geocoder = make_geocoder(lambda request: httpx.Response(200, json=[{"name": "no coordinates"}]))

    with pytest.raises(UnavailableError):
        await geocoder.resolve("Toronto, ON, Canada")


@pytest.mark.asyncio
@pytest.mark.parametrize("base_url", ["http://[::1/search", "nominatim.local/search"])
async def test_misconfigured_url_raises_unavailable(base_url):
    geocoder = NominatimGeocoder(base_url=base_url, user_agent="test-agent", timeout=1.0)

    with pytest.raises(UnavailableError):
        await geocoder.resolve("Toronto, ON, Canada")


@pytest.mark.asyncio
async def test_misconfigured_url_still_quotes_default_distance(origin, destination, package):
    estimator = RateEstimator(NominatimGeocoder(base_url="http://[::1/search", user_agent="test-agent"))

    offers = await estimator.estimate(origin, destination, package)

    assert [(o.service_name, o.rate) for o in offers] == [("Standard", 15.0), ("Express", 22.5)]
