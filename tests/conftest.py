# tests/conftest.py
import asyncio
import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.core.config import clear_settings_cache
from app.dependencies import get_blob_store, get_document_store, get_geocoder, get_tax_service
from app.schemas.cart import ProductSnapshot
from app.schemas.shipping import Address, PackageDescriptor
from app.services.blob_store import DocumentBlobStore, InMemoryBlobStore
from app.services.document_store import InMemoryDocumentStore
from app.services.tax_service import TaxService
from tests.mocks import FakeGeocoder


@pytest.fixture
def fake_geocoder():
    """Geocoder that never finds anything"""
    return FakeGeocoder()


@pytest.fixture
def document_store():
    return InMemoryDocumentStore()


@pytest.fixture
def blob_store():
    return InMemoryBlobStore()


@pytest.fixture
def origin():
    return Address(country="Canada", state="ON", city="Toronto", postal_code="M5V 2T6")


@pytest.fixture
def destination():
    return Address(country="United States", state="NY", city="New York", postal_code="10001")


@pytest.fixture
def package():
    return PackageDescriptor(weight=0, length=10, width=10, height=5, value=250)


@pytest.fixture
def sample_product_data():
    """Provide sample catalog data for tests"""
    return {
        "name": "Gold Hoop Earrings",
        "price": 129.99,
        "featuredImage": "https://cdn.example.com/hoops.jpg",
        "images": ["https://cdn.example.com/hoops-side.jpg"],
        "category": "earrings",
        "stockQuantity": 10,
    }


@pytest.fixture
def ring():
    return ProductSnapshot(id="ring-1", name="Silver Ring", price=49.5, category="rings")


@pytest.fixture
def necklace():
    return ProductSnapshot(
        id="necklace-1",
        name="Pearl Necklace",
        price=210.0,
        images=["https://cdn.example.com/pearls.jpg"],
        category="necklaces",
    )


@pytest.fixture
def bracelet():
    return ProductSnapshot(id="bracelet-1", name="Charm Bracelet", price=75.25, category="bracelets")


@pytest.fixture
def settings_env(monkeypatch):
    """Set environment overrides for Settings; the cache is cleared around the test"""
    def apply(**values):
        for key, value in values.items():
            monkeypatch.setenv(key, str(value))
        clear_settings_cache()

    clear_settings_cache()
    yield apply
    clear_settings_cache()


@pytest.fixture
def test_client(document_store, fake_geocoder):
    """Provide a test client backed by in-memory stores and a fake geocoder"""
    app.dependency_overrides[get_document_store] = lambda: document_store
    app.dependency_overrides[get_blob_store] = lambda: DocumentBlobStore(document_store)
    app.dependency_overrides[get_geocoder] = lambda: fake_geocoder
    app.dependency_overrides[get_tax_service] = lambda: TaxService()
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def seed_products(document_store, sample_product_data):
    """Put a couple of products in the catalog collection"""
    asyncio.run(document_store.put("products", "hoops-1", sample_product_data))
    asyncio.run(document_store.put("products", "last-one", {**sample_product_data, "name": "Last Brooch", "stockQuantity": 1}))
    return document_store
