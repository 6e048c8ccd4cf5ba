# tests/unit/services/test_product_catalog.py
import pytest

from app.core.exceptions import NotFoundError, ValidationError
from app.services.product_service import ProductCatalog


@pytest.fixture
async def catalog(document_store):
    products = {
        "ring-1": {"name": "Silver Ring", "price": 49.5, "category": "rings", "inStock": True,
                   "createdAt": "2026-01-10T09:00:00Z"},
        "ring-2": {"name": "Gold Ring", "price": 320.0, "category": "rings", "featured": True, "inStock": False,
                   "createdAt": "2026-03-02T09:00:00Z"},
        "hoops-1": {"name": "Gold Hoops", "price": 129.99, "category": "earrings", "featured": True,
                    "inStock": True, "createdAt": "2026-02-14T09:00:00Z", "material": "14k gold"},
        "broken": {"name": "Missing Price", "category": "rings"},
    }
    for key, data in products.items():
        await document_store.put("products", key, data)
    return ProductCatalog(document_store)


def ids(products):
    return [product.id for product in products]


@pytest.mark.asyncio
async def test_list_is_newest_first_and_skips_invalid_entries(catalog):
    assert ids(await catalog.list_products()) == ["ring-2", "hoops-1", "ring-1"]


@pytest.mark.asyncio
async def test_list_filters(catalog):
    assert ids(await catalog.list_products(category="rings")) == ["ring-2", "ring-1"]
    assert ids(await catalog.list_products(featured=True)) == ["ring-2", "hoops-1"]
    assert ids(await catalog.list_products(in_stock=True)) == ["hoops-1", "ring-1"]
    assert ids(await catalog.list_products(category="rings", featured=True, in_stock=True)) == []


@pytest.mark.asyncio
async def test_false_flags_do_not_filter(catalog):
    assert len(await catalog.list_products(featured=False, in_stock=False)) == 3


@pytest.mark.asyncio
async def test_list_limit(catalog):
    assert ids(await catalog.list_products(limit=1)) == ["ring-2"]


@pytest.mark.asyncio
async def test_get_product_keeps_extra_fields(catalog):
    product = await catalog.get_product("hoops-1")

    document = product.to_document()
    assert document["id"] == "hoops-1"
    assert document["featured"] is True
    assert document["material"] == "14k gold"


@pytest.mark.asyncio
async def test_get_unknown_product_raises_not_found(catalog):
    with pytest.raises(NotFoundError):
        await catalog.get_product("ghost")
    with pytest.raises(NotFoundError):
        await catalog.get_snapshot("ghost")


@pytest.mark.asyncio
async def test_invalid_entry_raises_validation_error(catalog):
    with pytest.raises(ValidationError):
        await catalog.get_product("broken")
    with pytest.raises(ValidationError):
        await catalog.get_snapshot("broken")


@pytest.mark.asyncio
async def test_snapshot_for_cart_line(catalog):
    snapshot = await catalog.get_snapshot("ring-1")

    assert (snapshot.id, snapshot.name, snapshot.price, snapshot.category) == ("ring-1", "Silver Ring", 49.5, "rings")
