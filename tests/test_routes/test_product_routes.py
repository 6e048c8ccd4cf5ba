# tests/test_routes/test_product_routes.py
import asyncio


def test_list_products(test_client, seed_products):
    response = test_client.get("/api/products")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["count"] == 2
    assert {product["id"] for product in body["products"]} == {"hoops-1", "last-one"}
    hoops = next(product for product in body["products"] if product["id"] == "hoops-1")
    assert hoops["featuredImage"] == "https://cdn.example.com/hoops.jpg"
    assert hoops["stockQuantity"] == 10


def test_list_products_by_category_and_flags(test_client, seed_products, sample_product_data):
    asyncio.run(seed_products.put("products", "pearl-1", {
        **sample_product_data, "name": "Pearl Studs", "category": "studs", "featured": True, "inStock": True,
    }))

    assert test_client.get("/api/products", params={"category": "studs"}).json()["count"] == 1
    featured = test_client.get("/api/products", params={"featured": "true", "inStock": "true"}).json()
    assert [product["id"] for product in featured["products"]] == ["pearl-1"]
    assert test_client.get("/api/products", params={"category": "anklets"}).json() == {
        "success": True, "products": [], "count": 0,
    }


def test_get_product(test_client, seed_products):
    response = test_client.get("/api/products/last-one")

    assert response.status_code == 200
    assert response.json()["product"]["name"] == "Last Brooch"


def test_get_unknown_product_is_404(test_client, seed_products):
    response = test_client.get("/api/products/ghost")

    assert response.status_code == 404
    assert response.json() == {"error": "Product ghost not found"}
