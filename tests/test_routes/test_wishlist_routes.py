# tests/test_routes/test_wishlist_routes.py
import asyncio

WISHLIST_URL = "/api/wishlist/user-42"


def test_empty_wishlist(test_client):
    assert test_client.get(WISHLIST_URL).json() == {"items": [], "count": 0}


def test_add_and_list_with_catalog_snapshot(test_client, seed_products):
    first = test_client.post(f"{WISHLIST_URL}/items", json={"productId": "hoops-1"})
    again = test_client.post(f"{WISHLIST_URL}/items", json={"productId": "hoops-1"})

    assert first.status_code == 200
    assert first.json()["added"] is True
    assert again.json()["added"] is False
    body = test_client.get(WISHLIST_URL).json()
    assert body["count"] == 1
    assert body["items"][0]["productId"] == "hoops-1"
    assert body["items"][0]["product"]["name"] == "Gold Hoop Earrings"


def test_add_unknown_product_is_404(test_client, seed_products):
    response = test_client.post(f"{WISHLIST_URL}/items", json={"productId": "ghost"})

    assert response.status_code == 404
    assert test_client.get(WISHLIST_URL).json()["count"] == 0


def test_status_toggle_and_remove(test_client, seed_products):
    status_url = f"{WISHLIST_URL}/items/last-one"

    assert test_client.get(status_url).json() == {"productId": "last-one", "inWishlist": False}
    assert test_client.post(f"{status_url}/toggle").json()["inWishlist"] is True
    assert test_client.get(status_url).json()["inWishlist"] is True
    assert test_client.post(f"{status_url}/toggle").json()["inWishlist"] is False

    test_client.post(f"{WISHLIST_URL}/items", json={"productId": "last-one"})
    removed = test_client.delete(status_url)
    assert removed.json()["count"] == 0


def test_toggle_unknown_product_is_404(test_client, seed_products):
    assert test_client.post(f"{WISHLIST_URL}/items/ghost/toggle").status_code == 404


def test_product_removed_from_catalog_stays_listed(test_client, seed_products):
    test_client.post(f"{WISHLIST_URL}/items", json={"productId": "hoops-1"})
    asyncio.run(seed_products.delete("products", "hoops-1"))

    item = test_client.get(WISHLIST_URL).json()["items"][0]

    assert item["productId"] == "hoops-1"
    assert item["product"] is None


def test_wishlists_are_per_user(test_client, seed_products):
    test_client.post(f"{WISHLIST_URL}/items", json={"productId": "hoops-1"})

    assert test_client.get("/api/wishlist/someone-else").json()["count"] == 0
