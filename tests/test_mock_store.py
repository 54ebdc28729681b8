import pytest
from fastapi.testclient import TestClient

from mock_store.database import coupon_db, product_db
from mock_store.main import app

AUTH = {"Authorization": "Bearer shopper-1"}
ADDRESS = {"line1": "12 Orchard Lane", "city": "Portland", "state": "OR", "zip": "97205"}


@pytest.fixture
def client():
    return TestClient(app)


def test_product_search_hides_inactive(client):
    body = client.get("/api/products").json()
    ids = [product["_id"] for product in body["products"]]

    assert "prod-001" in ids
    assert "prod-006" not in ids
    assert body["total"] == len(ids)

    body = client.get("/api/products", params={"query": "serum"}).json()
    assert [p["_id"] for p in body["products"]] == ["prod-001"]


def test_get_product(client):
    body = client.get("/api/products/prod-002").json()

    assert body["title"] == "Hydrating Rose Toner"
    assert body["shipping"]["freeShippingMinQuantity"] == 3
    assert body["cashOnDelivery"]["enabled"]

    response = client.get("/api/products/missing")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Product not found"}


def test_invalid_body_uses_error_envelope(client):
    response = client.post("/api/cart/add", json={"qty": 1}, headers=AUTH)

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_cart_summary(client):
    client.post("/api/cart/add", json={"productId": "prod-001", "qty": 2}, headers=AUTH)
    body = client.get("/api/cart", headers=AUTH).json()

    assert body["data"]["summary"] == {"totalItems": 2, "subtotal": 100.0}
    assert body["data"]["cart"]["items"][0]["productId"]["_id"] == "prod-001"


def test_hosted_checkout_completion_takes_stock_and_clears_cart(client):
    client.post("/api/cart/add", json={"productId": "prod-005", "qty": 2}, headers=AUTH)
    body = client.post(
        "/api/payments/checkout-session",
        json={"items": [{"productId": "prod-005", "qty": 2}], "shippingAddress": ADDRESS},
        headers=AUTH,
    ).json()
    session_id = body["sessionId"]

    # Cart and stock are untouched until the provider confirms
    assert client.get("/api/cart", headers=AUTH).json()["data"]["cart"]["items"]
    assert product_db.get_product("prod-005").stock == 15

    body = client.post(f"/api/payments/sessions/{session_id}/complete").json()
    order = client.get(f"/api/payments/orders/{body['orderId']}").json()

    assert order["status"] == "paid"
    assert order["subtotal"] == 370.0
    assert order["shipping"] == 0.0
    assert order["total"] == 370.0
    assert product_db.get_product("prod-005").stock == 13
    assert client.get("/api/cart", headers=AUTH).json()["data"]["cart"]["items"] == []


def test_coupon_use_is_counted(client):
    lines = {"items": [{"productId": "prod-002", "qty": 1}], "couponCode": "save10"}
    body = client.post("/api/payments/cod-order", json=lines).json()

    assert body["data"]["coupon_code"] == "SAVE10"
    assert body["data"]["coupon_discount"] == 10.0
    # 24.00 - 10.00 + 5.00 shipping
    assert body["data"]["total"] == 19.0
    assert coupon_db.get_coupon("SAVE10").used_count == 1


def test_unknown_checkout_session(client):
    response = client.post("/api/payments/sessions/cs_test_missing/complete")

    assert response.status_code == 404
    assert response.json()["message"] == "Checkout session not found"
