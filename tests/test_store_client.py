import httpx
import pytest

from mock_store.main import app as store_app
from storefront.exceptions import NetworkFailure, StoreRejected
from storefront.models.checkout import PaymentMethod
from storefront.services.store_client import StoreClient

pytestmark = pytest.mark.anyio

STORE_URL = "http://store.test/api"


def client_with(handler) -> StoreClient:
    return StoreClient(store_base_url=STORE_URL, transport=httpx.MockTransport(handler))


async def test_empty_cart(store_client):
    assert await store_client.get_cart() == []


async def test_add_to_cart_returns_populated_items(store_client):
    items = await store_client.add_to_cart("prod-001", 2)

    assert len(items) == 1
    item = items[0]
    assert item.product_id == "prod-001"
    assert item.cart_item_id
    assert item.name == "Radiance Vitamin C Serum"
    assert item.unit_price == 5000
    assert item.quantity == 2
    assert item.per_unit_discount == 500
    assert item.available_stock == 40
    assert item.cash_on_delivery
    assert item.taxonomies == ["tax-serums"]
    assert item.shipping_policy.flat_charge == 1000
    assert item.shipping_policy.free_shipping_subtotal_threshold == 10000


async def test_adding_again_merges_on_the_store(store_client):
    await store_client.add_to_cart("prod-002", 1)
    items = await store_client.add_to_cart("prod-002", 2)

    assert [(i.product_id, i.quantity) for i in items] == [("prod-002", 3)]


async def test_item_quantity_calls(store_client):
    [item] = await store_client.add_to_cart("prod-004", 1)

    [item] = await store_client.increase_quantity(item.cart_item_id, 2)
    assert item.quantity == 3

    [item] = await store_client.decrease_quantity(item.cart_item_id)
    assert item.quantity == 2

    [item] = await store_client.update_cart_item(item.cart_item_id, 7)
    assert item.quantity == 7

    assert await store_client.update_cart_item(item.cart_item_id, 0) == []


async def test_remove_and_clear(store_client):
    await store_client.add_to_cart("prod-001", 1)
    items = await store_client.add_to_cart("prod-002", 1)

    remaining = await store_client.remove_from_cart(items[0].cart_item_id)
    assert [i.product_id for i in remaining] == ["prod-002"]

    await store_client.clear_cart()
    assert await store_client.get_cart() == []


async def test_carts_are_per_shopper(store_client):
    await store_client.add_to_cart("prod-001", 1)
    other = StoreClient(
        store_base_url=STORE_URL,
        api_token="shopper-2",
        transport=httpx.ASGITransport(app=store_app),
    )

    assert await other.get_cart() == []


async def test_store_rejections(store_client):
    with pytest.raises(StoreRejected) as exc_info:
        await store_client.add_to_cart("no-such-product", 1)
    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Product not found"

    with pytest.raises(StoreRejected) as exc_info:
        await store_client.add_to_cart("prod-001", 100)
    assert exc_info.value.status_code == 400

    with pytest.raises(StoreRejected):
        await store_client.remove_from_cart("missing-item")


async def test_validate_coupon_flat(store_client):
    items = await store_client.add_to_cart("prod-001", 2)
    result = await store_client.validate_coupon("SAVE10", 10000, items)

    assert result.valid
    assert result.discount == 1000


async def test_validate_coupon_percentage(store_client):
    items = await store_client.add_to_cart("prod-003", 1)
    result = await store_client.validate_coupon("GLOW20", 12345, items)

    assert result.valid
    assert result.discount == 2469


@pytest.mark.parametrize(
    "code, subtotal, message",
    [
        ("BOGUS", 10000, "Invalid coupon code"),
        ("SUMMER", 10000, "This coupon has expired"),
        ("SOON", 10000, "This coupon is not yet valid"),
        ("PAUSED", 10000, "This coupon is not active"),
        ("ONCE", 10000, "This coupon has reached its usage limit"),
        ("GLOW20", 4000, "Minimum order of $50.00 required for this coupon"),
        ("SERUM15", 2400, "This coupon does not apply to items in your cart"),
    ],
)
async def test_validate_coupon_rejections(store_client, code, subtotal, message):
    items = await store_client.add_to_cart("prod-002", 1)
    result = await store_client.validate_coupon(code, subtotal, items)

    assert not result.valid
    assert result.discount == 0
    assert result.message == message


async def test_card_order_returns_hosted_url(store_client, address):
    items = await store_client.add_to_cart("prod-001", 2)
    result = await store_client.create_order(items, PaymentMethod.CARD, address, coupon_code="SAVE10")

    assert result.redirect_url.startswith("https://pay.example.com/checkout/")
    assert result.session_id
    assert not result.is_free_order


async def test_fully_discounted_order_is_free(store_client, address):
    items = await store_client.add_to_cart("prod-001", 2)
    result = await store_client.create_order(items, PaymentMethod.CARD, address, coupon_code="FREEBIE")

    assert result.is_free_order
    assert result.redirect_url is None
    assert result.order_number.startswith("ORD-")


async def test_cod_order(store_client, address):
    items = await store_client.add_to_cart("prod-002", 2)
    result = await store_client.create_order(items, PaymentMethod.COD, address)

    assert result.order_id
    assert result.order_number
    assert result.redirect_url is None
    assert await store_client.get_cart() == []


async def test_cod_refused_for_products_without_it(store_client, address):
    items = await store_client.add_to_cart("prod-003", 1)

    with pytest.raises(StoreRejected) as exc_info:
        await store_client.create_order(items, PaymentMethod.COD, address)

    assert "Gold Peptide Night Cream" in exc_info.value.message


async def test_server_error_is_network_failure():
    client = client_with(lambda request: httpx.Response(503, text="unavailable"))

    with pytest.raises(NetworkFailure) as exc_info:
        await client.get_cart()

    assert exc_info.value.status_code == 503


async def test_connection_error_is_network_failure():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkFailure):
        await client_with(refuse).add_to_cart("prod-001")


async def test_timeout_is_network_failure():
    def slow(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(NetworkFailure):
        await client_with(slow).get_cart()


async def test_non_json_answer_is_network_failure():
    client = client_with(lambda request: httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(NetworkFailure):
        await client.get_cart()


async def test_coupon_validator_outage_is_not_a_rejection():
    client = client_with(lambda request: httpx.Response(500, json={"success": False}))

    with pytest.raises(NetworkFailure):
        await client.validate_coupon("SAVE10", 10000, [])


async def test_bearer_token_is_sent():
    seen = {}

    def capture(request):
        seen["authorization"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"success": True, "data": {"cart": {"items": []}}})

    client = StoreClient(STORE_URL, api_token="abc123", transport=httpx.MockTransport(capture))
    await client.get_cart()

    assert seen["authorization"] == "Bearer abc123"
