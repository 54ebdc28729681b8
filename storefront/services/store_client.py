"""
Store API Client

HTTP client for the store's cart, coupon and payment endpoints.
The store is the source of truth for stock; every cart call returns the
server's copy of the cart, which the caller mirrors locally.
"""

import json
import logging
from typing import Optional, Any

import httpx

from ..exceptions import NetworkFailure, StoreRejected
from ..models.cart import CartLineItem
from ..models.checkout import CheckoutResult, PaymentMethod, ShippingAddress
from ..models.store import CouponValidation, StoreCart
from ..money import cents_to_decimal, to_cents

logger = logging.getLogger(__name__)


class StoreClient:
    """
    Client for the store REST API.

    Raises NetworkFailure for timeouts, connectivity problems and 5xx
    responses, and StoreRejected when the store answers with a 4xx business
    message.
    """

    def __init__(
        self,
        store_base_url: str,
        api_token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize store client.

        Args:
            store_base_url: Base URL of the store API, e.g. http://localhost:8001/api
            api_token: Bearer token of the signed-in user
            timeout: Request timeout in seconds
            transport: Optional httpx transport (in-process apps in tests)
        """
        self.base_url = store_base_url.rstrip("/")
        self.api_token = api_token
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    def _generate_headers(self) -> dict[str, str]:
        """Generate headers including the bearer token if available"""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"

        return headers

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
    ) -> dict[str, Any]:
        """Make an HTTP request and return the decoded JSON body"""
        url = f"{self.base_url}{path}"
        body_str = json.dumps(body) if body is not None else None

        try:
            response = await self._http_client.request(
                method=method,
                url=url,
                headers=self._generate_headers(),
                content=body_str,
            )
        except httpx.TimeoutException as e:
            logger.error(f"Request timed out: {method} {url}")
            raise NetworkFailure(f"Request timed out: {method} {path}") from e
        except httpx.RequestError as e:
            logger.error(f"Request failed: {method} {url} - {e}")
            raise NetworkFailure(f"Could not reach the store: {e}") from e

        if response.status_code >= 500:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            raise NetworkFailure(
                f"Store error {response.status_code} on {method} {path}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise NetworkFailure(
                f"Invalid response from store on {method} {path}",
                status_code=response.status_code,
            ) from e

        if response.status_code >= 400 or payload.get("success") is False:
            message = payload.get("message") or f"Request failed with {response.status_code}"
            logger.warning(f"Store rejected {method} {path}: {message}")
            raise StoreRejected(message, status_code=response.status_code)

        return payload

    @staticmethod
    def _cart_items(payload: dict[str, Any]) -> list[CartLineItem]:
        cart = (payload.get("data") or {}).get("cart") or {}
        return StoreCart.model_validate(cart).to_line_items()

    # ==================== Cart APIs ====================

    async def get_cart(self) -> list[CartLineItem]:
        """Get the signed-in user's cart"""
        return self._cart_items(await self._request("GET", "/cart"))

    async def add_to_cart(self, product_id: str, quantity: int = 1) -> list[CartLineItem]:
        """Add a product to the cart"""
        payload = await self._request(
            "POST",
            "/cart/add",
            body={"productId": product_id, "qty": quantity, "variant": {}},
        )
        return self._cart_items(payload)

    async def update_cart_item(self, cart_item_id: str, quantity: int) -> list[CartLineItem]:
        """Set a cart item's quantity"""
        payload = await self._request(
            "PUT",
            f"/cart/items/{cart_item_id}",
            body={"qty": quantity},
        )
        return self._cart_items(payload)

    async def increase_quantity(self, cart_item_id: str, amount: int = 1) -> list[CartLineItem]:
        payload = await self._request(
            "PUT",
            f"/cart/items/{cart_item_id}/increase",
            body={"amount": amount},
        )
        return self._cart_items(payload)

    async def decrease_quantity(self, cart_item_id: str, amount: int = 1) -> list[CartLineItem]:
        payload = await self._request(
            "PUT",
            f"/cart/items/{cart_item_id}/decrease",
            body={"amount": amount},
        )
        return self._cart_items(payload)

    async def remove_from_cart(self, cart_item_id: str) -> list[CartLineItem]:
        """Remove item from cart"""
        return self._cart_items(await self._request("DELETE", f"/cart/items/{cart_item_id}"))

    async def clear_cart(self) -> None:
        await self._request("DELETE", "/cart/clear")

    # ==================== Coupon APIs ====================

    async def validate_coupon(
        self,
        code: str,
        subtotal: int,
        items: list[CartLineItem],
    ) -> CouponValidation:
        """
        Ask the store whether a coupon applies.

        A business rejection (expired, minimum not met, ...) comes back as
        valid=False with the store's message; only transport problems raise.
        """
        body = {
            "code": code,
            "subtotal": float(cents_to_decimal(subtotal)),
            "items": [
                {
                    "productId": item.product_id,
                    "qty": item.quantity,
                    "taxonomies": item.taxonomies,
                }
                for item in items
            ],
        }

        try:
            payload = await self._request("POST", "/coupons/validate", body=body)
        except StoreRejected as e:
            return CouponValidation(valid=False, discount=0, message=e.message)

        data = payload.get("data") or {}
        discount = to_cents(data.get("discount") or 0)
        return CouponValidation(
            valid=True,
            discount=discount,
            message=payload.get("message") or "Coupon applied",
        )

    # ==================== Payment APIs ====================

    async def create_order(
        self,
        items: list[CartLineItem],
        payment_method: PaymentMethod,
        shipping_address: ShippingAddress,
        coupon_code: Optional[str] = None,
    ) -> CheckoutResult:
        """
        Create a hosted checkout session (card) or a cash-on-delivery order.
        """
        path = "/payments/cod-order" if payment_method == PaymentMethod.COD else "/payments/checkout-session"
        body = {
            "items": [{"productId": item.product_id, "qty": item.quantity} for item in items],
            "shippingAddress": shipping_address.model_dump(exclude_none=True),
        }
        if coupon_code:
            body["couponCode"] = coupon_code

        payload = await self._request("POST", path, body=body)

        result = CheckoutResult(
            payment_method=payment_method,
            order_id=payload.get("orderId"),
            order_number=payload.get("orderNumber"),
            redirect_url=payload.get("url"),
            session_id=payload.get("sessionId"),
            is_free_order=bool(payload.get("isFreeOrder")),
            message=payload.get("message"),
        )

        if payment_method == PaymentMethod.CARD and not result.is_free_order and not result.redirect_url:
            raise NetworkFailure("No checkout URL received from server")

        return result
