"""
Checkout Service

Runs a checkout session against the store API:
1. Mirrors cart mutations to the store and re-syncs from its answer
2. Drives the coupon lifecycle through the store's validator
3. Refuses checkout while the cart has issues, then places the order
"""

import logging
from typing import Awaitable, Callable, Optional

from ..core.session import CheckoutSession
from ..coupons import CouponApplication
from ..exceptions import CheckoutBlocked, CouponRejected, InvalidQuantity, NetworkFailure
from ..models.cart import CartLineItem
from ..models.checkout import CheckoutResult
from ..pricing import compute_subtotal
from .store_client import StoreClient

logger = logging.getLogger(__name__)

CartCall = Callable[[], Awaitable[list[CartLineItem]]]


class CheckoutService:
    """
    Cart, coupon and checkout operations for one store.

    Mutating calls return False when they were dropped: a request for the
    same key was still in flight, or the session was closed before the
    store answered.
    """

    def __init__(self, store_client: StoreClient):
        self.store = store_client

    async def _mirror(self, session: CheckoutSession, key: str, call: CartCall) -> bool:
        """Run a cart call for `key` and adopt the store's copy of the cart"""
        with session.hold(key) as acquired:
            if not acquired:
                logger.debug(f"Ignoring duplicate request for {key}")
                return False

            items = await call()

            if not session.accepts_responses():
                logger.debug(f"Discarding cart response for closed session {session.session_id}")
                return False

            session.cart.replace(items)
            session.touch()
            return True

    # ==================== Cart ====================

    async def sync(self, session: CheckoutSession) -> bool:
        """Reload the cart from the store"""
        return await self._mirror(session, "cart", self.store.get_cart)

    async def add_to_cart(
        self,
        session: CheckoutSession,
        product_id: str,
        quantity: int = 1,
    ) -> bool:
        if quantity < 1:
            raise InvalidQuantity(quantity)

        existing = session.cart.get(product_id)
        return await self._mirror(
            session,
            existing.busy_key if existing else product_id,
            lambda: self.store.add_to_cart(product_id, quantity),
        )

    async def set_quantity(
        self,
        session: CheckoutSession,
        product_id: str,
        quantity: int,
    ) -> bool:
        """Set an item's quantity; 0 removes it"""
        if quantity < 0:
            raise InvalidQuantity(quantity)

        item = session.cart.require(product_id)
        if quantity == 0:
            return await self.remove(session, product_id)

        if not item.cart_item_id:
            session.cart.set_quantity(product_id, quantity)
            session.touch()
            return True

        return await self._mirror(
            session,
            item.busy_key,
            lambda: self.store.update_cart_item(item.cart_item_id, quantity),
        )

    async def increase(self, session: CheckoutSession, product_id: str, amount: int = 1) -> bool:
        item = session.cart.require(product_id)
        if not item.cart_item_id:
            session.cart.increase(product_id, amount)
            session.touch()
            return True

        return await self._mirror(
            session,
            item.busy_key,
            lambda: self.store.increase_quantity(item.cart_item_id, amount),
        )

    async def decrease(self, session: CheckoutSession, product_id: str, amount: int = 1) -> bool:
        item = session.cart.require(product_id)
        if not item.cart_item_id:
            session.cart.decrease(product_id, amount)
            session.touch()
            return True

        return await self._mirror(
            session,
            item.busy_key,
            lambda: self.store.decrease_quantity(item.cart_item_id, amount),
        )

    async def remove(self, session: CheckoutSession, product_id: str) -> bool:
        item = session.cart.require(product_id)
        if not item.cart_item_id:
            session.cart.remove(product_id)
            session.touch()
            return True

        return await self._mirror(
            session,
            item.busy_key,
            lambda: self.store.remove_from_cart(item.cart_item_id),
        )

    async def clear(self, session: CheckoutSession) -> bool:
        async def clear_and_return() -> list[CartLineItem]:
            await self.store.clear_cart()
            return []

        return await self._mirror(session, "cart", clear_and_return)

    # ==================== Coupon ====================

    async def apply_coupon(self, session: CheckoutSession, code: str) -> CouponApplication:
        """
        Validate a coupon with the store and apply its discount.

        Raises:
            CouponRejected: The store refused the code; the coupon is left
                unapplied with its message and a new code may be submitted
            CouponAlreadyApplied: A coupon is already applied
            NetworkFailure: The validator could not be reached
        """
        coupon = session.coupon

        if coupon.is_pending:
            logger.debug("Coupon validation already in flight, ignoring submission")
            return coupon

        if not session.cart and not coupon.is_applied:
            raise CouponRejected("Your cart is empty", code=code)

        ticket = coupon.begin(code)
        if ticket is None:
            return coupon

        items = list(session.cart)
        try:
            result = await self.store.validate_coupon(coupon.code, compute_subtotal(items), items)
        except NetworkFailure as e:
            coupon.fail(ticket, "Failed to apply coupon. Please try again.")
            logger.error(f"Coupon validation failed: {e}")
            raise

        if not session.accepts_responses() or not coupon.resolve(
            ticket, result.valid, result.discount, result.message
        ):
            logger.debug("Discarding stale coupon validation")
            return coupon

        session.touch()
        if not result.valid:
            logger.warning(f"Coupon {coupon.code} rejected: {result.message}")
            raise CouponRejected(result.message, code=coupon.code)

        logger.info(f"Coupon {coupon.code} applied: {coupon.discount} cents off")
        return coupon

    def remove_coupon(self, session: CheckoutSession) -> None:
        session.coupon.remove()
        session.touch()

    # ==================== Checkout ====================

    async def submit(self, session: CheckoutSession) -> CheckoutResult:
        """
        Place the order.

        Raises:
            CheckoutBlocked: The cart is empty, no address is selected, an
                item exceeds stock, COD is not available, or a payment is
                already being processed
        """
        blockers = session.checkout_blockers()
        if blockers:
            logger.warning(f"Checkout blocked for {session.session_id}: {blockers}")
            raise CheckoutBlocked(blockers)

        session.is_processing_payment = True
        coupon_code: Optional[str] = session.coupon.code if session.coupon.is_applied else None

        try:
            result = await self.store.create_order(
                items=list(session.cart),
                payment_method=session.payment_method,
                shipping_address=session.shipping_address,
                coupon_code=coupon_code,
            )

            if not session.accepts_responses():
                logger.debug(f"Order placed for closed session {session.session_id}")
                return result

            summary = session.summary()
            logger.info(
                f"Checkout {result.order_id or result.session_id} created: "
                f"{summary.grand_total} cents - {session.payment_method.value}"
            )

            # COD and free orders are final and the store empties the cart when
            # it records them. Hosted card payments complete on the provider's
            # page and the cart stays until the payment is confirmed.
            if result.redirect_url is None:
                session.cart.clear()
                session.reset_checkout()
            return result
        finally:
            session.is_processing_payment = False
