"""Storefront error types"""

from typing import Optional


class StorefrontError(Exception):
    """Base class for cart, coupon and checkout errors"""


class InvalidQuantity(StorefrontError):
    """A caller asked for a negative line-item quantity"""

    def __init__(self, quantity: int):
        super().__init__(f"Quantity cannot be negative: {quantity}")
        self.quantity = quantity


class InvalidPrice(StorefrontError):
    """A catalog price label could not be parsed"""

    def __init__(self, label: str):
        super().__init__(f"Cannot parse price: {label!r}")
        self.label = label


class ItemNotInCart(StorefrontError):
    def __init__(self, product_id: str):
        super().__init__(f"Item not in cart: {product_id}")
        self.product_id = product_id


class SessionNotFound(StorefrontError):
    def __init__(self, session_id: str):
        super().__init__(f"Session not found: {session_id}")
        self.session_id = session_id


class CouponRejected(StorefrontError):
    """The coupon validator refused the code (expired, minimum not met, ...)"""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class CouponAlreadyApplied(StorefrontError):
    """A second coupon was submitted while one is applied"""

    def __init__(self, code: str):
        super().__init__(f"Coupon {code} is already applied; remove it first")
        self.code = code


class CheckoutBlocked(StorefrontError):
    """Checkout submission refused while the cart has unresolved issues"""

    def __init__(self, reasons: list[str]):
        super().__init__("; ".join(reasons))
        self.reasons = reasons


class NetworkFailure(StorefrontError):
    """
    A call to the store API failed (timeout, connectivity, 5xx).

    Local cart state is left as it was before the call.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class StoreRejected(StorefrontError):
    """The store API refused a request with a business message (4xx)"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
