# Storefront Models

from .cart import CartLineItem, ShippingPolicy, ItemDiscount, DiscountType
from .checkout import PaymentMethod, ShippingAddress, CheckoutResult
from .store import (
    StoreProduct,
    StoreCartItem,
    StoreCart,
    CouponValidation,
)

__all__ = [
    "CartLineItem",
    "ShippingPolicy",
    "ItemDiscount",
    "DiscountType",
    "PaymentMethod",
    "ShippingAddress",
    "CheckoutResult",
    "StoreProduct",
    "StoreCartItem",
    "StoreCart",
    "CouponValidation",
]
