# Mock Store Models

from .product import (
    Product,
    ProductDiscount,
    ProductShipping,
    CashOnDelivery,
    DiscountType,
    ProductSearchResponse,
)
from .cart import Cart, CartItem, AddToCartRequest, UpdateCartItemRequest, QuantityChangeRequest
from .coupon import Coupon, CouponType, CouponItem, ValidateCouponRequest
from .order import (
    Order,
    OrderItem,
    OrderLine,
    OrderStatus,
    CreateOrderRequest,
    ShippingAddress,
    PaymentMethod,
)

__all__ = [
    "Product",
    "ProductDiscount",
    "ProductShipping",
    "CashOnDelivery",
    "DiscountType",
    "ProductSearchResponse",
    "Cart",
    "CartItem",
    "AddToCartRequest",
    "UpdateCartItemRequest",
    "QuantityChangeRequest",
    "Coupon",
    "CouponType",
    "CouponItem",
    "ValidateCouponRequest",
    "Order",
    "OrderItem",
    "OrderLine",
    "OrderStatus",
    "CreateOrderRequest",
    "ShippingAddress",
    "PaymentMethod",
]
