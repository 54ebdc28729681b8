# Database modules

from .products import product_db, ProductDatabase
from .carts import cart_db, CartDatabase
from .coupons import coupon_db, CouponDatabase, CouponError
from .orders import order_db, OrderDatabase


def reset_all() -> None:
    """Restore the seeded catalog and coupons and drop carts and orders"""
    product_db.reset()
    cart_db.reset()
    coupon_db.reset()
    order_db.reset()


__all__ = [
    "product_db",
    "ProductDatabase",
    "cart_db",
    "CartDatabase",
    "coupon_db",
    "CouponDatabase",
    "CouponError",
    "order_db",
    "OrderDatabase",
    "reset_all",
]
