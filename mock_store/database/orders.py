"""Order storage for mock store"""

import uuid
from datetime import datetime
from typing import Optional

from ..models.order import Order, OrderItem, OrderStatus, PaymentMethod, ShippingAddress


class OrderDatabase:
    """In-memory order storage"""

    def __init__(self):
        self.orders: dict[str, Order] = {}

    def reset(self) -> None:
        self.orders = {}

    def create_order(
        self,
        items: list[OrderItem],
        subtotal: float,
        item_discount: float,
        coupon_discount: float,
        shipping: float,
        total: float,
        payment_method: PaymentMethod,
        status: OrderStatus,
        shipping_address: Optional[ShippingAddress] = None,
        owner: str = "guest",
        coupon_code: Optional[str] = None,
        checkout_session_id: Optional[str] = None,
    ) -> Order:
        """Create an order from priced items"""
        now = datetime.utcnow()

        order = Order(
            order_id=uuid.uuid4().hex[:24],
            order_number=f"ORD-{now:%Y%m%d}-{uuid.uuid4().hex[:6].upper()}",
            owner=owner,
            status=status,
            items=items,
            subtotal=subtotal,
            item_discount=item_discount,
            coupon_code=coupon_code,
            coupon_discount=coupon_discount,
            shipping=shipping,
            total=total,
            shipping_address=shipping_address,
            payment_method=payment_method,
            checkout_session_id=checkout_session_id,
            created_at=now,
            updated_at=now,
        )

        self.orders[order.order_id] = order
        return order

    def get_order(self, order_id: str) -> Optional[Order]:
        """Get an order by ID"""
        return self.orders.get(order_id)

    def update_status(self, order_id: str, status: OrderStatus) -> Optional[Order]:
        """Update order status"""
        order = self.get_order(order_id)
        if not order:
            return None

        order.status = status
        order.updated_at = datetime.utcnow()
        return order


# Singleton instance
order_db = OrderDatabase()
