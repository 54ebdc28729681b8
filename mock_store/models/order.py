"""Order and payment models for mock store"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from enum import Enum


class OrderStatus(str, Enum):
    PENDING_PAYMENT = "pending_payment"
    PAID = "paid"
    COD_PENDING = "cod_pending"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    CARD = "card"
    COD = "cod"


class ShippingAddress(BaseModel):
    """Shipping address for order"""
    label: Optional[str] = None
    line1: str
    line2: Optional[str] = None
    city: str
    state: str
    zip: str
    country: str = "US"


class OrderLine(BaseModel):
    product_id: str = Field(alias="productId")
    qty: int = Field(ge=1)

    class Config:
        populate_by_name = True


class CreateOrderRequest(BaseModel):
    """Body of checkout-session and cod-order requests"""
    items: list[OrderLine]
    coupon_code: Optional[str] = Field(None, alias="couponCode")
    shipping_address: Optional[ShippingAddress] = Field(None, alias="shippingAddress")

    class Config:
        populate_by_name = True


class OrderItem(BaseModel):
    """Item in an order"""
    product_id: str
    title: str
    qty: int
    unit_price: float
    total_price: float


class Order(BaseModel):
    """Placed order"""
    order_id: str
    order_number: str
    owner: str = "guest"
    status: OrderStatus
    items: list[OrderItem]
    subtotal: float
    item_discount: float
    coupon_code: Optional[str] = None
    coupon_discount: float = 0.0
    shipping: float
    total: float
    currency: str = "USD"
    shipping_address: Optional[ShippingAddress] = None
    payment_method: PaymentMethod
    checkout_session_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime
