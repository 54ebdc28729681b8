"""Checkout models"""

from pydantic import BaseModel
from typing import Optional
from enum import Enum


class PaymentMethod(str, Enum):
    CARD = "card"  # Hosted checkout page of the payment provider
    COD = "cod"  # Cash on delivery


class ShippingAddress(BaseModel):
    """Delivery address sent with the order"""
    label: Optional[str] = None
    line1: str
    line2: Optional[str] = None
    city: str
    state: str
    zip: str
    country: str = "US"


class CheckoutResult(BaseModel):
    """Outcome of a successful checkout submission"""
    payment_method: PaymentMethod
    order_id: Optional[str] = None
    order_number: Optional[str] = None
    redirect_url: Optional[str] = None  # Hosted payment page, card payments only
    session_id: Optional[str] = None
    is_free_order: bool = False
    message: Optional[str] = None
