"""Cart models for mock store"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class CartItem(BaseModel):
    """Item in a shopping cart, with the price and title captured when added"""
    id: str
    product_id: str
    title_snapshot: str
    price_snapshot: float
    qty: int = Field(ge=1, le=99)


class Cart(BaseModel):
    """Shopping cart of one user"""
    owner: str
    items: list[CartItem] = []
    coupon_code: Optional[str] = None
    coupon_discount: float = 0.0
    created_at: datetime
    updated_at: datetime


class AddToCartRequest(BaseModel):
    """Request to add item to cart"""
    product_id: str = Field(alias="productId")
    qty: int = 1
    variant: dict = {}

    class Config:
        populate_by_name = True


class UpdateCartItemRequest(BaseModel):
    """Request to set an item's quantity; 0 removes it"""
    qty: int


class QuantityChangeRequest(BaseModel):
    amount: int = Field(default=1, gt=0)
