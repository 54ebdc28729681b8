"""Product models for mock store"""

from pydantic import BaseModel, Field
from typing import Optional
from enum import Enum


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class ProductDiscount(BaseModel):
    value: float = Field(ge=0, default=0)
    type: DiscountType = DiscountType.PERCENTAGE


class ProductShipping(BaseModel):
    """Flat charge, waived above a cart subtotal or item count"""
    charges: float = Field(ge=0, default=0)
    free_shipping_threshold: float = Field(0, ge=0, alias="freeShippingThreshold")
    free_shipping_min_quantity: int = Field(0, ge=0, alias="freeShippingMinQuantity")

    class Config:
        populate_by_name = True


class CashOnDelivery(BaseModel):
    enabled: bool = False


class Product(BaseModel):
    """Product in the catalog"""
    id: str = Field(alias="_id")
    title: str
    slug: str = ""
    price: float = Field(ge=0)
    stock: int = Field(ge=0, default=100)
    is_active: bool = Field(True, alias="isActive")
    discount: Optional[ProductDiscount] = None
    shipping: Optional[ProductShipping] = None
    cash_on_delivery: CashOnDelivery = Field(default_factory=CashOnDelivery, alias="cashOnDelivery")
    taxonomies: list[str] = []

    class Config:
        populate_by_name = True
        from_attributes = True


class ProductSearchResponse(BaseModel):
    """Response from product search"""
    products: list[Product]
    total: int
    limit: int
    offset: int
