"""Coupon models for mock store"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from enum import Enum


class CouponType(str, Enum):
    FLAT = "flat"
    PERCENTAGE = "percentage"


class Coupon(BaseModel):
    """Discount code"""
    code: str
    type: CouponType
    value: float = Field(ge=0)
    min_subtotal: float = 0.0
    starts_at: datetime
    ends_at: datetime
    usage_limit: Optional[int] = None
    used_count: int = 0
    is_active: bool = True
    # Empty lists mean the coupon applies to any cart
    product_ids: list[str] = []
    taxonomy_ids: list[str] = []

    def calculate_discount(self, subtotal: float) -> float:
        """Discount for a subtotal, never above the subtotal"""
        if subtotal < self.min_subtotal:
            return 0.0

        if self.type == CouponType.FLAT:
            discount = min(self.value, subtotal)
        else:
            discount = min(round(subtotal * self.value / 100, 2), subtotal)

        return max(0.0, discount)


class CouponItem(BaseModel):
    product_id: str = Field(alias="productId")
    qty: int = 1
    taxonomies: list[str] = []

    class Config:
        populate_by_name = True


class ValidateCouponRequest(BaseModel):
    code: Optional[str] = None
    subtotal: float = 0.0
    items: list[CouponItem] = []
