"""Coupon storage and validation for mock store"""

from datetime import datetime, timedelta
from typing import Optional

from ..models.coupon import Coupon, CouponItem, CouponType


class CouponError(Exception):
    """Coupon refused; carries the HTTP status the store answers with"""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _sample_coupons() -> dict[str, Coupon]:
    """Mock coupons"""
    now = datetime.utcnow()
    coupons = [
        Coupon(
            code="SAVE10",
            type=CouponType.FLAT,
            value=10,
            starts_at=now - timedelta(days=30),
            ends_at=now + timedelta(days=365),
        ),
        Coupon(
            code="GLOW20",
            type=CouponType.PERCENTAGE,
            value=20,
            min_subtotal=50,
            starts_at=now - timedelta(days=30),
            ends_at=now + timedelta(days=365),
        ),
        Coupon(
            code="FREEBIE",
            type=CouponType.PERCENTAGE,
            value=100,
            starts_at=now - timedelta(days=1),
            ends_at=now + timedelta(days=30),
        ),
        Coupon(
            code="SERUM15",
            type=CouponType.PERCENTAGE,
            value=15,
            starts_at=now - timedelta(days=1),
            ends_at=now + timedelta(days=30),
            taxonomy_ids=["tax-serums"],
        ),
        Coupon(
            code="SUMMER",
            type=CouponType.FLAT,
            value=15,
            starts_at=now - timedelta(days=120),
            ends_at=now - timedelta(days=30),
        ),
        Coupon(
            code="SOON",
            type=CouponType.FLAT,
            value=5,
            starts_at=now + timedelta(days=7),
            ends_at=now + timedelta(days=60),
        ),
        Coupon(
            code="PAUSED",
            type=CouponType.FLAT,
            value=5,
            starts_at=now - timedelta(days=1),
            ends_at=now + timedelta(days=60),
            is_active=False,
        ),
        Coupon(
            code="ONCE",
            type=CouponType.FLAT,
            value=5,
            starts_at=now - timedelta(days=1),
            ends_at=now + timedelta(days=60),
            usage_limit=1,
            used_count=1,
        ),
    ]
    return {coupon.code: coupon for coupon in coupons}


class CouponDatabase:
    """In-memory coupon storage"""

    def __init__(self):
        self.coupons = _sample_coupons()

    def reset(self) -> None:
        self.coupons = _sample_coupons()

    def get_coupon(self, code: str) -> Optional[Coupon]:
        return self.coupons.get(code.strip().upper())

    def validate(
        self,
        code: Optional[str],
        subtotal: float,
        items: list[CouponItem],
    ) -> tuple[Coupon, float]:
        """
        Check a coupon against a cart.

        Returns:
            Tuple of (coupon, discount)

        Raises:
            CouponError: with the message shown to the shopper
        """
        if not code or not code.strip():
            raise CouponError("Coupon code is required")

        coupon = self.get_coupon(code)
        if not coupon:
            raise CouponError("Invalid coupon code", status_code=404)

        if not coupon.is_active:
            raise CouponError("This coupon is not active")

        now = datetime.utcnow()
        if coupon.starts_at > now:
            raise CouponError("This coupon is not yet valid")
        if coupon.ends_at < now:
            raise CouponError("This coupon has expired")

        if coupon.usage_limit is not None and coupon.used_count >= coupon.usage_limit:
            raise CouponError("This coupon has reached its usage limit")

        if subtotal < coupon.min_subtotal:
            raise CouponError(f"Minimum order of ${coupon.min_subtotal:.2f} required for this coupon")

        if coupon.product_ids or coupon.taxonomy_ids:
            applicable = any(
                item.product_id in coupon.product_ids
                or any(t in coupon.taxonomy_ids for t in item.taxonomies)
                for item in items
            )
            if not applicable:
                raise CouponError("This coupon does not apply to items in your cart")

        return coupon, coupon.calculate_discount(subtotal)

    def record_use(self, code: str) -> None:
        coupon = self.get_coupon(code)
        if coupon:
            coupon.used_count += 1


# Singleton instance
coupon_db = CouponDatabase()
