"""Coupon API routes for mock store"""

import logging
from fastapi import APIRouter, HTTPException

from ..models.coupon import ValidateCouponRequest
from ..database.coupons import coupon_db, CouponError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/coupons", tags=["Coupons"])


@router.post("/validate")
async def validate_coupon(request: ValidateCouponRequest):
    """
    Check a coupon against the shopper's cart.

    Rejections answer 400 (404 for an unknown code) with the message to
    show; the discount on success is in store currency.
    """
    try:
        coupon, discount = coupon_db.validate(
            code=request.code,
            subtotal=request.subtotal,
            items=request.items,
        )
    except CouponError as e:
        logger.info(f"Coupon {request.code!r} refused: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return {
        "success": True,
        "message": "Coupon applied",
        "data": {
            "code": coupon.code,
            "type": coupon.type.value,
            "value": coupon.value,
            "discount": discount,
        },
    }
