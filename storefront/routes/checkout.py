"""Checkout API routes"""

from pydantic import BaseModel
from fastapi import APIRouter, Depends

from ..core.session import CheckoutSession
from ..models.checkout import CheckoutResult, PaymentMethod, ShippingAddress
from ..services.checkout import CheckoutService
from .sessions import (
    SessionView,
    get_checkout_service,
    get_checkout_session,
    session_view,
    storefront_errors,
)

router = APIRouter(prefix="/api/sessions/{session_id}", tags=["Checkout"])


class ApplyCouponRequest(BaseModel):
    code: str


class PaymentMethodRequest(BaseModel):
    method: PaymentMethod


class CheckoutResponse(BaseModel):
    """Response from checkout"""
    success: bool
    result: CheckoutResult


@router.post("/coupon", response_model=SessionView)
async def apply_coupon(
    request: ApplyCouponRequest,
    session: CheckoutSession = Depends(get_checkout_session),
    service: CheckoutService = Depends(get_checkout_service),
):
    """
    Apply a coupon code.

    A submission made while another validation is in flight is ignored.
    """
    with storefront_errors():
        await service.apply_coupon(session, request.code)
    return session_view(session)


@router.delete("/coupon", response_model=SessionView)
async def remove_coupon(
    session: CheckoutSession = Depends(get_checkout_session),
    service: CheckoutService = Depends(get_checkout_service),
):
    """Remove the applied coupon"""
    service.remove_coupon(session)
    return session_view(session)


@router.put("/address", response_model=SessionView)
async def set_shipping_address(
    address: ShippingAddress,
    session: CheckoutSession = Depends(get_checkout_session),
):
    """Select the delivery address"""
    session.shipping_address = address
    session.touch()
    return session_view(session)


@router.put("/payment-method", response_model=SessionView)
async def set_payment_method(
    request: PaymentMethodRequest,
    session: CheckoutSession = Depends(get_checkout_session),
):
    """Choose card (hosted checkout) or cash on delivery"""
    session.payment_method = request.method
    session.touch()
    return session_view(session)


@router.post("/checkout", response_model=CheckoutResponse)
async def checkout(
    session: CheckoutSession = Depends(get_checkout_session),
    service: CheckoutService = Depends(get_checkout_service),
):
    """
    Place the order.

    Refused with 409 while the cart is empty, no address is selected, an
    item exceeds stock, or COD is selected for items that do not allow it.
    """
    with storefront_errors():
        result = await service.submit(session)

    return CheckoutResponse(success=True, result=result)
