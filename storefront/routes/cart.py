"""Cart API routes"""

from typing import Optional
from pydantic import BaseModel, Field
from fastapi import APIRouter, Depends

from ..core.session import CheckoutSession
from ..services.checkout import CheckoutService
from .sessions import (
    SessionView,
    get_checkout_service,
    get_checkout_session,
    session_view,
    storefront_errors,
)

router = APIRouter(prefix="/api/sessions/{session_id}/items", tags=["Cart"])


class AddToCartRequest(BaseModel):
    """Request to add item to cart"""
    product_id: str
    quantity: int = Field(default=1, gt=0)


class UpdateCartItemRequest(BaseModel):
    """
    Request to change an item's quantity.

    Either an absolute quantity (0 removes the item) or a relative change.
    Negative quantities are rejected by the cart guard, not by the schema.
    """
    quantity: Optional[int] = None
    change: Optional[int] = None


@router.post("", response_model=SessionView)
async def add_to_cart(
    request: AddToCartRequest,
    session: CheckoutSession = Depends(get_checkout_session),
    service: CheckoutService = Depends(get_checkout_service),
):
    """Add an item to the cart"""
    with storefront_errors():
        await service.add_to_cart(session, request.product_id, request.quantity)
    return session_view(session)


@router.put("/{product_id}", response_model=SessionView)
async def update_cart_item(
    product_id: str,
    request: UpdateCartItemRequest,
    session: CheckoutSession = Depends(get_checkout_session),
    service: CheckoutService = Depends(get_checkout_service),
):
    """Update item quantity in cart"""
    with storefront_errors():
        if request.quantity is not None:
            await service.set_quantity(session, product_id, request.quantity)
        elif request.change and request.change > 0:
            await service.increase(session, product_id, request.change)
        elif request.change and request.change < 0:
            await service.decrease(session, product_id, -request.change)
    return session_view(session)


@router.delete("/{product_id}", response_model=SessionView)
async def remove_from_cart(
    product_id: str,
    session: CheckoutSession = Depends(get_checkout_session),
    service: CheckoutService = Depends(get_checkout_service),
):
    """Remove an item from the cart"""
    with storefront_errors():
        await service.remove(session, product_id)
    return session_view(session)


@router.delete("", response_model=SessionView)
async def clear_cart(
    session: CheckoutSession = Depends(get_checkout_session),
    service: CheckoutService = Depends(get_checkout_service),
):
    """Clear all items from cart"""
    with storefront_errors():
        await service.clear(session)
    return session_view(session)
