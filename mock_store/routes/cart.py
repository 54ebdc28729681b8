"""Cart API routes for mock store"""

from typing import Any, Optional
from fastapi import APIRouter, HTTPException, Depends, Header

from ..models.cart import (
    Cart,
    AddToCartRequest,
    UpdateCartItemRequest,
    QuantityChangeRequest,
)
from ..database.carts import cart_db
from ..database.products import product_db

router = APIRouter(prefix="/api/cart", tags=["Cart"])

MAX_QTY = 99


def get_owner(authorization: Optional[str] = Header(None)) -> str:
    """Identify the cart owner from the bearer token"""
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[7:].strip()
        if token:
            return token
    return "guest"


def serialize_cart(cart: Cart) -> dict[str, Any]:
    """Cart with each item's product populated, as the storefront reads it"""
    items = []
    for item in cart.items:
        product = product_db.get_product(item.product_id)
        if product:
            populated = product.model_dump(mode="json", by_alias=True)
        else:
            populated = {"_id": item.product_id, "title": item.title_snapshot}
        items.append(
            {
                "_id": item.id,
                "productId": populated,
                "titleSnapshot": item.title_snapshot,
                "priceSnapshot": item.price_snapshot,
                "qty": item.qty,
            }
        )

    return {
        "owner": cart.owner,
        "items": items,
        "couponCode": cart.coupon_code,
        "updatedAt": cart.updated_at.isoformat(),
    }


def cart_response(cart: Cart, message: Optional[str] = None) -> dict[str, Any]:
    subtotal = sum(item.price_snapshot * item.qty for item in cart.items)
    return {
        "success": True,
        "message": message,
        "data": {
            "cart": serialize_cart(cart),
            "summary": {
                "totalItems": sum(item.qty for item in cart.items),
                "subtotal": round(subtotal, 2),
            },
        },
    }


def _require_item(owner: str, item_id: str):
    item = cart_db.get_item(owner, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Item not found in cart")
    return item


@router.get("")
async def get_cart(owner: str = Depends(get_owner)):
    """Get the user's cart"""
    return cart_response(cart_db.get_or_create_cart(owner))


@router.post("/add")
async def add_to_cart(
    request: AddToCartRequest,
    owner: str = Depends(get_owner),
):
    """Add an item to the cart"""
    product = product_db.get_product(request.product_id)
    if not product or not product.is_active:
        raise HTTPException(status_code=404, detail="Product not found")

    if request.qty < 1 or request.qty > MAX_QTY:
        raise HTTPException(
            status_code=400,
            detail=f"Quantity must be between 1 and {MAX_QTY}",
        )

    # Stock is not enforced here; the storefront blocks checkout instead
    cart = cart_db.add_item(owner, product, request.qty)
    return cart_response(cart, message=f"Added {request.qty}x {product.title} to cart")


@router.put("/items/{item_id}")
async def update_cart_item(
    item_id: str,
    request: UpdateCartItemRequest,
    owner: str = Depends(get_owner),
):
    """Set item quantity; 0 removes the item"""
    if request.qty < 0 or request.qty > MAX_QTY:
        raise HTTPException(
            status_code=400,
            detail=f"Quantity must be between 0 and {MAX_QTY}",
        )

    _require_item(owner, item_id)
    cart = cart_db.set_quantity(owner, item_id, request.qty)
    return cart_response(cart, message="Cart updated")


@router.put("/items/{item_id}/increase")
async def increase_quantity(
    item_id: str,
    request: QuantityChangeRequest = QuantityChangeRequest(),
    owner: str = Depends(get_owner),
):
    item = _require_item(owner, item_id)
    new_qty = item.qty + request.amount
    if new_qty > MAX_QTY:
        raise HTTPException(
            status_code=400,
            detail=f"Quantity cannot exceed {MAX_QTY}",
        )

    cart = cart_db.set_quantity(owner, item_id, new_qty)
    return cart_response(cart, message="Quantity increased")


@router.put("/items/{item_id}/decrease")
async def decrease_quantity(
    item_id: str,
    request: QuantityChangeRequest = QuantityChangeRequest(),
    owner: str = Depends(get_owner),
):
    item = _require_item(owner, item_id)
    cart = cart_db.set_quantity(owner, item_id, max(0, item.qty - request.amount))
    return cart_response(cart, message="Quantity decreased")


@router.delete("/items/{item_id}")
async def remove_from_cart(
    item_id: str,
    owner: str = Depends(get_owner),
):
    """Remove an item from the cart"""
    _require_item(owner, item_id)
    cart = cart_db.remove_item(owner, item_id)
    return cart_response(cart, message="Item removed")


@router.delete("/clear")
async def clear_cart(owner: str = Depends(get_owner)):
    """Clear all items from cart"""
    cart = cart_db.clear_cart(owner)
    return cart_response(cart, message="Cart cleared")
