"""Cart storage for mock store"""

import uuid
from datetime import datetime
from typing import Optional

from ..models.cart import Cart, CartItem
from ..models.product import Product


class CartDatabase:
    """In-memory carts, one per user"""

    def __init__(self):
        self.carts: dict[str, Cart] = {}

    def reset(self) -> None:
        self.carts = {}

    def get_or_create_cart(self, owner: str) -> Cart:
        """Get the user's cart, creating an empty one"""
        cart = self.carts.get(owner)
        if cart is None:
            now = datetime.utcnow()
            cart = Cart(owner=owner, items=[], created_at=now, updated_at=now)
            self.carts[owner] = cart
        return cart

    def get_item(self, owner: str, item_id: str) -> Optional[CartItem]:
        cart = self.get_or_create_cart(owner)
        return next((item for item in cart.items if item.id == item_id), None)

    def add_item(self, owner: str, product: Product, qty: int = 1) -> Cart:
        """Add an item to the cart"""
        cart = self.get_or_create_cart(owner)

        # Check if product already in cart
        existing_item = next(
            (item for item in cart.items if item.product_id == product.id),
            None,
        )

        if existing_item:
            existing_item.qty = min(99, existing_item.qty + qty)
        else:
            cart.items.append(
                CartItem(
                    id=uuid.uuid4().hex[:24],
                    product_id=product.id,
                    title_snapshot=product.title,
                    price_snapshot=product.price,
                    qty=qty,
                )
            )

        cart.updated_at = datetime.utcnow()
        return cart

    def set_quantity(self, owner: str, item_id: str, qty: int) -> Optional[Cart]:
        """Set an item's quantity; 0 removes it"""
        cart = self.get_or_create_cart(owner)
        item = self.get_item(owner, item_id)
        if not item:
            return None

        if qty <= 0:
            cart.items = [i for i in cart.items if i.id != item_id]
        else:
            item.qty = qty

        cart.updated_at = datetime.utcnow()
        return cart

    def remove_item(self, owner: str, item_id: str) -> Optional[Cart]:
        """Remove an item from the cart"""
        return self.set_quantity(owner, item_id, 0)

    def clear_cart(self, owner: str) -> Cart:
        """Clear all items from cart"""
        cart = self.get_or_create_cart(owner)
        cart.items = []
        cart.coupon_code = None
        cart.coupon_discount = 0.0
        cart.updated_at = datetime.utcnow()
        return cart


# Singleton instance
cart_db = CartDatabase()
