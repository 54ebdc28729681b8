"""Cart line-item collection and mutation guard"""

from dataclasses import replace
from typing import Iterator, Optional

from .exceptions import InvalidQuantity, ItemNotInCart
from .models.cart import CartLineItem


def exceeds_stock(item: CartLineItem) -> bool:
    """
    True when the requested quantity is above the known available stock.

    Advisory: mutation is still allowed, but checkout is refused while any
    item is in this state.
    """
    return item.available_stock is not None and item.quantity > item.available_stock


def merge_items(items: list[CartLineItem]) -> list[CartLineItem]:
    """Collapse duplicate entries for one product, summing quantities into copies"""
    merged: dict[str, CartLineItem] = {}
    for item in items:
        existing = merged.get(item.product_id)
        if existing:
            existing.quantity += item.quantity
        else:
            merged[item.product_id] = replace(item)
    return list(merged.values())


class Cart:
    """
    Line items of the active session's cart.

    Quantity is always >= 1 for an item present in the collection; setting
    it to 0 removes the item.
    """

    def __init__(self, items: Optional[list[CartLineItem]] = None):
        self.items: list[CartLineItem] = merge_items(list(items or []))

    def __iter__(self) -> Iterator[CartLineItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __bool__(self) -> bool:
        return bool(self.items)

    def get(self, product_id: str) -> Optional[CartLineItem]:
        return next(
            (item for item in self.items if item.product_id == product_id),
            None,
        )

    def require(self, product_id: str) -> CartLineItem:
        item = self.get(product_id)
        if item is None:
            raise ItemNotInCart(product_id)
        return item

    def add(self, item: CartLineItem) -> CartLineItem:
        """Add a line item, or grow the existing one for the same product"""
        if item.quantity < 1:
            raise InvalidQuantity(item.quantity)

        existing = self.get(item.product_id)
        if existing:
            existing.quantity += item.quantity
            return existing

        self.items.append(item)
        return item

    def set_quantity(self, product_id: str, quantity: int) -> Optional[CartLineItem]:
        """
        Set an item's quantity.

        Returns:
            The updated item, or None if quantity 0 removed it
        """
        if quantity < 0:
            raise InvalidQuantity(quantity)

        item = self.require(product_id)
        if quantity == 0:
            self.remove(product_id)
            return None

        item.quantity = quantity
        return item

    def increase(self, product_id: str, amount: int = 1) -> Optional[CartLineItem]:
        item = self.require(product_id)
        return self.set_quantity(product_id, item.quantity + amount)

    def decrease(self, product_id: str, amount: int = 1) -> Optional[CartLineItem]:
        """Lower an item's quantity; reaching zero removes it"""
        item = self.require(product_id)
        return self.set_quantity(product_id, max(0, item.quantity - amount))

    def remove(self, product_id: str) -> None:
        self.items = [item for item in self.items if item.product_id != product_id]

    def clear(self) -> None:
        self.items = []

    def replace(self, items: list[CartLineItem]) -> None:
        """Mirror the server's copy of the cart"""
        self.items = merge_items(list(items))

    def stock_issues(self) -> list[CartLineItem]:
        return [item for item in self.items if exceeds_stock(item)]

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)


def set_quantity(cart: Cart, product_id: str, new_quantity: int) -> Optional[CartLineItem]:
    """Mutation guard entry point; see Cart.set_quantity"""
    return cart.set_quantity(product_id, new_quantity)
