"""
Cart pricing calculator.

Pure functions over a line-item collection. Every amount is in cents.
Totals are recomputed on each call; carts are small and change often, so
nothing is cached.
"""

from dataclasses import dataclass
from typing import Iterable

from .cart import exceeds_stock
from .models.cart import CartLineItem


def compute_subtotal(items: Iterable[CartLineItem]) -> int:
    """Sum of unit price x quantity, before any discount"""
    return sum(item.unit_price * item.quantity for item in items)


def compute_item_discount_total(items: Iterable[CartLineItem]) -> int:
    """
    Sum of per-unit discount x quantity.

    Not clamped against the subtotal: keeping discount <= price is the
    catalog's job.
    """
    return sum(item.per_unit_discount * item.quantity for item in items)


def compute_total_quantity(items: Iterable[CartLineItem]) -> int:
    return sum(item.quantity for item in items)


def compute_shipping_total(items: Iterable[CartLineItem]) -> int:
    """
    Sum of flat shipping charges not waived by free-shipping rules.

    Each item's rule is checked against the whole cart's subtotal and
    quantity, not the item's own.
    """
    items = list(items)
    subtotal = compute_subtotal(items)
    total_quantity = compute_total_quantity(items)

    shipping = 0
    for item in items:
        policy = item.shipping_policy
        if policy is None or policy.flat_charge <= 0:
            continue
        if not policy.is_waived(subtotal, total_quantity):
            shipping += policy.flat_charge
    return shipping


def has_free_shipping(items: Iterable[CartLineItem]) -> bool:
    """True when at least one item's shipping charge was waived"""
    items = list(items)
    subtotal = compute_subtotal(items)
    total_quantity = compute_total_quantity(items)

    return any(
        item.shipping_policy is not None
        and item.shipping_policy.flat_charge > 0
        and item.shipping_policy.is_waived(subtotal, total_quantity)
        for item in items
    )


def compute_grand_total(
    subtotal: int,
    item_discount: int,
    coupon_discount: int,
    shipping: int,
) -> int:
    """Discounted subtotal, floored at zero, plus shipping"""
    return max(0, subtotal - item_discount - coupon_discount) + shipping


@dataclass(frozen=True)
class PriceSummary:
    """Everything the order summary shows"""
    subtotal: int
    item_discount: int
    coupon_discount: int
    shipping: int
    grand_total: int
    total_quantity: int
    free_shipping: bool
    has_stock_issue: bool


def summarize(items: Iterable[CartLineItem], coupon_discount: int = 0) -> PriceSummary:
    """Compute every derived total for a cart in one pass"""
    items = list(items)
    subtotal = compute_subtotal(items)
    item_discount = compute_item_discount_total(items)
    shipping = compute_shipping_total(items)

    return PriceSummary(
        subtotal=subtotal,
        item_discount=item_discount,
        coupon_discount=coupon_discount,
        shipping=shipping,
        grand_total=compute_grand_total(subtotal, item_discount, coupon_discount, shipping),
        total_quantity=compute_total_quantity(items),
        free_shipping=has_free_shipping(items),
        has_stock_issue=any(exceeds_stock(item) for item in items),
    )
