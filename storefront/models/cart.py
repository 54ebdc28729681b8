"""Cart line-item models"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..money import Amount, format_cents, percentage_of, to_cents


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


@dataclass(frozen=True)
class ItemDiscount:
    """Catalog discount on a product, as the catalog describes it"""
    value: float
    type: DiscountType = DiscountType.PERCENTAGE

    def per_unit(self, unit_price: int) -> int:
        """Resolve to a per-unit amount in cents"""
        if self.value <= 0:
            return 0
        if self.type == DiscountType.PERCENTAGE:
            return percentage_of(unit_price, self.value)
        return to_cents(self.value)


@dataclass(frozen=True)
class ShippingPolicy:
    """Per-product shipping rule. Amounts in cents."""
    flat_charge: int = 0
    free_shipping_subtotal_threshold: int = 0
    free_shipping_min_quantity: int = 0

    @classmethod
    def from_amounts(
        cls,
        charges: Amount = 0,
        free_shipping_threshold: Amount = 0,
        free_shipping_min_quantity: int = 0,
    ) -> "ShippingPolicy":
        return cls(
            flat_charge=to_cents(charges or 0),
            free_shipping_subtotal_threshold=to_cents(free_shipping_threshold or 0),
            free_shipping_min_quantity=int(free_shipping_min_quantity or 0),
        )

    def is_waived(self, cart_subtotal: int, cart_quantity: int) -> bool:
        """
        Whether the flat charge is waived for the given cart-wide totals.

        Either rule is enough; a zero threshold or minimum disables that rule.
        """
        by_threshold = (
            self.free_shipping_subtotal_threshold > 0
            and cart_subtotal >= self.free_shipping_subtotal_threshold
        )
        by_quantity = (
            self.free_shipping_min_quantity > 0
            and cart_quantity >= self.free_shipping_min_quantity
        )
        return by_threshold or by_quantity


@dataclass
class CartLineItem:
    """One product-and-quantity entry in a cart. Money in cents."""
    product_id: str
    unit_price: int
    quantity: int = 1
    name: str = ""
    per_unit_discount: int = 0
    shipping_policy: Optional[ShippingPolicy] = None
    available_stock: Optional[int] = None
    cart_item_id: Optional[str] = None
    cash_on_delivery: bool = False
    taxonomies: list[str] = field(default_factory=list)

    @classmethod
    def from_catalog(
        cls,
        product_id: str,
        unit_price_label: Amount,
        quantity: int = 1,
        discount: Optional[ItemDiscount] = None,
        **kwargs,
    ) -> "CartLineItem":
        """Build a line item from catalog data, normalizing the price label"""
        unit_price = to_cents(unit_price_label)
        per_unit_discount = discount.per_unit(unit_price) if discount else 0
        return cls(
            product_id=product_id,
            unit_price=unit_price,
            quantity=quantity,
            per_unit_discount=per_unit_discount,
            **kwargs,
        )

    @property
    def line_subtotal(self) -> int:
        return self.unit_price * self.quantity

    @property
    def line_discount(self) -> int:
        return self.per_unit_discount * self.quantity

    @property
    def unit_price_label(self) -> str:
        return format_cents(self.unit_price)

    @property
    def busy_key(self) -> str:
        """Key used to gate concurrent requests for this item"""
        return self.cart_item_id or self.product_id
