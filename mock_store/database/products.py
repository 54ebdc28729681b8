"""Mock product database"""

from typing import Optional
from ..models.product import (
    CashOnDelivery,
    DiscountType,
    Product,
    ProductDiscount,
    ProductShipping,
)


def _catalog() -> dict[str, Product]:
    """Mock product catalog"""
    products = [
        Product(
            id="prod-001",
            title="Radiance Vitamin C Serum",
            slug="radiance-vitamin-c-serum",
            price=50.00,
            stock=40,
            discount=ProductDiscount(value=5, type=DiscountType.FIXED),
            shipping=ProductShipping(charges=10, free_shipping_threshold=100),
            cash_on_delivery=CashOnDelivery(enabled=True),
            taxonomies=["tax-serums"],
        ),
        Product(
            id="prod-002",
            title="Hydrating Rose Toner",
            slug="hydrating-rose-toner",
            price=24.00,
            stock=100,
            shipping=ProductShipping(charges=5, free_shipping_min_quantity=3),
            cash_on_delivery=CashOnDelivery(enabled=True),
            taxonomies=["tax-toners"],
        ),
        Product(
            id="prod-003",
            title="Gold Peptide Night Cream",
            slug="gold-peptide-night-cream",
            price=120.00,
            stock=3,
            discount=ProductDiscount(value=10, type=DiscountType.PERCENTAGE),
            taxonomies=["tax-creams"],
        ),
        Product(
            id="prod-004",
            title="Gentle Foaming Cleanser",
            slug="gentle-foaming-cleanser",
            price=18.50,
            stock=200,
            shipping=ProductShipping(charges=4.5),
            cash_on_delivery=CashOnDelivery(enabled=True),
            taxonomies=["tax-cleansers"],
        ),
        Product(
            id="prod-005",
            title="Signature Gift Set",
            slug="signature-gift-set",
            price=185.00,
            stock=15,
            shipping=ProductShipping(charges=15, free_shipping_threshold=150),
            taxonomies=["tax-gifts"],
        ),
        Product(
            id="prod-006",
            title="Retired Clay Mask",
            slug="retired-clay-mask",
            price=30.00,
            stock=0,
            is_active=False,
            taxonomies=["tax-masks"],
        ),
    ]
    return {product.id: product for product in products}


class ProductDatabase:
    """In-memory product database for mock store"""

    def __init__(self):
        self.products = _catalog()

    def reset(self) -> None:
        self.products = _catalog()

    def get_product(self, product_id: str) -> Optional[Product]:
        """Get a product by ID"""
        return self.products.get(product_id)

    def search_products(
        self,
        query: Optional[str] = None,
        active_only: bool = True,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Product], int]:
        """
        Search products by title.

        Returns:
            Tuple of (matching products, total count)
        """
        results = list(self.products.values())

        if query:
            query_lower = query.lower()
            results = [p for p in results if query_lower in p.title.lower()]

        if active_only:
            results = [p for p in results if p.is_active]

        total = len(results)
        return results[offset : offset + limit], total

    def update_stock(self, product_id: str, quantity_change: int) -> bool:
        """
        Update product stock.

        Args:
            product_id: Product to update
            quantity_change: Positive to add, negative to remove

        Returns:
            True if successful
        """
        product = self.products.get(product_id)
        if not product:
            return False

        new_quantity = product.stock + quantity_change
        if new_quantity < 0:
            return False

        product.stock = new_quantity
        return True


# Singleton instance
product_db = ProductDatabase()
