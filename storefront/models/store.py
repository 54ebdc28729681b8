"""Store API payloads (cart, coupons, payments)"""

from pydantic import BaseModel, Field
from typing import Optional, Union

from .cart import CartLineItem, DiscountType, ItemDiscount, ShippingPolicy


class StoreDiscount(BaseModel):
    value: float = 0
    type: DiscountType = DiscountType.PERCENTAGE


class StoreShipping(BaseModel):
    charges: float = 0
    free_shipping_threshold: float = Field(0, alias="freeShippingThreshold")
    free_shipping_min_quantity: int = Field(0, alias="freeShippingMinQuantity")

    class Config:
        populate_by_name = True


class StoreCashOnDelivery(BaseModel):
    enabled: bool = False


class StoreProduct(BaseModel):
    """Catalog product as populated into a cart item"""
    id: str = Field(alias="_id")
    title: str = ""
    price: Union[float, str] = 0
    stock: Optional[int] = None
    discount: Optional[StoreDiscount] = None
    shipping: Optional[StoreShipping] = None
    cash_on_delivery: Optional[StoreCashOnDelivery] = Field(None, alias="cashOnDelivery")
    taxonomies: list[str] = []

    class Config:
        populate_by_name = True


class StoreCartItem(BaseModel):
    """Cart item as the store returns it"""
    id: str = Field(alias="_id")
    product: StoreProduct = Field(alias="productId")
    title_snapshot: Optional[str] = Field(None, alias="titleSnapshot")
    price_snapshot: Optional[Union[float, str]] = Field(None, alias="priceSnapshot")
    qty: int = 1

    class Config:
        populate_by_name = True

    def to_line_item(self) -> CartLineItem:
        """Convert to a line item, parsing the price once"""
        product = self.product
        discount = None
        if product.discount:
            discount = ItemDiscount(value=product.discount.value, type=product.discount.type)

        shipping_policy = None
        if product.shipping:
            shipping_policy = ShippingPolicy.from_amounts(
                charges=product.shipping.charges,
                free_shipping_threshold=product.shipping.free_shipping_threshold,
                free_shipping_min_quantity=product.shipping.free_shipping_min_quantity,
            )

        return CartLineItem.from_catalog(
            product_id=product.id,
            unit_price_label=self.price_snapshot if self.price_snapshot is not None else product.price,
            quantity=self.qty or 1,
            discount=discount,
            name=self.title_snapshot or product.title,
            shipping_policy=shipping_policy,
            available_stock=product.stock,
            cart_item_id=self.id,
            cash_on_delivery=bool(product.cash_on_delivery and product.cash_on_delivery.enabled),
            taxonomies=list(product.taxonomies),
        )


class StoreCart(BaseModel):
    items: list[StoreCartItem] = []

    def to_line_items(self) -> list[CartLineItem]:
        return [item.to_line_item() for item in self.items]


class CouponValidation(BaseModel):
    """Validator answer; discount in cents"""
    valid: bool
    discount: int = 0
    message: str = ""
