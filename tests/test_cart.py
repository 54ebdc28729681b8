import pytest

from storefront.cart import Cart, exceeds_stock, set_quantity
from storefront.exceptions import InvalidPrice, InvalidQuantity, ItemNotInCart
from storefront.models.cart import CartLineItem, ItemDiscount, ShippingPolicy
from storefront.pricing import compute_subtotal


def make_item(product_id, quantity=1, price=1000, stock=None):
    return CartLineItem(
        product_id=product_id,
        unit_price=price,
        quantity=quantity,
        available_stock=stock,
    )


def test_from_catalog_parses_label_once():
    item = CartLineItem.from_catalog("p1", "$1,250.50", quantity=2, name="Gift Set")

    assert item.unit_price == 125050
    assert item.unit_price_label == "$1,250.50"
    assert item.line_subtotal == 250100


def test_from_catalog_rejects_bad_price():
    with pytest.raises(InvalidPrice):
        CartLineItem.from_catalog("p1", "call for price")


def test_shipping_policy_from_amounts():
    policy = ShippingPolicy.from_amounts(charges="10", free_shipping_threshold=99.5)

    assert policy.flat_charge == 1000
    assert policy.free_shipping_subtotal_threshold == 9950
    assert policy.free_shipping_min_quantity == 0


def test_non_positive_catalog_discount_is_ignored():
    assert ItemDiscount(value=0).per_unit(5000) == 0
    assert ItemDiscount(value=-5).per_unit(5000) == 0


def test_add_merges_same_product():
    cart = Cart()
    cart.add(make_item("a", 1))
    cart.add(make_item("a", 2))

    assert len(cart) == 1
    assert cart.require("a").quantity == 3


def test_constructor_merges_duplicates():
    cart = Cart([make_item("a", 1), make_item("b", 1), make_item("a", 4)])

    assert [item.product_id for item in cart] == ["a", "b"]
    assert cart.require("a").quantity == 5


def test_merge_leaves_caller_items_untouched():
    first = make_item("a", 1)
    second = make_item("a", 4)

    cart = Cart([first, second])

    assert cart.require("a").quantity == 5
    assert first.quantity == 1
    assert second.quantity == 4


def test_add_requires_positive_quantity():
    with pytest.raises(InvalidQuantity):
        Cart().add(make_item("a", 0))


def test_set_quantity_updates_item():
    cart = Cart([make_item("a", 1, price=2500)])
    updated = set_quantity(cart, "a", 4)

    assert updated.quantity == 4
    assert compute_subtotal(cart) == 10000


def test_set_quantity_zero_removes_item():
    cart = Cart([make_item("a", 2), make_item("b", 1)])

    assert set_quantity(cart, "a", 0) is None
    assert cart.get("a") is None
    assert len(cart) == 1


def test_negative_quantity_rejected_and_cart_unchanged():
    cart = Cart([make_item("a", 2)])

    with pytest.raises(InvalidQuantity):
        set_quantity(cart, "a", -1)

    assert cart.require("a").quantity == 2


def test_unknown_item():
    with pytest.raises(ItemNotInCart):
        Cart().set_quantity("missing", 1)


def test_increase_and_decrease():
    cart = Cart([make_item("a", 2)])

    cart.increase("a")
    assert cart.require("a").quantity == 3

    cart.decrease("a", 2)
    assert cart.require("a").quantity == 1

    assert cart.decrease("a", 5) is None
    assert not cart


def test_quantity_above_stock_is_allowed_but_flagged():
    cart = Cart([make_item("a", 1, stock=3)])
    item = set_quantity(cart, "a", 5)

    assert item.quantity == 5
    assert exceeds_stock(item)
    assert cart.stock_issues() == [item]

    set_quantity(cart, "a", 3)
    assert not exceeds_stock(item)
    assert cart.stock_issues() == []


def test_unknown_stock_never_exceeds():
    assert not exceeds_stock(make_item("a", 500))


def test_replace_and_clear():
    cart = Cart([make_item("a", 1)])
    cart.replace([make_item("b", 2), make_item("c", 1)])

    assert [item.product_id for item in cart] == ["b", "c"]
    assert cart.total_quantity == 3

    cart.clear()
    assert len(cart) == 0
