import pytest

from storefront.models.cart import CartLineItem, DiscountType, ItemDiscount, ShippingPolicy
from storefront.pricing import (
    compute_grand_total,
    compute_item_discount_total,
    compute_shipping_total,
    compute_subtotal,
    compute_total_quantity,
    has_free_shipping,
    summarize,
)


def make_item(product_id="p1", price=1000, quantity=1, discount=0, shipping=None, stock=None):
    return CartLineItem(
        product_id=product_id,
        unit_price=price,
        quantity=quantity,
        per_unit_discount=discount,
        shipping_policy=shipping,
        available_stock=stock,
    )


def test_empty_cart_totals_are_zero():
    summary = summarize([])
    assert summary.subtotal == 0
    assert summary.item_discount == 0
    assert summary.shipping == 0
    assert summary.grand_total == 0
    assert summary.total_quantity == 0
    assert not summary.free_shipping
    assert not summary.has_stock_issue


def test_subtotal_is_sum_of_line_contributions():
    items = [
        make_item("a", price=5000, quantity=2),
        make_item("b", price=1999, quantity=3),
        make_item("c", price=1, quantity=7),
    ]
    expected = sum(item.unit_price * item.quantity for item in items)
    assert compute_subtotal(items) == expected == 16004


def test_adding_an_item_adds_exactly_its_contribution():
    items = [make_item("a", price=2500, quantity=2)]
    before = compute_subtotal(items)
    extra = make_item("b", price=1250, quantity=3)

    assert compute_subtotal(items + [extra]) == before + 3750


def test_item_discount_bounded_by_subtotal():
    items = [
        make_item("a", price=5000, quantity=2, discount=5000),
        make_item("b", price=1999, quantity=1, discount=200),
        make_item("c", price=300, quantity=4, discount=0),
    ]
    assert compute_item_discount_total(items) == 10200
    assert compute_item_discount_total(items) <= compute_subtotal(items)


def test_item_discount_is_not_clamped():
    items = [make_item(price=1000, quantity=1, discount=1500)]
    assert compute_item_discount_total(items) == 1500


@pytest.mark.parametrize(
    "subtotal, item_discount, coupon_discount, shipping",
    [
        (10000, 1000, 1000, 0),
        (10000, 0, 20000, 500),
        (0, 0, 0, 0),
        (500, 500, 500, 999),
        (100, 0, 0, 1000),
    ],
)
def test_grand_total_never_below_shipping(subtotal, item_discount, coupon_discount, shipping):
    total = compute_grand_total(subtotal, item_discount, coupon_discount, shipping)
    assert total >= shipping
    assert total == max(0, subtotal - item_discount - coupon_discount) + shipping


def test_discounts_larger_than_subtotal_leave_only_shipping():
    assert compute_grand_total(5000, 1000, 9000, 700) == 700


def test_free_shipping_by_subtotal_threshold():
    policy = ShippingPolicy(flat_charge=1000, free_shipping_subtotal_threshold=10000)

    below = [make_item(price=9900, shipping=policy)]
    at = [make_item(price=10000, shipping=policy)]

    assert compute_shipping_total(below) == 1000
    assert compute_shipping_total(at) == 0
    assert has_free_shipping(at)
    assert not has_free_shipping(below)


def test_free_shipping_by_quantity():
    policy = ShippingPolicy(flat_charge=500, free_shipping_min_quantity=3)

    assert compute_shipping_total([make_item(quantity=2, shipping=policy)]) == 500
    assert compute_shipping_total([make_item(quantity=3, shipping=policy)]) == 0


def test_shipping_rule_uses_whole_cart_totals():
    # The shipped item alone is below the threshold; the cart is not
    policy = ShippingPolicy(flat_charge=1000, free_shipping_subtotal_threshold=10000)
    items = [
        make_item("shipped", price=2000, shipping=policy),
        make_item("other", price=8000),
    ]
    assert compute_shipping_total(items) == 0

    policy = ShippingPolicy(flat_charge=500, free_shipping_min_quantity=3)
    items = [
        make_item("shipped", quantity=1, shipping=policy),
        make_item("other", quantity=2),
    ]
    assert compute_shipping_total(items) == 0


def test_each_unwaived_charge_is_added():
    items = [
        make_item("a", shipping=ShippingPolicy(flat_charge=1000)),
        make_item("b", shipping=ShippingPolicy(flat_charge=450)),
        make_item("c"),
    ]
    assert compute_shipping_total(items) == 1450


def test_zero_thresholds_disable_waiver():
    items = [make_item(price=1_000_000, quantity=50, shipping=ShippingPolicy(flat_charge=700))]
    assert compute_shipping_total(items) == 700
    assert not has_free_shipping(items)


def test_scenario_price_discount_and_coupon():
    item = CartLineItem.from_catalog(
        product_id="serum",
        unit_price_label="$50.00",
        quantity=2,
        discount=ItemDiscount(value=5, type=DiscountType.FIXED),
    )
    summary = summarize([item], coupon_discount=1000)

    assert summary.subtotal == 10000
    assert summary.item_discount == 1000
    assert summary.coupon_discount == 1000
    assert summary.shipping == 0
    assert summary.grand_total == 8000


def test_percentage_catalog_discount():
    item = CartLineItem.from_catalog(
        product_id="cream",
        unit_price_label=120,
        quantity=2,
        discount=ItemDiscount(value=10, type=DiscountType.PERCENTAGE),
    )
    assert item.per_unit_discount == 1200
    assert compute_item_discount_total([item]) == 2400


def test_computations_are_idempotent():
    policy = ShippingPolicy(flat_charge=1000, free_shipping_subtotal_threshold=10000)
    items = [make_item("a", price=4000, quantity=2, shipping=policy), make_item("b", price=1500)]

    assert compute_subtotal(items) == compute_subtotal(items)
    assert compute_shipping_total(items) == compute_shipping_total(items)
    assert summarize(items, 500) == summarize(items, 500)


def test_summary_reports_quantity_and_stock_issue():
    items = [
        make_item("a", quantity=5, stock=3),
        make_item("b", quantity=2),
    ]
    summary = summarize(items)

    assert compute_total_quantity(items) == 7
    assert summary.total_quantity == 7
    assert summary.has_stock_issue
