"""Payment API routes for mock store"""

import logging
import uuid
from typing import Optional
from fastapi import APIRouter, HTTPException, Depends

from storefront.models.cart import CartLineItem, DiscountType, ItemDiscount, ShippingPolicy
from storefront.money import cents_to_decimal, to_cents
from storefront.pricing import PriceSummary, summarize

from ..models.coupon import CouponItem
from ..models.order import (
    CreateOrderRequest,
    Order,
    OrderItem,
    OrderStatus,
    PaymentMethod,
)
from ..models.product import Product
from ..database.carts import cart_db
from ..database.coupons import coupon_db, CouponError
from ..database.orders import order_db
from ..database.products import product_db
from .cart import get_owner

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/payments", tags=["Payments"])

HOSTED_CHECKOUT_URL = "https://pay.example.com/checkout"


def _line_item(product: Product, qty: int) -> CartLineItem:
    discount = None
    if product.discount:
        discount = ItemDiscount(value=product.discount.value, type=DiscountType(product.discount.type.value))

    shipping_policy = None
    if product.shipping:
        shipping_policy = ShippingPolicy.from_amounts(
            charges=product.shipping.charges,
            free_shipping_threshold=product.shipping.free_shipping_threshold,
            free_shipping_min_quantity=product.shipping.free_shipping_min_quantity,
        )

    return CartLineItem.from_catalog(
        product_id=product.id,
        unit_price_label=product.price,
        quantity=qty,
        discount=discount,
        name=product.title,
        shipping_policy=shipping_policy,
    )


def _price_order(request: CreateOrderRequest) -> tuple[list[CartLineItem], PriceSummary]:
    """Look up every ordered product and price the order, coupon included"""
    if not request.items:
        raise HTTPException(status_code=400, detail="Cart is empty")

    products = []
    for line in request.items:
        product = product_db.get_product(line.product_id)
        if not product or not product.is_active:
            raise HTTPException(status_code=404, detail=f"Product not found: {line.product_id}")
        products.append(product)

    line_items = [_line_item(p, line.qty) for p, line in zip(products, request.items)]
    summary = summarize(line_items)

    if request.coupon_code:
        coupon_items = [
            CouponItem(product_id=p.id, qty=line.qty, taxonomies=p.taxonomies)
            for p, line in zip(products, request.items)
        ]
        try:
            _, discount = coupon_db.validate(
                code=request.coupon_code,
                subtotal=float(cents_to_decimal(summary.subtotal)),
                items=coupon_items,
            )
        except CouponError as e:
            raise HTTPException(status_code=e.status_code, detail=e.message)
        summary = summarize(line_items, coupon_discount=to_cents(discount))

    return line_items, summary


def _place_order(
    request: CreateOrderRequest,
    owner: str,
    payment_method: PaymentMethod,
    status: OrderStatus,
    checkout_session_id: Optional[str] = None,
) -> Order:
    line_items, summary = _price_order(request)

    order_items = [
        OrderItem(
            product_id=item.product_id,
            title=item.name,
            qty=item.quantity,
            unit_price=float(cents_to_decimal(item.unit_price)),
            total_price=float(cents_to_decimal(item.line_subtotal)),
        )
        for item in line_items
    ]

    return order_db.create_order(
        items=order_items,
        subtotal=float(cents_to_decimal(summary.subtotal)),
        item_discount=float(cents_to_decimal(summary.item_discount)),
        coupon_discount=float(cents_to_decimal(summary.coupon_discount)),
        shipping=float(cents_to_decimal(summary.shipping)),
        total=float(cents_to_decimal(summary.grand_total)),
        payment_method=payment_method,
        status=status,
        shipping_address=request.shipping_address,
        owner=owner,
        coupon_code=request.coupon_code.strip().upper() if request.coupon_code else None,
        checkout_session_id=checkout_session_id,
    )


def _fulfil(order: Order) -> None:
    """Take stock, count the coupon use and empty the owner's cart"""
    for item in order.items:
        product_db.update_stock(item.product_id, -item.qty)
    if order.coupon_code:
        coupon_db.record_use(order.coupon_code)
    cart_db.clear_cart(order.owner)


@router.post("/checkout-session")
async def create_checkout_session(
    request: CreateOrderRequest,
    owner: str = Depends(get_owner),
):
    """
    Start a hosted card payment.

    Orders whose discounted total is zero are placed immediately and come
    back with isFreeOrder instead of a payment URL.
    """
    session_id = f"cs_test_{uuid.uuid4().hex}"
    order = _place_order(
        request,
        owner,
        PaymentMethod.CARD,
        OrderStatus.PENDING_PAYMENT,
        checkout_session_id=session_id,
    )

    if order.total <= 0:
        order_db.update_status(order.order_id, OrderStatus.PAID)
        _fulfil(order)
        logger.info(f"Free order {order.order_number} placed for {owner}")
        return {
            "success": True,
            "message": "Order placed",
            "orderId": order.order_id,
            "orderNumber": order.order_number,
            "isFreeOrder": True,
        }

    logger.info(f"Checkout session {session_id} created for order {order.order_number}: ${order.total:.2f}")
    return {
        "success": True,
        "url": f"{HOSTED_CHECKOUT_URL}/{session_id}",
        "sessionId": session_id,
    }


@router.post("/cod-order")
async def create_cod_order(
    request: CreateOrderRequest,
    owner: str = Depends(get_owner),
):
    """Place a cash-on-delivery order"""
    for line in request.items:
        product = product_db.get_product(line.product_id)
        if product and not product.cash_on_delivery.enabled:
            raise HTTPException(
                status_code=400,
                detail=f"Cash on delivery is not available for {product.title}",
            )

    order = _place_order(request, owner, PaymentMethod.COD, OrderStatus.COD_PENDING)
    _fulfil(order)

    logger.info(f"COD order {order.order_number} placed for {owner}: ${order.total:.2f}")
    return {
        "success": True,
        "message": "Order placed successfully",
        "orderId": order.order_id,
        "orderNumber": order.order_number,
        "data": order.model_dump(mode="json"),
    }


@router.post("/sessions/{session_id}/complete")
async def complete_checkout_session(session_id: str):
    """Simulate the payment provider confirming a hosted checkout"""
    order = next(
        (o for o in order_db.orders.values() if o.checkout_session_id == session_id),
        None,
    )
    if not order:
        raise HTTPException(status_code=404, detail="Checkout session not found")

    if order.status == OrderStatus.PENDING_PAYMENT:
        order_db.update_status(order.order_id, OrderStatus.PAID)
        _fulfil(order)

    return {"success": True, "orderId": order.order_id, "orderNumber": order.order_number}


@router.get("/orders/{order_id}", response_model=Order)
async def get_order(order_id: str):
    """Get order details"""
    order = order_db.get_order(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order
