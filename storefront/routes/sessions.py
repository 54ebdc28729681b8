"""Checkout session API routes"""

from contextlib import contextmanager
from typing import Iterator, Optional
from pydantic import BaseModel
from fastapi import APIRouter, HTTPException, Depends

from ..core.config import settings
from ..core.session import CheckoutSession, SessionManager
from ..exceptions import (
    CheckoutBlocked,
    CouponAlreadyApplied,
    CouponRejected,
    InvalidPrice,
    InvalidQuantity,
    ItemNotInCart,
    NetworkFailure,
    SessionNotFound,
    StoreRejected,
)
from ..models.checkout import PaymentMethod, ShippingAddress
from ..money import format_cents
from ..cart import exceeds_stock
from ..services.checkout import CheckoutService
from ..services.store_client import StoreClient

router = APIRouter(prefix="/api/sessions", tags=["Sessions"])

# Initialize services (would be dependency injected in production)
session_manager = SessionManager()
store_client: Optional[StoreClient] = None
checkout_service: Optional[CheckoutService] = None


def get_session_manager() -> SessionManager:
    return session_manager


def get_store_client() -> StoreClient:
    """Get or create store client"""
    global store_client
    if store_client is None:
        store_client = StoreClient(
            store_base_url=settings.store_base_url,
            api_token=settings.store_api_token,
            timeout=settings.request_timeout,
        )
    return store_client


def get_checkout_service(client: StoreClient = Depends(get_store_client)) -> CheckoutService:
    """Get or create checkout service"""
    global checkout_service
    if checkout_service is None or checkout_service.store is not client:
        checkout_service = CheckoutService(store_client=client)
    return checkout_service


def get_checkout_session(
    session_id: str,
    manager: SessionManager = Depends(get_session_manager),
) -> CheckoutSession:
    """Resolve the session in the path"""
    with storefront_errors():
        return manager.require_session(session_id)


@contextmanager
def storefront_errors() -> Iterator[None]:
    """Translate storefront errors into HTTP errors"""
    try:
        yield
    except (SessionNotFound, ItemNotInCart) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (InvalidQuantity, InvalidPrice, CouponAlreadyApplied) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CouponRejected as e:
        raise HTTPException(status_code=400, detail=e.message)
    except StoreRejected as e:
        raise HTTPException(status_code=400, detail=e.message)
    except CheckoutBlocked as e:
        raise HTTPException(status_code=409, detail={"message": "Checkout blocked", "reasons": e.reasons})
    except NetworkFailure as e:
        raise HTTPException(status_code=502, detail=e.message)


class LineItemView(BaseModel):
    product_id: str
    cart_item_id: Optional[str] = None
    name: str
    unit_price: int
    unit_price_label: str
    quantity: int
    per_unit_discount: int
    available_stock: Optional[int] = None
    exceeds_stock: bool = False


class CouponView(BaseModel):
    state: str
    code: Optional[str] = None
    discount: int = 0
    message: Optional[str] = None


class SummaryView(BaseModel):
    """Totals in cents plus display strings"""
    subtotal: int
    item_discount: int
    coupon_discount: int
    shipping: int
    grand_total: int
    total_quantity: int
    free_shipping: bool
    has_stock_issue: bool
    display: dict[str, str]
    can_checkout: bool
    blockers: list[str]


class SessionView(BaseModel):
    session_id: str
    items: list[LineItemView]
    coupon: CouponView
    summary: SummaryView
    payment_method: PaymentMethod
    shipping_address: Optional[ShippingAddress] = None
    supports_cash_on_delivery: bool


def summary_view(session: CheckoutSession) -> SummaryView:
    summary = session.summary()
    blockers = session.checkout_blockers()
    return SummaryView(
        subtotal=summary.subtotal,
        item_discount=summary.item_discount,
        coupon_discount=summary.coupon_discount,
        shipping=summary.shipping,
        grand_total=summary.grand_total,
        total_quantity=summary.total_quantity,
        free_shipping=summary.free_shipping,
        has_stock_issue=summary.has_stock_issue,
        display={
            "subtotal": format_cents(summary.subtotal, settings.currency),
            "item_discount": format_cents(-summary.item_discount, settings.currency),
            "coupon_discount": format_cents(-summary.coupon_discount, settings.currency),
            "shipping": (
                "FREE" if summary.shipping == 0 and summary.free_shipping
                else format_cents(summary.shipping, settings.currency)
            ),
            "total": format_cents(summary.grand_total, settings.currency),
        },
        can_checkout=not blockers,
        blockers=blockers,
    )


def session_view(session: CheckoutSession) -> SessionView:
    return SessionView(
        session_id=session.session_id,
        items=[
            LineItemView(
                product_id=item.product_id,
                cart_item_id=item.cart_item_id,
                name=item.name,
                unit_price=item.unit_price,
                unit_price_label=item.unit_price_label,
                quantity=item.quantity,
                per_unit_discount=item.per_unit_discount,
                available_stock=item.available_stock,
                exceeds_stock=exceeds_stock(item),
            )
            for item in session.cart
        ],
        coupon=CouponView(
            state=session.coupon.state.value,
            code=session.coupon.code,
            discount=session.coupon.applied_discount,
            message=session.coupon.message,
        ),
        summary=summary_view(session),
        payment_method=session.payment_method,
        shipping_address=session.shipping_address,
        supports_cash_on_delivery=session.supports_cash_on_delivery(),
    )


@router.post("", response_model=SessionView)
async def create_session(
    manager: SessionManager = Depends(get_session_manager),
    service: CheckoutService = Depends(get_checkout_service),
):
    """Start a checkout session, loading the user's cart from the store"""
    manager.cleanup_old_sessions(max_age_hours=settings.session_max_age_hours)
    session = manager.create_session()
    with storefront_errors():
        await service.sync(session)
    return session_view(session)


@router.get("/{session_id}", response_model=SessionView)
async def get_session(session: CheckoutSession = Depends(get_checkout_session)):
    """Get session details"""
    return session_view(session)


@router.get("/{session_id}/summary", response_model=SummaryView)
async def get_summary(session: CheckoutSession = Depends(get_checkout_session)):
    """Order summary; recomputed on every request"""
    return summary_view(session)


@router.post("/{session_id}/sync", response_model=SessionView)
async def sync_session(
    session: CheckoutSession = Depends(get_checkout_session),
    service: CheckoutService = Depends(get_checkout_service),
):
    """Reload the cart from the store"""
    with storefront_errors():
        await service.sync(session)
    return session_view(session)


@router.delete("/{session_id}")
async def delete_session(
    session_id: str,
    manager: SessionManager = Depends(get_session_manager),
):
    """Close and delete a session"""
    if manager.delete_session(session_id):
        return {"message": "Session deleted"}
    raise HTTPException(status_code=404, detail="Session not found")
