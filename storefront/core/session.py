"""Checkout session management"""

import uuid
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, Optional
from dataclasses import dataclass, field

from ..cart import Cart
from ..coupons import CouponApplication
from ..exceptions import SessionNotFound
from ..models.checkout import PaymentMethod, ShippingAddress
from ..pricing import PriceSummary, summarize


@dataclass
class CheckoutSession:
    """
    Cart and checkout state of one signed-in shopper.

    The session is the only writer of its cart and coupon. Network calls are
    gated per key (one in flight per line item or action); once the session
    is closed, late responses are discarded.
    """
    session_id: str
    created_at: datetime
    updated_at: datetime
    cart: Cart = field(default_factory=Cart)
    coupon: CouponApplication = field(default_factory=CouponApplication)
    shipping_address: Optional[ShippingAddress] = None
    payment_method: PaymentMethod = PaymentMethod.CARD
    is_processing_payment: bool = False
    closed: bool = False
    busy: set = field(default_factory=set)

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()

    def summary(self) -> PriceSummary:
        """Current totals; recomputed on every call"""
        return summarize(self.cart, self.coupon.applied_discount)

    def is_busy(self, key: str) -> bool:
        return key in self.busy

    @contextmanager
    def hold(self, key: str) -> Iterator[bool]:
        """
        Mark `key` busy for the duration of a request.

        Yields False (and holds nothing) if the key is already busy, so the
        caller can drop the duplicate submission.
        """
        if key in self.busy:
            yield False
            return

        self.busy.add(key)
        try:
            yield True
        finally:
            self.busy.discard(key)

    def accepts_responses(self) -> bool:
        return not self.closed

    def close(self) -> None:
        """The shopper left; pending responses must not touch this session"""
        self.closed = True
        self.coupon.remove()

    def checkout_blockers(self) -> list[str]:
        """Reasons the proceed-to-payment action is disabled"""
        reasons = []

        if not self.cart:
            reasons.append("Your cart is empty")

        if self.shipping_address is None:
            reasons.append("Please select or add a delivery address")

        over_stock = self.cart.stock_issues()
        if over_stock:
            names = ", ".join(item.name or item.product_id for item in over_stock)
            reasons.append(
                f"Some items exceed available stock: {names}. "
                "Please adjust quantities in your cart."
            )

        if self.payment_method == PaymentMethod.COD and not self.supports_cash_on_delivery():
            reasons.append("Cash on Delivery is not available for some items in your cart")

        if self.is_processing_payment:
            reasons.append("Payment is already being processed")

        return reasons

    def supports_cash_on_delivery(self) -> bool:
        return bool(self.cart) and all(item.cash_on_delivery for item in self.cart)

    def reset_checkout(self) -> None:
        """Forget coupon and payment state after an order is placed"""
        self.coupon.reset()
        self.is_processing_payment = False
        self.touch()


class SessionManager:
    """Manages checkout sessions"""

    def __init__(self):
        self.sessions: dict[str, CheckoutSession] = {}

    def create_session(self) -> CheckoutSession:
        """Create a new session"""
        now = datetime.utcnow()
        session = CheckoutSession(
            session_id=str(uuid.uuid4()),
            created_at=now,
            updated_at=now,
        )
        self.sessions[session.session_id] = session
        return session

    def get_session(self, session_id: str) -> Optional[CheckoutSession]:
        """Get session by ID"""
        return self.sessions.get(session_id)

    def require_session(self, session_id: str) -> CheckoutSession:
        session = self.get_session(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def get_or_create_session(self, session_id: Optional[str] = None) -> CheckoutSession:
        """Get existing session or create new one"""
        if session_id and session_id in self.sessions:
            return self.sessions[session_id]
        return self.create_session()

    def delete_session(self, session_id: str) -> bool:
        """Close and delete a session"""
        session = self.sessions.pop(session_id, None)
        if session is None:
            return False
        session.close()
        return True

    def cleanup_old_sessions(self, max_age_hours: int = 24) -> int:
        """Remove sessions older than max_age_hours"""
        now = datetime.utcnow()
        old_sessions = [
            sid for sid, session in self.sessions.items()
            if (now - session.updated_at).total_seconds() > max_age_hours * 3600
        ]
        for sid in old_sessions:
            self.delete_session(sid)
        return len(old_sessions)
