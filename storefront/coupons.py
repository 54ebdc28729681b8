"""
Coupon application lifecycle.

    UNAPPLIED -> PENDING -> APPLIED | UNAPPLIED (rejected)

A rejection is feedback only: the state goes back to UNAPPLIED with the
validator's message kept, and a new code can be submitted right away.
APPLIED must be removed before another code is submitted. Each submission gets a ticket; a response carrying an older
ticket (the coupon was removed or the session reset meanwhile) is dropped.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .exceptions import CouponAlreadyApplied, CouponRejected


class CouponState(str, Enum):
    UNAPPLIED = "unapplied"
    PENDING = "pending"
    APPLIED = "applied"


def normalize_code(code: str) -> str:
    return code.strip().upper()


@dataclass
class CouponApplication:
    """Coupon state for one checkout session. Discount in cents."""
    state: CouponState = CouponState.UNAPPLIED
    code: Optional[str] = None
    discount: int = 0
    message: Optional[str] = None
    _ticket: int = 0

    @property
    def is_applied(self) -> bool:
        return self.state == CouponState.APPLIED

    @property
    def is_pending(self) -> bool:
        return self.state == CouponState.PENDING

    @property
    def applied_discount(self) -> int:
        """Discount that feeds the grand total"""
        return self.discount if self.is_applied else 0

    def begin(self, code: str) -> Optional[int]:
        """
        Start validating a code.

        Returns:
            Ticket to pass to resolve()/fail(), or None when a validation is
            already in flight and this submission is ignored
        """
        if self.state == CouponState.PENDING:
            return None
        if self.state == CouponState.APPLIED:
            raise CouponAlreadyApplied(self.code or "")

        normalized = normalize_code(code)
        if not normalized:
            raise CouponRejected("Please enter a coupon code")

        self._ticket += 1
        self.state = CouponState.PENDING
        self.code = normalized
        self.discount = 0
        self.message = None
        return self._ticket

    def is_current(self, ticket: int) -> bool:
        return self.state == CouponState.PENDING and ticket == self._ticket

    def resolve(self, ticket: int, valid: bool, discount: int, message: str) -> bool:
        """
        Record the validator's answer.

        Returns:
            False if the ticket is stale and the answer was discarded
        """
        if not self.is_current(ticket):
            return False

        self.message = message
        if valid:
            self.state = CouponState.APPLIED
            self.discount = max(0, discount)
        else:
            self.state = CouponState.UNAPPLIED
            self.discount = 0
        return True

    def fail(self, ticket: int, message: Optional[str] = None) -> bool:
        """The validation call itself failed; nothing was applied"""
        if not self.is_current(ticket):
            return False

        self.state = CouponState.UNAPPLIED
        self.code = None
        self.discount = 0
        self.message = message
        return True

    def remove(self) -> None:
        """Drop the coupon and any validation still in flight"""
        self._ticket += 1
        self.state = CouponState.UNAPPLIED
        self.code = None
        self.discount = 0
        self.message = None

    reset = remove
