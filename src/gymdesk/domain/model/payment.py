"""Payments made against an enrollment."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from gymdesk.domain.errors import InvalidPaymentError
from gymdesk.domain.model.enums import PaymentStatus
from gymdesk.domain.model.payment_methods import is_valid_method

if TYPE_CHECKING:
    from datetime import date
    from decimal import Decimal

    from gymdesk.domain.model.enrollment import Enrollment
    from gymdesk.domain.model.payment_methods import PaymentMethod


@dataclass(kw_only=True)
class Payment:
    """Legal transitions are PENDING -> CONFIRMED -> REVERSED; others are no-ops."""

    payment_id: str
    enrollment: Enrollment
    method: PaymentMethod
    amount: Decimal
    paid_on: date
    status: PaymentStatus = PaymentStatus.PENDING

    def __post_init__(self) -> None:
        if self.amount <= 0:
            raise InvalidPaymentError(f"Payment amount must be positive, got {self.amount}")

    @property
    def is_confirmed(self) -> bool:
        return self.status is PaymentStatus.CONFIRMED

    @property
    def is_pending(self) -> bool:
        return self.status is PaymentStatus.PENDING

    def is_valid(self) -> bool:
        return self.amount > 0 and is_valid_method(self.method)

    def confirm(self) -> bool:
        if self.status is not PaymentStatus.PENDING:
            return False
        self.status = PaymentStatus.CONFIRMED
        return True

    def reverse(self) -> bool:
        if self.status is not PaymentStatus.CONFIRMED:
            return False
        self.status = PaymentStatus.REVERSED
        return True
