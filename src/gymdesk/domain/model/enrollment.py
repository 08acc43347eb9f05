"""Enrollments link a student to a plan for a period."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Self

from gymdesk.domain.errors import InvalidEnrollmentError
from gymdesk.domain.model.enums import EnrollmentStatus
from gymdesk.domain.model.money import to_money
from gymdesk.domain.model.plans import final_price

if TYPE_CHECKING:
    from decimal import Decimal

    from gymdesk.domain.model.people import Student
    from gymdesk.domain.model.plans import Plan


@dataclass(kw_only=True)
class Enrollment:
    """A student's subscription to a plan.

    ``monthly_price`` is a snapshot taken when the enrollment is opened; later
    changes to the plan's price do not affect it.

    Transitions: ACTIVE -> SUSPENDED, SUSPENDED -> ACTIVE, anything -> CANCELLED.
    CANCELLED is terminal. EXPIRED is derived from ``end_date`` by
    ``effective_status`` rather than stored by a transition.
    """

    enrollment_id: str
    student: Student
    plan: Plan
    start_date: date
    end_date: date
    monthly_price: Decimal
    status: EnrollmentStatus = EnrollmentStatus.ACTIVE

    def __post_init__(self) -> None:
        if self.start_date > self.end_date:
            raise InvalidEnrollmentError("Enrollment start date must not be after its end date")

    @classmethod
    def open(
        cls,
        *,
        enrollment_id: str,
        student: Student,
        plan: Plan,
        start_date: date,
        end_date: date,
    ) -> Self:
        return cls(
            enrollment_id=enrollment_id,
            student=student,
            plan=plan,
            start_date=start_date,
            end_date=end_date,
            monthly_price=to_money(final_price(plan)),
        )

    @property
    def is_active(self) -> bool:
        return self.status is EnrollmentStatus.ACTIVE

    def is_expired(self, today: date | None = None) -> bool:
        return self.end_date < (today or date.today())

    def effective_status(self, today: date | None = None) -> EnrollmentStatus:
        if self.is_active and self.is_expired(today):
            return EnrollmentStatus.EXPIRED
        return self.status

    def suspend(self) -> bool:
        if self.status is not EnrollmentStatus.ACTIVE:
            return False
        self.status = EnrollmentStatus.SUSPENDED
        return True

    def reactivate(self) -> bool:
        if self.status is not EnrollmentStatus.SUSPENDED:
            return False
        self.status = EnrollmentStatus.ACTIVE
        return True

    def cancel(self) -> bool:
        if self.status is EnrollmentStatus.CANCELLED:
            return False
        self.status = EnrollmentStatus.CANCELLED
        return True
