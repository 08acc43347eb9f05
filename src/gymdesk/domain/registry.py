"""In-memory aggregate holding the working set of a session.

``Gym`` is the single authority for rules that span several entities: identity
uniqueness, at most one active enrollment per student, sequential ids. It never
touches the data files; callers persist through the stores separately.
"""

from __future__ import annotations

import re
from decimal import Decimal
from logging import getLogger
from typing import TYPE_CHECKING, Final

from gymdesk.domain.errors import (
    DuplicateRecordError,
    EnrollmentNotFoundError,
    InvalidEnrollmentError,
    InvalidPaymentError,
    PaymentNotFoundError,
    PersonNotFoundError,
    PlanNotFoundError,
)
from gymdesk.domain.model import (
    Enrollment,
    Payment,
    PaymentStatus,
    is_valid_method,
    to_money,
)

if TYPE_CHECKING:
    from datetime import date

    from gymdesk.domain.model import Instructor, PaymentMethod, Plan, Student

ENROLLMENT_ID_PREFIX: Final[str] = "MAT"
PAYMENT_ID_PREFIX: Final[str] = "PAG"

_TRAILING_NUMBER = re.compile(r"(\d+)$")

log = getLogger(__name__)


def sequence_number(identifier: str) -> int | None:
    """Return the trailing integer of a generated id (``MAT012`` -> 12)."""
    match = _TRAILING_NUMBER.search(identifier.strip())
    return int(match.group(1)) if match else None


class Gym:
    def __init__(self) -> None:
        self._students: list[Student] = []
        self._instructors: list[Instructor] = []
        self._plans: list[Plan] = []
        self._enrollments: list[Enrollment] = []
        self._payments: list[Payment] = []
        self._next_enrollment = 1
        self._next_payment = 1

    # students -------------------------------------------------------------

    def add_student(self, student: Student) -> None:
        if self._find_student(student.national_id) is not None:
            raise DuplicateRecordError(f"A student with id {student.national_id} already exists")
        self._students.append(student)

    def get_student(self, national_id: str) -> Student:
        student = self._find_student(national_id)
        if student is None:
            raise PersonNotFoundError("Student", national_id)
        return student

    def replace_student(self, student: Student) -> None:
        for index, current in enumerate(self._students):
            if current.national_id == student.national_id:
                self._students[index] = student
                return
        raise PersonNotFoundError("Student", student.national_id)

    def remove_student(self, national_id: str) -> bool:
        before = len(self._students)
        self._students = [s for s in self._students if s.national_id != national_id]
        return len(self._students) != before

    def list_students(self) -> list[Student]:
        return list(self._students)

    def _find_student(self, national_id: str) -> Student | None:
        return next((s for s in self._students if s.national_id == national_id), None)

    # instructors ----------------------------------------------------------

    def add_instructor(self, instructor: Instructor) -> None:
        if self._find_instructor(instructor.national_id) is not None:
            raise DuplicateRecordError(
                f"An instructor with id {instructor.national_id} already exists"
            )
        self._instructors.append(instructor)

    def get_instructor(self, national_id: str) -> Instructor:
        instructor = self._find_instructor(national_id)
        if instructor is None:
            raise PersonNotFoundError("Instructor", national_id)
        return instructor

    def replace_instructor(self, instructor: Instructor) -> None:
        for index, current in enumerate(self._instructors):
            if current.national_id == instructor.national_id:
                self._instructors[index] = instructor
                return
        raise PersonNotFoundError("Instructor", instructor.national_id)

    def remove_instructor(self, national_id: str) -> bool:
        before = len(self._instructors)
        self._instructors = [i for i in self._instructors if i.national_id != national_id]
        return len(self._instructors) != before

    def list_instructors(self) -> list[Instructor]:
        return list(self._instructors)

    def _find_instructor(self, national_id: str) -> Instructor | None:
        return next((i for i in self._instructors if i.national_id == national_id), None)

    # plans ----------------------------------------------------------------

    def add_plan(self, plan: Plan) -> None:
        if any(p.plan_id == plan.plan_id for p in self._plans):
            raise DuplicateRecordError(f"A plan with id {plan.plan_id} already exists")
        self._plans.append(plan)

    def get_plan(self, plan_id: str) -> Plan:
        for plan in self._plans:
            if plan.plan_id == plan_id:
                return plan
        raise PlanNotFoundError(plan_id)

    def remove_plan(self, plan_id: str) -> bool:
        before = len(self._plans)
        self._plans = [p for p in self._plans if p.plan_id != plan_id]
        return len(self._plans) != before

    def list_plans(self) -> list[Plan]:
        return list(self._plans)

    # enrollments ----------------------------------------------------------

    def enroll(
        self,
        student: Student,
        plan: Plan,
        start_date: date,
        end_date: date,
    ) -> Enrollment:
        """Open a new active enrollment and snapshot the plan's current price."""
        if self.active_enrollments_for(student.national_id):
            raise InvalidEnrollmentError(f"Student {student.name} already has an active enrollment")
        if start_date > end_date:
            raise InvalidEnrollmentError("Enrollment start date must not be after its end date")

        enrollment = Enrollment.open(
            enrollment_id=f"{ENROLLMENT_ID_PREFIX}{self._next_enrollment:03d}",
            student=student,
            plan=plan,
            start_date=start_date,
            end_date=end_date,
        )
        self._next_enrollment += 1
        student.enrollment_ref = enrollment.enrollment_id
        self._enrollments.append(enrollment)
        log.debug("Opened enrollment %s for %s", enrollment.enrollment_id, student.national_id)
        return enrollment

    def adopt_enrollment(self, enrollment: Enrollment) -> None:
        """Insert an enrollment that already carries an id (e.g. loaded from disk)."""
        if self._find_enrollment(enrollment.enrollment_id) is not None:
            raise DuplicateRecordError(
                f"An enrollment with id {enrollment.enrollment_id} already exists"
            )
        if enrollment.is_active and self.active_enrollments_for(enrollment.student.national_id):
            raise InvalidEnrollmentError(
                f"Student {enrollment.student.national_id} already has an active enrollment"
            )
        self._enrollments.append(enrollment)

    def get_enrollment(self, enrollment_id: str) -> Enrollment:
        enrollment = self._find_enrollment(enrollment_id)
        if enrollment is None:
            raise EnrollmentNotFoundError(enrollment_id)
        return enrollment

    def suspend_enrollment(self, enrollment_id: str) -> bool:
        return self.get_enrollment(enrollment_id).suspend()

    def reactivate_enrollment(self, enrollment_id: str) -> bool:
        enrollment = self.get_enrollment(enrollment_id)
        others = [
            e
            for e in self.active_enrollments_for(enrollment.student.national_id)
            if e.enrollment_id != enrollment_id
        ]
        if others:
            raise InvalidEnrollmentError(
                f"Student {enrollment.student.name} already has an active enrollment"
            )
        return enrollment.reactivate()

    def cancel_enrollment(self, enrollment_id: str) -> bool:
        return self.get_enrollment(enrollment_id).cancel()

    def list_enrollments(self) -> list[Enrollment]:
        return list(self._enrollments)

    def active_enrollments_for(self, national_id: str) -> list[Enrollment]:
        return [
            e for e in self._enrollments if e.student.national_id == national_id and e.is_active
        ]

    def _find_enrollment(self, enrollment_id: str) -> Enrollment | None:
        return next((e for e in self._enrollments if e.enrollment_id == enrollment_id), None)

    # payments -------------------------------------------------------------

    def record_payment(
        self,
        enrollment: Enrollment,
        method: PaymentMethod,
        amount: Decimal,
        paid_on: date,
    ) -> Payment:
        if not is_valid_method(method):
            raise InvalidPaymentError("Payment method details are invalid")
        if amount <= 0:
            raise InvalidPaymentError("Payment amount must be greater than zero")

        payment = Payment(
            payment_id=f"{PAYMENT_ID_PREFIX}{self._next_payment:03d}",
            enrollment=enrollment,
            method=method,
            amount=to_money(amount),
            paid_on=paid_on,
            status=PaymentStatus.CONFIRMED,
        )
        self._next_payment += 1
        self._payments.append(payment)
        return payment

    def adopt_payment(self, payment: Payment) -> None:
        if self._find_payment(payment.payment_id) is not None:
            raise DuplicateRecordError(f"A payment with id {payment.payment_id} already exists")
        self._payments.append(payment)

    def get_payment(self, payment_id: str) -> Payment:
        payment = self._find_payment(payment_id)
        if payment is None:
            raise PaymentNotFoundError(payment_id)
        return payment

    def confirm_payment(self, payment_id: str) -> bool:
        return self.get_payment(payment_id).confirm()

    def reverse_payment(self, payment_id: str) -> bool:
        return self.get_payment(payment_id).reverse()

    def list_payments(self) -> list[Payment]:
        return list(self._payments)

    def payments_for(self, enrollment_id: str) -> list[Payment]:
        return [p for p in self._payments if p.enrollment.enrollment_id == enrollment_id]

    def confirmed_total(self, enrollment_id: str) -> Decimal:
        return sum(
            (p.amount for p in self.payments_for(enrollment_id) if p.is_confirmed),
            start=Decimal("0.00"),
        )

    def _find_payment(self, payment_id: str) -> Payment | None:
        return next((p for p in self._payments if p.payment_id == payment_id), None)

    # counters -------------------------------------------------------------

    @property
    def next_enrollment_number(self) -> int:
        return self._next_enrollment

    @property
    def next_payment_number(self) -> int:
        return self._next_payment

    def advance_counters(self, *, last_enrollment: int = 0, last_payment: int = 0) -> None:
        """Move the id counters past the given numbers; counters never go backwards."""
        self._next_enrollment = max(self._next_enrollment, last_enrollment + 1)
        self._next_payment = max(self._next_payment, last_payment + 1)

    def clear(self) -> None:
        self._students.clear()
        self._instructors.clear()
        self._plans.clear()
        self._enrollments.clear()
        self._payments.clear()
        self._next_enrollment = 1
        self._next_payment = 1
