"""Public domain model surface."""

from __future__ import annotations

from gymdesk.domain.model.enrollment import Enrollment
from gymdesk.domain.model.enums import (
    EnrollmentStatus,
    PaymentMethodType,
    PaymentStatus,
    PersonKind,
    PlanType,
)
from gymdesk.domain.model.money import CENT, ZERO, Money, to_money
from gymdesk.domain.model.payment import Payment
from gymdesk.domain.model.payment_methods import (
    CardPayment,
    CashPayment,
    PaymentMethod,
    PixPayment,
    describe_method,
    is_valid_method,
    method_detail,
    method_type,
)
from gymdesk.domain.model.people import Instructor, Person, PersonBase, Student
from gymdesk.domain.model.plans import (
    PREMIUM_MULTIPLIER,
    STUDENT_DISCOUNT_MULTIPLIER,
    Plan,
    PlanBase,
    PremiumPlan,
    StandardPlan,
    StudentPlan,
    final_price,
)

__all__ = [  # noqa: RUF022
    # people
    "PersonBase",
    "Person",
    "Student",
    "Instructor",
    # plans
    "PlanBase",
    "Plan",
    "StandardPlan",
    "PremiumPlan",
    "StudentPlan",
    "final_price",
    "PREMIUM_MULTIPLIER",
    "STUDENT_DISCOUNT_MULTIPLIER",
    # payment methods
    "PaymentMethod",
    "PixPayment",
    "CardPayment",
    "CashPayment",
    "method_type",
    "is_valid_method",
    "method_detail",
    "describe_method",
    # composites
    "Enrollment",
    "Payment",
    # enums
    "EnrollmentStatus",
    "PaymentMethodType",
    "PaymentStatus",
    "PersonKind",
    "PlanType",
    # money
    "Money",
    "CENT",
    "ZERO",
    "to_money",
]
