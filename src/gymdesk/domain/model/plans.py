"""Subscription plans.

``Plan`` is a closed union of three variants. The price of a plan is computed by
``final_price`` alone, dispatching on the variant.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import ClassVar, Final, assert_never

from gymdesk.domain.errors import InvalidDataError
from gymdesk.domain.model.enums import PlanType
from gymdesk.domain.model.money import to_money

PREMIUM_MULTIPLIER: Final[Decimal] = Decimal("1.5")
STUDENT_DISCOUNT_MULTIPLIER: Final[Decimal] = Decimal("0.7")


@dataclass(kw_only=True)
class PlanBase:
    plan_id: str
    name: str
    base_price: Decimal
    duration_days: int

    PLAN_TYPE: ClassVar[PlanType]

    def __post_init__(self) -> None:
        if not self.plan_id.strip():
            raise InvalidDataError("Plan id must not be blank")
        self.base_price = to_money(self.base_price)
        if self.base_price <= 0:
            raise InvalidDataError(f"Plan base price must be positive, got {self.base_price}")
        if self.duration_days <= 0:
            raise InvalidDataError(
                f"Plan duration must be a positive number of days, got {self.duration_days}"
            )

    @property
    def plan_type(self) -> PlanType:
        return self.PLAN_TYPE


@dataclass(kw_only=True)
class StandardPlan(PlanBase):
    PLAN_TYPE: ClassVar[PlanType] = PlanType.STANDARD


@dataclass(kw_only=True)
class PremiumPlan(PlanBase):
    PLAN_TYPE: ClassVar[PlanType] = PlanType.PREMIUM


@dataclass(kw_only=True)
class StudentPlan(PlanBase):
    """Discounted plan for enrolled university/school students."""

    PLAN_TYPE: ClassVar[PlanType] = PlanType.STUDENT


type Plan = StandardPlan | PremiumPlan | StudentPlan


def final_price(plan: Plan) -> Decimal:
    match plan:
        case StandardPlan():
            return plan.base_price
        case PremiumPlan():
            return plan.base_price * PREMIUM_MULTIPLIER
        case StudentPlan():
            return plan.base_price * STUDENT_DISCOUNT_MULTIPLIER
        case _:
            assert_never(plan)
