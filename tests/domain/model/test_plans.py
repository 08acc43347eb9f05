from __future__ import annotations

from decimal import Decimal

import pytest

from gymdesk.domain.errors import InvalidDataError
from gymdesk.domain.model import (
    PlanType,
    PremiumPlan,
    StandardPlan,
    StudentPlan,
    final_price,
)


def test_standard_plan_costs_its_base_price(standard_plan: StandardPlan) -> None:
    assert final_price(standard_plan) == Decimal("80.00")


def test_premium_plan_costs_one_and_a_half_times_base(premium_plan: PremiumPlan) -> None:
    assert final_price(premium_plan) == Decimal("150.00")


def test_student_plan_gets_thirty_percent_off(student_plan: StudentPlan) -> None:
    assert final_price(student_plan) == Decimal("63.00")


def test_plan_type_matches_variant(
    standard_plan: StandardPlan, premium_plan: PremiumPlan, student_plan: StudentPlan
) -> None:
    assert standard_plan.plan_type is PlanType.STANDARD
    assert premium_plan.plan_type is PlanType.PREMIUM
    assert student_plan.plan_type is PlanType.STUDENT
    assert str(PlanType.STUDENT) == "ESTUDANTE"


@pytest.mark.parametrize(
    ("plan_id", "price", "days"),
    [
        ("P1", Decimal(0), 30),
        ("P1", Decimal("-10"), 30),
        ("P1", Decimal(100), 0),
        ("  ", Decimal(100), 30),
    ],
)
def test_plan_rejects_invalid_values(plan_id: str, price: Decimal, days: int) -> None:
    with pytest.raises(InvalidDataError):
        StandardPlan(plan_id=plan_id, name="Mensal", base_price=price, duration_days=days)


def test_plan_price_is_kept_in_cents() -> None:
    plan = StandardPlan(plan_id="P1", name="Mensal", base_price=Decimal("10.005"), duration_days=30)

    assert plan.base_price == Decimal("10.01")


def test_plan_price_below_one_cent_is_rejected() -> None:
    with pytest.raises(InvalidDataError):
        StandardPlan(plan_id="P1", name="Mensal", base_price=Decimal("0.004"), duration_days=30)
