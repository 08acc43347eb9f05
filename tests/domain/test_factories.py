from __future__ import annotations

from decimal import Decimal

import pytest

from gymdesk.domain.errors import InvalidDataError, UnknownVariantError
from gymdesk.domain.factories import (
    build_payment_method,
    build_plan,
    payment_method_type_from_tag,
    plan_type_from_tag,
)
from gymdesk.domain.model import (
    CardPayment,
    CashPayment,
    PaymentMethodType,
    PixPayment,
    PlanType,
    PremiumPlan,
    StandardPlan,
    StudentPlan,
)


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("COMUM", StandardPlan),
        ("PREMIUM", PremiumPlan),
        ("ESTUDANTE", StudentPlan),
        (" premium ", PremiumPlan),
        (PlanType.STUDENT, StudentPlan),
    ],
)
def test_build_plan_selects_variant(tag: str | PlanType, expected: type) -> None:
    plan = build_plan(
        tag, plan_id="P1", name="Plano", base_price=Decimal("100.00"), duration_days=30
    )

    assert type(plan) is expected
    assert plan.plan_id == "P1"


def test_build_plan_rejects_unknown_tag() -> None:
    with pytest.raises(UnknownVariantError) as excinfo:
        build_plan("GOLD", plan_id="P1", name="Plano", base_price=Decimal(100), duration_days=30)

    assert "GOLD" in str(excinfo.value)
    assert isinstance(excinfo.value, InvalidDataError)


def test_build_plan_still_validates_fields() -> None:
    with pytest.raises(InvalidDataError):
        build_plan("COMUM", plan_id="P1", name="Plano", base_price=Decimal(0), duration_days=30)


def test_tag_lookup_helpers() -> None:
    assert plan_type_from_tag("comum") is PlanType.STANDARD
    assert payment_method_type_from_tag("cartao") is PaymentMethodType.CARD
    with pytest.raises(UnknownVariantError):
        payment_method_type_from_tag("BOLETO")


def test_build_payment_method_variants() -> None:
    assert build_payment_method("PIX") == PixPayment()
    assert build_payment_method("DINHEIRO", "DINHEIRO") == CashPayment()
    assert build_payment_method("CARTAO", "CARTAO:Crédito") == CardPayment(card_kind="Crédito")


def test_card_detail_splits_on_first_separator_only() -> None:
    method = build_payment_method(PaymentMethodType.CARD, "CARTAO:Débito:extra")

    assert method == CardPayment(card_kind="Débito:extra")


def test_card_detail_without_separator_has_no_kind() -> None:
    assert build_payment_method("CARTAO", "CARTAO") == CardPayment(card_kind="")


def test_build_payment_method_rejects_unknown_tag() -> None:
    with pytest.raises(UnknownVariantError):
        build_payment_method("CHEQUE")
