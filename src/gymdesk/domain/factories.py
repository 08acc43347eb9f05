"""Build concrete plan and payment-method variants from their type tags.

Both families are closed: an unknown tag is always an error and never falls
back to a default variant.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, assert_never

from gymdesk.domain.errors import UnknownVariantError
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
from gymdesk.domain.model.payment_methods import DETAIL_SEPARATOR

if TYPE_CHECKING:
    from decimal import Decimal

    from gymdesk.domain.model import PaymentMethod, Plan


def plan_type_from_tag(tag: str) -> PlanType:
    try:
        return PlanType(tag.strip().upper())
    except ValueError:
        raise UnknownVariantError("plan", tag) from None


def payment_method_type_from_tag(tag: str) -> PaymentMethodType:
    try:
        return PaymentMethodType(tag.strip().upper())
    except ValueError:
        raise UnknownVariantError("payment method", tag) from None


def build_plan(
    tag: str | PlanType,
    *,
    plan_id: str,
    name: str,
    base_price: Decimal,
    duration_days: int,
) -> Plan:
    plan_type = tag if isinstance(tag, PlanType) else plan_type_from_tag(tag)
    match plan_type:
        case PlanType.STANDARD:
            cls = StandardPlan
        case PlanType.PREMIUM:
            cls = PremiumPlan
        case PlanType.STUDENT:
            cls = StudentPlan
        case _:
            assert_never(plan_type)
    return cls(plan_id=plan_id, name=name, base_price=base_price, duration_days=duration_days)


def build_payment_method(tag: str | PaymentMethodType, detail: str = "") -> PaymentMethod:
    """Rebuild a payment method from its tag and stored detail string.

    Only the card variant reads the detail: the card kind follows the first ``:``.
    """

    method = tag if isinstance(tag, PaymentMethodType) else payment_method_type_from_tag(tag)
    match method:
        case PaymentMethodType.PIX:
            return PixPayment()
        case PaymentMethodType.CASH:
            return CashPayment()
        case PaymentMethodType.CARD:
            _, separator, kind = detail.partition(DETAIL_SEPARATOR)
            return CardPayment(card_kind=kind.strip() if separator else "")
        case _:
            assert_never(method)
