"""Payment methods embedded in payments.

Methods are value objects without identity. ``PaymentMethod`` is a closed union;
validity, serialisation detail and display text dispatch on the variant.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, assert_never

from gymdesk.domain.model.enums import PaymentMethodType

DETAIL_SEPARATOR = ":"


@dataclass(frozen=True)
class PixPayment:
    METHOD_TYPE: ClassVar[PaymentMethodType] = PaymentMethodType.PIX


@dataclass(frozen=True)
class CardPayment:
    METHOD_TYPE: ClassVar[PaymentMethodType] = PaymentMethodType.CARD

    card_kind: str = ""


@dataclass(frozen=True)
class CashPayment:
    METHOD_TYPE: ClassVar[PaymentMethodType] = PaymentMethodType.CASH


type PaymentMethod = PixPayment | CardPayment | CashPayment


def method_type(method: PaymentMethod) -> PaymentMethodType:
    return method.METHOD_TYPE


def is_valid_method(method: PaymentMethod) -> bool:
    match method:
        case CardPayment(card_kind=kind):
            return bool(kind.strip())
        case PixPayment() | CashPayment():
            return True
        case _:
            assert_never(method)


def method_detail(method: PaymentMethod) -> str:
    """Detail string written next to the method tag in the payments file."""
    match method:
        case CardPayment(card_kind=kind):
            return f"{PaymentMethodType.CARD}{DETAIL_SEPARATOR}{kind}"
        case PixPayment() | CashPayment():
            return str(method.METHOD_TYPE)
        case _:
            assert_never(method)


def describe_method(method: PaymentMethod) -> str:
    match method:
        case PixPayment():
            return "Pagamento via PIX"
        case CardPayment(card_kind=kind):
            return f"Cartão de {kind}"
        case CashPayment():
            return "Pagamento em dinheiro"
        case _:
            assert_never(method)
