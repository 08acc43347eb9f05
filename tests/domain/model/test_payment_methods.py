from __future__ import annotations

from gymdesk.domain.model import (
    CardPayment,
    CashPayment,
    PaymentMethodType,
    PixPayment,
    describe_method,
    is_valid_method,
    method_detail,
    method_type,
)


def test_card_requires_a_kind() -> None:
    assert is_valid_method(CardPayment(card_kind="Crédito"))
    assert not is_valid_method(CardPayment(card_kind="  "))
    assert not is_valid_method(CardPayment())


def test_pix_and_cash_are_always_valid() -> None:
    assert is_valid_method(PixPayment())
    assert is_valid_method(CashPayment())


def test_method_detail_strings() -> None:
    assert method_detail(CardPayment(card_kind="Débito")) == "CARTAO:Débito"
    assert method_detail(PixPayment()) == "PIX"
    assert method_detail(CashPayment()) == "DINHEIRO"


def test_describe_method() -> None:
    assert describe_method(PixPayment()) == "Pagamento via PIX"
    assert describe_method(CardPayment(card_kind="Crédito")) == "Cartão de Crédito"
    assert describe_method(CashPayment()) == "Pagamento em dinheiro"


def test_methods_are_values() -> None:
    assert CardPayment(card_kind="Crédito") == CardPayment(card_kind="Crédito")
    assert method_type(CashPayment()) is PaymentMethodType.CASH
