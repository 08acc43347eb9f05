"""Monetary helpers.

Amounts are ``Decimal`` throughout and are stored with two decimal places.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Final

type Money = Decimal

CENT: Final[Decimal] = Decimal("0.01")
ZERO: Final[Decimal] = Decimal("0.00")


def to_money(value: Decimal | int | str) -> Money:
    """Quantise a value to cents, rounding halves away from zero."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
