"""Validation and normalisation of national IDs (CPF) and e-mail addresses."""

from __future__ import annotations

import re
from typing import Final

NATIONAL_ID_DIGITS: Final[int] = 11
EMAIL_MIN_LENGTH: Final[int] = 6
EMAIL_MAX_LENGTH: Final[int] = 254

_NON_DIGITS = re.compile(r"[^0-9]")
_EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")


def normalize_national_id(value: str | None) -> str:
    """Strip punctuation and whitespace, keeping digits only."""
    if value is None:
        return ""
    return _NON_DIGITS.sub("", value)


def is_valid_national_id(value: str | None) -> bool:
    """Only the digit count is checked; verifier digits are not computed."""
    if value is None or not value.strip():
        return False
    return len(normalize_national_id(value)) == NATIONAL_ID_DIGITS


def format_national_id(value: str | None) -> str:
    digits = normalize_national_id(value)
    if len(digits) != NATIONAL_ID_DIGITS:
        return digits
    return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"


def is_valid_email(value: str | None) -> bool:
    if value is None:
        return False
    candidate = value.strip()
    if not EMAIL_MIN_LENGTH <= len(candidate) <= EMAIL_MAX_LENGTH:
        return False
    return _EMAIL_PATTERN.fullmatch(candidate) is not None


def normalize_email(value: str | None) -> str:
    if value is None:
        return ""
    return value.strip().lower()
