"""Domain error taxonomy.

Validation errors are raised before anything is mutated. Not-found errors are a
separate branch so callers can tell "does not exist yet" apart from bad input.
Format and referential errors are raised while reading a single stored line and
are contained to that line by the record store.
"""

from __future__ import annotations


class GymError(Exception):
    """Base class for every domain error."""


class InvalidDataError(GymError, ValueError):
    """Raised when input data breaks a domain rule."""


class DuplicateRecordError(InvalidDataError):
    """Raised when an identity is already registered."""


class InvalidEnrollmentError(InvalidDataError):
    """Raised when an enrollment cannot be created or transitioned."""


class InvalidPaymentError(InvalidDataError):
    """Raised when a payment cannot be recorded."""


class RecordFormatError(InvalidDataError):
    """Raised when a stored line does not have the expected shape."""


class UnknownVariantError(RecordFormatError):
    """Raised for a type tag outside a closed variant family."""

    def __init__(self, family: str, tag: str) -> None:
        super().__init__(f"Unknown {family} type: {tag!r}")
        self.family = family
        self.tag = tag


class NotFoundError(GymError, LookupError):
    """Raised when a lookup by identity misses."""

    def __init__(self, kind: str, key: str) -> None:
        super().__init__(f"{kind} {key!r} not found")
        self.kind = kind
        self.key = key


class PersonNotFoundError(NotFoundError):
    pass


class PlanNotFoundError(NotFoundError):
    def __init__(self, key: str) -> None:
        super().__init__("Plan", key)


class EnrollmentNotFoundError(NotFoundError):
    def __init__(self, key: str) -> None:
        super().__init__("Enrollment", key)


class PaymentNotFoundError(NotFoundError):
    def __init__(self, key: str) -> None:
        super().__init__("Payment", key)


class ReferentialIntegrityError(GymError):
    """Raised when a stored record references an identity missing from its sibling store."""

    def __init__(self, kind: str, key: str) -> None:
        super().__init__(f"Referenced {kind} {key!r} does not exist")
        self.kind = kind
        self.key = key
