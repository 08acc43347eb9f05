"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import (
    EnrollmentStore,
    InstructorStore,
    PaymentStore,
    PlanStore,
    RecordLookup,
    RecordStore,
    StudentStore,
)

__all__ = [
    "EnrollmentStore",
    "InstructorStore",
    "PaymentStore",
    "PlanStore",
    "RecordLookup",
    "RecordStore",
    "StudentStore",
]
