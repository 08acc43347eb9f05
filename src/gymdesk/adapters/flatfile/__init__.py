"""Public interface for the flat-file persistence adapter."""

from __future__ import annotations

from .repositories import (
    FlatFileEnrollmentStore,
    FlatFileInstructorStore,
    FlatFilePaymentStore,
    FlatFilePlanStore,
    FlatFileStudentStore,
)
from .store import FlatFileStore, LoadResult, SkippedLine

__all__ = [
    "FlatFileEnrollmentStore",
    "FlatFileInstructorStore",
    "FlatFilePaymentStore",
    "FlatFilePlanStore",
    "FlatFileStore",
    "FlatFileStudentStore",
    "LoadResult",
    "SkippedLine",
]
