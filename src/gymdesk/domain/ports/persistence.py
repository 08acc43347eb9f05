"""Ports for persisting domain entities."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from gymdesk.domain.model import Enrollment, Instructor, Payment, Plan, Student

if TYPE_CHECKING:
    from collections.abc import Iterable


@runtime_checkable
class RecordLookup[TEntity](Protocol):
    """Read-only lookup used to resolve references while reading another store."""

    def find_by_id(self, key: str) -> TEntity | None: ...


@runtime_checkable
class RecordStore[TEntity](RecordLookup[TEntity], Protocol):
    """Durable CRUD over one entity family.

    Absence is reported as ``None``/``False``, never raised.
    """

    def list_all(self) -> list[TEntity]: ...

    def render(self, entity: TEntity) -> str: ...

    def add(self, entity: TEntity) -> bool: ...

    def update(self, entity: TEntity) -> bool: ...

    def remove(self, key: str) -> bool: ...

    def replace_all(self, entities: Iterable[TEntity]) -> bool: ...

    def count(self) -> int: ...

    def clear(self) -> bool: ...


@runtime_checkable
class StudentStore(RecordStore[Student], Protocol):
    """Persistence contract for students."""


@runtime_checkable
class InstructorStore(RecordStore[Instructor], Protocol):
    """Persistence contract for instructors."""


@runtime_checkable
class PlanStore(RecordStore[Plan], Protocol):
    """Persistence contract for plans."""


@runtime_checkable
class EnrollmentStore(RecordStore[Enrollment], Protocol):
    """Persistence contract for enrollments."""


@runtime_checkable
class PaymentStore(RecordStore[Payment], Protocol):
    """Persistence contract for payments."""
