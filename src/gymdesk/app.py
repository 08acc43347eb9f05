"""Application orchestration entry points.

The registry enforces the business rules and the stores handle durability; the
functions here compose the two: mutate the registry first, then write the
matching store. A failed write is logged and reported through ``persisted``.
Record lines are rendered before the registry is touched, so a value the file
format cannot hold is refused with nothing changed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from gymdesk.adapters.flatfile import (
    FlatFileEnrollmentStore,
    FlatFileInstructorStore,
    FlatFilePaymentStore,
    FlatFilePlanStore,
    FlatFileStudentStore,
)
from gymdesk.config import get_storage_config
from gymdesk.domain.errors import DuplicateRecordError, InvalidEnrollmentError, NotFoundError
from gymdesk.domain.model import EnrollmentStatus
from gymdesk.domain.registry import Gym, sequence_number

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from decimal import Decimal

    from gymdesk.adapters.flatfile import LoadResult
    from gymdesk.config import StorageConfig
    from gymdesk.domain.model import (
        Enrollment,
        Instructor,
        Payment,
        PaymentMethod,
        Plan,
        Student,
    )


log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GymStores:
    students: FlatFileStudentStore
    instructors: FlatFileInstructorStore
    plans: FlatFilePlanStore
    enrollments: FlatFileEnrollmentStore
    payments: FlatFilePaymentStore


def open_stores(storage: StorageConfig | None = None) -> GymStores:
    """Open every store, siblings first so the dependent stores can resolve references."""

    config = storage or get_storage_config()
    config.ensure_data_dir()
    students = FlatFileStudentStore(config.students_path())
    instructors = FlatFileInstructorStore(config.instructors_path())
    plans = FlatFilePlanStore(config.plans_path())
    enrollments = FlatFileEnrollmentStore(
        config.enrollments_path(), students=students, plans=plans
    )
    payments = FlatFilePaymentStore(config.payments_path(), enrollments=enrollments)
    return GymStores(
        students=students,
        instructors=instructors,
        plans=plans,
        enrollments=enrollments,
        payments=payments,
    )


@dataclass(slots=True)
class FamilyLoad:
    loaded: int = 0
    skipped: int = 0
    duplicates: int = 0
    orphaned: int = 0


@dataclass(slots=True)
class LoadReport:
    """Per-family counts from ``load_gym``.

    ``skipped`` counts unreadable lines, ``duplicates`` counts readable records the
    registry refused (repeated ids, a second active enrollment) and ``orphaned``
    counts records whose referenced record did not make it into the registry.
    """

    students: FamilyLoad = field(default_factory=FamilyLoad)
    instructors: FamilyLoad = field(default_factory=FamilyLoad)
    plans: FamilyLoad = field(default_factory=FamilyLoad)
    enrollments: FamilyLoad = field(default_factory=FamilyLoad)
    payments: FamilyLoad = field(default_factory=FamilyLoad)

    @property
    def total_skipped(self) -> int:
        return sum(f.skipped + f.duplicates + f.orphaned for f in self._families())

    @property
    def total_loaded(self) -> int:
        return sum(f.loaded for f in self._families())

    def _families(self) -> tuple[FamilyLoad, ...]:
        return (self.students, self.instructors, self.plans, self.enrollments, self.payments)


def _adopt_all[T](
    records: Iterable[T],
    adopt: Callable[[T], None],
    counts: FamilyLoad,
    label: str,
) -> None:
    for record in records:
        try:
            adopt(record)
        except (DuplicateRecordError, InvalidEnrollmentError) as exc:
            counts.duplicates += 1
            log.warning("Skipping %s while loading: %s", label, exc)
        else:
            counts.loaded += 1


def _load_family[T](
    result: LoadResult[T],
    adopt: Callable[[T], None],
    counts: FamilyLoad,
    label: str,
) -> None:
    counts.skipped = len(result.skipped)
    _adopt_all(result.records, adopt, counts, label)


def _linked[T](
    records: Iterable[T],
    relink: Callable[[T], bool],
    counts: FamilyLoad,
    label: str,
) -> list[T]:
    kept: list[T] = []
    for record in records:
        if relink(record):
            kept.append(record)
        else:
            counts.orphaned += 1
            log.warning("Skipping %s while loading: its reference was not loaded", label)
    return kept


def load_gym(stores: GymStores, gym: Gym | None = None) -> tuple[Gym, LoadReport]:
    """Fill a registry from the data files.

    Repeated records keep the first copy; later ones are counted, not fatal. Loaded
    enrollments and payments are relinked to the registry's own instances so the
    session works on a single object graph; a record whose referenced record was
    refused is dropped and counted as orphaned. Id counters are moved past the
    highest ids found on disk.
    """

    registry = gym or Gym()
    report = LoadReport()

    _load_family(stores.students.load(), registry.add_student, report.students, "student")
    _load_family(
        stores.instructors.load(), registry.add_instructor, report.instructors, "instructor"
    )
    _load_family(stores.plans.load(), registry.add_plan, report.plans, "plan")

    enrollments = stores.enrollments.load()
    report.enrollments.skipped = len(enrollments.skipped)
    _adopt_all(
        _linked(
            enrollments.records,
            partial(_relink_enrollment, registry),
            report.enrollments,
            "enrollment",
        ),
        registry.adopt_enrollment,
        report.enrollments,
        "enrollment",
    )

    payments = stores.payments.load()
    report.payments.skipped = len(payments.skipped)
    _adopt_all(
        _linked(payments.records, partial(_relink_payment, registry), report.payments, "payment"),
        registry.adopt_payment,
        report.payments,
        "payment",
    )

    registry.advance_counters(
        last_enrollment=_highest_number(e.enrollment_id for e in enrollments.records),
        last_payment=_highest_number(p.payment_id for p in payments.records),
    )
    log.info(
        "Loaded %d record(s), skipped %d", report.total_loaded, report.total_skipped
    )
    return registry, report


def _relink_enrollment(gym: Gym, enrollment: Enrollment) -> bool:
    try:
        enrollment.student = gym.get_student(enrollment.student.national_id)
        enrollment.plan = gym.get_plan(enrollment.plan.plan_id)
    except NotFoundError:
        return False
    return True


def _relink_payment(gym: Gym, payment: Payment) -> bool:
    try:
        payment.enrollment = gym.get_enrollment(payment.enrollment.enrollment_id)
    except NotFoundError:
        return False
    return True


def _highest_number(identifiers: Iterable[str]) -> int:
    numbers = [n for n in (sequence_number(i) for i in identifiers) if n is not None]
    return max(numbers, default=0)


@dataclass(frozen=True)
class Outcome[T]:
    """Result of a registry mutation followed by a store write."""

    value: T
    changed: bool = True
    persisted: bool = True


def _stored(ok: bool, what: str, key: str) -> bool:  # noqa: FBT001
    if not ok:
        log.error("Could not persist %s %s", what, key)
    return ok


def register_student(gym: Gym, stores: GymStores, student: Student) -> Outcome[Student]:
    stores.students.render(student)
    gym.add_student(student)
    ok = stores.students.add(student)
    return Outcome(student, persisted=_stored(ok, "student", student.national_id))


def update_student(gym: Gym, stores: GymStores, student: Student) -> Outcome[Student]:
    stores.students.render(student)
    gym.replace_student(student)
    ok = stores.students.update(student)
    return Outcome(student, persisted=_stored(ok, "student", student.national_id))


def register_instructor(
    gym: Gym, stores: GymStores, instructor: Instructor
) -> Outcome[Instructor]:
    stores.instructors.render(instructor)
    gym.add_instructor(instructor)
    ok = stores.instructors.add(instructor)
    return Outcome(instructor, persisted=_stored(ok, "instructor", instructor.national_id))


def update_instructor(
    gym: Gym, stores: GymStores, instructor: Instructor
) -> Outcome[Instructor]:
    stores.instructors.render(instructor)
    gym.replace_instructor(instructor)
    ok = stores.instructors.update(instructor)
    return Outcome(instructor, persisted=_stored(ok, "instructor", instructor.national_id))


def register_plan(gym: Gym, stores: GymStores, plan: Plan) -> Outcome[Plan]:
    stores.plans.render(plan)
    gym.add_plan(plan)
    return Outcome(plan, persisted=_stored(stores.plans.add(plan), "plan", plan.plan_id))


def enroll_student(
    gym: Gym,
    stores: GymStores,
    *,
    national_id: str,
    plan_id: str,
    start_date: date,
    end_date: date,
) -> Outcome[Enrollment]:
    student = gym.get_student(national_id)
    plan = gym.get_plan(plan_id)
    enrollment = gym.enroll(student, plan, start_date, end_date)
    ok = stores.enrollments.add(enrollment)
    # the student row carries the id of its latest enrollment
    ok = stores.students.update(student) and ok
    log.info(
        "Enrolled %s in %s as %s (R$ %s/month)",
        student.national_id,
        plan.plan_id,
        enrollment.enrollment_id,
        enrollment.monthly_price,
    )
    return Outcome(enrollment, persisted=_stored(ok, "enrollment", enrollment.enrollment_id))


def change_enrollment_status(
    gym: Gym,
    stores: GymStores,
    enrollment_id: str,
    target: EnrollmentStatus,
) -> Outcome[Enrollment]:
    """Apply the transition leading to ``target``; an illegal transition changes nothing."""

    match target:
        case EnrollmentStatus.SUSPENDED:
            changed = gym.suspend_enrollment(enrollment_id)
        case EnrollmentStatus.ACTIVE:
            changed = gym.reactivate_enrollment(enrollment_id)
        case EnrollmentStatus.CANCELLED:
            changed = gym.cancel_enrollment(enrollment_id)
        case EnrollmentStatus.EXPIRED:
            raise InvalidEnrollmentError("Expiry follows from the end date and cannot be set")
    enrollment = gym.get_enrollment(enrollment_id)
    if not changed:
        return Outcome(enrollment, changed=False, persisted=False)
    ok = stores.enrollments.update(enrollment)
    return Outcome(enrollment, persisted=_stored(ok, "enrollment", enrollment_id))


def record_payment(
    gym: Gym,
    stores: GymStores,
    *,
    enrollment_id: str,
    method: PaymentMethod,
    amount: Decimal,
    paid_on: date | None = None,
) -> Outcome[Payment]:
    enrollment = gym.get_enrollment(enrollment_id)
    payment = gym.record_payment(enrollment, method, amount, paid_on or date.today())
    ok = stores.payments.add(payment)
    return Outcome(payment, persisted=_stored(ok, "payment", payment.payment_id))


def reverse_payment(gym: Gym, stores: GymStores, payment_id: str) -> Outcome[Payment]:
    changed = gym.reverse_payment(payment_id)
    payment = gym.get_payment(payment_id)
    if not changed:
        return Outcome(payment, changed=False, persisted=False)
    ok = stores.payments.update(payment)
    return Outcome(payment, persisted=_stored(ok, "payment", payment_id))


def save_all(gym: Gym, stores: GymStores) -> bool:
    """Rewrite every data file from the registry's current state."""

    results = [
        stores.students.replace_all(gym.list_students()),
        stores.instructors.replace_all(gym.list_instructors()),
        stores.plans.replace_all(gym.list_plans()),
        stores.enrollments.replace_all(gym.list_enrollments()),
        stores.payments.replace_all(gym.list_payments()),
    ]
    return all(results)
