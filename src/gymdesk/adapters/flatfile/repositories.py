"""Concrete flat-file stores, one per entity family.

Enrollment and payment stores receive their sibling stores at construction time
and use them to resolve stored ids into live entities while reading.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gymdesk.domain.model import Enrollment, Instructor, Payment, Plan, Student

from .schema import (
    ENROLLMENT_HEADER,
    INSTRUCTOR_HEADER,
    PAYMENT_HEADER,
    PLAN_HEADER,
    STUDENT_HEADER,
)
from .store import FlatFileStore
from .translator import (
    format_enrollment,
    format_instructor,
    format_payment,
    format_plan,
    format_student,
    parse_enrollment,
    parse_instructor,
    parse_payment,
    parse_plan,
    parse_student,
)

if TYPE_CHECKING:
    from pathlib import Path

    from gymdesk.domain.ports import RecordLookup


def _student_id(student: Student) -> str:
    return student.national_id


def _instructor_id(instructor: Instructor) -> str:
    return instructor.national_id


def _plan_id(plan: Plan) -> str:
    return plan.plan_id


def _enrollment_id(enrollment: Enrollment) -> str:
    return enrollment.enrollment_id


def _payment_id(payment: Payment) -> str:
    return payment.payment_id


class FlatFileStudentStore(FlatFileStore[Student]):
    def __init__(self, path: Path | str) -> None:
        super().__init__(
            path,
            header=STUDENT_HEADER,
            parse=parse_student,
            format=format_student,
            identity_of=_student_id,
        )


class FlatFileInstructorStore(FlatFileStore[Instructor]):
    def __init__(self, path: Path | str) -> None:
        super().__init__(
            path,
            header=INSTRUCTOR_HEADER,
            parse=parse_instructor,
            format=format_instructor,
            identity_of=_instructor_id,
        )


class FlatFilePlanStore(FlatFileStore[Plan]):
    def __init__(self, path: Path | str) -> None:
        super().__init__(
            path,
            header=PLAN_HEADER,
            parse=parse_plan,
            format=format_plan,
            identity_of=_plan_id,
        )


class FlatFileEnrollmentStore(FlatFileStore[Enrollment]):
    def __init__(
        self,
        path: Path | str,
        *,
        students: RecordLookup[Student],
        plans: RecordLookup[Plan],
    ) -> None:
        self.students = students
        self.plans = plans
        super().__init__(
            path,
            header=ENROLLMENT_HEADER,
            parse=self._parse_line,
            format=format_enrollment,
            identity_of=_enrollment_id,
        )

    def _parse_line(self, line: str) -> Enrollment:
        return parse_enrollment(
            line,
            resolve_student=self.students.find_by_id,
            resolve_plan=self.plans.find_by_id,
        )


class FlatFilePaymentStore(FlatFileStore[Payment]):
    def __init__(self, path: Path | str, *, enrollments: RecordLookup[Enrollment]) -> None:
        self.enrollments = enrollments
        super().__init__(
            path,
            header=PAYMENT_HEADER,
            parse=self._parse_line,
            format=format_payment,
            identity_of=_payment_id,
        )

    def _parse_line(self, line: str) -> Payment:
        return parse_payment(line, resolve_enrollment=self.enrollments.find_by_id)
