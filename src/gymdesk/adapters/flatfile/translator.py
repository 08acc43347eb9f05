"""Translate data-file lines into domain entities and back."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gymdesk.domain.errors import ReferentialIntegrityError
from gymdesk.domain.factories import build_payment_method, build_plan
from gymdesk.domain.model import (
    Enrollment,
    Instructor,
    Payment,
    Student,
    method_detail,
    method_type,
    to_money,
)

from .schema import (
    EnrollmentRow,
    InstructorRow,
    PaymentRow,
    PlanRow,
    StudentRow,
    format_day,
    join_fields,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from decimal import Decimal

    from gymdesk.domain.model import Plan

    type Resolver[T] = Callable[[str], T | None]


def format_money(value: Decimal) -> str:
    return str(to_money(value))


def parse_student(line: str) -> Student:
    row = StudentRow.from_line(line)
    return Student(
        national_id=row.national_id,
        name=row.name,
        phone=row.phone,
        email=row.email,
        enrollment_ref=row.enrollment_ref,
    )


def format_student(student: Student) -> str:
    return join_fields(
        [
            student.national_id,
            student.name,
            student.phone,
            student.email,
            student.enrollment_ref or "",
        ]
    )


def parse_instructor(line: str) -> Instructor:
    row = InstructorRow.from_line(line)
    return Instructor(
        national_id=row.national_id,
        name=row.name,
        phone=row.phone,
        email=row.email,
        specialty=row.specialty,
        license=row.license,
    )


def format_instructor(instructor: Instructor) -> str:
    return join_fields(
        [
            instructor.national_id,
            instructor.name,
            instructor.phone,
            instructor.email,
            instructor.specialty,
            instructor.license,
        ]
    )


def parse_plan(line: str) -> Plan:
    row = PlanRow.from_line(line)
    return build_plan(
        row.plan_type,
        plan_id=row.plan_id,
        name=row.name,
        base_price=row.base_price,
        duration_days=row.duration_days,
    )


def format_plan(plan: Plan) -> str:
    return join_fields(
        [
            plan.plan_id,
            plan.name,
            format_money(plan.base_price),
            str(plan.duration_days),
            str(plan.plan_type),
        ]
    )


def parse_enrollment(
    line: str,
    *,
    resolve_student: Resolver[Student],
    resolve_plan: Resolver[Plan],
) -> Enrollment:
    """Rebuild an enrollment, replacing the stored student and plan ids with live entities."""

    row = EnrollmentRow.from_line(line)
    student = resolve_student(row.student_id)
    if student is None:
        raise ReferentialIntegrityError("student", row.student_id)
    plan = resolve_plan(row.plan_id)
    if plan is None:
        raise ReferentialIntegrityError("plan", row.plan_id)
    return Enrollment(
        enrollment_id=row.enrollment_id,
        student=student,
        plan=plan,
        start_date=row.start_date,
        end_date=row.end_date,
        status=row.status,
        monthly_price=row.monthly_price,
    )


def format_enrollment(enrollment: Enrollment) -> str:
    return join_fields(
        [
            enrollment.enrollment_id,
            enrollment.student.national_id,
            enrollment.plan.plan_id,
            format_day(enrollment.start_date),
            format_day(enrollment.end_date),
            str(enrollment.status),
            format_money(enrollment.monthly_price),
        ]
    )


def parse_payment(line: str, *, resolve_enrollment: Resolver[Enrollment]) -> Payment:
    """Rebuild a payment; the method variant is chosen by the stored method tag."""

    row = PaymentRow.from_payment_line(line)
    enrollment = resolve_enrollment(row.enrollment_id)
    if enrollment is None:
        raise ReferentialIntegrityError("enrollment", row.enrollment_id)
    return Payment(
        payment_id=row.payment_id,
        enrollment=enrollment,
        method=build_payment_method(row.method_tag, row.method_detail),
        amount=row.amount,
        paid_on=row.paid_on,
        status=row.status,
    )


def format_payment(payment: Payment) -> str:
    return join_fields(
        [
            payment.payment_id,
            payment.enrollment.enrollment_id,
            str(method_type(payment.method)),
            format_money(payment.amount),
            format_day(payment.paid_on),
            str(payment.status),
            method_detail(payment.method),
        ],
        open_last=True,
    )
