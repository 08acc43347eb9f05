# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date, timedelta
from decimal import Decimal, InvalidOperation
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from gymdesk.adapters.flatfile.schema import format_day, parse_day
from gymdesk.app import (
    change_enrollment_status,
    enroll_student,
    load_gym,
    open_stores,
    record_payment,
    register_instructor,
    register_plan,
    register_student,
    reverse_payment,
)
from gymdesk.config import StorageConfig, configure_logging, get_storage_config
from gymdesk.domain.errors import InvalidDataError
from gymdesk.domain.factories import build_payment_method, build_plan
from gymdesk.domain.model import (
    EnrollmentStatus,
    Instructor,
    PaymentMethodType,
    PlanType,
    Student,
    describe_method,
    final_price,
)
from gymdesk.domain.reports import (
    active_plan_counts,
    confirmed_revenue,
    export_rows,
    format_financial_report,
    format_student_report,
    students_with_status,
)
from gymdesk.domain.validation import format_national_id

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from gymdesk.app import GymStores, Outcome
    from gymdesk.domain.registry import Gym

log = logging.getLogger(__name__)

_STATUS_BY_ACTION = {
    "suspend": EnrollmentStatus.SUSPENDED,
    "reactivate": EnrollmentStatus.ACTIVE,
    "cancel": EnrollmentStatus.CANCELLED,
}


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage gym students, plans and payments")
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory holding the data files (defaults to GYMDESK_DATA_DIR)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    student = subparsers.add_parser("student", help="Student commands")
    student_sub = student.add_subparsers(dest="action", required=True)
    student_add = student_sub.add_parser("add", help="Register a student")
    _add_contact_arguments(student_add)

    instructor = subparsers.add_parser("instructor", help="Instructor commands")
    instructor_sub = instructor.add_subparsers(dest="action", required=True)
    instructor_add = instructor_sub.add_parser("add", help="Register an instructor")
    _add_contact_arguments(instructor_add)
    instructor_add.add_argument("--specialty", type=str, required=True)
    instructor_add.add_argument(
        "--cref",
        type=str,
        required=True,
        help="Professional registration number",
    )

    plan = subparsers.add_parser("plan", help="Plan commands")
    plan_sub = plan.add_subparsers(dest="action", required=True)
    plan_add = plan_sub.add_parser("add", help="Create a plan")
    plan_add.add_argument("--id", dest="plan_id", type=str, required=True)
    plan_add.add_argument("--name", type=str, required=True)
    plan_add.add_argument("--price", type=str, required=True, help="Base monthly price")
    plan_add.add_argument("--days", type=int, required=True, help="Duration in days")
    plan_add.add_argument(
        "--type",
        dest="plan_type",
        choices=[t.value for t in PlanType],
        default=PlanType.STANDARD.value,
        help="Plan type (default: %(default)s)",
    )

    enroll = subparsers.add_parser("enroll", help="Enroll a student in a plan")
    enroll.add_argument("--cpf", type=str, required=True)
    enroll.add_argument("--plan", dest="plan_id", type=str, required=True)
    enroll.add_argument("--start", type=str, help="Start date dd/mm/yyyy (default: today)")
    enroll.add_argument(
        "--end",
        type=str,
        help="End date dd/mm/yyyy (default: start plus the plan duration)",
    )

    pay = subparsers.add_parser("pay", help="Record a payment for an enrollment")
    pay.add_argument("--enrollment", type=str, required=True)
    pay.add_argument("--amount", type=str, required=True)
    pay.add_argument(
        "--method",
        choices=[m.value for m in PaymentMethodType],
        default=PaymentMethodType.PIX.value,
        help="Payment method (default: %(default)s)",
    )
    pay.add_argument("--card-kind", type=str, default="", help="Card kind, e.g. Crédito")
    pay.add_argument("--date", type=str, help="Payment date dd/mm/yyyy (default: today)")

    enrollment = subparsers.add_parser("enrollment", help="Change an enrollment's status")
    enrollment.add_argument("action", choices=sorted(_STATUS_BY_ACTION))
    enrollment.add_argument("enrollment_id", type=str)

    payment = subparsers.add_parser("payment", help="Payment commands")
    payment.add_argument("action", choices=["reverse"])
    payment.add_argument("payment_id", type=str)

    listing = subparsers.add_parser("list", help="List stored records")
    listing.add_argument(
        "family",
        choices=["students", "instructors", "plans", "enrollments", "payments"],
    )

    report = subparsers.add_parser("report", help="Print a report")
    report.add_argument("kind", choices=["students", "financial", "plans"])
    report.add_argument(
        "--status",
        choices=[s.value for s in EnrollmentStatus],
        help="Only students holding an enrollment with this status",
    )
    report.add_argument("--from", dest="start", type=str, help="Revenue window start dd/mm/yyyy")
    report.add_argument("--to", dest="end", type=str, help="Revenue window end dd/mm/yyyy")
    report.add_argument("--csv", dest="csv_path", type=Path, help="Also export rows as CSV")

    return parser.parse_args(list(argv))


def _add_contact_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--cpf", type=str, required=True, help="National ID (11 digits)")
    parser.add_argument("--name", type=str, required=True)
    parser.add_argument("--phone", type=str, default="")
    parser.add_argument("--email", type=str, required=True)


def _parse_date(value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return parse_day(value)
    except ValueError as exc:
        raise ValueError(f"Invalid date (expected dd/mm/yyyy): {value}") from exc


def _parse_amount(value: str) -> Decimal:
    try:
        return Decimal(value.strip().replace(",", "."))
    except InvalidOperation as exc:
        raise ValueError(f"Invalid amount: {value}") from exc


def _storage(args: argparse.Namespace) -> StorageConfig:
    if args.data_dir is not None:
        return StorageConfig(data_dir=args.data_dir)
    return get_storage_config()


def _require_persisted(outcome: Outcome[object], what: str) -> None:
    if not outcome.persisted:
        raise RuntimeError(f"{what} was applied in memory but could not be saved")


def _run(args: argparse.Namespace, gym: Gym, stores: GymStores) -> None:  # noqa: C901, PLR0912
    match args.command:
        case "student":
            student = Student.register(
                national_id=args.cpf, name=args.name, phone=args.phone, email=args.email
            )
            _require_persisted(register_student(gym, stores, student), "Student")
            log.info("Registered student %s", format_national_id(student.national_id))
        case "instructor":
            instructor = Instructor.register(
                national_id=args.cpf,
                name=args.name,
                phone=args.phone,
                email=args.email,
                specialty=args.specialty,
                license=args.cref,
            )
            _require_persisted(register_instructor(gym, stores, instructor), "Instructor")
            log.info("Registered instructor %s", format_national_id(instructor.national_id))
        case "plan":
            plan = build_plan(
                args.plan_type,
                plan_id=args.plan_id,
                name=args.name,
                base_price=_parse_amount(args.price),
                duration_days=args.days,
            )
            _require_persisted(register_plan(gym, stores, plan), "Plan")
            log.info("Created plan %s (R$ %.2f/month)", plan.plan_id, final_price(plan))
        case "enroll":
            start = _parse_date(args.start) or date.today()
            end = _parse_date(args.end)
            if end is None:
                end = start + timedelta(days=gym.get_plan(args.plan_id).duration_days)
            outcome = enroll_student(
                gym,
                stores,
                national_id=args.cpf,
                plan_id=args.plan_id,
                start_date=start,
                end_date=end,
            )
            _require_persisted(outcome, "Enrollment")
            print(outcome.value.enrollment_id)
        case "pay":
            method = build_payment_method(args.method, f"{args.method}:{args.card_kind}")
            outcome = record_payment(
                gym,
                stores,
                enrollment_id=args.enrollment,
                method=method,
                amount=_parse_amount(args.amount),
                paid_on=_parse_date(args.date),
            )
            _require_persisted(outcome, "Payment")
            print(outcome.value.payment_id)
        case "enrollment":
            outcome = change_enrollment_status(
                gym, stores, args.enrollment_id, _STATUS_BY_ACTION[args.action]
            )
            if not outcome.changed:
                raise InvalidDataError(
                    f"Cannot {args.action} enrollment {args.enrollment_id} "
                    f"from status {outcome.value.status}"
                )
            _require_persisted(outcome, "Enrollment")
            log.info("Enrollment %s is now %s", args.enrollment_id, outcome.value.status)
        case "payment":
            outcome = reverse_payment(gym, stores, args.payment_id)
            if not outcome.changed:
                raise InvalidDataError(
                    f"Only confirmed payments can be reversed ({args.payment_id} is "
                    f"{outcome.value.status})"
                )
            _require_persisted(outcome, "Payment")
            log.info("Payment %s reversed", args.payment_id)
        case "list":
            for line in _listing(gym, args.family):
                print(line)
        case "report":
            _report(gym, args)
        case _:
            raise ValueError(f"Unsupported command: {args.command}")


def _listing(gym: Gym, family: str) -> list[str]:
    today = date.today()
    match family:
        case "students":
            return [
                f"{format_national_id(s.national_id)}  {s.name}  {s.email}"
                f"  {s.enrollment_ref or '-'}"
                for s in gym.list_students()
            ]
        case "instructors":
            return [
                f"{format_national_id(i.national_id)}  {i.name}  {i.specialty}  CREF {i.license}"
                for i in gym.list_instructors()
            ]
        case "plans":
            return [
                f"{p.plan_id}  {p.name}  {p.PLAN_TYPE}  R$ {final_price(p):.2f}  {p.duration_days}d"
                for p in gym.list_plans()
            ]
        case "enrollments":
            return [
                f"{e.enrollment_id}  {format_national_id(e.student.national_id)}  {e.plan.plan_id}"
                f"  {format_day(e.start_date)}-{format_day(e.end_date)}"
                f"  {e.effective_status(today)}  R$ {e.monthly_price:.2f}"
                for e in gym.list_enrollments()
            ]
        case "payments":
            return [
                f"{p.payment_id}  {p.enrollment.enrollment_id}  {describe_method(p.method)}"
                f"  R$ {p.amount:.2f}  {format_day(p.paid_on)}  {p.status}"
                for p in gym.list_payments()
            ]
        case _:
            raise ValueError(f"Unknown record family: {family}")


def _report(gym: Gym, args: argparse.Namespace) -> None:
    rows: list[tuple[str, ...]]
    header: tuple[str, ...]
    match args.kind:
        case "students":
            students = gym.list_students()
            if args.status:
                students = students_with_status(
                    students, gym.list_enrollments(), EnrollmentStatus(args.status)
                )
            print(format_student_report(students), end="")
            header = ("cpf", "nome", "telefone", "email")
            rows = [(s.national_id, s.name, s.phone, s.email) for s in students]
        case "financial":
            payments = gym.list_payments()
            print(format_financial_report(payments), end="")
            start, end = _parse_date(args.start), _parse_date(args.end)
            if start or end:
                revenue = confirmed_revenue(payments, start, end)
                print(f"Receita confirmada no período: R$ {revenue:.2f}")
            header = ("id", "matricula", "forma", "valor", "data", "status")
            rows = [
                (
                    p.payment_id,
                    p.enrollment.enrollment_id,
                    describe_method(p.method),
                    f"{p.amount:.2f}",
                    format_day(p.paid_on),
                    str(p.status),
                )
                for p in payments
            ]
        case _:
            counts = active_plan_counts(gym.list_enrollments())
            for name, count in sorted(counts.items()):
                print(f"{name}: {count}")
            header = ("plano", "matriculas_ativas")
            rows = [(name, str(count)) for name, count in sorted(counts.items())]
    if args.csv_path is not None and not export_rows(rows, args.csv_path, header):
        raise RuntimeError(f"Could not export report to {args.csv_path}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    try:
        stores = open_stores(_storage(parsed_args))
        gym, _ = load_gym(stores)
        _run(parsed_args, gym, stores)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)
    except Exception:
        log.exception("Command failed")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    signal(SIGINT, sigint_handler)
    main()
