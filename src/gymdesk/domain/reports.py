"""Reporting helpers: filters, totals and printable summaries."""

from __future__ import annotations

import csv
from collections import Counter
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from gymdesk.domain.model import ZERO, EnrollmentStatus, PaymentStatus
from gymdesk.domain.validation import format_national_id

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import date
    from decimal import Decimal

    from gymdesk.domain.model import Enrollment, Payment, Student

log = getLogger(__name__)

RULE_WIDTH = 80


def students_with_status(
    students: Iterable[Student],
    enrollments: Sequence[Enrollment],
    status: EnrollmentStatus,
) -> list[Student]:
    """Students holding at least one enrollment in the given status."""
    matching = {e.student.national_id for e in enrollments if e.status is status}
    return [s for s in students if s.national_id in matching]


def payments_with_status(payments: Iterable[Payment], status: PaymentStatus) -> list[Payment]:
    return [p for p in payments if p.status is status]


def confirmed_revenue(
    payments: Iterable[Payment],
    start: date | None = None,
    end: date | None = None,
) -> Decimal:
    """Sum of confirmed payments whose date lies within the inclusive bounds."""
    total = ZERO
    for payment in payments:
        if payment.status is not PaymentStatus.CONFIRMED:
            continue
        if start is not None and payment.paid_on < start:
            continue
        if end is not None and payment.paid_on > end:
            continue
        total += payment.amount
    return total


def totals_by_status(payments: Iterable[Payment]) -> dict[PaymentStatus, Decimal]:
    totals = dict.fromkeys(PaymentStatus, ZERO)
    for payment in payments:
        totals[payment.status] += payment.amount
    return totals


def active_plan_counts(enrollments: Iterable[Enrollment]) -> dict[str, int]:
    """Number of active enrollments per plan name."""
    return dict(Counter(e.plan.name for e in enrollments if e.status is EnrollmentStatus.ACTIVE))


def format_student_report(students: Sequence[Student]) -> str:
    lines = ["RELATÓRIO DE ALUNOS", "=" * RULE_WIDTH, ""]
    if not students:
        lines.append("Nenhum aluno encontrado.")
    else:
        lines.append(f"Total de alunos: {len(students)}")
        lines.append("")
        lines.append(f"{'CPF':<15} {'Nome':<30} {'Telefone':<15} {'Email':<30}")
        lines.append("-" * RULE_WIDTH)
        lines.extend(
            f"{format_national_id(s.national_id):<15} {s.name:<30} {s.phone:<15} {s.email:<30}"
            for s in students
        )
    lines.extend(["", "=" * RULE_WIDTH])
    return "\n".join(lines) + "\n"


def format_financial_report(payments: Sequence[Payment]) -> str:
    totals = totals_by_status(payments)
    lines = [
        "RELATÓRIO FINANCEIRO",
        "=" * RULE_WIDTH,
        "",
        f"Total de Pagamentos: {len(payments)}",
        "",
        f"Receitas Confirmadas: R$ {totals[PaymentStatus.CONFIRMED]:.2f}",
        f"Pagamentos Pendentes: R$ {totals[PaymentStatus.PENDING]:.2f}",
        f"Valores Estornados:   R$ {totals[PaymentStatus.REVERSED]:.2f}",
        "",
        "=" * RULE_WIDTH,
    ]
    return "\n".join(lines) + "\n"


def export_rows(
    rows: Iterable[Sequence[str]],
    path: Path | str,
    header: Sequence[str] | None = None,
) -> bool:
    """Write rows as CSV; values containing commas are quoted."""
    try:
        with Path(path).open("w", encoding="utf-8", newline="") as handle:
            writer = csv.writer(handle, lineterminator="\n")
            if header:
                writer.writerow(header)
            writer.writerows(rows)
    except OSError:
        log.exception("Could not export report to %s", path)
        return False
    return True
