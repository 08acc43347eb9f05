"""Pydantic models describing the positional rows of the data files."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar, Final, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from gymdesk.domain.errors import RecordFormatError
from gymdesk.domain.model import EnrollmentStatus, PaymentStatus

FIELD_DELIMITER: Final[str] = ","
DATE_FORMAT: Final[str] = "%d/%m/%Y"

STUDENT_HEADER: Final[str] = "cpf,nome,telefone,email,matriculaId"
INSTRUCTOR_HEADER: Final[str] = "cpf,nome,telefone,email,especialidade,cref"
PLAN_HEADER: Final[str] = "id,nome,precoBase,duracao,tipo"
ENROLLMENT_HEADER: Final[str] = "id,cpfAluno,idPlano,dataInicio,dataFim,status,valorMensal"
PAYMENT_HEADER: Final[str] = (
    "id,idMatricula,formaPagamento,valor,dataPagamento,status,detalhesPagamento"
)


def split_fields(line: str, expected: int, *, maxsplit: int = -1) -> list[str]:
    """Split a line on the delimiter and check the field count.

    No quoting is supported: a delimiter inside a value shifts every later field.
    """

    fields = [value.strip() for value in line.split(FIELD_DELIMITER, maxsplit)]
    if len(fields) != expected:
        raise RecordFormatError(f"Expected {expected} fields, got {len(fields)}: {line!r}")
    return fields


def join_fields(fields: list[str], *, open_last: bool = False) -> str:
    """Join values into a line, refusing values that would break the split.

    With ``open_last`` the final value may contain delimiters; it is read back
    with a bounded split.
    """

    checked = fields[:-1] if open_last else fields
    for value in checked:
        if FIELD_DELIMITER in value:
            raise RecordFormatError(f"Field value must not contain {FIELD_DELIMITER!r}: {value!r}")
    return FIELD_DELIMITER.join(fields)


def parse_day(value: str) -> date:
    return datetime.strptime(value.strip(), DATE_FORMAT).date()  # noqa: DTZ007


def format_day(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        # older files wrote a missing reference as the literal "null"
        return None if not stripped or stripped == "null" else stripped
    return value


def _parse_day_field(value: object) -> object:
    if isinstance(value, str):
        try:
            return parse_day(value)
        except ValueError as exc:
            raise ValueError(f"date must be dd/mm/yyyy, got {value!r}") from exc
    return value


class RowModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)

    COLUMNS: ClassVar[tuple[str, ...]]

    @classmethod
    def from_line(cls, line: str, *, maxsplit: int = -1) -> Self:
        fields = split_fields(line, len(cls.COLUMNS), maxsplit=maxsplit)
        try:
            return cls.model_validate(dict(zip(cls.COLUMNS, fields, strict=True)))
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in exc.errors()
            )
            raise RecordFormatError(f"Invalid {cls.__name__} {line!r}: {problems}") from exc


class StudentRow(RowModel):
    COLUMNS: ClassVar[tuple[str, ...]] = ("national_id", "name", "phone", "email", "enrollment_ref")

    national_id: str = Field(min_length=1)
    name: str
    phone: str
    email: str
    enrollment_ref: str | None = None

    _normalize_ref = field_validator("enrollment_ref", mode="before")(_blank_to_none)


class InstructorRow(RowModel):
    COLUMNS: ClassVar[tuple[str, ...]] = (
        "national_id",
        "name",
        "phone",
        "email",
        "specialty",
        "license",
    )

    national_id: str = Field(min_length=1)
    name: str
    phone: str
    email: str
    specialty: str
    license: str


class PlanRow(RowModel):
    COLUMNS: ClassVar[tuple[str, ...]] = (
        "plan_id",
        "name",
        "base_price",
        "duration_days",
        "plan_type",
    )

    plan_id: str = Field(min_length=1)
    name: str
    base_price: Decimal
    duration_days: int
    # kept raw: the plan factory owns the closed set of tags
    plan_type: str


class EnrollmentRow(RowModel):
    COLUMNS: ClassVar[tuple[str, ...]] = (
        "enrollment_id",
        "student_id",
        "plan_id",
        "start_date",
        "end_date",
        "status",
        "monthly_price",
    )

    enrollment_id: str = Field(min_length=1)
    student_id: str = Field(min_length=1)
    plan_id: str = Field(min_length=1)
    start_date: date
    end_date: date
    status: EnrollmentStatus
    monthly_price: Decimal

    _parse_dates = field_validator("start_date", "end_date", mode="before")(_parse_day_field)


class PaymentRow(RowModel):
    COLUMNS: ClassVar[tuple[str, ...]] = (
        "payment_id",
        "enrollment_id",
        "method_tag",
        "amount",
        "paid_on",
        "status",
        "method_detail",
    )

    payment_id: str = Field(min_length=1)
    enrollment_id: str = Field(min_length=1)
    method_tag: str
    amount: Decimal
    paid_on: date
    status: PaymentStatus
    method_detail: str

    _parse_paid_on = field_validator("paid_on", mode="before")(_parse_day_field)

    @classmethod
    def from_payment_line(cls, line: str) -> Self:
        # the detail string takes whatever follows the sixth delimiter
        return cls.from_line(line, maxsplit=len(cls.COLUMNS) - 1)
