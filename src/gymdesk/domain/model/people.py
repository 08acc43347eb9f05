"""People registered at the gym: students and instructors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Self

from gymdesk.domain.errors import InvalidDataError
from gymdesk.domain.model.enums import PersonKind
from gymdesk.domain.validation import (
    is_valid_email,
    is_valid_national_id,
    normalize_email,
    normalize_national_id,
)


@dataclass(kw_only=True)
class PersonBase:
    """Fields shared by every person; ``national_id`` is the identity."""

    national_id: str
    name: str
    phone: str
    email: str

    # class-level discriminator; subclasses must override
    KIND: ClassVar[PersonKind]

    @property
    def kind(self) -> PersonKind:
        return self.KIND


@dataclass(kw_only=True)
class Student(PersonBase):
    KIND: ClassVar[PersonKind] = PersonKind.STUDENT

    enrollment_ref: str | None = None

    @classmethod
    def register(
        cls,
        *,
        national_id: str,
        name: str,
        phone: str,
        email: str,
        enrollment_ref: str | None = None,
    ) -> Self:
        """Validate and normalise user input before building a student."""
        checked_id, checked_email = _checked_contact(national_id, name, email)
        return cls(
            national_id=checked_id,
            name=name.strip(),
            phone=phone.strip(),
            email=checked_email,
            enrollment_ref=enrollment_ref,
        )


@dataclass(kw_only=True)
class Instructor(PersonBase):
    KIND: ClassVar[PersonKind] = PersonKind.INSTRUCTOR

    specialty: str
    license: str

    @classmethod
    def register(
        cls,
        *,
        national_id: str,
        name: str,
        phone: str,
        email: str,
        specialty: str,
        license: str,  # noqa: A002
    ) -> Self:
        checked_id, checked_email = _checked_contact(national_id, name, email)
        return cls(
            national_id=checked_id,
            name=name.strip(),
            phone=phone.strip(),
            email=checked_email,
            specialty=specialty.strip(),
            license=license.strip(),
        )


type Person = Student | Instructor


def _checked_contact(national_id: str, name: str, email: str) -> tuple[str, str]:
    if not is_valid_national_id(national_id):
        raise InvalidDataError(f"Invalid national id: {national_id!r}")
    if not is_valid_email(email):
        raise InvalidDataError(f"Invalid e-mail address: {email!r}")
    if not name.strip():
        raise InvalidDataError("Name must not be blank")
    return normalize_national_id(national_id), normalize_email(email)
