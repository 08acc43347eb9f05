from __future__ import annotations

from datetime import date
from decimal import Decimal
from pathlib import Path  # noqa: TC003

import pytest

from gymdesk.app import GymStores, open_stores
from gymdesk.config import StorageConfig
from gymdesk.domain.model import (
    Enrollment,
    Instructor,
    PremiumPlan,
    StandardPlan,
    Student,
    StudentPlan,
)
from gymdesk.domain.registry import Gym


@pytest.fixture
def student() -> Student:
    return Student(
        national_id="12345678901",
        name="Ana Souza",
        phone="11999990000",
        email="ana@example.com",
    )


@pytest.fixture
def other_student() -> Student:
    return Student(
        national_id="98765432100",
        name="Bruno Lima",
        phone="21988887777",
        email="bruno@example.com",
    )


@pytest.fixture
def instructor() -> Instructor:
    return Instructor(
        national_id="11122233344",
        name="Carla Dias",
        phone="11911112222",
        email="carla@example.com",
        specialty="Musculação",
        license="123456-G/SP",
    )


@pytest.fixture
def standard_plan() -> StandardPlan:
    return StandardPlan(plan_id="P0", name="Mensal", base_price=Decimal("80.00"), duration_days=30)


@pytest.fixture
def premium_plan() -> PremiumPlan:
    return PremiumPlan(plan_id="P1", name="Premium", base_price=Decimal("100.00"), duration_days=30)


@pytest.fixture
def student_plan() -> StudentPlan:
    return StudentPlan(
        plan_id="P2", name="Universitário", base_price=Decimal("90.00"), duration_days=90
    )


@pytest.fixture
def enrollment(student: Student, premium_plan: PremiumPlan) -> Enrollment:
    return Enrollment.open(
        enrollment_id="MAT001",
        student=student,
        plan=premium_plan,
        start_date=date(2024, 1, 1),
        end_date=date(2024, 12, 31),
    )


@pytest.fixture
def gym() -> Gym:
    return Gym()


@pytest.fixture
def storage(tmp_path: Path) -> StorageConfig:
    return StorageConfig(data_dir=tmp_path / "data")


@pytest.fixture
def stores(storage: StorageConfig) -> GymStores:
    return open_stores(storage)
