"""Data storage configuration helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var

APP_DIR_NAME: Final[str] = "gymdesk"
DATA_DIR_ENV_VAR: Final[str] = "GYMDESK_DATA_DIR"

STUDENTS_FILENAME: Final[str] = "alunos.csv"
INSTRUCTORS_FILENAME: Final[str] = "instrutores.csv"
PLANS_FILENAME: Final[str] = "planos.csv"
ENROLLMENTS_FILENAME: Final[str] = "matriculas.csv"
PAYMENTS_FILENAME: Final[str] = "pagamentos.csv"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    students_filename: str = STUDENTS_FILENAME
    instructors_filename: str = INSTRUCTORS_FILENAME
    plans_filename: str = PLANS_FILENAME
    enrollments_filename: str = ENROLLMENTS_FILENAME
    payments_filename: str = PAYMENTS_FILENAME

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def ensure_data_dir(self) -> Path:
        data_dir = self.resolve_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def students_path(self) -> Path:
        return self.resolve_data_dir() / self.students_filename

    def instructors_path(self) -> Path:
        return self.resolve_data_dir() / self.instructors_filename

    def plans_path(self) -> Path:
        return self.resolve_data_dir() / self.plans_filename

    def enrollments_path(self) -> Path:
        return self.resolve_data_dir() / self.enrollments_filename

    def payments_path(self) -> Path:
        return self.resolve_data_dir() / self.payments_filename


def _default_data_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else (Path.home() / ".local" / "share")
    return (base_path / APP_DIR_NAME).expanduser().resolve()


def get_storage_config() -> StorageConfig:
    env_dir = optional_env_var(DATA_DIR_ENV_VAR)
    data_dir = Path(env_dir) if env_dir else _default_data_dir()
    return StorageConfig(data_dir=data_dir)
