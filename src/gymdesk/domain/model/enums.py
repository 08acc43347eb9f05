"""Domain enums (pure, dependency-light).

Values are the tags written to the data files.
"""

from __future__ import annotations

from enum import StrEnum


class PersonKind(StrEnum):
    STUDENT = "ALUNO"
    INSTRUCTOR = "INSTRUTOR"


class PlanType(StrEnum):
    """Discriminator of the closed plan family."""

    STANDARD = "COMUM"
    PREMIUM = "PREMIUM"
    STUDENT = "ESTUDANTE"


class PaymentMethodType(StrEnum):
    """Discriminator of the closed payment-method family."""

    PIX = "PIX"
    CARD = "CARTAO"
    CASH = "DINHEIRO"


class EnrollmentStatus(StrEnum):
    ACTIVE = "ATIVA"
    SUSPENDED = "SUSPENSA"
    CANCELLED = "CANCELADA"
    EXPIRED = "VENCIDA"


class PaymentStatus(StrEnum):
    PENDING = "PENDENTE"
    CONFIRMED = "CONFIRMADO"
    REVERSED = "ESTORNADO"
