"""Ledger validation rules shared by the services and the stores."""
import math
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from app.core.errors import (
    ConflictError,
    ValidationError,
    EXCEEDS_AVAILABLE,
    EXCEEDS_OUTSTANDING,
    INVALID_AMOUNT,
)
from app.models.salary_log import SalaryLog
from app.models.transaction import Transaction

E = TypeVar("E", bound=Enum)


def validate_amount_cents(value: Any, field: str = "amount_cents") -> int:
    """
    Validate a money amount in cents.

    Rules:
    - must be an integer (bools are rejected)
    - floats are accepted only when finite and integral, e.g. 300.0
    - must be strictly positive
    """
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer number of cents", INVALID_AMOUNT)
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise ValidationError(f"{field} must be a whole number of cents", INVALID_AMOUNT)
        value = int(value)
    if not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer number of cents", INVALID_AMOUNT)
    if value <= 0:
        raise ValidationError(f"{field} must be positive, got {value}", INVALID_AMOUNT)
    return value


def validate_required_text(value: Optional[str], field: str) -> str:
    """Strip surrounding whitespace; the result must not be empty."""
    if value is None or not value.strip():
        raise ValidationError(f"{field} must not be empty")
    return value.strip()


def validate_optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def validate_settlement(transaction: Transaction, salary_log: SalaryLog, amount_cents: int) -> None:
    """
    Balance checks for a settlement, in order:
    1. amount fits the transaction's outstanding balance
    2. amount fits the salary log's unused balance
    """
    outstanding = transaction.outstanding_cents()
    if amount_cents > outstanding:
        raise ConflictError(
            f"Settlement of {amount_cents} cents exceeds outstanding balance "
            f"of {outstanding} cents on transaction {transaction.id}",
            EXCEEDS_OUTSTANDING,
        )
    if amount_cents > salary_log.amount_unused_cents:
        raise ConflictError(
            f"Settlement of {amount_cents} cents exceeds available balance "
            f"of {salary_log.amount_unused_cents} cents on salary log {salary_log.id}",
            EXCEEDS_AVAILABLE,
        )


def validate_amount_out_update(transaction: Transaction, amount_out_cents: int) -> None:
    """An edit may not shrink amount_out below what was already reimbursed."""
    if amount_out_cents < transaction.amount_reimbursed_cents:
        raise ValidationError(
            f"amount_out_cents {amount_out_cents} is below the "
            f"{transaction.amount_reimbursed_cents} cents already reimbursed",
            INVALID_AMOUNT,
        )


def validate_choice(value: Any, choices: Type[E], field: str) -> E:
    """Coerce ``value`` into the ``choices`` enum."""
    try:
        return choices(value)
    except ValueError:
        allowed = ", ".join(c.value for c in choices)
        raise ValidationError(f"{field} must be one of: {allowed}")
