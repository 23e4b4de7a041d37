"""Tests for the shared ledger validation rules."""

import math

import pytest

from app.core.errors import (
    ConflictError,
    ValidationError,
    EXCEEDS_AVAILABLE,
    EXCEEDS_OUTSTANDING,
    INVALID_AMOUNT,
)
from app.models.salary_log import IncomeSource, SalaryLog
from app.models.transaction import Transaction, TransactionCategory
from app.utils.ledger_validation import (
    validate_amount_cents,
    validate_amount_out_update,
    validate_choice,
    validate_optional_text,
    validate_required_text,
    validate_settlement,
)


@pytest.mark.parametrize("value", [0, -1, -30000, True, False, 1.5, math.nan, math.inf, "100", None])
def test_validate_amount_cents_rejects(value):
    with pytest.raises(ValidationError) as exc_info:
        validate_amount_cents(value)
    assert exc_info.value.code == INVALID_AMOUNT


def test_validate_amount_cents_accepts_integral_values():
    assert validate_amount_cents(1) == 1
    assert validate_amount_cents(30000) == 30000
    assert validate_amount_cents(300.0) == 300
    assert isinstance(validate_amount_cents(300.0), int)


def test_validate_amount_cents_names_the_field():
    with pytest.raises(ValidationError, match="amount_out_cents"):
        validate_amount_cents(0, "amount_out_cents")


def test_validate_required_text():
    assert validate_required_text("  车费 ", "title") == "车费"
    with pytest.raises(ValidationError, match="title"):
        validate_required_text("   ", "title")
    with pytest.raises(ValidationError):
        validate_required_text(None, "month")


def test_validate_optional_text():
    assert validate_optional_text(None) is None
    assert validate_optional_text("  ") is None
    assert validate_optional_text(" bonus ") == "bonus"


def test_validate_choice():
    assert validate_choice("personal", TransactionCategory, "category") == TransactionCategory.PERSONAL
    assert validate_choice(IncomeSource.OTHER, IncomeSource, "source") == IncomeSource.OTHER
    with pytest.raises(ValidationError, match="salary, reimbursement, other"):
        validate_choice("gift", IncomeSource, "source")


def _transaction(out, reimbursed=0):
    return Transaction(title="t", amount_out_cents=out, amount_reimbursed_cents=reimbursed)


def _log(amount, unused=None):
    return SalaryLog(
        amount_cents=amount,
        amount_unused_cents=amount if unused is None else unused,
        month="2024-05",
    )


def test_validate_settlement_allows_exact_balances():
    validate_settlement(_transaction(300, 100), _log(500, 200), 200)


def test_validate_settlement_outstanding_checked_before_available():
    with pytest.raises(ConflictError) as exc_info:
        validate_settlement(_transaction(300, 200), _log(50), 150)
    assert exc_info.value.code == EXCEEDS_OUTSTANDING


def test_validate_settlement_available():
    with pytest.raises(ConflictError) as exc_info:
        validate_settlement(_transaction(300), _log(500, 100), 150)
    assert exc_info.value.code == EXCEEDS_AVAILABLE


def test_validate_settlement_on_settled_transaction():
    with pytest.raises(ConflictError) as exc_info:
        validate_settlement(_transaction(300, 300), _log(500), 1)
    assert exc_info.value.code == EXCEEDS_OUTSTANDING


def test_validate_amount_out_update():
    validate_amount_out_update(_transaction(300, 200), 200)
    with pytest.raises(ValidationError) as exc_info:
        validate_amount_out_update(_transaction(300, 200), 199)
    assert exc_info.value.code == INVALID_AMOUNT
