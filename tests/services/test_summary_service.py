"""
Tests for the summary projection.

Covers:
- Overall totals and conservation with per-entry balances
- Threshold labels at their boundaries
- Business and family loops
- Idempotent reads
"""

import pytest

from app.models.salary_log import IncomeSource, SalaryLog
from app.models.transaction import Transaction, TransactionCategory
from app.schemas.summary import ActionNeeded, DebtStatus, SavingsStatus
from app.services.summary_service import (
    action_needed,
    build_summary,
    debt_status,
    savings_status,
)


def _txn(out, reimbursed=0, category=TransactionCategory.WORK):
    return Transaction(
        title="t",
        amount_out_cents=out,
        amount_reimbursed_cents=reimbursed,
        category=category,
    )


def _log(amount, unused=None, source=IncomeSource.SALARY):
    return SalaryLog(
        amount_cents=amount,
        amount_unused_cents=amount if unused is None else unused,
        month="2024-05",
        source=source,
    )


def test_empty_ledger():
    summary = build_summary([], [])

    assert summary.financial_status.total_lent_cents == 0
    assert summary.financial_status.current_debt_cents == 0
    assert summary.financial_status.status == DebtStatus.SETTLED
    assert summary.financial_status.total_assets_cents == 0
    assert summary.financial_status.family_loop.status == SavingsStatus.BREAK_EVEN
    assert summary.operational_status.action_needed == ActionNeeded.NONE


def test_overall_totals():
    transactions = [_txn(30000, 10000), _txn(5000, 5000), _txn(2000)]
    salary_logs = [_log(50000, 20000), _log(1000, 0)]

    financial = build_summary(transactions, salary_logs).financial_status
    operational = build_summary(transactions, salary_logs).operational_status

    assert financial.total_lent_cents == 37000
    assert financial.total_reimbursed_cents == 15000
    assert financial.current_debt_cents == 22000
    assert financial.current_debt_cents == sum(t.outstanding_cents() for t in transactions)
    assert financial.status == DebtStatus.OUTSTANDING
    assert financial.total_assets_cents == 20000 + 22000
    assert operational.cash_waiting_allocation_cents == 20000
    assert operational.bills_pending_settlement_cents == 22000
    assert operational.action_needed == ActionNeeded.ALLOCATE_CASH


def test_debt_status_boundaries():
    assert debt_status(0) == DebtStatus.SETTLED
    assert debt_status(-1) == DebtStatus.SETTLED
    assert debt_status(1) == DebtStatus.OUTSTANDING


def test_savings_status_boundaries():
    assert savings_status(1) == SavingsStatus.SURPLUS
    assert savings_status(0) == SavingsStatus.BREAK_EVEN
    assert savings_status(-1) == SavingsStatus.DEFICIT


@pytest.mark.parametrize(
    "cash, bills, expected",
    [
        (1, 1, ActionNeeded.ALLOCATE_CASH),
        (0, 1, ActionNeeded.AWAIT_REIMBURSEMENT),
        (1, 0, ActionNeeded.CASH_IDLE),
        (0, 0, ActionNeeded.NONE),
    ],
)
def test_action_needed_boundaries(cash, bills, expected):
    assert action_needed(cash, bills) == expected


def test_business_loop_only_counts_work():
    transactions = [
        _txn(1000, 400, TransactionCategory.WORK),
        _txn(3000, 0, TransactionCategory.PERSONAL),
    ]

    loop = build_summary(transactions, []).financial_status.business_loop

    assert loop.total_lent_cents == 1000
    assert loop.total_reimbursed_cents == 400
    assert loop.current_debt_cents == 600
    assert loop.status == DebtStatus.OUTSTANDING


def test_family_loop_income_and_spending():
    transactions = [
        _txn(1000, 0, TransactionCategory.WORK),
        _txn(3000, 0, TransactionCategory.PERSONAL),
    ]
    salary_logs = [
        _log(10000, source=IncomeSource.SALARY),
        _log(500, source=IncomeSource.OTHER),
        _log(9999, source=IncomeSource.REIMBURSEMENT),
    ]

    loop = build_summary(transactions, salary_logs).financial_status.family_loop

    assert loop.gross_income_cents == 10500
    assert loop.personal_spending_cents == 3000
    assert loop.net_savings_cents == 7500
    assert loop.status == SavingsStatus.SURPLUS


def test_family_loop_deficit():
    loop = build_summary(
        [_txn(3000, 0, TransactionCategory.PERSONAL)],
        [_log(1000)],
    ).financial_status.family_loop

    assert loop.net_savings_cents == -2000
    assert loop.status == SavingsStatus.DEFICIT


@pytest.mark.asyncio
async def test_summary_after_full_settlement(
    transaction_service, salary_log_service, settlement_service, summary_service
):
    debt = await transaction_service.create("车费", 30000)
    income = await salary_log_service.create(50000, "2024-05")
    await settlement_service.settle(debt.id, income.id, 30000)

    summary = await summary_service.get_summary()

    assert summary.operational_status.bills_pending_settlement_cents == 0
    assert summary.operational_status.cash_waiting_allocation_cents == 20000
    assert summary.operational_status.action_needed == ActionNeeded.CASH_IDLE
    assert summary.financial_status.current_debt_cents == 0
    assert summary.financial_status.status == DebtStatus.SETTLED


@pytest.mark.asyncio
async def test_summary_reads_are_idempotent(
    transaction_service, salary_log_service, settlement_service, summary_service
):
    debt = await transaction_service.create("Hotel", 30000)
    income = await salary_log_service.create(10000, "2024-05")
    await settlement_service.settle(debt.id, income.id, 2500)

    first = await summary_service.get_summary()
    second = await summary_service.get_summary()

    assert first == second
    assert first.model_dump() == second.model_dump()
