"""
Summary - a read-side projection over all transactions and salary logs.

Nothing is stored; every figure is recomputed from the ledger on request.

Thresholds (integer cents, so no epsilon):
- debt status:    current_debt <= 0 -> settled, else outstanding
- savings status: net_savings > 0 -> surplus, == 0 -> break_even, < 0 -> deficit
- action needed:  cash > 0 and bills > 0  -> allocate_cash
                  cash == 0 and bills > 0 -> await_reimbursement
                  cash > 0 and bills == 0 -> cash_idle
                  otherwise               -> none
"""

from typing import Iterable, List

from app.models.salary_log import IncomeSource, SalaryLog
from app.models.transaction import Transaction, TransactionCategory, TransactionStatus
from app.repositories.base import LedgerStore
from app.schemas.summary import (
    ActionNeeded,
    BusinessLoop,
    DebtStatus,
    FamilyLoop,
    FinancialStatus,
    OperationalStatus,
    SavingsStatus,
    SummaryView,
)

FAMILY_INCOME_SOURCES = (IncomeSource.SALARY, IncomeSource.OTHER)

ACTION_MESSAGES = {
    ActionNeeded.ALLOCATE_CASH: "Unallocated cash is available for pending bills; settle them",
    ActionNeeded.AWAIT_REIMBURSEMENT: "Bills are pending but no cash is waiting; wait for reimbursement",
    ActionNeeded.CASH_IDLE: "All bills are settled; remaining cash is free",
    ActionNeeded.NONE: "Nothing pending",
}


def debt_status(current_debt_cents: int) -> DebtStatus:
    return DebtStatus.SETTLED if current_debt_cents <= 0 else DebtStatus.OUTSTANDING


def savings_status(net_savings_cents: int) -> SavingsStatus:
    if net_savings_cents > 0:
        return SavingsStatus.SURPLUS
    if net_savings_cents == 0:
        return SavingsStatus.BREAK_EVEN
    return SavingsStatus.DEFICIT


def action_needed(cash_waiting_cents: int, bills_pending_cents: int) -> ActionNeeded:
    if cash_waiting_cents > 0 and bills_pending_cents > 0:
        return ActionNeeded.ALLOCATE_CASH
    if bills_pending_cents > 0:
        return ActionNeeded.AWAIT_REIMBURSEMENT
    if cash_waiting_cents > 0:
        return ActionNeeded.CASH_IDLE
    return ActionNeeded.NONE


def _business_loop(transactions: Iterable[Transaction]) -> BusinessLoop:
    work = [t for t in transactions if t.category == TransactionCategory.WORK]
    lent = sum(t.amount_out_cents for t in work)
    reimbursed = sum(t.amount_reimbursed_cents for t in work)
    return BusinessLoop(
        total_lent_cents=lent,
        total_reimbursed_cents=reimbursed,
        current_debt_cents=lent - reimbursed,
        status=debt_status(lent - reimbursed),
    )


def _family_loop(transactions: Iterable[Transaction], salary_logs: Iterable[SalaryLog]) -> FamilyLoop:
    income = sum(s.amount_cents for s in salary_logs if s.source in FAMILY_INCOME_SOURCES)
    spending = sum(
        t.amount_out_cents for t in transactions
        if t.category == TransactionCategory.PERSONAL
    )
    return FamilyLoop(
        gross_income_cents=income,
        personal_spending_cents=spending,
        net_savings_cents=income - spending,
        status=savings_status(income - spending),
    )


def build_summary(transactions: List[Transaction], salary_logs: List[SalaryLog]) -> SummaryView:
    """Compute the summary from a consistent set of entries."""
    total_lent = sum(t.amount_out_cents for t in transactions)
    total_reimbursed = sum(t.amount_reimbursed_cents for t in transactions)
    current_debt = total_lent - total_reimbursed
    cash_waiting = sum(s.amount_unused_cents for s in salary_logs)
    bills_pending = sum(
        t.outstanding_cents() for t in transactions
        if t.status != TransactionStatus.SETTLED
    )
    action = action_needed(cash_waiting, bills_pending)

    return SummaryView(
        financial_status=FinancialStatus(
            description="Money advanced, money received back, and what is still owed",
            total_lent_cents=total_lent,
            total_reimbursed_cents=total_reimbursed,
            current_debt_cents=current_debt,
            status=debt_status(current_debt),
            business_loop=_business_loop(transactions),
            family_loop=_family_loop(transactions, salary_logs),
            total_assets_cents=cash_waiting + current_debt,
        ),
        operational_status=OperationalStatus(
            description="Bills still to settle and cash still to allocate",
            bills_pending_settlement_cents=bills_pending,
            cash_waiting_allocation_cents=cash_waiting,
            action_needed=action,
            action_message=ACTION_MESSAGES[action],
        ),
    )


class SummaryService:

    def __init__(self, store: LedgerStore):
        self.store = store

    async def get_summary(self) -> SummaryView:
        transactions, salary_logs = await self.store.snapshot()
        return build_summary(transactions, salary_logs)
