from enum import Enum
from pydantic import BaseModel


class DebtStatus(str, Enum):
    SETTLED = "settled"
    OUTSTANDING = "outstanding"


class SavingsStatus(str, Enum):
    SURPLUS = "surplus"
    BREAK_EVEN = "break_even"
    DEFICIT = "deficit"


class ActionNeeded(str, Enum):
    ALLOCATE_CASH = "allocate_cash"
    AWAIT_REIMBURSEMENT = "await_reimbursement"
    CASH_IDLE = "cash_idle"
    NONE = "none"


class BusinessLoop(BaseModel):
    """Work advances and their reimbursement."""
    total_lent_cents: int
    total_reimbursed_cents: int
    current_debt_cents: int
    status: DebtStatus


class FamilyLoop(BaseModel):
    """Household income against personal spending."""
    gross_income_cents: int
    personal_spending_cents: int
    net_savings_cents: int
    status: SavingsStatus


class FinancialStatus(BaseModel):
    description: str
    total_lent_cents: int
    total_reimbursed_cents: int
    current_debt_cents: int
    status: DebtStatus
    business_loop: BusinessLoop
    family_loop: FamilyLoop
    total_assets_cents: int


class OperationalStatus(BaseModel):
    description: str
    bills_pending_settlement_cents: int
    cash_waiting_allocation_cents: int
    action_needed: ActionNeeded
    action_message: str


class SummaryView(BaseModel):
    financial_status: FinancialStatus
    operational_status: OperationalStatus
