"""
Transaction model - money the user advanced and expects back.

Design principles:
- All amounts in integer cents
- amount_reimbursed_cents only moves through settlement
- Status is derived from the two amounts, never set on its own
- Status: pending → partially_settled → settled
"""

from datetime import datetime
from enum import Enum

from pydantic import Field, computed_field, model_validator

from app.models.base import StoredModel, _utcnow


class TransactionCategory(str, Enum):
    WORK = "work"
    PERSONAL = "personal"


class TransactionStatus(str, Enum):
    PENDING = "pending"
    PARTIALLY_SETTLED = "partially_settled"
    SETTLED = "settled"


def derive_status(amount_out_cents: int, amount_reimbursed_cents: int) -> TransactionStatus:
    if amount_reimbursed_cents == 0:
        return TransactionStatus.PENDING
    if amount_reimbursed_cents == amount_out_cents:
        return TransactionStatus.SETTLED
    return TransactionStatus.PARTIALLY_SETTLED


class Transaction(StoredModel):
    """
    An advance awaiting reimbursement.

    Invariants:
    - 0 <= amount_reimbursed_cents <= amount_out_cents
    - status = settled iff amount_reimbursed_cents == amount_out_cents
    """
    title: str
    amount_out_cents: int
    amount_reimbursed_cents: int = 0
    category: TransactionCategory = TransactionCategory.WORK

    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @model_validator(mode="after")
    def _check_amounts(self):
        if self.amount_out_cents <= 0:
            raise ValueError("amount_out_cents must be positive")
        if not 0 <= self.amount_reimbursed_cents <= self.amount_out_cents:
            raise ValueError(
                "amount_reimbursed_cents must be between 0 and amount_out_cents"
            )
        return self

    @computed_field
    @property
    def status(self) -> TransactionStatus:
        return derive_status(self.amount_out_cents, self.amount_reimbursed_cents)

    def outstanding_cents(self) -> int:
        """How much remains to be reimbursed."""
        return self.amount_out_cents - self.amount_reimbursed_cents

    def is_fully_settled(self) -> bool:
        return self.status == TransactionStatus.SETTLED
