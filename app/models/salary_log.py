from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field, model_validator

from app.models.base import StoredModel, _utcnow


class IncomeSource(str, Enum):
    SALARY = "salary"
    REIMBURSEMENT = "reimbursement"
    OTHER = "other"


class SalaryLog(StoredModel):
    """
    Money received, waiting to be allocated against transactions.

    Append-only: amount_cents never changes, amount_unused_cents only shrinks
    through settlement (or grows back when a settled transaction is deleted
    with cascade).
    """
    amount_cents: int
    amount_unused_cents: int
    month: str
    source: IncomeSource = IncomeSource.SALARY
    remark: Optional[str] = None
    received_date: datetime = Field(default_factory=_utcnow)

    @model_validator(mode="after")
    def _check_amounts(self):
        if self.amount_cents <= 0:
            raise ValueError("amount_cents must be positive")
        if not 0 <= self.amount_unused_cents <= self.amount_cents:
            raise ValueError(
                "amount_unused_cents must be between 0 and amount_cents"
            )
        return self

    def used_cents(self) -> int:
        return self.amount_cents - self.amount_unused_cents

    def is_available(self) -> bool:
        return self.amount_unused_cents > 0
