from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, StrictInt

from app.models.salary_log import IncomeSource, SalaryLog


class SalaryLogCreate(BaseModel):
    """Request body to record received money."""
    amount_cents: StrictInt
    month: str
    source: IncomeSource = IncomeSource.SALARY
    remark: Optional[str] = None


class SalaryLogResponse(BaseModel):
    id: str
    amount_cents: int
    amount_unused_cents: int
    used_cents: int
    month: str
    source: IncomeSource
    remark: Optional[str] = None
    received_date: datetime

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_model(cls, salary_log: SalaryLog) -> "SalaryLogResponse":
        return cls(
            id=salary_log.id,
            amount_cents=salary_log.amount_cents,
            amount_unused_cents=salary_log.amount_unused_cents,
            used_cents=salary_log.used_cents(),
            month=salary_log.month,
            source=salary_log.source,
            remark=salary_log.remark,
            received_date=salary_log.received_date
        )
