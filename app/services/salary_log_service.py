from typing import List, Optional

from app.core.clock import Clock, SystemClock
from app.core.errors import NotFoundError
from app.core.logging_setup import get_logger
from app.models.salary_log import IncomeSource, SalaryLog
from app.repositories.base import LedgerStore
from app.utils.ledger_validation import (
    validate_amount_cents,
    validate_choice,
    validate_optional_text,
    validate_required_text,
)

logger = get_logger(__name__)


class SalaryLogService:
    """Records received money. Salary logs are append-only."""

    def __init__(self, store: LedgerStore, clock: Optional[Clock] = None):
        self.store = store
        self.clock = clock or SystemClock()

    async def create(
        self,
        amount_cents,
        month: str,
        source: IncomeSource = IncomeSource.SALARY,
        remark: Optional[str] = None,
    ) -> SalaryLog:
        amount_cents = validate_amount_cents(amount_cents)
        month = validate_required_text(month, "month")
        salary_log = SalaryLog(
            amount_cents=amount_cents,
            amount_unused_cents=amount_cents,
            month=month,
            source=validate_choice(source, IncomeSource, "source"),
            remark=validate_optional_text(remark),
            received_date=self.clock.now(),
        )
        salary_log = await self.store.insert_salary_log(salary_log)
        logger.info("Recorded salary log %s (%d cents, %s)", salary_log.id, amount_cents, month)
        return salary_log

    async def get(self, salary_log_id: str) -> SalaryLog:
        salary_log = await self.store.get_salary_log(salary_log_id)
        if salary_log is None:
            raise NotFoundError("Salary log", salary_log_id)
        return salary_log

    async def list(self, available_only: bool = False) -> List[SalaryLog]:
        return await self.store.list_salary_logs(available_only=available_only)
