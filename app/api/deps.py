from fastapi import Depends

from app.core.clock import Clock, SystemClock
from app.db.session import get_store
from app.repositories.base import LedgerStore
from app.services.salary_log_service import SalaryLogService
from app.services.settlement_service import SettlementService
from app.services.summary_service import SummaryService
from app.services.transaction_service import TransactionService

_system_clock = SystemClock()


def get_clock() -> Clock:
    return _system_clock


def get_transaction_service(
    store: LedgerStore = Depends(get_store),
    clock: Clock = Depends(get_clock)
) -> TransactionService:
    return TransactionService(store, clock)


def get_salary_log_service(
    store: LedgerStore = Depends(get_store),
    clock: Clock = Depends(get_clock)
) -> SalaryLogService:
    return SalaryLogService(store, clock)


def get_settlement_service(
    store: LedgerStore = Depends(get_store),
    clock: Clock = Depends(get_clock)
) -> SettlementService:
    return SettlementService(store, clock)


def get_summary_service(store: LedgerStore = Depends(get_store)) -> SummaryService:
    return SummaryService(store)
