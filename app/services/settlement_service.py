from typing import List, NamedTuple, Optional

from app.core.clock import Clock, SystemClock
from app.core.errors import LedgerError
from app.core.logging_setup import get_logger
from app.models.salary_log import SalaryLog
from app.models.settlement import Settlement
from app.models.transaction import Transaction
from app.repositories.base import LedgerStore
from app.utils.ledger_validation import validate_amount_cents

logger = get_logger(__name__)


class SettlementOutcome(NamedTuple):
    transaction: Transaction
    salary_log: SalaryLog
    settlement: Settlement


class SettlementService:
    """Moves unused salary log balance onto outstanding transactions."""

    def __init__(self, store: LedgerStore, clock: Optional[Clock] = None):
        self.store = store
        self.clock = clock or SystemClock()

    async def settle(self, transaction_id: str, salary_log_id: str, amount_cents) -> SettlementOutcome:
        """
        Settle ``amount_cents`` of a transaction from a salary log.

        Failure order:
        1. invalid amount                -> ValidationError
        2. transaction missing           -> NotFoundError
        3. salary log missing            -> NotFoundError
        4. amount > outstanding balance  -> ConflictError
        5. amount > unused balance       -> ConflictError

        Both balances and the settlement record are written in one atomic
        unit by the store; a failure leaves everything unchanged.
        """
        try:
            amount_cents = validate_amount_cents(amount_cents)
            settlement = Settlement(
                transaction_id=transaction_id,
                salary_log_id=salary_log_id,
                amount_cents=amount_cents,
                created_at=self.clock.now(),
            )
            transaction, salary_log = await self.store.apply_settlement(settlement)
        except LedgerError as exc:
            logger.warning(
                "Settlement rejected (%s): transaction=%s salary_log=%s amount=%r",
                exc.code, transaction_id, salary_log_id, amount_cents,
            )
            raise

        logger.info(
            "Settled %d cents: transaction=%s (%s) salary_log=%s unused=%d",
            amount_cents, transaction.id, transaction.status.value,
            salary_log.id, salary_log.amount_unused_cents,
        )
        return SettlementOutcome(transaction, salary_log, settlement)

    async def list_settlements(
        self,
        transaction_id: Optional[str] = None,
        salary_log_id: Optional[str] = None,
    ) -> List[Settlement]:
        return await self.store.list_settlements(
            transaction_id=transaction_id,
            salary_log_id=salary_log_id,
        )
