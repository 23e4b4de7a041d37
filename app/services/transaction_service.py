from typing import List, Optional

from app.core.clock import Clock, SystemClock
from app.core.errors import LedgerError, NotFoundError
from app.core.logging_setup import get_logger
from app.models.settlement import Settlement
from app.models.transaction import Transaction, TransactionCategory
from app.repositories.base import LedgerStore
from app.utils.ledger_validation import (
    validate_amount_cents,
    validate_choice,
    validate_required_text,
)

logger = get_logger(__name__)


class TransactionService:
    """Create, edit and delete transactions (advances awaiting reimbursement)."""

    def __init__(self, store: LedgerStore, clock: Optional[Clock] = None):
        self.store = store
        self.clock = clock or SystemClock()

    async def create(
        self,
        title: str,
        amount_out_cents,
        category: TransactionCategory = TransactionCategory.WORK,
    ) -> Transaction:
        title = validate_required_text(title, "title")
        amount_out_cents = validate_amount_cents(amount_out_cents, "amount_out_cents")
        now = self.clock.now()
        transaction = Transaction(
            title=title,
            amount_out_cents=amount_out_cents,
            category=validate_choice(category, TransactionCategory, "category"),
            created_at=now,
            updated_at=now,
        )
        transaction = await self.store.insert_transaction(transaction)
        logger.info("Created transaction %s (%d cents)", transaction.id, transaction.amount_out_cents)
        return transaction

    async def get(self, transaction_id: str) -> Transaction:
        transaction = await self.store.get_transaction(transaction_id)
        if transaction is None:
            raise NotFoundError("Transaction", transaction_id)
        return transaction

    async def list(self, unsettled_only: bool = False) -> List[Transaction]:
        return await self.store.list_transactions(unsettled_only=unsettled_only)

    async def update(
        self,
        transaction_id: str,
        title: str,
        amount_out_cents,
        category: TransactionCategory,
    ) -> Transaction:
        """
        Edit title, amount and category.

        The amount may not drop below what was already reimbursed; status is
        recomputed from the new amount in the same write.
        """
        try:
            title = validate_required_text(title, "title")
            amount_out_cents = validate_amount_cents(amount_out_cents, "amount_out_cents")
            transaction = await self.store.update_transaction(
                transaction_id,
                title=title,
                amount_out_cents=amount_out_cents,
                category=validate_choice(category, TransactionCategory, "category"),
                updated_at=self.clock.now(),
            )
        except LedgerError as exc:
            logger.warning("Update of transaction %s rejected (%s)", transaction_id, exc.code)
            raise
        logger.info("Updated transaction %s (%s)", transaction.id, transaction.status.value)
        return transaction

    async def delete(self, transaction_id: str, cascade: bool = False) -> List[Settlement]:
        """
        Delete a transaction.

        Refused once anything was reimbursed, unless ``cascade`` is set: then
        each linked settlement is reversed into its salary log first.
        Returns the reversed settlements.
        """
        try:
            reversed_settlements = await self.store.delete_transaction(transaction_id, cascade=cascade)
        except LedgerError as exc:
            logger.warning("Delete of transaction %s rejected (%s)", transaction_id, exc.code)
            raise
        logger.info(
            "Deleted transaction %s, reversed %d settlement(s)",
            transaction_id, len(reversed_settlements),
        )
        return reversed_settlements
