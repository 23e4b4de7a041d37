"""In-process LedgerStore. Every mutation runs under one asyncio lock."""

import asyncio
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from app.core.errors import ConflictError, NotFoundError, HAS_SETTLEMENTS
from app.models.salary_log import SalaryLog
from app.models.settlement import Settlement
from app.models.transaction import Transaction, TransactionCategory, TransactionStatus
from app.repositories.base import LedgerStore
from app.utils.ledger_validation import validate_amount_out_update, validate_settlement


class InMemoryLedgerStore(LedgerStore):
    """Dictionary-backed store. Records are copied on the way in and out."""

    def __init__(self):
        self._transactions: Dict[str, Transaction] = {}
        self._salary_logs: Dict[str, SalaryLog] = {}
        self._settlements: Dict[str, Settlement] = {}
        self._lock = asyncio.Lock()

    async def insert_transaction(self, transaction: Transaction) -> Transaction:
        async with self._lock:
            self._transactions[transaction.id] = transaction.model_copy()
        return transaction.model_copy()

    async def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        transaction = self._transactions.get(transaction_id)
        return transaction.model_copy() if transaction else None

    async def list_transactions(self, unsettled_only: bool = False) -> List[Transaction]:
        entries = sorted(self._transactions.values(), key=lambda t: t.created_at, reverse=True)
        if unsettled_only:
            entries = [t for t in entries if t.status != TransactionStatus.SETTLED]
        return [t.model_copy() for t in entries]

    async def update_transaction(
        self,
        transaction_id: str,
        *,
        title: str,
        amount_out_cents: int,
        category: TransactionCategory,
        updated_at: datetime,
    ) -> Transaction:
        async with self._lock:
            current = self._transactions.get(transaction_id)
            if current is None:
                raise NotFoundError("Transaction", transaction_id)
            validate_amount_out_update(current, amount_out_cents)
            updated = current.model_copy(update={
                "title": title,
                "amount_out_cents": amount_out_cents,
                "category": category,
                "updated_at": updated_at,
            })
            self._transactions[transaction_id] = updated
        return updated.model_copy()

    async def delete_transaction(self, transaction_id: str, cascade: bool = False) -> List[Settlement]:
        async with self._lock:
            current = self._transactions.get(transaction_id)
            if current is None:
                raise NotFoundError("Transaction", transaction_id)
            if current.amount_reimbursed_cents > 0 and not cascade:
                raise ConflictError(
                    f"Transaction {transaction_id} has {current.amount_reimbursed_cents} "
                    f"cents reimbursed; delete with cascade to reverse its settlements",
                    HAS_SETTLEMENTS,
                )

            linked = [s for s in self._settlements.values() if s.transaction_id == transaction_id]
            for settlement in linked:
                salary_log = self._salary_logs[settlement.salary_log_id]
                self._salary_logs[salary_log.id] = salary_log.model_copy(update={
                    "amount_unused_cents": salary_log.amount_unused_cents + settlement.amount_cents,
                })
                del self._settlements[settlement.id]
            del self._transactions[transaction_id]
        return linked

    async def insert_salary_log(self, salary_log: SalaryLog) -> SalaryLog:
        async with self._lock:
            self._salary_logs[salary_log.id] = salary_log.model_copy()
        return salary_log.model_copy()

    async def get_salary_log(self, salary_log_id: str) -> Optional[SalaryLog]:
        salary_log = self._salary_logs.get(salary_log_id)
        return salary_log.model_copy() if salary_log else None

    async def list_salary_logs(self, available_only: bool = False) -> List[SalaryLog]:
        logs = sorted(self._salary_logs.values(), key=lambda s: s.received_date, reverse=True)
        if available_only:
            logs = [s for s in logs if s.is_available()]
        return [s.model_copy() for s in logs]

    async def apply_settlement(self, settlement: Settlement) -> Tuple[Transaction, SalaryLog]:
        async with self._lock:
            transaction = self._transactions.get(settlement.transaction_id)
            if transaction is None:
                raise NotFoundError("Transaction", settlement.transaction_id)
            salary_log = self._salary_logs.get(settlement.salary_log_id)
            if salary_log is None:
                raise NotFoundError("Salary log", settlement.salary_log_id)

            validate_settlement(transaction, salary_log, settlement.amount_cents)

            # Build both new versions before writing either
            updated_transaction = transaction.model_copy(update={
                "amount_reimbursed_cents": transaction.amount_reimbursed_cents + settlement.amount_cents,
                "updated_at": settlement.created_at,
            })
            updated_log = salary_log.model_copy(update={
                "amount_unused_cents": salary_log.amount_unused_cents - settlement.amount_cents,
            })
            self._transactions[transaction.id] = updated_transaction
            self._salary_logs[salary_log.id] = updated_log
            self._settlements[settlement.id] = settlement
        return updated_transaction.model_copy(), updated_log.model_copy()

    async def list_settlements(
        self,
        transaction_id: Optional[str] = None,
        salary_log_id: Optional[str] = None,
    ) -> List[Settlement]:
        records = sorted(self._settlements.values(), key=lambda s: s.created_at)
        if transaction_id is not None:
            records = [s for s in records if s.transaction_id == transaction_id]
        if salary_log_id is not None:
            records = [s for s in records if s.salary_log_id == salary_log_id]
        return records

    async def snapshot(self) -> Tuple[List[Transaction], List[SalaryLog]]:
        async with self._lock:
            transactions = [t.model_copy() for t in self._transactions.values()]
            salary_logs = [s.model_copy() for s in self._salary_logs.values()]
        return transactions, salary_logs
