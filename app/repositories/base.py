"""
LedgerStore - the storage interface the services depend on.

Two implementations exist:
- MongoLedgerStore (motor), the production backend
- InMemoryLedgerStore, for local runs and tests

Single-record CRUD is plain. The operations that touch more than one record
(settle, cascading delete) or that must not race a settle (update) are
atomic inside the store: they re-read, re-check and write in one unit.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from app.models.salary_log import SalaryLog
from app.models.settlement import Settlement
from app.models.transaction import Transaction, TransactionCategory


class LedgerStore(ABC):
    """Storage for transactions, salary logs and settlement records."""

    # ===== TRANSACTIONS =====

    @abstractmethod
    async def insert_transaction(self, transaction: Transaction) -> Transaction:
        pass

    @abstractmethod
    async def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Return the transaction, or None if it does not exist."""
        pass

    @abstractmethod
    async def list_transactions(self, unsettled_only: bool = False) -> List[Transaction]:
        """Newest first. ``unsettled_only`` drops settled entries."""
        pass

    @abstractmethod
    async def update_transaction(
        self,
        transaction_id: str,
        *,
        title: str,
        amount_out_cents: int,
        category: TransactionCategory,
        updated_at: datetime,
    ) -> Transaction:
        """
        Rewrite the editable fields.

        Raises:
            NotFoundError: transaction does not exist
            ValidationError: amount_out_cents below the reimbursed amount
        """
        pass

    @abstractmethod
    async def delete_transaction(self, transaction_id: str, cascade: bool = False) -> List[Settlement]:
        """
        Delete a transaction and return the settlements that were reversed.

        Raises:
            NotFoundError: transaction does not exist
            ConflictError: it has reimbursements and ``cascade`` is False
        """
        pass

    # ===== SALARY LOGS =====

    @abstractmethod
    async def insert_salary_log(self, salary_log: SalaryLog) -> SalaryLog:
        pass

    @abstractmethod
    async def get_salary_log(self, salary_log_id: str) -> Optional[SalaryLog]:
        pass

    @abstractmethod
    async def list_salary_logs(self, available_only: bool = False) -> List[SalaryLog]:
        """Newest first. ``available_only`` keeps logs with unused balance."""
        pass

    # ===== SETTLEMENTS =====

    @abstractmethod
    async def apply_settlement(self, settlement: Settlement) -> Tuple[Transaction, SalaryLog]:
        """
        Apply a settlement atomically and store its record.

        Checks run in order: transaction exists, salary log exists, amount
        fits the outstanding balance, amount fits the unused balance.

        Raises:
            NotFoundError, ConflictError
        """
        pass

    @abstractmethod
    async def list_settlements(
        self,
        transaction_id: Optional[str] = None,
        salary_log_id: Optional[str] = None,
    ) -> List[Settlement]:
        """Oldest first, optionally filtered."""
        pass

    # ===== READ SIDE =====

    @abstractmethod
    async def snapshot(self) -> Tuple[List[Transaction], List[SalaryLog]]:
        """All transactions and salary logs, read consistently."""
        pass

    async def close(self) -> None:
        pass
