"""
MongoLedgerStore - LedgerStore on MongoDB via motor.

Collections: transactions, salary_logs, settlements.

Atomicity of multi-record operations:
1. With MONGODB_TRANSACTIONS on, reads and writes share one session
   transaction (snapshot read concern, majority write concern).
2. Every write is guarded: its filter pins the balance that was read, so a
   concurrent writer makes the update match nothing instead of clobbering.
3. Without server transactions, a guard miss on the second half of a
   settlement compensates the first half before raising.
4. A cascading delete is all-or-nothing only inside a server transaction.
   Without one, a settlement whose salary log is gone is logged and its
   cents are not restored.
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncIterator, Dict, List, Optional, Tuple

from motor.motor_asyncio import AsyncIOMotorClientSession, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.read_concern import ReadConcern
from pymongo.write_concern import WriteConcern

from app.core.errors import (
    ConflictError,
    NotFoundError,
    CONCURRENT_MODIFICATION,
    HAS_SETTLEMENTS,
)
from app.core.logging_setup import get_logger
from app.models.base import to_object_id
from app.models.salary_log import SalaryLog
from app.models.settlement import Settlement
from app.models.transaction import Transaction, TransactionCategory, TransactionStatus, derive_status
from app.repositories.base import LedgerStore
from app.utils.ledger_validation import validate_amount_out_update, validate_settlement

logger = get_logger(__name__)

Session = Optional[AsyncIOMotorClientSession]


def _concurrent(entity: str, entity_id: str) -> ConflictError:
    return ConflictError(
        f"{entity} {entity_id} was modified concurrently, retry the request",
        CONCURRENT_MODIFICATION,
    )


class MongoLedgerStore(LedgerStore):
    """Ledger storage backed by a motor database."""

    def __init__(self, db: AsyncIOMotorDatabase, use_transactions: bool = True):
        self.db = db
        self.use_transactions = use_transactions
        self.transactions = db["transactions"]
        self.salary_logs = db["salary_logs"]
        self.settlements = db["settlements"]

    async def create_indexes(self) -> None:
        await self.transactions.create_index([("created_at", DESCENDING)])
        await self.transactions.create_index("status")
        await self.salary_logs.create_index([("received_date", DESCENDING)])
        await self.salary_logs.create_index("amount_unused_cents")
        await self.settlements.create_index([("transaction_id", ASCENDING), ("created_at", ASCENDING)])
        await self.settlements.create_index([("salary_log_id", ASCENDING), ("created_at", ASCENDING)])
        logger.info("Ledger indexes ensured on %s", self.db.name)

    @asynccontextmanager
    async def _unit_of_work(self) -> AsyncIterator[Session]:
        """Yield a session inside a transaction, or None when disabled."""
        if not self.use_transactions:
            yield None
            return
        async with await self.db.client.start_session() as session:
            async with session.start_transaction(
                read_concern=ReadConcern("snapshot"),
                write_concern=WriteConcern("majority"),
            ):
                yield session

    # ===== TRANSACTIONS =====

    async def insert_transaction(self, transaction: Transaction) -> Transaction:
        await self.transactions.insert_one(transaction.to_document())
        return transaction

    async def get_transaction(self, transaction_id: str, session: Session = None) -> Optional[Transaction]:
        oid = to_object_id(transaction_id)
        if oid is None:
            return None
        doc = await self.transactions.find_one({"_id": oid}, session=session)
        return Transaction.from_document(doc) if doc else None

    async def list_transactions(self, unsettled_only: bool = False) -> List[Transaction]:
        query: Dict[str, Any] = {}
        if unsettled_only:
            query["status"] = {"$ne": TransactionStatus.SETTLED.value}
        docs = await self.transactions.find(query).sort("created_at", DESCENDING).to_list(None)
        return [Transaction.from_document(doc) for doc in docs]

    async def update_transaction(
        self,
        transaction_id: str,
        *,
        title: str,
        amount_out_cents: int,
        category: TransactionCategory,
        updated_at: datetime,
    ) -> Transaction:
        async with self._unit_of_work() as session:
            current = await self.get_transaction(transaction_id, session)
            if current is None:
                raise NotFoundError("Transaction", transaction_id)
            validate_amount_out_update(current, amount_out_cents)

            status = derive_status(amount_out_cents, current.amount_reimbursed_cents)
            result = await self.transactions.find_one_and_update(
                {
                    "_id": to_object_id(current.id),
                    "amount_reimbursed_cents": current.amount_reimbursed_cents,
                },
                {
                    "$set": {
                        "title": title,
                        "amount_out_cents": amount_out_cents,
                        "category": category.value,
                        "status": status.value,
                        "updated_at": updated_at,
                    }
                },
                return_document=True,
                session=session,
            )
            if result is None:
                raise _concurrent("Transaction", transaction_id)
        return Transaction.from_document(result)

    async def delete_transaction(self, transaction_id: str, cascade: bool = False) -> List[Settlement]:
        async with self._unit_of_work() as session:
            current = await self.get_transaction(transaction_id, session)
            if current is None:
                raise NotFoundError("Transaction", transaction_id)
            if current.amount_reimbursed_cents > 0 and not cascade:
                raise ConflictError(
                    f"Transaction {transaction_id} has {current.amount_reimbursed_cents} "
                    f"cents reimbursed; delete with cascade to reverse its settlements",
                    HAS_SETTLEMENTS,
                )

            linked = await self.list_settlements(transaction_id=current.id, session=session)

            # Transaction goes first so a concurrent settle cannot land on it
            result = await self.transactions.delete_one(
                {
                    "_id": to_object_id(current.id),
                    "amount_reimbursed_cents": current.amount_reimbursed_cents,
                },
                session=session,
            )
            if result.deleted_count == 0:
                raise _concurrent("Transaction", transaction_id)

            for settlement in linked:
                restored = await self.salary_logs.update_one(
                    {"_id": to_object_id(settlement.salary_log_id)},
                    {"$inc": {"amount_unused_cents": settlement.amount_cents}},
                    session=session,
                )
                if restored.matched_count == 0:
                    if session is not None:
                        raise NotFoundError("Salary log", settlement.salary_log_id)
                    logger.error(
                        "Settlement %s points at missing salary log %s; %d cents not restored",
                        settlement.id, settlement.salary_log_id, settlement.amount_cents,
                    )
            if linked:
                await self.settlements.delete_many(
                    {"transaction_id": current.id},
                    session=session,
                )
        return linked

    # ===== SALARY LOGS =====

    async def insert_salary_log(self, salary_log: SalaryLog) -> SalaryLog:
        await self.salary_logs.insert_one(salary_log.to_document())
        return salary_log

    async def get_salary_log(self, salary_log_id: str, session: Session = None) -> Optional[SalaryLog]:
        oid = to_object_id(salary_log_id)
        if oid is None:
            return None
        doc = await self.salary_logs.find_one({"_id": oid}, session=session)
        return SalaryLog.from_document(doc) if doc else None

    async def list_salary_logs(self, available_only: bool = False) -> List[SalaryLog]:
        query: Dict[str, Any] = {}
        if available_only:
            query["amount_unused_cents"] = {"$gt": 0}
        docs = await self.salary_logs.find(query).sort("received_date", DESCENDING).to_list(None)
        return [SalaryLog.from_document(doc) for doc in docs]

    # ===== SETTLEMENTS =====

    async def apply_settlement(self, settlement: Settlement) -> Tuple[Transaction, SalaryLog]:
        async with self._unit_of_work() as session:
            transaction = await self.get_transaction(settlement.transaction_id, session)
            if transaction is None:
                raise NotFoundError("Transaction", settlement.transaction_id)
            salary_log = await self.get_salary_log(settlement.salary_log_id, session)
            if salary_log is None:
                raise NotFoundError("Salary log", settlement.salary_log_id)

            validate_settlement(transaction, salary_log, settlement.amount_cents)

            new_reimbursed = transaction.amount_reimbursed_cents + settlement.amount_cents
            new_status = derive_status(transaction.amount_out_cents, new_reimbursed)
            txn_doc = await self.transactions.find_one_and_update(
                {
                    "_id": to_object_id(transaction.id),
                    "amount_out_cents": transaction.amount_out_cents,
                    "amount_reimbursed_cents": transaction.amount_reimbursed_cents,
                },
                {
                    "$set": {
                        "amount_reimbursed_cents": new_reimbursed,
                        "status": new_status.value,
                        "updated_at": settlement.created_at,
                    }
                },
                return_document=True,
                session=session,
            )
            if txn_doc is None:
                raise _concurrent("Transaction", transaction.id)

            log_doc = await self.salary_logs.find_one_and_update(
                {
                    "_id": to_object_id(salary_log.id),
                    "amount_unused_cents": salary_log.amount_unused_cents,
                },
                {"$inc": {"amount_unused_cents": -settlement.amount_cents}},
                return_document=True,
                session=session,
            )
            if log_doc is None:
                if session is None:
                    await self._revert_reimbursement(transaction, new_reimbursed)
                raise _concurrent("Salary log", salary_log.id)

            await self.settlements.insert_one(settlement.to_document(), session=session)

        return Transaction.from_document(txn_doc), SalaryLog.from_document(log_doc)

    async def _revert_reimbursement(self, original: Transaction, applied_reimbursed: int) -> None:
        """Undo the transaction half of a settlement when running without transactions."""
        await self.transactions.update_one(
            {
                "_id": to_object_id(original.id),
                "amount_reimbursed_cents": applied_reimbursed,
            },
            {
                "$set": {
                    "amount_reimbursed_cents": original.amount_reimbursed_cents,
                    "status": original.status.value,
                    "updated_at": original.updated_at,
                }
            },
        )
        logger.warning("Reverted partial settlement on transaction %s", original.id)

    async def list_settlements(
        self,
        transaction_id: Optional[str] = None,
        salary_log_id: Optional[str] = None,
        session: Session = None,
    ) -> List[Settlement]:
        query: Dict[str, Any] = {}
        if transaction_id is not None:
            query["transaction_id"] = transaction_id
        if salary_log_id is not None:
            query["salary_log_id"] = salary_log_id
        docs = await self.settlements.find(query, session=session).sort("created_at", ASCENDING).to_list(None)
        return [Settlement.from_document(doc) for doc in docs]

    # ===== READ SIDE =====

    async def snapshot(self) -> Tuple[List[Transaction], List[SalaryLog]]:
        async with self._unit_of_work() as session:
            txn_docs = await self.transactions.find({}, session=session).to_list(None)
            log_docs = await self.salary_logs.find({}, session=session).to_list(None)
        return (
            [Transaction.from_document(doc) for doc in txn_docs],
            [SalaryLog.from_document(doc) for doc in log_docs],
        )
