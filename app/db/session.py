from app.core.config import settings
from app.core.logging_setup import get_logger
from app.db.mongo import connect_to_mongo, close_mongo_connection
from app.repositories.base import LedgerStore
from app.repositories.memory_store import InMemoryLedgerStore
from app.repositories.mongo_store import MongoLedgerStore

logger = get_logger(__name__)


class StoreHolder:
    """Holds the ledger store opened at startup."""

    store: LedgerStore = None

ledger = StoreHolder()


async def open_store() -> LedgerStore:
    """Open the backend selected by STORAGE_BACKEND."""
    if settings.STORAGE_BACKEND == "memory":
        ledger.store = InMemoryLedgerStore()
    else:
        db = await connect_to_mongo()
        store = MongoLedgerStore(db, use_transactions=settings.MONGODB_TRANSACTIONS)
        await store.create_indexes()
        ledger.store = store
    logger.info("Ledger store ready (backend=%s)", settings.STORAGE_BACKEND)
    return ledger.store


async def close_store():
    if ledger.store is not None:
        await ledger.store.close()
        ledger.store = None
    if settings.STORAGE_BACKEND == "mongo":
        await close_mongo_connection()


def get_store() -> LedgerStore:
    """Return the active ledger store."""
    return ledger.store
