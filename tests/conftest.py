from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_clock
from app.core.clock import FixedClock
from app.db.session import get_store
from app.main import app
from app.repositories.memory_store import InMemoryLedgerStore
from app.services.salary_log_service import SalaryLogService
from app.services.settlement_service import SettlementService
from app.services.summary_service import SummaryService
from app.services.transaction_service import TransactionService

START = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock():
    """Deterministic clock, one second per reading."""
    return FixedClock(START)


@pytest.fixture
def store():
    """Fresh in-memory ledger for every test."""
    return InMemoryLedgerStore()


@pytest.fixture
def transaction_service(store, clock):
    return TransactionService(store, clock)


@pytest.fixture
def salary_log_service(store, clock):
    return SalaryLogService(store, clock)


@pytest.fixture
def settlement_service(store, clock):
    return SettlementService(store, clock)


@pytest.fixture
def summary_service(store):
    return SummaryService(store)


@pytest.fixture
def test_client(store, clock, monkeypatch):
    """FastAPI test client bound to the in-memory store."""
    from app.core import config
    monkeypatch.setattr(config.settings, "STORAGE_BACKEND", "memory")

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_clock] = lambda: clock
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
