"""
Pytest configuration and fixtures for Finance Tracker tests.

Settings are read from the environment and from a `.env` file in the
working directory, and get_settings() caches them. Every test runs in
its own temporary directory with a fresh settings cache so no test
sees another one's configuration or data file.
"""

from datetime import date
from decimal import Decimal

import pytest

from finance_tracker.config import get_settings
from finance_tracker.models.transaction import Transaction, TransactionKind
from finance_tracker.store import LedgerStore


@pytest.fixture(autouse=True)
def _isolate_settings(tmp_path, monkeypatch):
    """Run each test in a clean directory with uncached settings."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "FINANCE_TRACKER_MAX_TRANSACTIONS",
        "FINANCE_TRACKER_CHART_WIDTH",
        "FINANCE_TRACKER_LOG_LEVEL",
        "FINANCE_TRACKER_DEBUG_MODE",
        "FINANCE_TRACKER_STORAGE_DATA_FILE",
        "FINANCE_TRACKER_STORAGE_ENCODING",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_transaction(
    day: date = date(2025, 1, 15),
    kind: TransactionKind = TransactionKind.EXPENSE,
    category: str = "Food",
    amount: str = "10.00",
    note: str = "",
) -> Transaction:
    return Transaction(
        transaction_date=day,
        kind=kind,
        category=category,
        amount=Decimal(amount),
        note=note,
    )


@pytest.fixture
def sample_transactions():
    """A small mixed ledger, deliberately not in date order."""
    return [
        make_transaction(date(2025, 3, 1), TransactionKind.INCOME, "Salary", "3000.00", "March pay"),
        make_transaction(date(2025, 1, 20), TransactionKind.EXPENSE, "Food", "45.50", "Groceries"),
        make_transaction(date(2025, 2, 14), TransactionKind.EXPENSE, "Rent", "1200.00"),
        make_transaction(date(2024, 12, 31), TransactionKind.EXPENSE, "Gifts", "80.00", "New year"),
        make_transaction(date(2025, 1, 20), TransactionKind.EXPENSE, "Transport", "45.50", "Train pass"),
    ]


@pytest.fixture
def store(sample_transactions):
    ledger = LedgerStore(capacity=10)
    for t in sample_transactions:
        ledger.add(t)
    return ledger


@pytest.fixture
def make_tx():
    """Factory for single records with sensible defaults."""
    return make_transaction
