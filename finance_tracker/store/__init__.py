"""
Ledger Store Package

Provides the in-memory ledger, its text format and file persistence.
"""

from finance_tracker.store.ledger import DEFAULT_CAPACITY, LedgerStore
from finance_tracker.store.storage import (
    LedgerStorageInterface,
    TextFileLedgerStorage,
)

__all__ = [
    "DEFAULT_CAPACITY",
    "LedgerStore",
    "LedgerStorageInterface",
    "TextFileLedgerStorage",
]
