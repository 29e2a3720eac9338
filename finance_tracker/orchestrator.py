"""
Main Orchestrator for Finance Tracker

This module ties together the ledger, its file storage and the audit
logger, and defines the flows a front end drives:
1. Startup (load the data file, missing file means an empty ledger)
2. Mutations (add, delete, sort), each one audited
3. Explicit save and reload against the same file

DESIGN DECISION: The front end only talks to a LedgerSession.
Read-only queries go straight to `session.store`; anything that
changes the ledger or touches the file goes through the session so
it gets audited.
"""

from decimal import Decimal
from typing import Optional, Union
from uuid import UUID

import structlog

from finance_tracker.audit import AuditLogger, configure_logging, create_correlation_id
from finance_tracker.config import Settings, get_settings
from finance_tracker.errors import IOFailureError, LedgerError
from finance_tracker.models.transaction import SortKey, Transaction, TransactionKind
from finance_tracker.store import LedgerStorageInterface, LedgerStore, TextFileLedgerStorage


logger = structlog.get_logger(__name__)


class LedgerSession:
    """
    One user's working session on the ledger.

    Owns the store; the storage backend and audit logger are injected
    so tests can point them anywhere.
    """

    def __init__(
        self,
        store: LedgerStore,
        storage: LedgerStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self.store = store
        self._storage = storage
        self._audit_logger = audit_logger or AuditLogger()

    @property
    def storage(self) -> LedgerStorageInterface:
        return self._storage

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    @property
    def storage_location(self) -> str:
        return str(getattr(self._storage, "path", type(self._storage).__name__))

    def start(self, correlation_id: Optional[UUID] = None) -> int:
        """
        Load existing data at startup.

        A missing or unreadable file is not fatal here: the session
        simply starts with zero records.

        Returns:
            Number of records loaded
        """
        correlation_id = correlation_id or create_correlation_id()
        try:
            return self.load(correlation_id=correlation_id)
        except IOFailureError as e:
            self.store.clear()
            logger.info("ledger_start_empty", reason=str(e))
            return 0

    def load(self, correlation_id: Optional[UUID] = None) -> int:
        """
        Replace the ledger with the file content.

        Raises:
            IOFailureError: the file cannot be read; the ledger is unchanged
        """
        try:
            transactions = self._storage.load()
        except IOFailureError as e:
            self._audit_logger.log_load_failed(
                path=self.storage_location,
                error_message=str(e),
                correlation_id=correlation_id,
            )
            raise

        count = self.store.replace_all(transactions)
        self._audit_logger.log_ledger_loaded(
            path=self.storage_location,
            count=count,
            correlation_id=correlation_id,
        )
        return count

    def save(self, correlation_id: Optional[UUID] = None) -> int:
        """
        Write the whole ledger to the file.

        Raises:
            IOFailureError: the file cannot be written
        """
        try:
            count = self._storage.save(self.store.list_all())
        except IOFailureError as e:
            self._audit_logger.log_save_failed(
                path=self.storage_location,
                error_message=str(e),
                correlation_id=correlation_id,
            )
            raise

        self._audit_logger.log_ledger_saved(
            path=self.storage_location,
            count=count,
            correlation_id=correlation_id,
        )
        return count

    def add(
        self,
        transaction: Transaction,
        correlation_id: Optional[UUID] = None,
    ) -> int:
        """Add a prepared record (see LedgerStore.add for errors)."""
        try:
            index = self.store.add(transaction)
        except LedgerError as e:
            self._audit_logger.log_transaction_rejected(e, correlation_id=correlation_id)
            raise
        self._audit_logger.log_transaction_added(
            index=index,
            transaction=transaction,
            correlation_id=correlation_id,
        )
        return index

    def add_entry(
        self,
        year: int,
        month: int,
        day: int,
        kind: Union[TransactionKind, str],
        category: str,
        amount: Union[Decimal, int, float, str],
        note: str = "",
        correlation_id: Optional[UUID] = None,
    ) -> int:
        """Add a record from raw input (see LedgerStore.add_entry for errors)."""
        try:
            index = self.store.add_entry(year, month, day, kind, category, amount, note)
        except LedgerError as e:
            self._audit_logger.log_transaction_rejected(e, correlation_id=correlation_id)
            raise
        self._audit_logger.log_transaction_added(
            index=index,
            transaction=self.store[index],
            correlation_id=correlation_id,
        )
        return index

    def delete(self, index: int, correlation_id: Optional[UUID] = None) -> Transaction:
        removed = self.store.delete(index)
        self._audit_logger.log_transaction_deleted(
            index=index,
            transaction=removed,
            remaining=self.store.count,
            correlation_id=correlation_id,
        )
        return removed

    def sort(self, key: SortKey, correlation_id: Optional[UUID] = None) -> None:
        self.store.sort(key)
        self._audit_logger.log_ledger_sorted(
            key=key,
            count=self.store.count,
            correlation_id=correlation_id,
        )


def create_session(
    settings: Optional[Settings] = None,
    storage: Optional[LedgerStorageInterface] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> LedgerSession:
    """
    Factory function to create a session from settings.

    The session is not started; call start() to load existing data.
    """
    settings = settings or get_settings()
    app_settings = settings.app
    configure_logging("DEBUG" if app_settings.debug_mode else app_settings.log_level)

    if storage is None:
        storage_settings = settings.storage
        storage = TextFileLedgerStorage(
            storage_settings.data_file,
            encoding=storage_settings.encoding,
        )

    store = LedgerStore(capacity=app_settings.max_transactions)
    return LedgerSession(store=store, storage=storage, audit_logger=audit_logger)
