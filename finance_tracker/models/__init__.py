"""
Data Models Package

This package contains all Pydantic models used by the Finance Tracker.
Every record held by the ledger conforms to these schemas.
"""

from finance_tracker.models.transaction import (
    IndexedTransaction,
    LedgerSummary,
    SearchField,
    SortKey,
    Transaction,
    TransactionKind,
    check_date,
    is_valid_date,
    make_date,
    to_amount,
    to_decimal,
)
from finance_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Transaction models
    "IndexedTransaction",
    "LedgerSummary",
    "SearchField",
    "SortKey",
    "Transaction",
    "TransactionKind",
    "check_date",
    "is_valid_date",
    "make_date",
    "to_amount",
    "to_decimal",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
