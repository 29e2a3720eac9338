"""
Audit Models for Finance Tracker

Every change to the ledger and every file operation is logged.
This provides:
1. Traceability of what happened to the records
2. Debugging information when a load drops lines or a save fails
3. A history the UI can show back to the user

DESIGN DECISION: Audit events are append-only. We never modify them.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.
    """
    # Ledger mutations
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_REJECTED = "transaction_rejected"
    TRANSACTION_DELETED = "transaction_deleted"
    LEDGER_SORTED = "ledger_sorted"

    # Persistence
    LEDGER_LOADED = "ledger_loaded"
    LOAD_FAILED = "load_failed"
    LEDGER_SAVED = "ledger_saved"
    SAVE_FAILED = "save_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every ledger mutation or file operation creates one of these.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the event occurred (UTC)"
    )

    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # Groups events that belong to one user action (e.g. a single session start)
    correlation_id: Optional[UUID] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_added(index, transaction_details)
        event = AuditEventBuilder.ledger_saved(path, count)
    """

    @staticmethod
    def transaction_added(
        index: int,
        transaction: dict,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            correlation_id=correlation_id,
            description=(
                f"Transaction added at index {index}: "
                f"{transaction.get('kind')} {transaction.get('amount')}"
            ),
            details={
                "index": index,
                "transaction": transaction,
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_rejected(
        reason: str,
        error_code: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_REJECTED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Transaction rejected: {error_code}",
            details={
                "error_code": error_code,
            },
            error_message=reason,
            is_user_action=True,
        )

    @staticmethod
    def transaction_deleted(
        index: int,
        transaction: dict,
        remaining: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_DELETED,
            correlation_id=correlation_id,
            description=f"Transaction {index} deleted, {remaining} remaining",
            details={
                "index": index,
                "transaction": transaction,
                "remaining": remaining,
            },
            is_user_action=True,
        )

    @staticmethod
    def ledger_sorted(
        sort_key: str,
        count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_SORTED,
            correlation_id=correlation_id,
            description=f"Ledger sorted by {sort_key}",
            details={
                "sort_key": sort_key,
                "count": count,
            },
            is_user_action=True,
        )

    @staticmethod
    def ledger_loaded(
        path: str,
        count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            correlation_id=correlation_id,
            description=f"Loaded {count} records from {path}",
            details={
                "path": path,
                "count": count,
            },
        )

    @staticmethod
    def load_failed(
        path: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOAD_FAILED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Could not load {path}",
            details={
                "path": path,
            },
            error_message=error_message,
        )

    @staticmethod
    def ledger_saved(
        path: str,
        count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_SAVED,
            correlation_id=correlation_id,
            description=f"Saved {count} records to {path}",
            details={
                "path": path,
                "count": count,
            },
            is_user_action=True,
        )

    @staticmethod
    def save_failed(
        path: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"Could not save {path}",
            details={
                "path": path,
            },
            error_message=error_message,
            is_user_action=True,
        )
