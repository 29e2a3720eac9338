"""
Audit Logger

DESIGN DECISION: Every change to the ledger is logged.
This provides:
1. Traceability of adds, deletes, sorts, loads and saves
2. Debugging capability when the data file has bad lines
3. A history the user can look at in the UI

The audit logger:
- Is synchronous, like the rest of the ledger
- Gracefully handles sink failures (never breaks a ledger operation)
- Supports correlation IDs to trace related events
"""

import logging
from collections import deque
from typing import Callable, Optional
from uuid import UUID, uuid4

import structlog

from finance_tracker.models.audit import AuditEvent, AuditEventBuilder
from finance_tracker.models.transaction import SortKey, Transaction


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """
    Route structlog output to stderr at the given level.

    structlog hands rendered JSON lines to the stdlib logging module,
    so this only has to set up the stdlib side.
    """
    logging.basicConfig(format="%(message)s", level=level.upper())
    logging.getLogger("finance_tracker").setLevel(level.upper())


AuditSink = Callable[[AuditEvent], None]


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An in-memory trail (for the UI), plus an optional sink
    """

    def __init__(
        self,
        sink: Optional[AuditSink] = None,
        max_events: int = 1000,
    ):
        """
        Initialize audit logger.

        Args:
            sink: Extra destination for events (e.g. a file writer).
                  If None, events are only logged locally.
            max_events: How many events the in-memory trail keeps.
        """
        self._sink = sink
        self._events: deque[AuditEvent] = deque(maxlen=max_events)
        self._logger = structlog.get_logger("finance_tracker.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Returns False if the sink failed.
        """
        log_dict = event.to_log_dict()

        if event.severity.value == "error":
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        self._events.append(event)

        if self._sink:
            try:
                self._sink(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_sink_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """Most recent events, newest first."""
        events = list(self._events)
        events.reverse()
        return events[:limit]

    def events_by_correlation_id(self, correlation_id: UUID) -> list[AuditEvent]:
        """All events of one user action, oldest first."""
        return [e for e in self._events if e.correlation_id == correlation_id]

    def log_transaction_added(
        self,
        index: int,
        transaction: Transaction,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.transaction_added(
            index=index,
            transaction=transaction.to_log_dict(),
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_transaction_rejected(
        self,
        error: Exception,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.transaction_rejected(
            reason=str(error),
            error_code=type(error).__name__,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_transaction_deleted(
        self,
        index: int,
        transaction: Transaction,
        remaining: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.transaction_deleted(
            index=index,
            transaction=transaction.to_log_dict(),
            remaining=remaining,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_ledger_sorted(
        self,
        key: SortKey,
        count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.ledger_sorted(
            sort_key=key.value,
            count=count,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_ledger_loaded(
        self,
        path: str,
        count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.ledger_loaded(
            path=path,
            count=count,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_load_failed(
        self,
        path: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.load_failed(
            path=path,
            error_message=error_message,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_ledger_saved(
        self,
        path: str,
        count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.ledger_saved(
            path=path,
            count=count,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_save_failed(
        self,
        path: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.save_failed(
            path=path,
            error_message=error_message,
            correlation_id=correlation_id,
        )
        self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action and pass it
    through all subsequent operations.
    """
    return uuid4()
