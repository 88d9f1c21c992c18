"""
Audit Logger

DESIGN DECISION: Every significant action in the system is logged.
This provides:
1. Traceability of every write to the ledger file
2. Debugging capability
3. An activity history the user can look at

The audit logger:
- Gracefully handles failures (doesn't crash the app if logging fails)
- Supports correlation IDs to trace related events
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog

from accounting_ledger.models.audit import AuditEvent, AuditEventBuilder
from accounting_ledger.services.storage import AuditStorageInterface


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
    Route structlog's JSON lines to stderr at the given level.

    Call once from the entry point. structlog renders the message;
    the stdlib handler only writes it out.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. Audit storage (for the in-app activity history)
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("accounting_ledger.audit")

    @property
    def storage(self) -> Optional[AuditStorageInterface]:
        return self._storage

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_ledger_loaded(
        self,
        path: str,
        record_count: int,
        skipped_count: int,
        correlation_id: UUID,
    ) -> None:
        """Log a completed load."""
        self.log(AuditEventBuilder.ledger_loaded(
            path=path,
            record_count=record_count,
            skipped_count=skipped_count,
            correlation_id=correlation_id,
        ))

    def log_ledger_created(
        self,
        path: str,
        correlation_id: UUID,
    ) -> None:
        """Log creation of a fresh ledger file."""
        self.log(AuditEventBuilder.ledger_created(
            path=path,
            correlation_id=correlation_id,
        ))

    def log_line_skipped(
        self,
        line_number: int,
        reason: str,
        correlation_id: UUID,
    ) -> None:
        """Log a malformed line dropped during load."""
        self.log(AuditEventBuilder.line_skipped(
            line_number=line_number,
            reason=reason,
            correlation_id=correlation_id,
        ))

    def log_validation_failed(
        self,
        operation: str,
        issues: list[dict],
        correlation_id: UUID,
    ) -> None:
        """Log rejected user input."""
        self.log(AuditEventBuilder.validation_failed(
            operation=operation,
            issues=issues,
            correlation_id=correlation_id,
        ))

    def log_transaction_saved(
        self,
        vendor: str,
        amount: str,
        kind: str,
        correlation_id: UUID,
    ) -> None:
        """Log a transaction written to the ledger file."""
        self.log(AuditEventBuilder.transaction_saved(
            vendor=vendor,
            amount=amount,
            kind=kind,
            correlation_id=correlation_id,
        ))

    def log_save_failed(
        self,
        vendor: str,
        amount: str,
        error_message: str,
        correlation_id: UUID,
    ) -> None:
        """Log a failed append."""
        self.log(AuditEventBuilder.save_failed(
            vendor=vendor,
            amount=amount,
            error_message=error_message,
            correlation_id=correlation_id,
        ))

    def log_report_generated(
        self,
        report_type: str,
        result_count: int,
        correlation_id: UUID,
    ) -> None:
        """Log report execution."""
        self.log(AuditEventBuilder.report_generated(
            report_type=report_type,
            result_count=result_count,
            correlation_id=correlation_id,
        ))

    def log_report_failed(
        self,
        report_type: str,
        error_message: str,
        correlation_id: UUID,
    ) -> None:
        """Log a report that could not run."""
        self.log(AuditEventBuilder.report_failed(
            report_type=report_type,
            error_message=error_message,
            correlation_id=correlation_id,
        ))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (e.g., a deposit entry).
    Pass it through all subsequent operations.
    """
    return uuid4()
