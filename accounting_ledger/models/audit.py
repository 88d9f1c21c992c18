"""
Audit Models for the Accounting Ledger

Every significant action in the system is logged for audit purposes.
This provides:
1. Traceability of every write to the ledger file
2. Debugging information when things go wrong
3. A record of skipped lines after a load

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Loading
    LEDGER_LOADED = "ledger_loaded"
    LEDGER_CREATED = "ledger_created"
    LINE_SKIPPED = "line_skipped"

    # Writes
    VALIDATION_FAILED = "validation_failed"
    TRANSACTION_SAVED = "transaction_saved"
    SAVE_FAILED = "save_failed"

    # Reads
    REPORT_GENERATED = "report_generated"
    REPORT_FAILED = "report_failed"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (local time)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., one load or one entry)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

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
        event = AuditEventBuilder.ledger_loaded(path, 42, 1, correlation_id)
        event = AuditEventBuilder.transaction_saved("Acme", "-12.50", "payment", correlation_id)
    """

    @staticmethod
    def ledger_loaded(
        path: str,
        record_count: int,
        skipped_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            severity=AuditSeverity.WARNING if skipped_count else AuditSeverity.INFO,
            correlation_id=correlation_id,
            description=f"Loaded {record_count} transactions ({skipped_count} lines skipped)",
            details={
                "path": path,
                "record_count": record_count,
                "skipped_count": skipped_count,
            },
        )

    @staticmethod
    def ledger_created(
        path: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_CREATED,
            correlation_id=correlation_id,
            description=f"Created new ledger file: {path}",
            details={
                "path": path,
            },
        )

    @staticmethod
    def line_skipped(
        line_number: int,
        reason: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LINE_SKIPPED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Skipping invalid transaction on line {line_number}",
            details={
                "line_number": line_number,
            },
            error_message=reason,
        )

    @staticmethod
    def validation_failed(
        operation: str,
        issues: list[dict],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"{operation.capitalize()} rejected with {len(issues)} issues",
            details={
                "operation": operation,
                "issues": issues,
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_saved(
        vendor: str,
        amount: str,
        kind: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_SAVED,
            correlation_id=correlation_id,
            description=f"{kind.capitalize()} saved: {vendor} {amount}",
            details={
                "vendor": vendor,
                "amount": amount,
                "kind": kind,
            },
            is_user_action=True,
        )

    @staticmethod
    def save_failed(
        vendor: str,
        amount: str,
        error_message: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"Could not save transaction: {vendor} {amount}",
            details={
                "vendor": vendor,
                "amount": amount,
            },
            error_message=error_message,
            is_user_action=True,
        )

    @staticmethod
    def report_generated(
        report_type: str,
        result_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPORT_GENERATED,
            correlation_id=correlation_id,
            description=f"Report {report_type} returned {result_count} transactions",
            details={
                "report_type": report_type,
                "result_count": result_count,
            },
            is_user_action=True,
        )

    @staticmethod
    def report_failed(
        report_type: str,
        error_message: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPORT_FAILED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Report {report_type} failed",
            details={
                "report_type": report_type,
            },
            error_message=error_message,
            is_user_action=True,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
