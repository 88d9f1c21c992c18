"""
Data Models Package

This package contains all Pydantic models used in the Accounting Ledger.
All data flowing through the system must conform to these schemas.
"""

from accounting_ledger.models.transaction import (
    DELIMITER,
    LedgerSummary,
    LoadWarning,
    ReportRequest,
    ReportResult,
    ReportRow,
    ReportType,
    SearchCriteria,
    Transaction,
    TransactionKind,
    ValidationIssue,
    ValidationResult,
)
from accounting_ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "DELIMITER",
    "LedgerSummary",
    "LoadWarning",
    "ReportRequest",
    "ReportResult",
    "ReportRow",
    "ReportType",
    "SearchCriteria",
    "Transaction",
    "TransactionKind",
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
