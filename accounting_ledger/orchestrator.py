"""
Main Orchestrator for the Accounting Ledger

This module ties together all the components and defines the
end-to-end flows for:
1. Start-up (load the file → ledger + warnings)
2. Entry (input → validate → append to file → insert into ledger)
3. Reports (request → query → display-ready result)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing reaches the ledger unless it was appended to the file first
- Nothing reaches the file unless it passed validation
- Every step is audited
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

import structlog

from accounting_ledger.audit import AuditLogger, configure_logging, create_correlation_id
from accounting_ledger.config import get_settings
from accounting_ledger.ledger import Ledger
from accounting_ledger.models.transaction import (
    LoadWarning,
    ReportRequest,
    ReportResult,
    ReportType,
    SearchCriteria,
    Transaction,
    TransactionKind,
    ValidationResult,
)
from accounting_ledger.queries import ReportExecutor
from accounting_ledger.services.storage import (
    FlatFileTransactionStorage,
    InMemoryAuditStorage,
    PersistenceError,
    TransactionStorageInterface,
)
from accounting_ledger.validation import InputValidationError, TransactionValidator


logger = structlog.get_logger(__name__)


class LedgerSession:
    """
    Owns the ledger for the lifetime of the process.

    Flow:
    1. start() → Store.load(), warnings surfaced to the caller
    2. add_deposit() / make_payment() → validate → append → insert
    3. run_report() → ReportExecutor over a ledger snapshot

    The session is passed explicitly to the front end; there is no global.
    """

    def __init__(
        self,
        storage: TransactionStorageInterface,
        validator: Optional[TransactionValidator] = None,
        executor: Optional[ReportExecutor] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._validator = validator or TransactionValidator()
        self._executor = executor or ReportExecutor()
        self._audit_logger = audit_logger
        self._ledger = Ledger()
        self._warnings: list[LoadWarning] = []
        self._started = False
        self._load_error: Optional[str] = None

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    @property
    def warnings(self) -> list[LoadWarning]:
        return list(self._warnings)

    @property
    def started(self) -> bool:
        return self._started

    @property
    def load_error(self) -> Optional[str]:
        return self._load_error

    @property
    def validator(self) -> TransactionValidator:
        return self._validator

    @property
    def audit_logger(self) -> Optional[AuditLogger]:
        return self._audit_logger

    def start(self, correlation_id: Optional[UUID] = None) -> list[LoadWarning]:
        """
        Load the ledger from storage.

        Returns the skipped-line warnings; they never block start-up.

        Raises:
            PersistenceError: If the file can't be created or read
        """
        correlation_id = correlation_id or create_correlation_id()
        path = str(getattr(self._storage, "path", ""))

        try:
            result = self._storage.load()
        except PersistenceError as e:
            self._load_error = str(e)
            if self._audit_logger:
                self._audit_logger.log_error(
                    error_type="load_failed",
                    error_message=str(e),
                    details={"path": path},
                    correlation_id=correlation_id,
                )
            raise

        self._ledger = result.ledger
        self._load_error = None
        self._warnings = list(result.warnings)
        self._started = True

        if self._audit_logger:
            if result.created:
                self._audit_logger.log_ledger_created(path, correlation_id)
            for warning in result.warnings:
                self._audit_logger.log_line_skipped(
                    line_number=warning.line_number,
                    reason=warning.reason,
                    correlation_id=correlation_id,
                )
            self._audit_logger.log_ledger_loaded(
                path=path,
                record_count=len(result.ledger),
                skipped_count=len(result.warnings),
                correlation_id=correlation_id,
            )

        return self.warnings

    def add_deposit(
        self,
        description: Optional[str],
        vendor: Optional[str],
        amount: Optional[str],
        now: Optional[datetime] = None,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[Transaction, ValidationResult]:
        """Record money coming in. The amount is typed as a positive number."""
        return self._record(
            TransactionKind.DEPOSIT, description, vendor, amount, now, correlation_id
        )

    def make_payment(
        self,
        description: Optional[str],
        vendor: Optional[str],
        amount: Optional[str],
        now: Optional[datetime] = None,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[Transaction, ValidationResult]:
        """Record money going out. The amount is typed positive and stored negative."""
        return self._record(
            TransactionKind.PAYMENT, description, vendor, amount, now, correlation_id
        )

    def _record(
        self,
        kind: TransactionKind,
        description: Optional[str],
        vendor: Optional[str],
        amount: Optional[str],
        now: Optional[datetime],
        correlation_id: Optional[UUID],
    ) -> tuple[Transaction, ValidationResult]:
        """
        Validate, append, then insert.

        Raises:
            InputValidationError: Input rejected; nothing written
            PersistenceError: Append failed; ledger unchanged
        """
        correlation_id = correlation_id or create_correlation_id()

        try:
            transaction, validation = self._validator.build_transaction(
                kind, description, vendor, amount, now=now
            )
        except InputValidationError as e:
            if self._audit_logger:
                self._audit_logger.log_validation_failed(
                    operation=kind.value,
                    issues=[issue.model_dump() for issue in e.issues],
                    correlation_id=correlation_id,
                )
            raise

        amount_str = f"{transaction.amount:.2f}"
        try:
            self._storage.append(transaction)
        except PersistenceError as e:
            if self._audit_logger:
                self._audit_logger.log_save_failed(
                    vendor=transaction.vendor,
                    amount=amount_str,
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            raise

        self._ledger.insert(transaction)

        if self._audit_logger:
            self._audit_logger.log_transaction_saved(
                vendor=transaction.vendor,
                amount=amount_str,
                kind=kind.value,
                correlation_id=correlation_id,
            )

        return transaction, validation

    def run_report(
        self,
        report_type: ReportType,
        today: Optional[date] = None,
        vendor: Optional[str] = None,
        criteria: Optional[SearchCriteria] = None,
        correlation_id: Optional[UUID] = None,
    ) -> ReportResult:
        """Run a canned report or search over the current ledger."""
        correlation_id = correlation_id or create_correlation_id()

        request = ReportRequest(
            report_type=report_type,
            today=today or date.today(),
            vendor=vendor,
            criteria=criteria,
        )
        result = self._executor.execute(request, self._ledger.snapshot())

        if self._audit_logger:
            if result.success:
                self._audit_logger.log_report_generated(
                    report_type=report_type.value,
                    result_count=result.result_count,
                    correlation_id=correlation_id,
                )
            else:
                self._audit_logger.log_report_failed(
                    report_type=report_type.value,
                    error_message=result.error_message or "unknown error",
                    correlation_id=correlation_id,
                )

        return result

    def search_by_vendor(
        self,
        vendor: Optional[str],
        correlation_id: Optional[UUID] = None,
    ) -> ReportResult:
        """
        Vendor search from raw user input.

        Raises:
            InputValidationError: If the vendor name is blank
        """
        needle = self._validator.validate_vendor_needle(vendor)
        return self.run_report(
            ReportType.VENDOR, vendor=needle, correlation_id=correlation_id
        )

    def custom_search(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        description: Optional[str] = None,
        vendor: Optional[str] = None,
        min_amount: Optional[str] = None,
        max_amount: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> ReportResult:
        """
        Custom search from raw form input. Blank fields are ignored.

        Raises:
            InputValidationError: Unparseable dates/amounts or inverted ranges
        """
        correlation_id = correlation_id or create_correlation_id()
        try:
            criteria = self._validator.parse_search_criteria(
                start_date=start_date,
                end_date=end_date,
                description=description,
                vendor=vendor,
                min_amount=min_amount,
                max_amount=max_amount,
            )
        except InputValidationError as e:
            if self._audit_logger:
                self._audit_logger.log_validation_failed(
                    operation="custom search",
                    issues=[issue.model_dump() for issue in e.issues],
                    correlation_id=correlation_id,
                )
            raise

        return self.run_report(
            ReportType.CUSTOM, criteria=criteria, correlation_id=correlation_id
        )


def create_app_components(
    storage: Optional[TransactionStorageInterface] = None,
    start: bool = True,
) -> tuple[LedgerSession, AuditLogger]:
    """
    Factory function to create all application components.

    Args:
        storage: Transaction storage. Defaults to the flat file from settings.
        start: Whether to load the ledger right away.

    Returns:
        (session, audit_logger)
    """
    settings = get_settings()
    app_settings = settings.app

    configure_logging(app_settings.effective_log_level)

    storage = storage or FlatFileTransactionStorage()
    audit_logger = AuditLogger(InMemoryAuditStorage(app_settings.audit_history_size))

    session = LedgerSession(
        storage=storage,
        validator=TransactionValidator(app_settings),
        executor=ReportExecutor(app_settings),
        audit_logger=audit_logger,
    )

    if start:
        try:
            session.start()
        except PersistenceError as e:
            # Start with an empty ledger; the front end reports the error
            logger.error("ledger_start_failed", error=str(e))

    return session, audit_logger
