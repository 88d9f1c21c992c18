"""
Core Data Models for the Accounting Ledger

These models define the strict schemas for all data flowing through the system.
They are designed to:
1. Enforce the record invariants at construction time
2. Provide clear validation error messages
3. Be hashable and immutable once created (the ledger is append-only)

DESIGN DECISION: Amounts are Decimal, quantized to two places.
Floats would make the encode/decode round trip lossy.
"""

from datetime import date, datetime, time
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


# Field separator of the persistence format. Free text may never contain it.
DELIMITER = "|"

TWO_PLACES = Decimal("0.01")


def quantize_amount(value: Decimal) -> Decimal:
    """
    Round an amount to two decimal places (half-up).

    Raises:
        ValueError: If the amount has too many digits to be kept to the cent
    """
    try:
        return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValueError(f"Amount is out of range: {value}") from e


def check_free_text(value: str, field_name: str) -> str:
    """Reject text that would break the one-record-per-line format."""
    if DELIMITER in value:
        raise ValueError(f"{field_name} cannot contain the '{DELIMITER}' character")
    if "\n" in value or "\r" in value:
        raise ValueError(f"{field_name} cannot contain line breaks")
    return value


# =============================================================================
# ENUMS
# =============================================================================

class TransactionKind(str, Enum):
    """Which side of the ledger a transaction falls on (by sign)."""
    DEPOSIT = "deposit"
    PAYMENT = "payment"


class ReportType(str, Enum):
    """Canned reports and searches offered by the ledger."""
    ALL = "all"
    DEPOSITS = "deposits"
    PAYMENTS = "payments"
    MONTH_TO_DATE = "month_to_date"
    PREVIOUS_MONTH = "previous_month"
    YEAR_TO_DATE = "year_to_date"
    PREVIOUS_YEAR = "previous_year"
    VENDOR = "vendor"
    CUSTOM = "custom"


# =============================================================================
# TRANSACTION RECORD
# =============================================================================

class Transaction(BaseModel):
    """
    One deposit or payment.

    Positive amount = deposit, negative amount = payment.
    A zero amount is never valid, so every transaction is exactly one of them.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    date: date
    time: time
    description: str = Field(
        ...,
        min_length=1,
        description="What the transaction was for"
    )
    vendor: str = Field(
        ...,
        min_length=1,
        description="Who was paid or who paid"
    )
    amount: Decimal = Field(
        ...,
        description="Signed amount, two decimal places"
    )

    @field_validator('time')
    @classmethod
    def truncate_to_seconds(cls, v: time) -> time:
        """Storage keeps second precision only."""
        return v.replace(microsecond=0, tzinfo=None)

    @field_validator('description', 'vendor')
    @classmethod
    def reject_delimiter(cls, v: str, info) -> str:
        return check_free_text(v, info.field_name.capitalize())

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        if not v.is_finite():
            raise ValueError("Amount must be a finite number")
        v = quantize_amount(v)
        if v == 0:
            raise ValueError("Amount cannot be zero")
        return v

    @property
    def is_deposit(self) -> bool:
        return self.amount > 0

    @property
    def is_payment(self) -> bool:
        return self.amount < 0

    @property
    def kind(self) -> TransactionKind:
        return TransactionKind.DEPOSIT if self.is_deposit else TransactionKind.PAYMENT

    @property
    def sort_key(self) -> tuple[date, time]:
        return (self.date, self.time)

    @property
    def timestamp(self) -> datetime:
        return datetime.combine(self.date, self.time)

    def __str__(self) -> str:
        return (
            f"{self.date.isoformat()} {self.time.strftime('%H:%M:%S')} "
            f"{self.description} | {self.vendor} | {self.amount:.2f}"
        )


# =============================================================================
# QUERY MODELS
# =============================================================================

class SearchCriteria(BaseModel):
    """
    Custom search filter.

    Every criterion is optional. None means "no constraint";
    empty text is normalized to None so the two can't be confused.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    description: Optional[str] = None
    vendor: Optional[str] = None
    min_amount: Optional[Decimal] = None
    max_amount: Optional[Decimal] = None

    @field_validator('description', 'vendor')
    @classmethod
    def empty_text_is_absent(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v

    @model_validator(mode='after')
    def validate_ranges(self) -> 'SearchCriteria':
        """Validate range relationships."""
        if self.start_date and self.end_date:
            if self.end_date < self.start_date:
                raise ValueError("End date cannot be before start date")

        if self.min_amount is not None and self.max_amount is not None:
            if self.max_amount < self.min_amount:
                raise ValueError("Maximum amount cannot be below minimum amount")

        return self

    @property
    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (
                self.start_date,
                self.end_date,
                self.description,
                self.vendor,
                self.min_amount,
                self.max_amount,
            )
        )


class ReportRequest(BaseModel):
    """A report to run against the ledger."""

    report_type: ReportType
    today: date = Field(
        default_factory=date.today,
        description="Reference date for the date-window reports"
    )
    vendor: Optional[str] = Field(
        default=None,
        description="Needle for vendor search"
    )
    criteria: Optional[SearchCriteria] = Field(
        default=None,
        description="Filter for custom search"
    )


class LedgerSummary(BaseModel):
    """
    Aggregate totals over a list of transactions.

    deposit_count + payment_count == total_count and
    deposit_total + payment_total == total_amount, always.
    """
    model_config = ConfigDict(frozen=True)

    total_count: int = Field(default=0, ge=0)
    total_amount: Decimal = Decimal("0.00")
    deposit_count: int = Field(default=0, ge=0)
    deposit_total: Decimal = Decimal("0.00")
    payment_count: int = Field(default=0, ge=0)
    payment_total: Decimal = Decimal("0.00")


class ReportRow(BaseModel):
    """One display-ready line of a report."""

    date: str
    time: str
    description: str
    vendor: str
    amount: str
    kind: TransactionKind


class ReportResult(BaseModel):
    """
    Result of running a report.

    This is what the front end renders. It never holds live references
    into the ledger, only formatted rows and totals.
    """

    report_type: ReportType
    title: str
    description: str = ""

    success: bool = True
    error_message: Optional[str] = None

    data_found: bool = False
    result_count: int = Field(default=0, ge=0)
    rows: list[ReportRow] = Field(default_factory=list)
    summary: LedgerSummary = Field(default_factory=LedgerSummary)

    def summary_lines(self) -> list[str]:
        """Totals the way they are printed under a report table."""
        if not self.data_found:
            return ["No transactions found."]
        s = self.summary
        return [
            f"Total: {s.total_count} transactions, Balance: ${s.total_amount:.2f}",
            (
                f"Deposits: {s.deposit_count} ({s.deposit_total:.2f}), "
                f"Payments: {s.payment_count} ({s.payment_total:.2f})"
            ),
        ]


# =============================================================================
# LOAD / VALIDATION MODELS
# =============================================================================

class LoadWarning(BaseModel):
    """A persisted line that was skipped during load."""

    line_number: int = Field(..., ge=1)
    line: str
    reason: str

    def __str__(self) -> str:
        return f"Line {self.line_number}: {self.reason}"


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'delimiter')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """Outcome of validating user input."""

    validated_at: datetime = Field(
        default_factory=datetime.now
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[str]:
        """Non-blocking messages."""
        return [issue.message for issue in self.issues if issue.severity == "warning"]
