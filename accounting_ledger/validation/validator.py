"""
Input Validation

DESIGN DECISION: Validation happens in two distinct stages:

STAGE 1 - SCHEMA VALIDATION:
- Required field presence
- Format validation (amounts, dates)
- Delimiter and line-break rejection for free text
- This catches input that would corrupt the ledger file

STAGE 2 - SEMANTIC VALIDATION:
- Absurd amount detection
- Rounding to two decimal places
- This catches suspicious but storable input

Stage 2 only runs when stage 1 passes.

IMPORTANT: Validation NEVER silently fixes issues.
Anything that changes what the user typed is reported.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

from accounting_ledger.config import AppSettings, get_settings
from accounting_ledger.models.transaction import (
    DELIMITER,
    SearchCriteria,
    Transaction,
    TransactionKind,
    ValidationIssue,
    ValidationResult,
    quantize_amount,
)


class InputValidationError(Exception):
    """User input was rejected. Carries every issue found."""

    def __init__(self, result: ValidationResult):
        self.result = result
        messages = [i.message for i in result.issues if i.severity == "error"]
        super().__init__("; ".join(messages) or "Invalid input")

    @property
    def issues(self) -> list[ValidationIssue]:
        return self.result.issues


class TransactionValidator:
    """
    Validates user input for new transactions and searches.

    Entry amounts are always typed as positive numbers;
    the transaction kind decides the sign.
    """

    def __init__(self, settings: Optional[AppSettings] = None):
        self._settings = settings or get_settings().app

    # -------------------------------------------------------------------------
    # Transaction entry
    # -------------------------------------------------------------------------

    def _validate_text(self, field: str, value: Optional[str]) -> list[ValidationIssue]:
        issues = []
        label = field.capitalize()

        if value is None or not value.strip():
            issues.append(ValidationIssue(
                field=field,
                issue_type="missing",
                message=f"{label} is required",
                severity="error",
                suggested_fix=f"Please enter a {field}",
            ))
            return issues

        if DELIMITER in value:
            issues.append(ValidationIssue(
                field=field,
                issue_type="delimiter",
                message=f"{label} cannot contain the '{DELIMITER}' character",
                severity="error",
                suggested_fix=f"Remove '{DELIMITER}' or replace it with '/'",
            ))

        if "\n" in value or "\r" in value:
            issues.append(ValidationIssue(
                field=field,
                issue_type="invalid_format",
                message=f"{label} must be a single line",
                severity="error",
            ))

        return issues

    def _parse_amount(self, field: str, value: Optional[str]) -> tuple[Optional[Decimal], list[ValidationIssue]]:
        """Parse a user-typed amount, tolerating '$' and thousands separators."""
        if value is None or not value.strip():
            return None, [ValidationIssue(
                field=field,
                issue_type="missing",
                message="Amount cannot be empty",
                severity="error",
            )]

        cleaned = value.strip().replace("$", "").replace(",", "")
        try:
            amount = Decimal(cleaned)
        except InvalidOperation:
            amount = None

        if amount is None or not amount.is_finite():
            return None, [ValidationIssue(
                field=field,
                issue_type="invalid_format",
                message=f"Invalid amount: '{value.strip()}'",
                severity="error",
                suggested_fix="Please enter a valid number, e.g. 12.50",
            )]

        try:
            quantize_amount(amount)
        except ValueError:
            return None, [ValidationIssue(
                field=field,
                issue_type="invalid_format",
                message=f"Invalid amount: '{value.strip()}' is too large",
                severity="error",
                suggested_fix="Please enter a realistic amount, e.g. 12.50",
            )]

        return amount, []

    def _validate_schema(
        self,
        description: Optional[str],
        vendor: Optional[str],
        amount_text: Optional[str],
    ) -> tuple[Optional[Decimal], list[ValidationIssue]]:
        """
        Stage 1: Schema validation.

        Returns: (parsed_amount, list_of_issues)
        """
        issues = []
        issues.extend(self._validate_text("description", description))
        issues.extend(self._validate_text("vendor", vendor))

        amount, amount_issues = self._parse_amount("amount", amount_text)
        issues.extend(amount_issues)

        if amount is not None and amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be positive",
                severity="error",
                suggested_fix="Enter the amount without a sign; payments are recorded as negative automatically",
            ))
        elif amount is not None and quantize_amount(amount) == 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount rounds to zero",
                severity="error",
                suggested_fix="Amounts are stored with two decimal places",
            ))

        return amount, issues

    def _validate_semantic(self, amount: Decimal) -> list[ValidationIssue]:
        """
        Stage 2: Semantic validation.

        Only warnings; nothing here blocks the entry.
        """
        issues = []

        max_amount = Decimal(str(self._settings.max_transaction_amount))
        if amount > max_amount:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount ({amount:,.2f}) seems unusually high",
                severity="warning",
                suggested_fix="Please verify this amount is correct",
            ))

        if quantize_amount(amount) != amount:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="rounded",
                message=f"Amount {amount} will be stored as {quantize_amount(amount):.2f}",
                severity="warning",
            ))

        return issues

    def validate_entry(
        self,
        description: Optional[str],
        vendor: Optional[str],
        amount_text: Optional[str],
    ) -> ValidationResult:
        """Run both stages over a deposit or payment entry."""
        amount, issues = self._validate_schema(description, vendor, amount_text)

        schema_valid = not any(issue.severity == "error" for issue in issues)
        if schema_valid and amount is not None:
            issues.extend(self._validate_semantic(amount))

        return ValidationResult(issues=issues)

    def build_transaction(
        self,
        kind: TransactionKind,
        description: Optional[str],
        vendor: Optional[str],
        amount_text: Optional[str],
        now: Optional[datetime] = None,
    ) -> tuple[Transaction, ValidationResult]:
        """
        Validate an entry and build the transaction it describes.

        Payments are stored with a negative amount.

        Raises:
            InputValidationError: If any error-level issue was found
        """
        result = self.validate_entry(description, vendor, amount_text)
        if result.has_errors:
            raise InputValidationError(result)

        now = now or datetime.now()
        amount, _ = self._parse_amount("amount", amount_text)
        signed = amount if kind == TransactionKind.DEPOSIT else -amount

        transaction = Transaction(
            date=now.date(),
            time=now.time(),
            description=description,
            vendor=vendor,
            amount=signed,
        )
        return transaction, result

    # -------------------------------------------------------------------------
    # Searches
    # -------------------------------------------------------------------------

    def _parse_date(self, field: str, value: Optional[str], issues: list[ValidationIssue]) -> Optional[date]:
        if value is None or not value.strip():
            return None
        try:
            return datetime.strptime(value.strip(), "%Y-%m-%d").date()
        except ValueError:
            issues.append(ValidationIssue(
                field=field,
                issue_type="invalid_format",
                message=f"Invalid date: '{value.strip()}'",
                severity="error",
                suggested_fix="Please use YYYY-MM-DD format",
            ))
            return None

    def _parse_optional_amount(self, field: str, value: Optional[str], issues: list[ValidationIssue]) -> Optional[Decimal]:
        if value is None or not value.strip():
            return None
        amount, amount_issues = self._parse_amount(field, value)
        issues.extend(amount_issues)
        return amount

    def parse_search_criteria(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        description: Optional[str] = None,
        vendor: Optional[str] = None,
        min_amount: Optional[str] = None,
        max_amount: Optional[str] = None,
    ) -> SearchCriteria:
        """
        Turn raw search form input into SearchCriteria.

        Blank inputs mean "no constraint". Amount bounds keep their sign,
        so payments between -50 and -10 can be searched for.

        Raises:
            InputValidationError: Unparseable dates/amounts or inverted ranges
        """
        issues: list[ValidationIssue] = []

        start = self._parse_date("start_date", start_date, issues)
        end = self._parse_date("end_date", end_date, issues)
        minimum = self._parse_optional_amount("min_amount", min_amount, issues)
        maximum = self._parse_optional_amount("max_amount", max_amount, issues)

        if start and end and end < start:
            issues.append(ValidationIssue(
                field="end_date",
                issue_type="inconsistent",
                message="End date is before start date",
                severity="error",
                suggested_fix="Swap the two dates",
            ))

        if minimum is not None and maximum is not None and maximum < minimum:
            issues.append(ValidationIssue(
                field="max_amount",
                issue_type="inconsistent",
                message="Maximum amount is below minimum amount",
                severity="error",
                suggested_fix="Remember payments are negative: -50 is below -10",
            ))

        result = ValidationResult(issues=issues)
        if result.has_errors:
            raise InputValidationError(result)

        return SearchCriteria(
            start_date=start,
            end_date=end,
            description=description,
            vendor=vendor,
            min_amount=minimum,
            max_amount=maximum,
        )

    def validate_vendor_needle(self, vendor: Optional[str]) -> str:
        """
        Vendor search needs something to search for.

        Raises:
            InputValidationError: If the vendor name is blank
        """
        if vendor is None or not vendor.strip():
            raise InputValidationError(ValidationResult(issues=[ValidationIssue(
                field="vendor",
                issue_type="missing",
                message="Vendor name is required",
                severity="error",
                suggested_fix="Enter part of the vendor name, e.g. 'amaz'",
            )]))
        return vendor.strip()

    def get_user_friendly_summary(
        self,
        result: ValidationResult,
    ) -> str:
        """
        Generate a user-friendly summary of validation results.
        """
        if result.is_valid and not result.warnings:
            return "✅ All checks passed!"

        lines = []

        if result.has_errors:
            lines.append("❌ Please fix the following:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.message}")
                    if issue.suggested_fix:
                        lines.append(f"     💡 {issue.suggested_fix}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Please verify the following:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)
