"""
Report Execution Engine

DESIGN DECISION: Report execution is DETERMINISTIC.
A ReportRequest names the report and carries the reference date and filters.
This engine runs the matching pure query function over a ledger snapshot
and turns the result into display-ready rows plus totals.

The front end never touches the ledger directly. It only sees ReportResult.
"""

from datetime import date
from typing import Optional, Sequence

from accounting_ledger.config import AppSettings, get_settings
from accounting_ledger.models.transaction import (
    ReportRequest,
    ReportResult,
    ReportRow,
    ReportType,
    SearchCriteria,
    Transaction,
)
from accounting_ledger.queries import filters


class QueryExecutionError(Exception):
    """Error during report execution."""
    pass


TITLES = {
    ReportType.ALL: "ALL TRANSACTIONS",
    ReportType.DEPOSITS: "DEPOSITS",
    ReportType.PAYMENTS: "PAYMENTS",
    ReportType.MONTH_TO_DATE: "MONTH TO DATE",
    ReportType.PREVIOUS_MONTH: "PREVIOUS MONTH",
    ReportType.YEAR_TO_DATE: "YEAR TO DATE",
    ReportType.PREVIOUS_YEAR: "PREVIOUS YEAR",
    ReportType.VENDOR: "VENDOR SEARCH",
    ReportType.CUSTOM: "CUSTOM SEARCH RESULTS",
}


def truncate(text: str, width: int) -> str:
    """Shorten text to width characters, marking the cut with '...'."""
    if len(text) <= width:
        return text
    return text[:width - 3] + "..."


class ReportExecutor:
    """
    Runs reports against a snapshot of the ledger.

    GUARANTEES:
    - Never mutates the transactions it is given
    - Keeps newest-first order
    - Clear "no transactions found" if nothing matches
    """

    def __init__(self, settings: Optional[AppSettings] = None):
        self._settings = settings or get_settings().app

    def execute(
        self,
        request: ReportRequest,
        transactions: Sequence[Transaction],
    ) -> ReportResult:
        """
        Execute a report and return display-ready results.

        Bad requests don't raise; they come back with success=False.
        """
        try:
            selected = self.select(request, transactions)
        except QueryExecutionError as e:
            return ReportResult(
                report_type=request.report_type,
                title=TITLES[request.report_type],
                success=False,
                error_message=str(e),
                description=f"Report failed: {e}",
            )

        return self.present(request, selected)

    def select(
        self,
        request: ReportRequest,
        transactions: Sequence[Transaction],
    ) -> list[Transaction]:
        """Route to the query function for the report type."""
        today = request.today
        report_type = request.report_type

        if report_type == ReportType.ALL:
            return list(transactions)
        elif report_type == ReportType.DEPOSITS:
            return filters.deposits(transactions)
        elif report_type == ReportType.PAYMENTS:
            return filters.payments(transactions)
        elif report_type == ReportType.MONTH_TO_DATE:
            return filters.month_to_date(transactions, today)
        elif report_type == ReportType.PREVIOUS_MONTH:
            return filters.previous_month(transactions, today)
        elif report_type == ReportType.YEAR_TO_DATE:
            return filters.year_to_date(transactions, today)
        elif report_type == ReportType.PREVIOUS_YEAR:
            return filters.previous_year(transactions, today)
        elif report_type == ReportType.VENDOR:
            if not request.vendor or not request.vendor.strip():
                raise QueryExecutionError("Vendor search needs a vendor name")
            return filters.by_vendor(transactions, request.vendor.strip())
        elif report_type == ReportType.CUSTOM:
            return filters.custom_search(transactions, request.criteria)

        raise QueryExecutionError(f"Unknown report type: {report_type}")

    def present(
        self,
        request: ReportRequest,
        selected: Sequence[Transaction],
    ) -> ReportResult:
        """Format selected transactions plus totals for display."""
        title = TITLES[request.report_type]
        if request.report_type == ReportType.VENDOR:
            title = f"{title}: {request.vendor.strip()}"

        return ReportResult(
            report_type=request.report_type,
            title=title,
            description=self._describe(request),
            data_found=len(selected) > 0,
            result_count=len(selected),
            rows=[self._transaction_to_row(t) for t in selected],
            summary=filters.summarize(selected),
        )

    def _transaction_to_row(self, transaction: Transaction) -> ReportRow:
        """Convert a transaction to a display row."""
        return ReportRow(
            date=transaction.date.isoformat(),
            time=transaction.time.strftime("%H:%M:%S"),
            description=truncate(
                transaction.description, self._settings.description_display_width
            ),
            vendor=truncate(transaction.vendor, self._settings.vendor_display_width),
            amount=f"{transaction.amount:.2f}",
            kind=transaction.kind,
        )

    def _describe(self, request: ReportRequest) -> str:
        """Human-readable description of what was selected."""
        today = request.today
        report_type = request.report_type

        if report_type == ReportType.MONTH_TO_DATE:
            return self._date_range_str(filters.first_day_of_month(today), today)
        elif report_type == ReportType.PREVIOUS_MONTH:
            return self._date_range_str(*filters.previous_month_range(today))
        elif report_type == ReportType.YEAR_TO_DATE:
            return self._date_range_str(filters.first_day_of_year(today), today)
        elif report_type == ReportType.PREVIOUS_YEAR:
            return self._date_range_str(*filters.previous_year_range(today))
        elif report_type == ReportType.VENDOR:
            return f"vendor contains '{request.vendor.strip()}'"
        elif report_type == ReportType.CUSTOM:
            return self._criteria_str(request.criteria)
        elif report_type == ReportType.DEPOSITS:
            return "deposits only"
        elif report_type == ReportType.PAYMENTS:
            return "payments only"
        return "all transactions"

    def _criteria_str(self, criteria: Optional[SearchCriteria]) -> str:
        if criteria is None or criteria.is_empty:
            return "no filters"

        desc_parts = []
        if criteria.start_date or criteria.end_date:
            desc_parts.append(self._date_range_str(criteria.start_date, criteria.end_date))
        if criteria.description:
            desc_parts.append(f"description contains '{criteria.description}'")
        if criteria.vendor:
            desc_parts.append(f"vendor contains '{criteria.vendor}'")
        if criteria.min_amount is not None:
            desc_parts.append(f"amount >= {criteria.min_amount:.2f}")
        if criteria.max_amount is not None:
            desc_parts.append(f"amount <= {criteria.max_amount:.2f}")
        return " | ".join(desc_parts)

    def _date_range_str(
        self,
        date_from: Optional[date],
        date_to: Optional[date],
    ) -> str:
        """Format date range for description."""
        if date_from and date_to:
            if date_from == date_to:
                return f"on {date_from.strftime('%d %b %Y')}"
            elif date_from.month == date_to.month and date_from.year == date_to.year:
                return f"from {date_from.strftime('%d')} to {date_to.strftime('%d %B %Y')}"
            elif date_from.year == date_to.year:
                return f"from {date_from.strftime('%d %b')} to {date_to.strftime('%d %b %Y')}"
            else:
                return f"from {date_from.strftime('%d %b %Y')} to {date_to.strftime('%d %b %Y')}"
        elif date_from:
            return f"from {date_from.strftime('%d %b %Y')}"
        elif date_to:
            return f"until {date_to.strftime('%d %b %Y')}"
        return ""
