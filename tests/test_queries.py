"""Tests for the pure query functions."""

import pytest
from datetime import date
from decimal import Decimal

from accounting_ledger.models.transaction import SearchCriteria
from accounting_ledger.queries import filters

from helpers import make_transaction


TODAY = date(2024, 3, 15)


def _descriptions(transactions):
    return [t.description for t in transactions]


class TestDateWindows:
    """Tests for the date window helpers."""

    def test_previous_month_in_january(self):
        """Test January's previous month is last December."""
        assert filters.previous_month_range(date(2024, 1, 10)) == (
            date(2023, 12, 1),
            date(2023, 12, 31),
        )

    @pytest.mark.parametrize("today,last_day", [
        (date(2024, 3, 31), date(2024, 2, 29)),
        (date(2023, 3, 1), date(2023, 2, 28)),
        (date(2024, 5, 31), date(2024, 4, 30)),
    ])
    def test_previous_month_last_day(self, today, last_day):
        """Test month lengths and leap years."""
        start, end = filters.previous_month_range(today)
        assert start == last_day.replace(day=1)
        assert end == last_day

    def test_previous_year(self):
        """Test the previous calendar year."""
        assert filters.previous_year_range(TODAY) == (date(2023, 1, 1), date(2023, 12, 31))


class TestReports:
    """Tests for the canned reports against a fixed ledger."""

    def test_month_to_date(self, march_ledger):
        """Test transactions from the 1st of the month through today."""
        result = filters.month_to_date(march_ledger, TODAY)
        assert _descriptions(result) == ["Paycheck", "Groceries", "Rent"]

    def test_month_to_date_excludes_future(self, march_ledger):
        """Test entries after today are not part of month to date."""
        future = make_transaction(date(2024, 3, 20), "5.00", description="Future")
        result = filters.month_to_date([future] + march_ledger, TODAY)
        assert "Future" not in _descriptions(result)

    def test_previous_month_leap_day(self, march_ledger):
        """Test February 29 is included in the previous month."""
        result = filters.previous_month(march_ledger, TODAY)
        assert _descriptions(result) == ["Electricity", "Bonus"]

    def test_year_to_date(self, march_ledger):
        """Test transactions from Jan 1 through today."""
        result = filters.year_to_date(march_ledger, TODAY)
        assert len(result) == 6
        assert all(t.date.year == 2024 for t in result)

    def test_previous_year(self, march_ledger):
        """Test both ends of the previous year are inclusive."""
        result = filters.previous_year(march_ledger, TODAY)
        assert _descriptions(result) == ["Gift", "New year"]

    def test_by_vendor_case_insensitive(self, march_ledger):
        """Test vendor search is a case-insensitive substring match."""
        lower = filters.by_vendor(march_ledger, "acme")
        upper = filters.by_vendor(march_ledger, "ACME CORP")
        assert _descriptions(lower) == ["Paycheck", "Bonus", "Refund fee"]
        assert lower == upper

    def test_by_vendor_no_match(self, march_ledger):
        """Test an unknown vendor gives an empty list."""
        assert filters.by_vendor(march_ledger, "Nobody") == []

    def test_deposits_and_payments_partition(self, march_ledger):
        """Test every transaction is in exactly one of the two lists."""
        deposits = filters.deposits(march_ledger)
        payments = filters.payments(march_ledger)
        assert len(deposits) + len(payments) == len(march_ledger)
        assert all(t.amount > 0 for t in deposits)
        assert all(t.amount < 0 for t in payments)

    def test_order_is_preserved(self, march_ledger):
        """Test results keep the newest-first order."""
        result = filters.payments(march_ledger)
        assert [t.sort_key for t in result] == sorted(
            (t.sort_key for t in result), reverse=True
        )

    def test_input_not_mutated(self, march_ledger):
        """Test queries leave their input alone."""
        before = list(march_ledger)
        filters.custom_search(march_ledger, SearchCriteria(vendor="acme"))
        filters.year_to_date(march_ledger, TODAY)
        assert march_ledger == before


class TestCustomSearch:
    """Tests for the composed custom search."""

    def test_no_criteria_matches_everything(self, march_ledger):
        """Test empty criteria return every transaction."""
        assert filters.custom_search(march_ledger, SearchCriteria()) == march_ledger
        assert filters.custom_search(march_ledger) == march_ledger

    def test_criteria_are_anded(self, march_ledger):
        """Test the result matches A and B and C."""
        criteria = SearchCriteria(
            start_date=date(2024, 1, 1),
            vendor="zeta",
            max_amount=Decimal("-10"),
        )
        assert _descriptions(filters.custom_search(march_ledger, criteria)) == ["Book"]

    def test_vendor_and_minimum(self):
        """Test vendor and amount criteria must both hold."""
        a = make_transaction(TODAY, "100.00", "Acme", "A")
        b = make_transaction(TODAY, "-20.00", "Acme", "B")
        c = make_transaction(TODAY, "50.00", "Zeta", "C")
        criteria = SearchCriteria(vendor="acme", min_amount=Decimal("0"))
        assert filters.custom_search([a, b, c], criteria) == [a]

    def test_is_intersection_of_single_filters(self, march_ledger):
        """Test the combined result equals the intersection of each criterion alone."""
        parts = [
            SearchCriteria(vendor="acme"),
            SearchCriteria(min_amount=Decimal("100")),
            SearchCriteria(end_date=date(2024, 2, 29)),
        ]
        combined = SearchCriteria(
            vendor="acme", min_amount=Decimal("100"), end_date=date(2024, 2, 29)
        )
        expected = set(march_ledger)
        for part in parts:
            expected &= set(filters.custom_search(march_ledger, part))
        result = filters.custom_search(march_ledger, combined)
        assert set(result) == expected
        assert _descriptions(result) == ["Bonus"]

    def test_negative_amount_bounds(self, march_ledger):
        """Test payments between -100 and -15 are found by signed bounds."""
        criteria = SearchCriteria(min_amount=Decimal("-100"), max_amount=Decimal("-15"))
        result = filters.custom_search(march_ledger, criteria)
        assert _descriptions(result) == ["Groceries", "Electricity", "Book", "Gift"]

    def test_description_substring(self, march_ledger):
        """Test description search ignores case."""
        criteria = SearchCriteria(description="RENT")
        assert _descriptions(filters.custom_search(march_ledger, criteria)) == ["Rent"]

    def test_date_bounds_inclusive(self, march_ledger):
        """Test start and end dates are included."""
        criteria = SearchCriteria(start_date=date(2024, 2, 1), end_date=date(2024, 3, 1))
        result = filters.custom_search(march_ledger, criteria)
        assert _descriptions(result) == ["Rent", "Electricity", "Bonus"]


class TestSummarize:
    """Tests for summarize()."""

    def test_totals(self, march_ledger):
        """Test counts and totals over the whole ledger."""
        summary = filters.summarize(march_ledger)
        assert summary.total_count == 9
        assert summary.deposit_count == 3
        assert summary.payment_count == 6
        assert summary.deposit_total == Decimal("1750.00")
        assert summary.payment_total == Decimal("-1430.09")
        assert summary.total_amount == Decimal("319.91")

    def test_partition_is_total(self, march_ledger):
        """Test deposits and payments add up to the whole."""
        summary = filters.summarize(filters.year_to_date(march_ledger, TODAY))
        assert summary.deposit_count + summary.payment_count == summary.total_count
        assert summary.deposit_total + summary.payment_total == summary.total_amount

    def test_empty(self):
        """Test an empty list sums to zero."""
        summary = filters.summarize([])
        assert summary.total_count == 0
        assert summary.total_amount == Decimal("0.00")
