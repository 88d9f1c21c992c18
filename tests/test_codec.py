"""Tests for the pipe-delimited record codec."""

import pytest
from datetime import date, time
from decimal import Decimal

from accounting_ledger.services.storage import FormatError, HEADER, decode, encode

from helpers import make_transaction


class TestEncode:
    """Tests for encode()."""

    def test_header(self):
        """Test the header names every field in order."""
        assert HEADER == "date|time|description|vendor|amount"

    def test_encode_deposit(self):
        """Test a deposit line."""
        t = make_transaction(date(2024, 3, 5), "1500", "Acme Corp", "Paycheck", time(9, 5, 7))
        assert encode(t) == "2024-03-05|09:05:07|Paycheck|Acme Corp|1500.00"

    def test_encode_payment(self):
        """Test negative amounts keep their sign and two places."""
        t = make_transaction(date(2024, 3, 5), "-12.5", at=time(23, 59, 59))
        assert encode(t) == "2024-03-05|23:59:59|Test|Acme|-12.50"

    def test_encode_has_no_thousands_separator(self):
        """Test large amounts are written plainly."""
        t = make_transaction(date(2024, 3, 5), "1234567.891")
        assert encode(t).endswith("|1234567.89")


class TestDecode:
    """Tests for decode()."""

    def test_decode_line(self):
        """Test a well-formed line."""
        t = decode("2024-03-05|09:05:07|Paycheck|Acme Corp|1500.00")
        assert t.date == date(2024, 3, 5)
        assert t.time == time(9, 5, 7)
        assert t.description == "Paycheck"
        assert t.vendor == "Acme Corp"
        assert t.amount == Decimal("1500.00")

    def test_decode_ignores_line_endings(self):
        """Test trailing CRLF is ignored."""
        t = decode("2024-03-05|09:05:07|Rent|Landlord|-1200.00\r\n")
        assert t.amount == Decimal("-1200.00")

    def test_round_trip(self):
        """Test decode(encode(t)) == t for a few representative records."""
        samples = [
            make_transaction(date(2024, 2, 29), "0.01", "A", "B", time(0, 0, 0)),
            make_transaction(date(1999, 12, 31), "-99999.99", "Zeta Books", "Gift", time(23, 59, 59)),
            make_transaction(date(2024, 3, 15), "42", "Café Crème", "Lunch, with tip"),
        ]
        for t in samples:
            assert decode(encode(t)) == t

    @pytest.mark.parametrize("line", [
        "2024-03-05|09:05:07|Paycheck|Acme Corp",
        "2024-03-05|09:05:07|Pay|check|Acme Corp|1500.00",
        "just some text",
        "",
    ])
    def test_wrong_field_count(self, line):
        """Test lines that don't split into 5 fields."""
        with pytest.raises(FormatError, match="Expected 5 fields"):
            decode(line)

    @pytest.mark.parametrize("value", ["2024-3-5", "05/03/2024", "2024-02-30", "2024-13-01"])
    def test_bad_date(self, value):
        """Test unparseable dates."""
        with pytest.raises(FormatError, match="Invalid date"):
            decode(f"{value}|09:05:07|Paycheck|Acme|1.00")

    @pytest.mark.parametrize("value", ["9:05:07", "09:05", "25:00:00", "12:60:00"])
    def test_bad_time(self, value):
        """Test unparseable times."""
        with pytest.raises(FormatError, match="Invalid time"):
            decode(f"2024-03-05|{value}|Paycheck|Acme|1.00")

    @pytest.mark.parametrize("value", ["abc", "", "1.2.3", "NaN", "Infinity"])
    def test_bad_amount(self, value):
        """Test unparseable amounts."""
        with pytest.raises(FormatError, match="Invalid amount"):
            decode(f"2024-03-05|09:05:07|Paycheck|Acme|{value}")

    def test_zero_amount(self):
        """Test records that violate the model invariants."""
        with pytest.raises(FormatError, match="amount"):
            decode("2024-03-05|09:05:07|Paycheck|Acme|0.00")

    @pytest.mark.parametrize("value", ["1e30", "-1e30", "12345678901234567890123456789"])
    def test_amount_out_of_range(self, value):
        """Test amounts too large to keep to the cent are format errors."""
        with pytest.raises(FormatError, match="out of range"):
            decode(f"2024-03-05|09:05:07|Paycheck|Acme|{value}")

    def test_blank_vendor(self):
        """Test blank required text."""
        with pytest.raises(FormatError, match="vendor"):
            decode("2024-03-05|09:05:07|Paycheck|   |1.00")

    def test_error_keeps_line(self):
        """Test FormatError carries the offending line."""
        with pytest.raises(FormatError) as exc_info:
            decode("bad|line")
        assert exc_info.value.line == "bad|line"
