"""Tests for the in-memory ledger."""

from datetime import date, time
from decimal import Decimal

from accounting_ledger.ledger import Ledger, sort_newest_first

from helpers import make_transaction


class TestLedger:
    """Tests for Ledger ordering and insertion."""

    def test_sorts_on_construction(self):
        """Test the constructor orders newest first."""
        old = make_transaction(date(2024, 1, 1), "1.00")
        new = make_transaction(date(2024, 3, 1), "2.00")
        ledger = Ledger([old, new])
        assert ledger.snapshot() == (new, old)

    def test_insert_newest_goes_first(self):
        """Test a fresh entry lands at index 0."""
        ledger = Ledger([make_transaction(date(2024, 3, 1), "1.00")])
        newest = make_transaction(date(2024, 3, 15), "2.00")
        assert ledger.insert(newest) == 0
        assert ledger[0] == newest

    def test_insert_back_dated(self):
        """Test an older entry lands in the middle, not at the front."""
        ledger = Ledger([
            make_transaction(date(2024, 3, 15), "1.00"),
            make_transaction(date(2024, 1, 1), "2.00"),
        ])
        middle = make_transaction(date(2024, 2, 1), "3.00")
        assert ledger.insert(middle) == 1
        assert [t.date for t in ledger] == [date(2024, 3, 15), date(2024, 2, 1), date(2024, 1, 1)]

    def test_insert_oldest_goes_last(self):
        """Test an entry older than everything is appended."""
        ledger = Ledger([make_transaction(date(2024, 3, 15), "1.00")])
        oldest = make_transaction(date(2020, 1, 1), "2.00")
        assert ledger.insert(oldest) == 1

    def test_insert_into_empty(self):
        """Test inserting into an empty ledger."""
        ledger = Ledger()
        assert ledger.insert(make_transaction(date(2024, 3, 15), "1.00")) == 0
        assert len(ledger) == 1

    def test_insert_tie_goes_after_existing(self):
        """Test equal timestamps keep insertion order, the same as a reload."""
        first = make_transaction(date(2024, 3, 15), "1.00", description="First")
        ledger = Ledger([first])
        second = make_transaction(date(2024, 3, 15), "2.00", description="Second")
        assert ledger.insert(second) == 1

        assert ledger.snapshot() == tuple(sort_newest_first([first, second]))

    def test_time_breaks_date_ties(self):
        """Test time of day orders entries on the same date."""
        morning = make_transaction(date(2024, 3, 15), "1.00", at=time(8, 0))
        evening = make_transaction(date(2024, 3, 15), "2.00", at=time(20, 0))
        ledger = Ledger([morning])
        assert ledger.insert(evening) == 0

    def test_snapshot_is_detached(self):
        """Test a snapshot doesn't change when the ledger grows."""
        ledger = Ledger([make_transaction(date(2024, 3, 1), "1.00")])
        snapshot = ledger.snapshot()
        ledger.insert(make_transaction(date(2024, 3, 2), "1.00"))
        assert len(snapshot) == 1
        assert len(ledger) == 2

    def test_balance(self):
        """Test balance is the signed sum."""
        ledger = Ledger([
            make_transaction(date(2024, 3, 1), "100.00"),
            make_transaction(date(2024, 3, 2), "-30.25"),
        ])
        assert ledger.balance == Decimal("69.75")
        assert Ledger().balance == Decimal("0.00")
