"""
Ledger Query Functions

Every function here is pure: it takes a sequence of transactions
(newest first) and returns a new list in the same relative order.
Nothing reads the system clock; the reference date is always passed in.
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Callable, Optional, Sequence

from accounting_ledger.models.transaction import (
    LedgerSummary,
    SearchCriteria,
    Transaction,
)


Predicate = Callable[[Transaction], bool]


# =============================================================================
# DATE WINDOWS
# =============================================================================

def first_day_of_month(today: date) -> date:
    return today.replace(day=1)


def first_day_of_year(today: date) -> date:
    return today.replace(month=1, day=1)


def previous_month_range(today: date) -> tuple[date, date]:
    """First and last day of the calendar month before today's."""
    last_day = first_day_of_month(today) - timedelta(days=1)
    return last_day.replace(day=1), last_day


def previous_year_range(today: date) -> tuple[date, date]:
    """Jan 1 and Dec 31 of the year before today's."""
    year = today.year - 1
    return date(year, 1, 1), date(year, 12, 31)


# =============================================================================
# PREDICATES
# =============================================================================

def on_or_after(start: date) -> Predicate:
    return lambda t: t.date >= start


def on_or_before(end: date) -> Predicate:
    return lambda t: t.date <= end


def between(start: date, end: date) -> Predicate:
    return lambda t: start <= t.date <= end


def text_contains(field: str, needle: str) -> Predicate:
    """Case-insensitive substring match against a text field."""
    folded = needle.casefold()
    return lambda t: folded in getattr(t, field).casefold()


def amount_at_least(minimum: Decimal) -> Predicate:
    return lambda t: t.amount >= minimum


def amount_at_most(maximum: Decimal) -> Predicate:
    return lambda t: t.amount <= maximum


def build_predicates(criteria: SearchCriteria) -> list[Predicate]:
    """One predicate per criterion that is present."""
    predicates: list[Predicate] = []
    if criteria.start_date is not None:
        predicates.append(on_or_after(criteria.start_date))
    if criteria.end_date is not None:
        predicates.append(on_or_before(criteria.end_date))
    if criteria.description:
        predicates.append(text_contains("description", criteria.description))
    if criteria.vendor:
        predicates.append(text_contains("vendor", criteria.vendor))
    if criteria.min_amount is not None:
        predicates.append(amount_at_least(criteria.min_amount))
    if criteria.max_amount is not None:
        predicates.append(amount_at_most(criteria.max_amount))
    return predicates


def matches_all(predicates: Sequence[Predicate]) -> Predicate:
    """Logical AND. No predicates matches everything."""
    return lambda t: all(p(t) for p in predicates)


def select(transactions: Sequence[Transaction], predicate: Predicate) -> list[Transaction]:
    return [t for t in transactions if predicate(t)]


# =============================================================================
# REPORTS
# =============================================================================

def month_to_date(transactions: Sequence[Transaction], today: date) -> list[Transaction]:
    """From the 1st of today's month through today. Later-dated entries are excluded."""
    return select(transactions, between(first_day_of_month(today), today))


def previous_month(transactions: Sequence[Transaction], today: date) -> list[Transaction]:
    return select(transactions, between(*previous_month_range(today)))


def year_to_date(transactions: Sequence[Transaction], today: date) -> list[Transaction]:
    """From Jan 1 of today's year through today. Later-dated entries are excluded."""
    return select(transactions, between(first_day_of_year(today), today))


def previous_year(transactions: Sequence[Transaction], today: date) -> list[Transaction]:
    return select(transactions, between(*previous_year_range(today)))


def by_vendor(transactions: Sequence[Transaction], needle: str) -> list[Transaction]:
    return select(transactions, text_contains("vendor", needle))


def custom_search(
    transactions: Sequence[Transaction],
    criteria: Optional[SearchCriteria] = None,
) -> list[Transaction]:
    if criteria is None:
        return list(transactions)
    return select(transactions, matches_all(build_predicates(criteria)))


def deposits(transactions: Sequence[Transaction]) -> list[Transaction]:
    return select(transactions, lambda t: t.is_deposit)


def payments(transactions: Sequence[Transaction]) -> list[Transaction]:
    return select(transactions, lambda t: t.is_payment)


# =============================================================================
# AGGREGATES
# =============================================================================

def summarize(transactions: Sequence[Transaction]) -> LedgerSummary:
    """
    Count and sum everything, then deposits and payments separately.

    Amounts are never zero, so every transaction lands on exactly one side.
    """
    zero = Decimal("0.00")
    deposit_count = payment_count = 0
    deposit_total = payment_total = zero

    for t in transactions:
        if t.is_deposit:
            deposit_count += 1
            deposit_total += t.amount
        else:
            payment_count += 1
            payment_total += t.amount

    return LedgerSummary(
        total_count=deposit_count + payment_count,
        total_amount=deposit_total + payment_total,
        deposit_count=deposit_count,
        deposit_total=deposit_total,
        payment_count=payment_count,
        payment_total=payment_total,
    )
