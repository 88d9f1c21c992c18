"""Builders shared by the test modules."""

from datetime import date, time
from decimal import Decimal

from accounting_ledger.models.transaction import Transaction


def make_transaction(
    day: date,
    amount: str,
    vendor: str = "Acme",
    description: str = "Test",
    at: time = time(12, 0, 0),
) -> Transaction:
    return Transaction(
        date=day,
        time=at,
        description=description,
        vendor=vendor,
        amount=Decimal(amount),
    )
