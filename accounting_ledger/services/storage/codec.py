"""
Record Codec

One transaction per line, fields separated by '|':

    date|time|description|vendor|amount
    2024-03-15|09:30:00|Paycheck|Acme Corp|1500.00

The format has no escaping. Free text containing '|' is rejected by the
Transaction model before it can ever reach encode().
"""

import re
from datetime import date, time
from decimal import Decimal, InvalidOperation

from pydantic import ValidationError

from accounting_ledger.models.transaction import DELIMITER, Transaction
from accounting_ledger.services.storage.interface import FormatError


FIELDS = ["date", "time", "description", "vendor", "amount"]
HEADER = DELIMITER.join(FIELDS)

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_PATTERN = re.compile(r"^\d{2}:\d{2}:\d{2}$")


def encode(transaction: Transaction) -> str:
    """Convert a transaction to a line (without the trailing newline)."""
    return DELIMITER.join([
        transaction.date.strftime(DATE_FORMAT),
        transaction.time.strftime(TIME_FORMAT),
        transaction.description,
        transaction.vendor,
        f"{transaction.amount:.2f}",
    ])


def decode(line: str) -> Transaction:
    """
    Convert a line back to a transaction.

    Raises:
        FormatError: wrong field count, bad date/time/amount,
                     or values the Transaction model rejects
    """
    text = line.rstrip("\r\n")
    parts = text.split(DELIMITER)
    if len(parts) != len(FIELDS):
        raise FormatError(
            f"Expected {len(FIELDS)} fields but found {len(parts)}",
            line=text,
        )

    date_text, time_text, description, vendor, amount_text = parts
    transaction_date = _parse_date(date_text, text)
    transaction_time = _parse_time(time_text, text)
    amount = _parse_amount(amount_text, text)

    try:
        return Transaction(
            date=transaction_date,
            time=transaction_time,
            description=description,
            vendor=vendor,
            amount=amount,
        )
    except ValidationError as e:
        raise FormatError(_first_error(e), line=text) from e


def _parse_date(value: str, line: str) -> date:
    if not _DATE_PATTERN.match(value):
        raise FormatError(f"Invalid date '{value}' (expected YYYY-MM-DD)", line=line)
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise FormatError(f"Invalid date '{value}': {e}", line=line) from e


def _parse_time(value: str, line: str) -> time:
    if not _TIME_PATTERN.match(value):
        raise FormatError(f"Invalid time '{value}' (expected HH:MM:SS)", line=line)
    try:
        return time.fromisoformat(value)
    except ValueError as e:
        raise FormatError(f"Invalid time '{value}': {e}", line=line) from e


def _parse_amount(value: str, line: str) -> Decimal:
    try:
        amount = Decimal(value.strip())
    except InvalidOperation as e:
        raise FormatError(f"Invalid amount '{value}'", line=line) from e
    if not amount.is_finite():
        raise FormatError(f"Invalid amount '{value}'", line=line)
    return amount


def _first_error(error: ValidationError) -> str:
    details = error.errors()
    if not details:
        return str(error)
    first = details[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or "record"
    return f"{field}: {first.get('msg', 'invalid value')}"
