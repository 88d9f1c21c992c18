"""Shared fixtures for the ledger tests."""

from datetime import date, time
from pathlib import Path

import pytest

from accounting_ledger.config import AppSettings, get_settings
from accounting_ledger.models.transaction import Transaction
from accounting_ledger.services.storage import FlatFileTransactionStorage

from helpers import make_transaction


@pytest.fixture(autouse=True)
def _isolate_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point the default ledger file into the test's temp dir and drop cached settings."""
    monkeypatch.setenv("LEDGER_FILE_PATH", str(tmp_path / "default-transactions.csv"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def app_settings() -> AppSettings:
    return AppSettings()


@pytest.fixture
def ledger_path(tmp_path: Path) -> Path:
    return tmp_path / "transactions.csv"


@pytest.fixture
def storage(ledger_path: Path) -> FlatFileTransactionStorage:
    return FlatFileTransactionStorage(ledger_path, encoding="utf-8")


@pytest.fixture
def march_ledger() -> list[Transaction]:
    """Newest-first transactions around today = 2024-03-15."""
    return [
        make_transaction(date(2024, 3, 15), "1500.00", "Acme Corp", "Paycheck", time(9, 0)),
        make_transaction(date(2024, 3, 2), "-45.10", "Grocer", "Groceries"),
        make_transaction(date(2024, 3, 1), "-1200.00", "Landlord", "Rent"),
        make_transaction(date(2024, 2, 29), "-60.00", "Power Co", "Electricity"),
        make_transaction(date(2024, 2, 1), "200.00", "Acme Corp", "Bonus"),
        make_transaction(date(2024, 1, 31), "-15.00", "Zeta Books", "Book"),
        make_transaction(date(2023, 12, 31), "-99.99", "Zeta Books", "Gift"),
        make_transaction(date(2023, 1, 1), "50.00", "Grandma", "New year"),
        make_transaction(date(2022, 12, 31), "-10.00", "Acme Corp", "Refund fee"),
    ]
