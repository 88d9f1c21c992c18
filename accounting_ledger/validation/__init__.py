"""Input validation package."""

from accounting_ledger.validation.validator import (
    InputValidationError,
    TransactionValidator,
)

__all__ = ["InputValidationError", "TransactionValidator"]
