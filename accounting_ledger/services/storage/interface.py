"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Swap the flat file for another backend later
2. Use throwaway files or in-memory storage for testing
3. Keep business logic decoupled from the file format

The interface is intentionally small. The ledger is append-only,
so there is no update or delete.
"""

from abc import ABC, abstractmethod
from typing import NamedTuple, Optional
from uuid import UUID

from accounting_ledger.ledger import Ledger
from accounting_ledger.models.audit import AuditEvent
from accounting_ledger.models.transaction import LoadWarning, Transaction


class LoadResult(NamedTuple):
    """Everything load() produces: the ledger and the lines it had to skip."""
    ledger: Ledger
    warnings: list[LoadWarning]
    created: bool = False


class TransactionStorageInterface(ABC):
    """
    Abstract interface for transaction storage operations.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load(self) -> LoadResult:
        """
        Load every stored transaction.

        Returns:
            The newest-first ledger plus one warning per skipped record.
            Malformed records never abort the load.

        Raises:
            PersistenceError: If the backing store can't be created or read
        """
        pass

    @abstractmethod
    def append(self, transaction: Transaction) -> None:
        """
        Append one transaction to storage.

        Existing content is never rewritten.

        Raises:
            PersistenceError: If the write fails
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        """
        Get all events for a correlation ID (e.g., one load).

        Returns:
            List of related events in chronological order
        """
        pass

    @abstractmethod
    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class FormatError(StorageError):
    """A persisted record could not be decoded."""

    def __init__(self, message: str, line: Optional[str] = None):
        super().__init__(message)
        self.line = line


class PersistenceError(StorageError):
    """The backing file could not be created, read or written."""
    pass
