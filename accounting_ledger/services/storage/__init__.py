"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
Transactions live in a pipe-delimited flat file; audit events are kept in memory.
"""

from accounting_ledger.services.storage.interface import (
    AuditStorageInterface,
    FormatError,
    LoadResult,
    PersistenceError,
    StorageError,
    TransactionStorageInterface,
)
from accounting_ledger.services.storage.codec import (
    HEADER,
    decode,
    encode,
)
from accounting_ledger.services.storage.flat_file import (
    DecodeOutcome,
    FlatFileTransactionStorage,
    decode_lines,
)
from accounting_ledger.services.storage.memory import InMemoryAuditStorage

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "LoadResult",
    "TransactionStorageInterface",
    # Exceptions
    "FormatError",
    "PersistenceError",
    "StorageError",
    # Codec
    "HEADER",
    "decode",
    "encode",
    # Implementations
    "DecodeOutcome",
    "FlatFileTransactionStorage",
    "InMemoryAuditStorage",
    "decode_lines",
]
