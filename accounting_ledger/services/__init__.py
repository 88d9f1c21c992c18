"""Services package."""

from accounting_ledger.services.storage import (
    AuditStorageInterface,
    DecodeOutcome,
    FlatFileTransactionStorage,
    FormatError,
    HEADER,
    InMemoryAuditStorage,
    LoadResult,
    PersistenceError,
    StorageError,
    TransactionStorageInterface,
    decode,
    decode_lines,
    encode,
)

__all__ = [
    "AuditStorageInterface",
    "DecodeOutcome",
    "FlatFileTransactionStorage",
    "FormatError",
    "HEADER",
    "InMemoryAuditStorage",
    "LoadResult",
    "PersistenceError",
    "StorageError",
    "TransactionStorageInterface",
    "decode",
    "decode_lines",
    "encode",
]
