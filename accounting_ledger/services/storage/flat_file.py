"""
Flat File Storage Implementation

DESIGN DECISION: A plain pipe-delimited text file is the storage backend because:
1. Users can read and fix their data in any text editor
2. No database setup required
3. Appending one line is the only write the ledger ever needs

TRADEOFFS:
- No concurrent access (one process, one user)
- No atomicity beyond a single line append
- Everything is filtered in Python after a full load

A corrupt line never costs the user the rest of their ledger:
load() skips it and reports a warning instead.
"""

from pathlib import Path
from typing import Iterable, Iterator, NamedTuple, Optional, Union

import structlog

from accounting_ledger.config import get_settings
from accounting_ledger.ledger import Ledger
from accounting_ledger.models.transaction import LoadWarning, Transaction
from accounting_ledger.services.storage.codec import HEADER, decode, encode
from accounting_ledger.services.storage.interface import (
    FormatError,
    LoadResult,
    PersistenceError,
    TransactionStorageInterface,
)


logger = structlog.get_logger(__name__)


class DecodeOutcome(NamedTuple):
    """Result of decoding one line: exactly one of transaction / error is set."""
    line_number: int
    line: str
    transaction: Optional[Transaction] = None
    error: Optional[FormatError] = None

    @property
    def ok(self) -> bool:
        return self.transaction is not None


def decode_lines(
    lines: Iterable[Union[str, bytes]],
    encoding: str = "utf-8",
) -> Iterator[DecodeOutcome]:
    """
    Decode every data line of a ledger file.

    The first line is only treated as a header when it is exactly HEADER,
    so a file that starts with data loses nothing. Blank lines are ignored.
    Raw byte lines are decoded one at a time, so a line with bad bytes
    becomes a single failed outcome.
    """
    for line_number, raw in enumerate(lines, start=1):
        if isinstance(raw, bytes):
            try:
                raw = raw.decode(encoding)
            except UnicodeDecodeError as e:
                shown = raw.decode(encoding, errors="backslashreplace").rstrip("\r\n")
                yield DecodeOutcome(
                    line_number,
                    shown,
                    error=FormatError(f"Invalid {encoding} text: {e.reason}", line=shown),
                )
                continue
        line = raw.rstrip("\r\n")
        if line_number == 1 and line == HEADER:
            continue
        if not line.strip():
            continue
        try:
            yield DecodeOutcome(line_number, line, transaction=decode(line))
        except FormatError as e:
            yield DecodeOutcome(line_number, line, error=e)


class FlatFileTransactionStorage(TransactionStorageInterface):
    """
    Pipe-delimited flat file implementation of transaction storage.

    One transaction per line, with a header line when the file is created.
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        encoding: Optional[str] = None,
    ):
        if path is None or encoding is None:
            settings = get_settings().ledger
            path = path if path is not None else settings.file_path
            encoding = encoding or settings.encoding
        self._path = Path(path)
        self._encoding = encoding

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> LoadResult:
        if not self._path.exists():
            self._create()
            logger.info("ledger_file_created", path=str(self._path))
            return LoadResult(ledger=Ledger(), warnings=[], created=True)

        try:
            with self._path.open("rb") as f:
                outcomes = list(decode_lines(f, self._encoding))
        except OSError as e:
            raise PersistenceError(f"Error loading transactions from {self._path}: {e}")

        transactions = [o.transaction for o in outcomes if o.ok]
        warnings = [
            LoadWarning(line_number=o.line_number, line=o.line, reason=str(o.error))
            for o in outcomes
            if not o.ok
        ]

        for warning in warnings:
            logger.warning(
                "ledger_line_skipped",
                path=str(self._path),
                line_number=warning.line_number,
                reason=warning.reason,
            )
        logger.info(
            "ledger_loaded",
            path=str(self._path),
            record_count=len(transactions),
            skipped_count=len(warnings),
        )

        return LoadResult(ledger=Ledger(transactions), warnings=warnings)

    def append(self, transaction: Transaction) -> None:
        line = encode(transaction)
        try:
            if not self._path.exists():
                self._create()
            prefix = "" if self._ends_with_newline() else "\n"
            with self._path.open("a", encoding=self._encoding, newline="") as f:
                f.write(f"{prefix}{line}\n")
                f.flush()
        except OSError as e:
            raise PersistenceError(f"Error saving transaction to {self._path}: {e}")

        logger.debug("transaction_appended", path=str(self._path), line=line)

    def _create(self) -> None:
        """Create the file holding only the header line."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding=self._encoding, newline="") as f:
                f.write(f"{HEADER}\n")
        except OSError as e:
            raise PersistenceError(f"Error creating transactions file {self._path}: {e}")

    def _ends_with_newline(self) -> bool:
        """True for an empty file or one whose last byte is a newline."""
        with self._path.open("rb") as f:
            f.seek(0, 2)
            if f.tell() == 0:
                return True
            f.seek(-1, 2)
            return f.read(1) == b"\n"
