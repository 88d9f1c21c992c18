"""
In-Memory Ledger

The ledger is the ordered collection of every transaction of the session,
newest first by (date, time).

DESIGN DECISION: The ledger is an explicit object owned by the session,
never a module-level global. It has a single lifecycle:
built by the store on load, grown by insert() after a successful append,
discarded at process exit. The file stays the source of truth.
"""

from decimal import Decimal
from typing import Iterable, Iterator

from accounting_ledger.models.transaction import Transaction


def sort_newest_first(transactions: Iterable[Transaction]) -> list[Transaction]:
    """
    Sort by (date, time) descending.

    sorted() is stable with reverse=True, so equal timestamps keep
    their original (file) order.
    """
    return sorted(transactions, key=lambda t: t.sort_key, reverse=True)


class Ledger:
    """Newest-first, append-only collection of transactions."""

    def __init__(self, transactions: Iterable[Transaction] = ()):
        self._transactions: list[Transaction] = sort_newest_first(transactions)

    def insert(self, transaction: Transaction) -> int:
        """
        Insert a transaction at its sort-correct position.

        Never assumes the new record is the newest one: back-dated entries
        and clock skew still land in order. Ties go after existing records
        with the same timestamp, which is where a reload would put them.

        Returns the index the transaction was inserted at.
        """
        key = transaction.sort_key
        index = next(
            (i for i, existing in enumerate(self._transactions) if existing.sort_key < key),
            len(self._transactions),
        )
        self._transactions.insert(index, transaction)
        return index

    def snapshot(self) -> tuple[Transaction, ...]:
        """Immutable view for the query engine."""
        return tuple(self._transactions)

    @property
    def balance(self) -> Decimal:
        return sum((t.amount for t in self._transactions), Decimal("0.00"))

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(tuple(self._transactions))

    def __getitem__(self, index: int) -> Transaction:
        return self._transactions[index]

    def __repr__(self) -> str:
        return f"Ledger({len(self._transactions)} transactions)"
