"""In-memory transaction ledger"""

import time
from typing import Iterable, Iterator, List, Optional, Tuple

from finance_dashboard.domain.models import Transaction, TransactionKind, WeekWindow
from finance_dashboard.domain.windowing import filter_by_window


def _newest_first(entries: Iterable[Transaction]) -> List[Transaction]:
    # Date descending; same-day entries newest insertion first
    indexed = list(enumerate(entries))
    indexed.sort(key=lambda pair: (pair[1].date, pair[0]), reverse=True)
    return [t for _, t in indexed]


class Ledger:
    """Ordered collection of transactions; entries are appended or removed, never edited"""

    def __init__(self, transactions: Optional[Iterable[Transaction]] = None):
        self._transactions: List[Transaction] = list(transactions or [])
        self._last_id = max((t.id for t in self._transactions), default=0)

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(tuple(self._transactions))

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        return tuple(self._transactions)

    def next_id(self) -> int:
        """Millisecond timestamp id, bumped when two entries land in the same millisecond"""
        candidate = max(time.time_ns() // 1_000_000, self._last_id + 1)
        self._last_id = candidate
        return candidate

    def add(self, transaction: Transaction) -> None:
        self._transactions.append(transaction)
        self._last_id = max(self._last_id, transaction.id)

    def remove(self, transaction_id: int) -> int:
        """Remove every entry with this id; unknown ids are ignored. Returns the count removed."""
        kept = [t for t in self._transactions if t.id != transaction_id]
        removed = len(self._transactions) - len(kept)
        self._transactions = kept
        return removed

    def balance(self) -> int:
        """All-time income minus expense; may be negative"""
        return sum(t.signed_amount for t in self._transactions)

    def sum_by_kind(self, window: WeekWindow, kind: TransactionKind) -> int:
        return sum(t.amount for t in filter_by_window(self._transactions, window) if t.kind == kind)

    def in_window(self, window: WeekWindow) -> List[Transaction]:
        """Window members, newest first (weekly transaction table)"""
        return _newest_first(filter_by_window(self._transactions, window))

    def recent(self, n: int) -> List[Transaction]:
        if n <= 0:
            return []
        return _newest_first(self._transactions)[:n]
