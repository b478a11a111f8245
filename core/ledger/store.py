"""
POS Ledger — Store Protocol + In-Memory Store
===============================================
The ledger is an injected repository, not a process-wide list.

Contract:
    append(entries)     — all-or-nothing per call, insertion order kept,
                          existing entries never touched
    query(start, end)   — entries with start <= timestamp <= end,
                          in insertion order

Concurrency:
- Appends are serialized (single writer)
- Reads take a consistent snapshot; a reader never observes a
  partially appended batch
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Iterable, List, Protocol, Tuple

from core.ledger.entries import TransactionEntry
from core.ledger.errors import LedgerAppendError

logger = logging.getLogger("pos.ledger")


# ══════════════════════════════════════════════════════════════
# PROTOCOL
# ══════════════════════════════════════════════════════════════

class LedgerStore(Protocol):
    def append(self, entries: Iterable[TransactionEntry]) -> None:
        """Append a batch atomically. Raises LedgerAppendError on failure."""
        ...  # pragma: no cover

    def query(
        self, start: datetime, end: datetime,
    ) -> Tuple[TransactionEntry, ...]:
        """Entries with start <= timestamp <= end, insertion order."""
        ...  # pragma: no cover


def check_window(start: datetime, end: datetime) -> None:
    if start.tzinfo is None or end.tzinfo is None:
        raise ValueError("query bounds must be timezone-aware.")


# ══════════════════════════════════════════════════════════════
# IN-MEMORY STORE
# ══════════════════════════════════════════════════════════════

class InMemoryLedgerStore:
    """
    Thread-safe in-memory ledger.
    Used in tests, bootstrap, and single-process hosts.
    """

    def __init__(self, entries: Iterable[TransactionEntry] = ()) -> None:
        self._entries: List[TransactionEntry] = []
        self._entry_ids: set = set()
        self._lock = threading.Lock()
        if entries:
            self.append(entries)

    def append(self, entries: Iterable[TransactionEntry]) -> None:
        batch = list(entries)
        for entry in batch:
            if not isinstance(entry, TransactionEntry):
                raise LedgerAppendError(
                    f"Ledger accepts TransactionEntry only, "
                    f"got {type(entry).__name__}."
                )
        batch_ids = tuple(sorted({e.batch_id for e in batch}))
        entry_ids = {e.entry_id for e in batch}
        if len(entry_ids) != len(batch):
            raise LedgerAppendError(
                "Duplicate entry_id inside one batch.", batch_ids,
            )

        with self._lock:
            clashes = [e.entry_id for e in batch if e.entry_id in self._entry_ids]
            if clashes:
                raise LedgerAppendError(
                    f"Entry ids already recorded: {', '.join(clashes)}.",
                    batch_ids,
                )
            self._entries.extend(batch)
            self._entry_ids.update(e.entry_id for e in batch)

        logger.debug(f"Appended {len(batch)} ledger entries")

    def query(
        self, start: datetime, end: datetime,
    ) -> Tuple[TransactionEntry, ...]:
        check_window(start, end)
        with self._lock:
            snapshot = tuple(self._entries)
        return tuple(e for e in snapshot if start <= e.timestamp <= end)

    def entries_for_batch(self, batch_id: str) -> Tuple[TransactionEntry, ...]:
        with self._lock:
            return tuple(e for e in self._entries if e.batch_id == batch_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
