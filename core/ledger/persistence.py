"""
POS Ledger — Django Persistence Store
=======================================
LedgerStore backed by the LedgerEntry model.

Write flow:
    1. Check every entry is a TransactionEntry
    2. Insert all rows inside one transaction.atomic() block
    3. Any database error → rollback, LedgerAppendError

No partial batch is ever visible: either every row of the batch
commits or none does.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Tuple

from django.db import DatabaseError, transaction

from core.ledger.entries import TransactionEntry
from core.ledger.errors import LedgerAppendError
from core.ledger.models import LedgerEntry
from core.ledger.store import check_window

logger = logging.getLogger("pos.ledger")


_FIELDS = (
    "entry_id",
    "batch_id",
    "timestamp",
    "customer_id",
    "customer_name",
    "staff_id",
    "staff_name",
    "service_name",
    "category",
    "gross_amount",
    "discount_amount",
    "payment_method",
)


def _to_row(entry: TransactionEntry) -> LedgerEntry:
    return LedgerEntry(**{name: getattr(entry, name) for name in _FIELDS})


def _to_entry(row: dict) -> TransactionEntry:
    return TransactionEntry(**{name: row[name] for name in _FIELDS})


class DjangoLedgerStore:
    """LedgerStore over the `pos_ledger_entry` table."""

    def __init__(self, using: str = "default") -> None:
        self._using = using

    def append(self, entries: Iterable[TransactionEntry]) -> None:
        batch = list(entries)
        for entry in batch:
            if not isinstance(entry, TransactionEntry):
                raise LedgerAppendError(
                    f"Ledger accepts TransactionEntry only, "
                    f"got {type(entry).__name__}."
                )
        batch_ids = tuple(sorted({e.batch_id for e in batch}))

        try:
            with transaction.atomic(using=self._using):
                for entry in batch:
                    _to_row(entry).save(using=self._using)
        except DatabaseError as exc:
            logger.error(
                f"Ledger append failed for batch {', '.join(batch_ids)}: {exc}",
                exc_info=True,
            )
            raise LedgerAppendError(
                f"Ledger append failed: {exc}", batch_ids,
            ) from exc

        logger.debug(f"Appended {len(batch)} ledger entries")

    def query(
        self, start: datetime, end: datetime,
    ) -> Tuple[TransactionEntry, ...]:
        check_window(start, end)
        rows = (
            LedgerEntry.objects.using(self._using)
            .filter(timestamp__gte=start, timestamp__lte=end)
            .order_by("seq")
            .values(*_FIELDS)
        )
        return tuple(_to_entry(row) for row in rows)

    def entries_for_batch(self, batch_id: str) -> Tuple[TransactionEntry, ...]:
        rows = (
            LedgerEntry.objects.using(self._using)
            .filter(batch_id=batch_id)
            .order_by("seq")
            .values(*_FIELDS)
        )
        return tuple(_to_entry(row) for row in rows)
