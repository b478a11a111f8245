"""
POS Retail Engine — Sale Completion Records
=============================================
Converts a paid order into ledger entries and a completion record.

One TransactionEntry per line item; every entry of a checkout
shares one batch_id. Discounts are taken from the snapshot made at
payment time and are never recomputed afterwards.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Sequence, Tuple

from core.ledger.entries import TransactionEntry
from engines.retail.discounts import ZERO, compute_line_discounts
from engines.retail.order import OrderSnapshot


RETAIL_SALE_COMPLETED = "retail.sale.completed"


# ══════════════════════════════════════════════════════════════
# BATCH IDS
# ══════════════════════════════════════════════════════════════

class BatchIdGenerator:
    """
    Time-derived batch ids: "TX" + epoch milliseconds.

    Ids are strictly increasing within the process: a second
    checkout in the same millisecond gets the next millisecond.
    """

    def __init__(self, prefix: str = "TX") -> None:
        self._prefix = prefix
        self._last_ms = 0
        self._lock = threading.Lock()

    def next_id(self, now: datetime) -> str:
        ms = int(now.timestamp() * 1000)
        with self._lock:
            if ms <= self._last_ms:
                ms = self._last_ms + 1
            self._last_ms = ms
        return f"{self._prefix}{ms}"


# ══════════════════════════════════════════════════════════════
# COMPLETION RECORD
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SaleCompleted:
    """Emitted to completion listeners after the batch is committed."""
    batch_id: str
    payment_method: str
    completed_at: datetime
    customer_name: str
    staff_name: str
    gross_amount: Decimal
    discount_amount: Decimal
    entries: Tuple[TransactionEntry, ...]
    event_type: str = RETAIL_SALE_COMPLETED

    @property
    def net_amount(self) -> Decimal:
        return self.gross_amount - self.discount_amount


# ══════════════════════════════════════════════════════════════
# ENTRY BUILDERS
# ══════════════════════════════════════════════════════════════

def build_transaction_entries(
    snapshot: OrderSnapshot,
    *,
    batch_id: str,
    payment_method: str,
    paid_at: datetime,
) -> Tuple[TransactionEntry, ...]:
    """
    One entry per line: gross = unit_price × quantity,
    discount = the line's apportioned discount.
    """
    if snapshot.customer is None or snapshot.staff is None:
        raise ValueError("customer and staff must be set before building entries.")

    discounts = compute_line_discounts(snapshot.line_items, snapshot.discount)
    return tuple(
        TransactionEntry(
            entry_id=f"{batch_id}-{line.item_id}",
            batch_id=batch_id,
            timestamp=paid_at,
            customer_id=snapshot.customer.party_id,
            customer_name=snapshot.customer.name,
            staff_id=snapshot.staff.party_id,
            staff_name=snapshot.staff.name,
            service_name=line.name,
            category=line.category or "unknown",
            gross_amount=line.line_subtotal,
            discount_amount=discount,
            payment_method=payment_method,
        )
        for line, discount in zip(snapshot.line_items, discounts)
    )


def build_sale_completed(
    entries: Sequence[TransactionEntry],
    *,
    batch_id: str,
    payment_method: str,
    paid_at: datetime,
    customer_name: str,
    staff_name: str,
) -> SaleCompleted:
    return SaleCompleted(
        batch_id=batch_id,
        payment_method=payment_method,
        completed_at=paid_at,
        customer_name=customer_name,
        staff_name=staff_name,
        gross_amount=sum((e.gross_amount for e in entries), ZERO),
        discount_amount=sum((e.discount_amount for e in entries), ZERO),
        entries=tuple(entries),
    )
