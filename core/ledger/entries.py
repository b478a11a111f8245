"""
POS Ledger — Transaction Entry
================================
One completed-sale line, as recorded in the ledger.

RULES (NON-NEGOTIABLE):
- Entries are immutable once created
- discount_amount <= gross_amount, both >= 0
- timestamp is timezone-aware
- Entries sharing a batch_id are one sale event
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class TransactionEntry:
    entry_id: str
    batch_id: str
    timestamp: datetime
    customer_id: str
    customer_name: str
    staff_id: str
    staff_name: str
    service_name: str
    category: str
    gross_amount: Decimal
    discount_amount: Decimal
    payment_method: str

    def __post_init__(self):
        if not self.entry_id:
            raise ValueError("entry_id must be non-empty.")
        if not self.batch_id:
            raise ValueError("batch_id must be non-empty.")
        if not isinstance(self.timestamp, datetime) or self.timestamp.tzinfo is None:
            raise ValueError("timestamp must be a timezone-aware datetime.")
        for name in ("gross_amount", "discount_amount"):
            value = getattr(self, name)
            if not isinstance(value, Decimal):
                raise TypeError(
                    f"{name} must be Decimal, got {type(value).__name__}."
                )
            if value < 0:
                raise ValueError(f"{name} cannot be negative.")
        if self.discount_amount > self.gross_amount:
            raise ValueError(
                f"discount_amount ({self.discount_amount}) exceeds "
                f"gross_amount ({self.gross_amount})."
            )
        if not self.payment_method:
            raise ValueError("payment_method must be non-empty.")

    @property
    def net_amount(self) -> Decimal:
        return self.gross_amount - self.discount_amount

    def to_dict(self) -> dict:
        return {
            "entry_id": self.entry_id,
            "batch_id": self.batch_id,
            "timestamp": self.timestamp.isoformat(),
            "customer_id": self.customer_id,
            "customer_name": self.customer_name,
            "staff_id": self.staff_id,
            "staff_name": self.staff_name,
            "service_name": self.service_name,
            "category": self.category,
            "gross_amount": str(self.gross_amount),
            "discount_amount": str(self.discount_amount),
            "payment_method": self.payment_method,
        }

    @classmethod
    def from_dict(cls, data: dict) -> TransactionEntry:
        timestamp = data["timestamp"]
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp)
        return cls(
            entry_id=data["entry_id"],
            batch_id=data["batch_id"],
            timestamp=timestamp,
            customer_id=data["customer_id"],
            customer_name=data["customer_name"],
            staff_id=data["staff_id"],
            staff_name=data["staff_name"],
            service_name=data["service_name"],
            category=data["category"],
            gross_amount=Decimal(str(data["gross_amount"])),
            discount_amount=Decimal(str(data["discount_amount"])),
            payment_method=data["payment_method"],
        )
