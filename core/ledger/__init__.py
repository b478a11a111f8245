"""
POS Ledger — Public API
=========================
Append-only record of completed sales.

The Django-backed store lives in core.ledger.persistence and is
imported explicitly by hosts that run inside Django.
"""

from core.ledger.entries import TransactionEntry
from core.ledger.errors import LedgerAppendError
from core.ledger.store import InMemoryLedgerStore, LedgerStore

__all__ = [
    "TransactionEntry",
    "LedgerAppendError",
    "InMemoryLedgerStore",
    "LedgerStore",
]
