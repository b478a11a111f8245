from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest import mock

import pytest
from django.db import DatabaseError

from core.ledger import LedgerAppendError, TransactionEntry
from core.ledger.models import LedgerEntry
from core.ledger.persistence import DjangoLedgerStore

pytestmark = pytest.mark.django_db(transaction=True)

UTC = timezone.utc
DAY_START = datetime(2026, 3, 14, 0, 0, tzinfo=UTC)
DAY_END = datetime(2026, 3, 14, 23, 59, 59, 999000, tzinfo=UTC)


def _entry(entry_id: str, batch_id: str, ts: datetime, gross="20.00", discount="2.00"):
    return TransactionEntry(
        entry_id=entry_id,
        batch_id=batch_id,
        timestamp=ts,
        customer_id="c-1",
        customer_name="Ada Lovelace",
        staff_id="s-1",
        staff_name="Grace",
        service_name="Hot Stone Massage",
        category="massage",
        gross_amount=Decimal(gross),
        discount_amount=Decimal(discount),
        payment_method="CASH",
    )


def test_append_and_query_round_trip() -> None:
    store = DjangoLedgerStore()
    e = _entry("TX1-a", "TX1", datetime(2026, 3, 14, 12, 0, tzinfo=UTC))
    store.append([e])

    (loaded,) = store.query(DAY_START, DAY_END)
    assert loaded.entry_id == "TX1-a"
    assert loaded.gross_amount == Decimal("20.00")
    assert loaded.discount_amount == Decimal("2.00")
    assert loaded.timestamp == e.timestamp
    assert loaded.net_amount == Decimal("18.00")


def test_query_inclusive_and_in_insertion_order() -> None:
    store = DjangoLedgerStore()
    store.append([_entry("TX1-a", "TX1", DAY_END)])
    store.append([_entry("TX2-a", "TX2", DAY_START)])
    store.append([_entry("TX3-a", "TX3", DAY_END + timedelta(milliseconds=1))])

    ids = [e.entry_id for e in store.query(DAY_START, DAY_END)]
    assert ids == ["TX1-a", "TX2-a"]


def test_failed_batch_commits_nothing() -> None:
    store = DjangoLedgerStore()
    ts = datetime(2026, 3, 14, 9, 0, tzinfo=UTC)
    store.append([_entry("TX1-a", "TX1", ts)])

    # second row clashes on the unique entry_id
    with pytest.raises(LedgerAppendError):
        store.append([_entry("TX2-a", "TX2", ts), _entry("TX1-a", "TX2", ts)])

    assert LedgerEntry.objects.count() == 1
    assert store.entries_for_batch("TX2") == ()


def test_database_error_is_reported_as_append_error() -> None:
    store = DjangoLedgerStore()
    ts = datetime(2026, 3, 14, 9, 0, tzinfo=UTC)
    with mock.patch.object(LedgerEntry, "save", side_effect=DatabaseError("disk full")):
        with pytest.raises(LedgerAppendError, match="disk full"):
            store.append([_entry("TX1-a", "TX1", ts)])


def test_rows_cannot_be_updated_or_deleted() -> None:
    store = DjangoLedgerStore()
    store.append([_entry("TX1-a", "TX1", datetime(2026, 3, 14, 9, 0, tzinfo=UTC))])
    row = LedgerEntry.objects.get(entry_id="TX1-a")

    row.service_name = "changed"
    with pytest.raises(PermissionError, match="immutable"):
        row.save()
    with pytest.raises(PermissionError, match="never deleted"):
        row.delete()


def test_entries_for_batch_keeps_line_order() -> None:
    store = DjangoLedgerStore()
    ts = datetime(2026, 3, 14, 9, 0, tzinfo=UTC)
    store.append([_entry("TX1-b", "TX1", ts), _entry("TX1-a", "TX1", ts)])
    assert [e.entry_id for e in store.entries_for_batch("TX1")] == ["TX1-b", "TX1-a"]
