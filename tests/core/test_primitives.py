"""
Tests for core.primitives and core.notifications.
"""

from decimal import Decimal

import pytest

from core.notifications import RecordingNotificationSink, safe_notify
from core.primitives import (
    CATEGORY_LABELS,
    CatalogItem,
    InMemoryServiceCatalog,
    Operator,
    PartyRef,
    ServiceCategory,
)


def _catalog():
    return InMemoryServiceCatalog([
        CatalogItem("f1", "Signature Facial", Decimal("65.00"), ServiceCategory.FACIAL),
        CatalogItem("f2", "Express Facial", Decimal("35.00"), ServiceCategory.FACIAL),
        CatalogItem("f3", "Retired Facial", Decimal("40.00"), ServiceCategory.FACIAL, active=False),
        CatalogItem("m1", "Hot Stone Massage", Decimal("80.00"), ServiceCategory.MASSAGE),
        CatalogItem("x1", "Facial Gift Card", Decimal("50.00")),
    ])


class TestCatalogItem:
    def test_valid(self):
        item = CatalogItem("f1", "Signature Facial", Decimal("65.00"), ServiceCategory.FACIAL)
        assert item.category_code == "facial"

    def test_uncategorised_item_reports_unknown(self):
        assert CatalogItem("x", "Mystery", Decimal("1")).category_code == "unknown"

    def test_float_price_rejected(self):
        with pytest.raises(TypeError, match="Decimal"):
            CatalogItem("f1", "Facial", 65.0)

    def test_negative_price_rejected(self):
        with pytest.raises(ValueError, match="negative"):
            CatalogItem("f1", "Facial", Decimal("-1"))

    def test_category_must_be_enum(self):
        with pytest.raises(ValueError, match="ServiceCategory"):
            CatalogItem("f1", "Facial", Decimal("1"), category="facial")

    def test_every_category_has_a_label(self):
        assert set(CATEGORY_LABELS) == set(ServiceCategory)


class TestInMemoryServiceCatalog:
    def test_services_by_category_skips_inactive(self):
        ids = [i.item_id for i in _catalog().services_by_category(ServiceCategory.FACIAL)]
        assert ids == ["f1", "f2"]

    def test_search_is_case_insensitive(self):
        ids = [i.item_id for i in _catalog().search("FACIAL")]
        assert ids == ["f1", "f2"]

    def test_search_empty_query(self):
        assert _catalog().search("   ") == ()

    def test_add(self):
        catalog = _catalog()
        catalog.add(CatalogItem("n1", "Gel Nails", Decimal("30"), ServiceCategory.NAILS))
        assert len(catalog.services_by_category(ServiceCategory.NAILS)) == 1


class TestParties:
    def test_party_ref_dict(self):
        ref = PartyRef("c-1", "Ada")
        assert ref.to_dict() == {"id": "c-1", "name": "Ada"}
        assert PartyRef.from_dict(ref.to_dict()) == ref

    def test_party_ref_requires_name(self):
        with pytest.raises(ValueError, match="name"):
            PartyRef("c-1", "")

    def test_operator_as_staff(self):
        op = Operator("s-9", "Grace")
        assert op.as_staff() == PartyRef("s-9", "Grace")
        assert op.can_reassign_staff is False


class TestNotifications:
    def test_recording_sink_keeps_order(self):
        sink = RecordingNotificationSink()
        safe_notify(sink, "success", "one")
        safe_notify(sink, "error", "two")
        assert sink.messages == [("success", "one"), ("error", "two")]
        assert sink.successes == ["one"]
        assert sink.errors == ["two"]

    def test_failing_sink_is_contained(self):
        class BrokenSink:
            def notify_success(self, message):
                raise RuntimeError("toast service down")

            def notify_error(self, message):
                raise RuntimeError("toast service down")

        safe_notify(BrokenSink(), "success", "ignored")
