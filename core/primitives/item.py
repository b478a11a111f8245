"""
POS Item Primitive — Service Catalog Item
===========================================
The catalog (categories and pricing) is an external collaborator.
The POS core only consumes it through the ServiceCatalog protocol:

    services_by_category(category) -> sequence of CatalogItem
    search(query)                  -> sequence of CatalogItem

RULES:
- Items are immutable snapshots
- Prices are Decimal, never float, never negative
- Category is drawn from a fixed enumerated set with display labels

This file contains NO persistence logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Dict, Iterable, List, Protocol, Tuple


# ══════════════════════════════════════════════════════════════
# ENUMS
# ══════════════════════════════════════════════════════════════

class ServiceCategory(Enum):
    """Fixed set of catalog categories."""
    FACIAL = "facial"
    MASSAGE = "massage"
    NAILS = "nails"
    WAXING = "waxing"
    LASHES_BROWS = "lashes_brows"
    BODY = "body"
    PRODUCTS = "products"


CATEGORY_LABELS: Dict[ServiceCategory, str] = {
    ServiceCategory.FACIAL: "Facials",
    ServiceCategory.MASSAGE: "Massage",
    ServiceCategory.NAILS: "Nails",
    ServiceCategory.WAXING: "Waxing",
    ServiceCategory.LASHES_BROWS: "Lashes & Brows",
    ServiceCategory.BODY: "Body Treatments",
    ServiceCategory.PRODUCTS: "Retail Products",
}


# ══════════════════════════════════════════════════════════════
# CATALOG ITEM
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CatalogItem:
    """
    A sellable service or product as exposed by the catalog.

    category is None for items the catalog never classified;
    the cart records those under "unknown".
    """
    item_id: str
    name: str
    price: Decimal
    category: ServiceCategory | None = None
    active: bool = True

    def __post_init__(self):
        if not self.item_id or not isinstance(self.item_id, str):
            raise ValueError("item_id must be non-empty string.")
        if not self.name or not isinstance(self.name, str):
            raise ValueError("name must be non-empty string.")
        if not isinstance(self.price, Decimal):
            raise TypeError(
                f"price must be Decimal, got {type(self.price).__name__}."
            )
        if self.price < 0:
            raise ValueError("price cannot be negative.")
        if self.category is not None and not isinstance(
            self.category, ServiceCategory
        ):
            raise ValueError("category must be ServiceCategory enum.")

    @property
    def category_code(self) -> str:
        return self.category.value if self.category is not None else "unknown"


# ══════════════════════════════════════════════════════════════
# CATALOG PROTOCOL
# ══════════════════════════════════════════════════════════════

class ServiceCatalog(Protocol):
    def services_by_category(
        self, category: ServiceCategory,
    ) -> Tuple[CatalogItem, ...]:
        ...  # pragma: no cover

    def search(self, query: str) -> Tuple[CatalogItem, ...]:
        ...  # pragma: no cover


class InMemoryServiceCatalog:
    """Simple in-memory catalog for tests and bootstrap."""

    def __init__(self, items: Iterable[CatalogItem] = ()) -> None:
        self._items: List[CatalogItem] = list(items)

    def add(self, item: CatalogItem) -> None:
        self._items.append(item)

    def services_by_category(
        self, category: ServiceCategory,
    ) -> Tuple[CatalogItem, ...]:
        """Active items of one category, in catalog order."""
        return tuple(
            i for i in self._items if i.active and i.category == category
        )

    def search(self, query: str) -> Tuple[CatalogItem, ...]:
        """Case-insensitive name match across every category."""
        needle = query.strip().lower()
        if not needle:
            return ()
        return tuple(
            i for i in self._items
            if i.active and i.category is not None and needle in i.name.lower()
        )
