"""
POS Core Primitives — Reusable Building Blocks
================================================
Primitives are the shared, engine-agnostic building blocks that
the retail and reporting engines consume. They are:

- Pure Python (no Django dependency)
- Immutable (frozen dataclasses)
- Deterministic (same input → same output)

Primitives:
    item   — Catalog item, service categories, catalog protocol
    party  — Customer / staff references and the operator identity
"""

from core.primitives.item import (
    CATEGORY_LABELS,
    CatalogItem,
    InMemoryServiceCatalog,
    ServiceCatalog,
    ServiceCategory,
)
from core.primitives.party import Operator, PartyRef

__all__ = [
    "CATEGORY_LABELS",
    "CatalogItem",
    "InMemoryServiceCatalog",
    "ServiceCatalog",
    "ServiceCategory",
    "Operator",
    "PartyRef",
]
