"""
POS Retail Engine — Order Model
=================================
The in-progress, not-yet-paid order and its checkout phase.

RULES:
- A line with quantity 0 is absent, never present with value 0
- Line ids are unique within an order
- The order is owned by exactly one CartManager
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from core.primitives.item import CatalogItem
from core.primitives.party import PartyRef
from engines.retail.discounts import NO_DISCOUNT, DiscountSelection


class CartPhase(Enum):
    """Checkout state machine phases."""
    EMPTY = "EMPTY"
    BUILDING = "BUILDING"
    AWAITING_CHECKOUT = "AWAITING_CHECKOUT"
    AWAITING_PAYMENT = "AWAITING_PAYMENT"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class LineItem:
    item_id: str
    name: str
    unit_price: Decimal
    quantity: int
    category: str = "unknown"

    def __post_init__(self):
        if not self.item_id:
            raise ValueError("item_id must be non-empty.")
        if not isinstance(self.unit_price, Decimal):
            raise TypeError(
                f"unit_price must be Decimal, got {type(self.unit_price).__name__}."
            )
        if self.unit_price < 0:
            raise ValueError("unit_price cannot be negative.")
        if not isinstance(self.quantity, int) or self.quantity < 1:
            raise ValueError(
                f"quantity must be a positive int, got {self.quantity!r}."
            )

    @property
    def line_subtotal(self) -> Decimal:
        return self.unit_price * self.quantity

    def with_quantity(self, quantity: int) -> LineItem:
        return replace(self, quantity=quantity)

    @classmethod
    def from_catalog(cls, item: CatalogItem) -> LineItem:
        return cls(
            item_id=item.item_id,
            name=item.name,
            unit_price=item.price,
            quantity=1,
            category=item.category_code,
        )


@dataclass
class Order:
    """Mutable order state. Mutated only by CartManager."""
    line_items: List[LineItem] = field(default_factory=list)
    customer: Optional[PartyRef] = None
    staff: Optional[PartyRef] = None
    discount: DiscountSelection = NO_DISCOUNT
    phase: CartPhase = CartPhase.EMPTY

    def find(self, item_id: str) -> Optional[int]:
        for index, line in enumerate(self.line_items):
            if line.item_id == item_id:
                return index
        return None


@dataclass(frozen=True)
class OrderSnapshot:
    """Read-only copy of an order, taken at payment time."""
    line_items: tuple
    customer: Optional[PartyRef]
    staff: Optional[PartyRef]
    discount: DiscountSelection
    phase: CartPhase

    @classmethod
    def of(cls, order: Order) -> OrderSnapshot:
        return cls(
            line_items=tuple(order.line_items),
            customer=order.customer,
            staff=order.staff,
            discount=order.discount,
            phase=order.phase,
        )
