"""
POS Retail Engine — Cart Manager
==================================
State machine over the in-progress order.

    EMPTY → BUILDING → AWAITING_CHECKOUT → AWAITING_PAYMENT
                                         → COMPLETED | CANCELLED → EMPTY

Line and discount edits are refused while the order awaits payment
("Back to Cart" first). Customer and staff may be changed or cleared
until payment is confirmed; pay() re-validates them.

Every fallible operation returns an Outcome. Rejections leave the
order untouched and are reported to the notification sink.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional, Tuple

from core.commands.outcomes import Outcome
from core.commands.rejection import ReasonCode, RejectionReason
from core.config.rules import PosConfig
from core.notifications import LoggingNotificationSink, NotificationSink, safe_notify
from core.primitives.item import CatalogItem
from core.primitives.party import Operator, PartyRef
from engines.retail.discounts import (
    NO_DISCOUNT,
    CartTotals,
    DiscountSelection,
    compute_line_discounts,
    compute_totals,
    select_percentage,
    select_voucher,
)
from engines.retail.order import CartPhase, LineItem, Order, OrderSnapshot
from engines.retail.policies import (
    CHECKOUT_POLICIES,
    first_rejection,
    staff_reassignment_policy,
)

logger = logging.getLogger("pos.cart")

EDITABLE_PHASES = frozenset({
    CartPhase.EMPTY,
    CartPhase.BUILDING,
    CartPhase.AWAITING_CHECKOUT,
})

OPEN_PHASES = frozenset({
    CartPhase.BUILDING,
    CartPhase.AWAITING_CHECKOUT,
    CartPhase.AWAITING_PAYMENT,
})


class CartManager:
    """Holds one order for one operator at a till."""

    def __init__(
        self,
        *,
        operator: Operator,
        notifier: NotificationSink | None = None,
        config: PosConfig | None = None,
    ):
        self._operator = operator
        self._notifier = notifier or LoggingNotificationSink()
        self._config = config or PosConfig()
        self._order = Order()
        self._phase_history: List[CartPhase] = [CartPhase.EMPTY]
        self._reset_staff()

    # ── Read side ──────────────────────────────────────────────

    @property
    def operator(self) -> Operator:
        return self._operator

    @property
    def phase(self) -> CartPhase:
        return self._order.phase

    @property
    def phase_history(self) -> Tuple[CartPhase, ...]:
        return tuple(self._phase_history)

    @property
    def line_items(self) -> Tuple[LineItem, ...]:
        return tuple(self._order.line_items)

    @property
    def customer(self) -> Optional[PartyRef]:
        return self._order.customer

    @property
    def staff(self) -> Optional[PartyRef]:
        return self._order.staff

    @property
    def discount(self) -> DiscountSelection:
        return self._order.discount

    @property
    def totals(self) -> CartTotals:
        return compute_totals(self._order.line_items, self._order.discount)

    @property
    def subtotal(self) -> Decimal:
        return self.totals.subtotal

    @property
    def discount_amount(self) -> Decimal:
        return self.totals.discount

    @property
    def total(self) -> Decimal:
        return self.totals.total

    @property
    def line_discounts(self) -> Tuple[Decimal, ...]:
        return compute_line_discounts(self._order.line_items, self._order.discount)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self._order.line_items)

    def snapshot(self) -> OrderSnapshot:
        return OrderSnapshot.of(self._order)

    # ── Line items ─────────────────────────────────────────────

    def add_item(self, item: CatalogItem) -> Outcome:
        """Add one unit; an existing line with the same id is incremented."""
        rejection = self._editable_policy()
        if rejection is not None:
            return self._reject(rejection)

        order = self._order
        index = order.find(item.item_id)
        if index is None:
            line = LineItem.from_catalog(item)
            order.line_items.append(line)
        else:
            line = order.line_items[index].with_quantity(
                order.line_items[index].quantity + 1
            )
            order.line_items[index] = line

        if order.phase is CartPhase.EMPTY:
            self._transition(CartPhase.BUILDING)
        return Outcome.accepted(line)

    def update_quantity(self, item_id: str, delta: int) -> Outcome:
        """Change a line's quantity; at zero or below the line is removed."""
        rejection = self._editable_policy()
        if rejection is not None:
            return self._reject(rejection)

        order = self._order
        index = order.find(item_id)
        if index is None:
            return self._reject(self._missing_item(item_id))

        quantity = max(0, order.line_items[index].quantity + delta)
        if quantity == 0:
            del order.line_items[index]
            self._after_removal()
            return Outcome.accepted(None)

        line = order.line_items[index].with_quantity(quantity)
        order.line_items[index] = line
        return Outcome.accepted(line)

    def remove_item(self, item_id: str) -> Outcome:
        """Remove a line whatever its quantity."""
        rejection = self._editable_policy()
        if rejection is not None:
            return self._reject(rejection)

        index = self._order.find(item_id)
        if index is None:
            return self._reject(self._missing_item(item_id))

        removed = self._order.line_items.pop(index)
        self._after_removal()
        return Outcome.accepted(removed)

    # ── Parties ────────────────────────────────────────────────

    def select_customer(self, customer: Optional[PartyRef]) -> Outcome:
        """Set or clear (None) the customer."""
        self._order.customer = customer
        return Outcome.accepted(customer)

    def select_staff(self, staff: Optional[PartyRef]) -> Outcome:
        """
        Set or clear (None) the staff member.

        Operators without the reassignment capability always sell
        under their own name.
        """
        if staff != self._operator.as_staff():
            rejection = staff_reassignment_policy(self._operator)
            if rejection is not None:
                return self._reject(rejection)
        self._order.staff = staff
        return Outcome.accepted(staff)

    # ── Discounts ──────────────────────────────────────────────

    def apply_percentage(self, tier: int) -> Outcome:
        rejection = self._editable_policy()
        if rejection is not None:
            return self._reject(rejection)

        outcome = select_percentage(tier, self._config.percentage_tiers)
        if outcome.is_rejected:
            return self._reject(outcome.reason)
        self._order.discount = outcome.value
        return outcome

    def apply_voucher(self, code, amount) -> Outcome:
        """Replace any discount with a voucher; bad input keeps the prior one."""
        rejection = self._editable_policy()
        if rejection is not None:
            return self._reject(rejection)

        outcome = select_voucher(code, amount)
        if outcome.is_rejected:
            return self._reject(outcome.reason)
        voucher = outcome.value
        self._order.discount = voucher
        safe_notify(
            self._notifier,
            "success",
            f"Voucher {voucher.code} applied for "
            f"{self._config.currency_symbol}{voucher.amount}",
        )
        return outcome

    def remove_discount(self) -> Outcome:
        rejection = self._editable_policy()
        if rejection is not None:
            return self._reject(rejection)
        self._order.discount = NO_DISCOUNT
        return Outcome.accepted(NO_DISCOUNT)

    # ── Phase transitions ──────────────────────────────────────

    def checkout(self) -> Outcome:
        """Move to payment-method selection once lines, customer and staff are set."""
        if self._order.phase is CartPhase.AWAITING_PAYMENT:
            return Outcome.accepted(self._order.phase)

        rejection = first_rejection(self._order, CHECKOUT_POLICIES)
        if rejection is not None:
            return self._reject(rejection)

        self._transition(CartPhase.AWAITING_CHECKOUT)
        self._transition(CartPhase.AWAITING_PAYMENT)
        return Outcome.accepted(self._order.phase)

    def back_to_cart(self) -> Outcome:
        """Leave payment-method selection without losing the order."""
        if self._order.phase is not CartPhase.AWAITING_PAYMENT:
            return self._reject(RejectionReason(
                code=ReasonCode.INVALID_PHASE,
                message="The order is not awaiting payment",
                policy_name="back_to_cart",
            ))
        self._transition(CartPhase.BUILDING)
        return Outcome.accepted(self._order.phase)

    def clear(self) -> Outcome:
        """Discard the order from any phase and return to EMPTY."""
        if self._order.phase in OPEN_PHASES:
            self._transition(CartPhase.CANCELLED)
        self._reset()
        return Outcome.accepted(self._order.phase)

    def finish_sale(self) -> None:
        """Called by checkout once the batch is committed to the ledger."""
        self._transition(CartPhase.COMPLETED)
        self._reset()

    # ── Internals ──────────────────────────────────────────────

    def _reset(self) -> None:
        order = self._order
        order.line_items.clear()
        order.discount = NO_DISCOUNT
        order.customer = None
        self._reset_staff()
        if order.phase is not CartPhase.EMPTY:
            self._transition(CartPhase.EMPTY)

    def _reset_staff(self) -> None:
        if self._operator.can_reassign_staff:
            self._order.staff = None
        else:
            self._order.staff = self._operator.as_staff()

    def _after_removal(self) -> None:
        if not self._order.line_items and self._order.phase is not CartPhase.EMPTY:
            self._transition(CartPhase.EMPTY)

    def _transition(self, phase: CartPhase) -> None:
        logger.debug(f"Cart phase {self._order.phase.value} -> {phase.value}")
        self._order.phase = phase
        self._phase_history.append(phase)

    def _editable_policy(self) -> Optional[RejectionReason]:
        if self._order.phase not in EDITABLE_PHASES:
            return RejectionReason(
                code=ReasonCode.INVALID_PHASE,
                message="Go back to the cart to change the order",
                policy_name="cart_editable_policy",
            )
        return None

    def _missing_item(self, item_id: str) -> RejectionReason:
        return RejectionReason(
            code=ReasonCode.ITEM_NOT_IN_CART,
            message=f"Item '{item_id}' is not in the cart",
            policy_name="cart_item_policy",
        )

    def _reject(self, reason: RejectionReason) -> Outcome:
        logger.info(f"Cart request rejected: {reason.code} ({reason.message})")
        safe_notify(self._notifier, "error", reason.message)
        return Outcome.rejected(reason)
