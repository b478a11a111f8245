"""
POS Retail Engine — Discount Engine
=====================================
Pure computation from (lines, discount selection) to per-line
discount amounts. No state of its own.

Exactly one selection is active at a time:

    NoDiscount                      — zero on every line
    PercentageDiscount(tier)        — tier% off every unit
    VoucherDiscount(code, amount)   — fixed amount apportioned pro-rata
                                      by each line's share of the subtotal

Guarantees (for every input):
- 0 <= line discount <= line subtotal
- total = subtotal - discount >= 0
- a voucher larger than the subtotal is clipped, never negative
- subtotal 0 → voucher discount 0 (no division by zero)
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable, Protocol, Sequence, Tuple, Union

from core.commands.outcomes import Outcome
from engines.retail.policies import (
    percentage_tier_policy,
    voucher_amount_policy,
    voucher_code_policy,
)


ZERO = Decimal("0")
HUNDRED = Decimal("100")
MINOR_UNIT = Decimal("0.01")


# ══════════════════════════════════════════════════════════════
# SELECTION (tagged union)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class NoDiscount:
    kind = "none"


@dataclass(frozen=True)
class PercentageDiscount:
    tier: int
    kind = "percentage"

    def __post_init__(self):
        if not isinstance(self.tier, int) or isinstance(self.tier, bool):
            raise TypeError("tier must be int.")
        if not 0 < self.tier <= 100:
            raise ValueError(f"tier must be in (0, 100], got {self.tier}.")

    @property
    def rate(self) -> Decimal:
        return Decimal(self.tier) / HUNDRED


@dataclass(frozen=True)
class VoucherDiscount:
    code: str
    amount: Decimal
    kind = "voucher"

    def __post_init__(self):
        if not self.code or not self.code.strip():
            raise ValueError("voucher code must be non-empty.")
        if not isinstance(self.amount, Decimal):
            raise TypeError(
                f"voucher amount must be Decimal, got {type(self.amount).__name__}."
            )
        if not self.amount.is_finite() or self.amount <= 0:
            raise ValueError("voucher amount must be a positive number.")


DiscountSelection = Union[NoDiscount, PercentageDiscount, VoucherDiscount]

NO_DISCOUNT = NoDiscount()


# ══════════════════════════════════════════════════════════════
# LINE PROTOCOL + TOTALS
# ══════════════════════════════════════════════════════════════

class PricedLine(Protocol):
    unit_price: Decimal
    quantity: int


@dataclass(frozen=True)
class CartTotals:
    subtotal: Decimal
    discount: Decimal
    total: Decimal


def line_subtotal(line: PricedLine) -> Decimal:
    return line.unit_price * line.quantity


def subtotal_of(lines: Iterable[PricedLine]) -> Decimal:
    return sum((line_subtotal(line) for line in lines), ZERO)


# ══════════════════════════════════════════════════════════════
# COMPUTATION
# ══════════════════════════════════════════════════════════════

def _apportion_voucher(
    amount: Decimal, line_totals: Sequence[Decimal],
) -> Tuple[Decimal, ...]:
    subtotal = sum(line_totals, ZERO)
    if subtotal <= 0:
        return tuple(ZERO for _ in line_totals)

    effective = min(amount, subtotal)
    shares = [
        min(
            (effective * lt / subtotal).quantize(MINOR_UNIT, rounding=ROUND_HALF_UP),
            lt,
        )
        for lt in line_totals
    ]

    # Rounding residual goes to the largest lines first so the
    # apportioned sum equals the effective voucher amount exactly.
    residual = effective - sum(shares, ZERO)
    order = sorted(range(len(line_totals)), key=lambda i: -line_totals[i])
    for i in order:
        if residual == 0:
            break
        adjusted = min(max(shares[i] + residual, ZERO), line_totals[i])
        residual -= adjusted - shares[i]
        shares[i] = adjusted

    return tuple(shares)


def compute_line_discounts(
    lines: Sequence[PricedLine], selection: DiscountSelection,
) -> Tuple[Decimal, ...]:
    """Total discount for each line (per-unit discount × quantity)."""
    if isinstance(selection, NoDiscount):
        return tuple(ZERO for _ in lines)
    if isinstance(selection, PercentageDiscount):
        rate = selection.rate
        return tuple(line.unit_price * rate * line.quantity for line in lines)
    if isinstance(selection, VoucherDiscount):
        return _apportion_voucher(
            selection.amount, [line_subtotal(line) for line in lines],
        )
    raise TypeError(f"Unknown discount selection: {type(selection).__name__}")


def subtotal_discount(
    lines: Sequence[PricedLine], selection: DiscountSelection,
) -> Decimal:
    """Discount applied to the whole order."""
    subtotal = subtotal_of(lines)
    if isinstance(selection, NoDiscount):
        return ZERO
    if isinstance(selection, PercentageDiscount):
        return subtotal * selection.rate
    if isinstance(selection, VoucherDiscount):
        return min(selection.amount, subtotal) if subtotal > 0 else ZERO
    raise TypeError(f"Unknown discount selection: {type(selection).__name__}")


def compute_totals(
    lines: Sequence[PricedLine], selection: DiscountSelection,
) -> CartTotals:
    subtotal = subtotal_of(lines)
    discount = subtotal_discount(lines, selection)
    return CartTotals(
        subtotal=subtotal,
        discount=discount,
        total=subtotal - discount,
    )


# ══════════════════════════════════════════════════════════════
# SELECTION BUILDERS (validated)
# ══════════════════════════════════════════════════════════════

def parse_amount(raw: Any) -> Decimal | None:
    """Parse operator input into a Decimal. None if not a finite number."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite():
        return None
    return value


def select_percentage(tier: Any, allowed_tiers: Iterable[int]) -> Outcome:
    """ACCEPTED with a PercentageDiscount, or REJECTED (selection unchanged)."""
    rejection = percentage_tier_policy(tier, allowed_tiers)
    if rejection is not None:
        return Outcome.rejected(rejection)
    return Outcome.accepted(PercentageDiscount(tier=tier))


def select_voucher(code: Any, amount: Any) -> Outcome:
    """
    ACCEPTED with a VoucherDiscount, or REJECTED when the code is blank
    or the amount is not a strictly positive number.
    """
    rejection = voucher_code_policy(code)
    if rejection is not None:
        return Outcome.rejected(rejection)

    parsed = parse_amount(amount)
    rejection = voucher_amount_policy(parsed)
    if rejection is not None:
        return Outcome.rejected(rejection)

    return Outcome.accepted(VoucherDiscount(code=code.strip(), amount=parsed))


def describe(selection: DiscountSelection) -> str:
    """Suffix for the payment confirmation message."""
    if isinstance(selection, PercentageDiscount):
        return f" with {selection.tier}% discount"
    if isinstance(selection, VoucherDiscount):
        return f" with voucher {selection.code}"
    return ""


__all__ = [
    "NoDiscount",
    "PercentageDiscount",
    "VoucherDiscount",
    "DiscountSelection",
    "NO_DISCOUNT",
    "CartTotals",
    "line_subtotal",
    "subtotal_of",
    "compute_line_discounts",
    "subtotal_discount",
    "compute_totals",
    "parse_amount",
    "select_percentage",
    "select_voucher",
    "describe",
]
