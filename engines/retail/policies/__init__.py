"""
POS Retail Engine — Policies
===============================
Validation policies for cart, discount and payment requests.

Each policy returns None when the request may proceed, or a
RejectionReason whose message is shown to the operator.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Callable, Iterable, Optional

from core.commands.rejection import ReasonCode, RejectionReason


# ══════════════════════════════════════════════════════════════
# DISCOUNT POLICIES
# ══════════════════════════════════════════════════════════════

def percentage_tier_policy(
    tier: Any, allowed_tiers: Iterable[int],
) -> Optional[RejectionReason]:
    """Only the offered percentage tiers may be selected."""
    allowed = tuple(allowed_tiers)
    if isinstance(tier, bool) or not isinstance(tier, int) or tier not in allowed:
        return RejectionReason(
            code=ReasonCode.INVALID_PERCENTAGE_TIER,
            message=(
                f"Discount of {tier}% is not offered. "
                f"Choose one of {', '.join(f'{t}%' for t in allowed)}."
            ),
            policy_name="percentage_tier_policy",
        )
    return None


def voucher_code_policy(code: Any) -> Optional[RejectionReason]:
    """A voucher needs a non-blank code."""
    if not isinstance(code, str) or not code.strip():
        return RejectionReason(
            code=ReasonCode.INVALID_VOUCHER_CODE,
            message="Please enter a voucher code",
            policy_name="voucher_code_policy",
        )
    return None


def voucher_amount_policy(amount: Optional[Decimal]) -> Optional[RejectionReason]:
    """A voucher amount must be a number strictly greater than zero."""
    if amount is None or amount <= 0:
        return RejectionReason(
            code=ReasonCode.INVALID_VOUCHER_AMOUNT,
            message="Please enter a valid voucher amount",
            policy_name="voucher_amount_policy",
        )
    return None


# ══════════════════════════════════════════════════════════════
# ORDER POLICIES
# ══════════════════════════════════════════════════════════════

def cart_not_empty_policy(order) -> Optional[RejectionReason]:
    if not order.line_items:
        return RejectionReason(
            code=ReasonCode.CART_EMPTY,
            message="cart is empty",
            policy_name="cart_not_empty_policy",
        )
    return None


def customer_required_policy(order) -> Optional[RejectionReason]:
    if order.customer is None:
        return RejectionReason(
            code=ReasonCode.CUSTOMER_REQUIRED,
            message="customer required",
            policy_name="customer_required_policy",
        )
    return None


def staff_required_policy(order) -> Optional[RejectionReason]:
    if order.staff is None:
        return RejectionReason(
            code=ReasonCode.STAFF_REQUIRED,
            message="staff required",
            policy_name="staff_required_policy",
        )
    return None


CHECKOUT_POLICIES = (
    cart_not_empty_policy,
    customer_required_policy,
    staff_required_policy,
)

PAYMENT_POLICIES = (
    customer_required_policy,
    staff_required_policy,
    cart_not_empty_policy,
)


def first_rejection(
    order, policies: Iterable[Callable[[Any], Optional[RejectionReason]]],
) -> Optional[RejectionReason]:
    """Run policies in order; the first rejection wins."""
    for policy in policies:
        rejection = policy(order)
        if rejection is not None:
            return rejection
    return None


# ══════════════════════════════════════════════════════════════
# OPERATOR / PAYMENT POLICIES
# ══════════════════════════════════════════════════════════════

def staff_reassignment_policy(operator) -> Optional[RejectionReason]:
    """Only operators with the reassignment capability may change staff."""
    if not operator.can_reassign_staff:
        return RejectionReason(
            code=ReasonCode.STAFF_REASSIGNMENT_FORBIDDEN,
            message="You can only record sales under your own name",
            policy_name="staff_reassignment_policy",
        )
    return None


def payment_method_policy(
    method: Any, allowed_methods: Iterable[str],
) -> Optional[RejectionReason]:
    allowed = tuple(allowed_methods)
    if not isinstance(method, str) or method.strip().upper() not in allowed:
        return RejectionReason(
            code=ReasonCode.INVALID_PAYMENT_METHOD,
            message=(
                f"Payment method '{method}' is not accepted. "
                f"Use one of: {', '.join(allowed)}."
            ),
            policy_name="payment_method_policy",
        )
    return None
