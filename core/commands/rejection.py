"""
POS Command Layer — Rejection Model
======================================
Structured rejection reasons for refused cart / checkout requests.

Every rejection must be:
- Deterministic (same input → same rejection)
- Machine-readable (code)
- Human-readable (message, shown to the operator)
"""

from __future__ import annotations

from dataclasses import dataclass


# ══════════════════════════════════════════════════════════════
# REJECTION REASON (frozen explanation structure)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RejectionReason:
    """
    Structured reason for a refused request.

    Fields:
        code:        Machine-readable rejection code (e.g. 'STAFF_REQUIRED').
        message:     Human-readable explanation.
        policy_name: Name of the policy that caused rejection.
    """

    code: str
    message: str
    policy_name: str

    def __post_init__(self):
        if not self.code or not isinstance(self.code, str):
            raise ValueError("code must be a non-empty string.")

        if not self.message or not isinstance(self.message, str):
            raise ValueError("message must be a non-empty string.")

        if not self.policy_name or not isinstance(self.policy_name, str):
            raise ValueError("policy_name must be a non-empty string.")

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "policy_name": self.policy_name,
        }


# ══════════════════════════════════════════════════════════════
# STANDARD REJECTION CODES
# ══════════════════════════════════════════════════════════════

class ReasonCode:
    """
    Known rejection codes.

    Convention: SCREAMING_SNAKE_CASE.
    """

    # ── Cart ──────────────────────────────────────────────────
    CART_EMPTY = "CART_EMPTY"
    ITEM_NOT_IN_CART = "ITEM_NOT_IN_CART"
    INVALID_PHASE = "INVALID_PHASE"

    # ── Parties ───────────────────────────────────────────────
    CUSTOMER_REQUIRED = "CUSTOMER_REQUIRED"
    STAFF_REQUIRED = "STAFF_REQUIRED"
    STAFF_REASSIGNMENT_FORBIDDEN = "STAFF_REASSIGNMENT_FORBIDDEN"

    # ── Discounts ─────────────────────────────────────────────
    INVALID_PERCENTAGE_TIER = "INVALID_PERCENTAGE_TIER"
    INVALID_VOUCHER_CODE = "INVALID_VOUCHER_CODE"
    INVALID_VOUCHER_AMOUNT = "INVALID_VOUCHER_AMOUNT"

    # ── Payment ───────────────────────────────────────────────
    INVALID_PAYMENT_METHOD = "INVALID_PAYMENT_METHOD"
    LEDGER_APPEND_FAILED = "LEDGER_APPEND_FAILED"
