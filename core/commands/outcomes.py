"""
POS Command Layer — Outcome Contract
=======================================
Every fallible cart, discount and checkout operation returns
exactly one Outcome. Callers check it before proceeding.

ACCEPTED → the operation took effect; `value` may carry a result.
REJECTED → nothing changed; reason is mandatory.

Rules:
- Outcome is immutable (frozen dataclass)
- REJECTED must contain reason (RejectionReason)
- ACCEPTED must NOT contain reason
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from core.commands.rejection import RejectionReason


# ══════════════════════════════════════════════════════════════
# OUTCOME STATUS
# ══════════════════════════════════════════════════════════════

class OutcomeStatus(Enum):
    """Binary decision. No middle ground."""
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


# ══════════════════════════════════════════════════════════════
# OUTCOME
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Outcome:
    """
    Result of a cart / checkout operation.

    Invariants:
        - REJECTED + reason is None → ValueError
        - ACCEPTED + reason is not None → ValueError
    """

    status: OutcomeStatus
    reason: Optional[RejectionReason] = None
    value: Any = None

    def __post_init__(self):
        if not isinstance(self.status, OutcomeStatus):
            raise ValueError(
                f"status must be OutcomeStatus, got {type(self.status).__name__}."
            )

        if self.status == OutcomeStatus.REJECTED and self.reason is None:
            raise ValueError(
                "REJECTED outcome must include a RejectionReason. "
                "No silent rejections allowed."
            )

        if self.status == OutcomeStatus.ACCEPTED and self.reason is not None:
            raise ValueError(
                "ACCEPTED outcome must NOT include a RejectionReason."
            )

    @classmethod
    def accepted(cls, value: Any = None) -> "Outcome":
        return cls(status=OutcomeStatus.ACCEPTED, value=value)

    @classmethod
    def rejected(cls, reason: RejectionReason) -> "Outcome":
        return cls(status=OutcomeStatus.REJECTED, reason=reason)

    @property
    def is_accepted(self) -> bool:
        return self.status == OutcomeStatus.ACCEPTED

    @property
    def is_rejected(self) -> bool:
        return self.status == OutcomeStatus.REJECTED

    @property
    def message(self) -> str:
        return self.reason.message if self.reason is not None else ""
