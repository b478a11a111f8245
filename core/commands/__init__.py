"""
POS Command Layer — Outcomes
===============================
Every fallible operation produces exactly one Outcome.
REJECTED outcomes carry a structured, human-readable reason.
"""

from core.commands.outcomes import (
    Outcome,
    OutcomeStatus,
)
from core.commands.rejection import (
    ReasonCode,
    RejectionReason,
)

__all__ = [
    "Outcome",
    "OutcomeStatus",
    "ReasonCode",
    "RejectionReason",
]
