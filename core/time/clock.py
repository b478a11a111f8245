"""
POS Core Time — Explicit Clock Protocol
=========================================
Doctrine: NO datetime.now() inside cart, checkout or reporting logic.
Services receive a Clock at construction so that tests can pin
"now" and reporting periods are reproducible.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol


# ══════════════════════════════════════════════════════════════
# CLOCK PROTOCOL
# ══════════════════════════════════════════════════════════════

class Clock(Protocol):
    """Injectable time source."""

    def now_utc(self) -> datetime:
        """Return current UTC time."""
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# IMPLEMENTATIONS
# ══════════════════════════════════════════════════════════════

class SystemClock:
    """Production clock — real system time."""

    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """
    Test clock — returns a fixed timestamp until advanced.

    Usage:
        clock = FixedClock(datetime(2026, 3, 14, 9, 30, tzinfo=timezone.utc))
        clock.advance(minutes=1)
    """

    def __init__(self, fixed_dt: datetime) -> None:
        if fixed_dt.tzinfo is None:
            raise ValueError("FixedClock requires timezone-aware datetime.")
        self._fixed_dt = fixed_dt.astimezone(timezone.utc)

    def now_utc(self) -> datetime:
        return self._fixed_dt

    def advance(self, **delta) -> None:
        """Move the clock forward, e.g. advance(days=1) or advance(seconds=5)."""
        self._fixed_dt = self._fixed_dt + timedelta(**delta)

    def set(self, new_dt: datetime) -> None:
        if new_dt.tzinfo is None:
            raise ValueError("FixedClock requires timezone-aware datetime.")
        self._fixed_dt = new_dt.astimezone(timezone.utc)
