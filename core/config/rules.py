"""
POS Core Config — Point-of-Sale Rules
=======================================
Doctrine: No hardcoded week conventions, time zones or payment
methods in engine logic. These come from configuration (Django
settings, which read the environment), never from source code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from core.time.temporal import WeekStart


DEFAULT_PERCENTAGE_TIERS: Tuple[int, ...] = (5, 10, 20)
DEFAULT_PAYMENT_METHODS: Tuple[str, ...] = ("CARD", "CASH")
DEFAULT_REFRESH_SECONDS = 60


# ══════════════════════════════════════════════════════════════
# POS CONFIG
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PosConfig:
    """
    Runtime rules for the cart, checkout and reporting engines.

    week_start:        First day of a reporting week.
    report_time_zone:  IANA zone used to cut calendar periods.
    refresh_seconds:   Dashboard refresh interval.
    payment_methods:   Accepted payment method codes.
    percentage_tiers:  Offered percentage discounts.
    currency_symbol:   Display prefix for money in messages.
    """

    week_start: WeekStart = WeekStart.MONDAY
    report_time_zone: str = "UTC"
    refresh_seconds: float = DEFAULT_REFRESH_SECONDS
    payment_methods: Tuple[str, ...] = DEFAULT_PAYMENT_METHODS
    percentage_tiers: Tuple[int, ...] = DEFAULT_PERCENTAGE_TIERS
    currency_symbol: str = "£"

    def __post_init__(self) -> None:
        if not isinstance(self.week_start, WeekStart):
            raise ValueError("week_start must be a WeekStart enum.")
        try:
            ZoneInfo(self.report_time_zone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(
                f"Unknown report_time_zone '{self.report_time_zone}'."
            ) from exc
        if self.refresh_seconds <= 0:
            raise ValueError("refresh_seconds must be positive.")
        if not self.payment_methods:
            raise ValueError("payment_methods must not be empty.")
        for tier in self.percentage_tiers:
            if not isinstance(tier, int) or not 0 < tier <= 100:
                raise ValueError(
                    f"percentage tier must be an int in (0, 100], got {tier!r}."
                )

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.report_time_zone)

    @classmethod
    def from_settings(cls, settings_obj: Any) -> "PosConfig":
        """Build from any object exposing POS_* attributes (Django settings)."""
        week_start = getattr(settings_obj, "POS_WEEK_START", "MONDAY")
        methods = getattr(
            settings_obj, "POS_PAYMENT_METHODS", DEFAULT_PAYMENT_METHODS,
        )
        if isinstance(methods, str):
            methods = [m for m in methods.split(",")]
        return cls(
            week_start=WeekStart[str(week_start).strip().upper()],
            report_time_zone=getattr(settings_obj, "POS_REPORT_TIME_ZONE", "UTC"),
            refresh_seconds=float(
                getattr(
                    settings_obj,
                    "POS_REPORT_REFRESH_SECONDS",
                    DEFAULT_REFRESH_SECONDS,
                )
            ),
            payment_methods=tuple(
                m.strip().upper() for m in methods if m.strip()
            ),
            percentage_tiers=tuple(
                getattr(
                    settings_obj,
                    "POS_PERCENTAGE_TIERS",
                    DEFAULT_PERCENTAGE_TIERS,
                )
            ),
            currency_symbol=getattr(settings_obj, "POS_CURRENCY_SYMBOL", "£"),
        )


def load_pos_config() -> PosConfig:
    """
    Read PosConfig from django.conf.settings when Django is configured,
    otherwise return the defaults.
    """
    from django.conf import settings

    if not settings.configured:
        return PosConfig()
    return PosConfig.from_settings(settings)
