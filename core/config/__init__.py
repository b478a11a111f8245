"""
POS Core Config — Public API
===============================
Point-of-sale rules (week convention, reporting zone, payment methods).
"""

from core.config.rules import (
    DEFAULT_PAYMENT_METHODS,
    DEFAULT_PERCENTAGE_TIERS,
    DEFAULT_REFRESH_SECONDS,
    PosConfig,
    load_pos_config,
)

__all__ = [
    "DEFAULT_PAYMENT_METHODS",
    "DEFAULT_PERCENTAGE_TIERS",
    "DEFAULT_REFRESH_SECONDS",
    "PosConfig",
    "load_pos_config",
]
