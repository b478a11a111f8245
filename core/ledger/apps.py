"""
POS Core — Ledger App Configuration
=====================================
The ledger is the append-only record of completed sales.
Checkout writes to it; reporting reads from it.

This app does NOT:
- Compute discounts
- Interpret sales for reporting
"""

from django.apps import AppConfig


class LedgerConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.ledger"
    label = "ledger"
    verbose_name = "POS Transaction Ledger"
