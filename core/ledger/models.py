"""
POS Ledger — Ledger Entry Model
=================================
ORM record behind DjangoLedgerStore.

RULES (NON-NEGOTIABLE):
- No deletes, no overwrites, no updates after persistence
- One row per sold line; rows sharing batch_id are one sale
- discount_amount <= gross_amount (checked before insert)

This file contains NO business logic.
"""

from django.db import models


class LedgerEntry(models.Model):
    """
    Immutable completed-sale line.

    The surrogate `seq` primary key gives the insertion order that
    range queries return.
    """

    seq = models.BigAutoField(primary_key=True)

    entry_id = models.CharField(
        max_length=128,
        unique=True,
        help_text="<batch_id>-<line item id>.",
    )

    batch_id = models.CharField(
        max_length=64,
        help_text="Shared by every line of one checkout.",
    )

    timestamp = models.DateTimeField(
        help_text="When the sale was paid.",
    )

    # ── Parties ───────────────────────────────────────────────
    customer_id = models.CharField(max_length=128)
    customer_name = models.CharField(max_length=255)
    staff_id = models.CharField(max_length=128)
    staff_name = models.CharField(max_length=255)

    # ── Line ──────────────────────────────────────────────────
    service_name = models.CharField(max_length=255)
    category = models.CharField(max_length=64)
    gross_amount = models.DecimalField(max_digits=14, decimal_places=4)
    discount_amount = models.DecimalField(max_digits=14, decimal_places=4)
    payment_method = models.CharField(max_length=32)

    class Meta:
        db_table = "pos_ledger_entry"
        ordering = ["seq"]
        indexes = [
            models.Index(fields=["timestamp"], name="idx_ledger_timestamp"),
            models.Index(fields=["batch_id"], name="idx_ledger_batch"),
        ]

    # ══════════════════════════════════════════════════════════
    # IMMUTABILITY GUARDS
    # ══════════════════════════════════════════════════════════

    def save(self, *args, **kwargs):
        """GUARD: INSERT only. Ledger rows are never updated."""
        if not self._state.adding:
            raise PermissionError(
                "Ledger entries are immutable. Cannot update a persisted entry."
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        """GUARD: Ledger rows are NEVER deleted."""
        raise PermissionError("Ledger entries are never deleted.")

    def __str__(self):
        return f"[{self.batch_id}] {self.entry_id} {self.service_name}"
