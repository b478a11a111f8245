"""
POS Ledger - Errors
===================
Store-reported failures. Checkout treats any of these as
"nothing committed" for the whole batch.
"""


class LedgerAppendError(Exception):
    """A batch could not be appended. No entry of the batch is stored."""

    def __init__(self, message: str, batch_ids: tuple = ()):
        super().__init__(message)
        self.batch_ids = tuple(batch_ids)
