"""
POS Retail Engine — Application Services
==========================================
Order lifecycle: add lines → discount → checkout → pay → ledger.
"""

from engines.retail.services.cart import CartManager
from engines.retail.services.checkout import (
    RETRY_MESSAGE,
    CheckoutOrchestrator,
    CompletionListener,
)

__all__ = [
    "CartManager",
    "CheckoutOrchestrator",
    "CompletionListener",
    "RETRY_MESSAGE",
]
