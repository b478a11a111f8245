"""
POS Retail Engine — Checkout Orchestrator
===========================================
Turns a paid order into one ledger batch.

Pay flow (NON-NEGOTIABLE):
    1. Re-validate customer, staff and lines (even after checkout())
    2. Validate the payment method
    3. Snapshot the order and its discount selection
    4. Build one TransactionEntry per line, all sharing a batch_id
    5. Append the batch to the ledger — all entries or none
    6. Notify, clear the cart, tell completion listeners

If the ledger append fails nothing is committed, the order stays
AWAITING_PAYMENT and the operator is asked to retry.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List

from core.commands.outcomes import Outcome
from core.commands.rejection import ReasonCode, RejectionReason
from core.config.rules import PosConfig
from core.ledger.store import LedgerStore
from core.notifications import LoggingNotificationSink, NotificationSink, safe_notify
from core.time.clock import Clock, SystemClock
from engines.retail.discounts import describe
from engines.retail.events import (
    BatchIdGenerator,
    SaleCompleted,
    build_sale_completed,
    build_transaction_entries,
)
from engines.retail.order import CartPhase
from engines.retail.policies import (
    PAYMENT_POLICIES,
    first_rejection,
    payment_method_policy,
)
from engines.retail.services.cart import CartManager

logger = logging.getLogger("pos.checkout")

CompletionListener = Callable[[SaleCompleted], None]

RETRY_MESSAGE = "Payment could not be recorded. Please try again."


class CheckoutOrchestrator:
    """Pays the order held by one CartManager into one LedgerStore."""

    def __init__(
        self,
        *,
        cart: CartManager,
        ledger: LedgerStore,
        clock: Clock | None = None,
        notifier: NotificationSink | None = None,
        config: PosConfig | None = None,
        batch_ids: BatchIdGenerator | None = None,
        listeners: Iterable[CompletionListener] = (),
    ):
        self._cart = cart
        self._ledger = ledger
        self._clock = clock or SystemClock()
        self._notifier = notifier or LoggingNotificationSink()
        self._config = config or PosConfig()
        self._batch_ids = batch_ids or BatchIdGenerator()
        self._listeners: List[CompletionListener] = list(listeners)

    def subscribe(self, listener: CompletionListener) -> None:
        self._listeners.append(listener)

    def pay(self, method: str) -> Outcome:
        """
        Record the sale. ACCEPTED carries the SaleCompleted record;
        REJECTED means no ledger entry was written.
        """
        rejection = first_rejection(self._cart.snapshot(), PAYMENT_POLICIES)
        if rejection is None:
            rejection = payment_method_policy(
                method, self._config.payment_methods,
            )
        if rejection is not None:
            return self._reject(rejection)

        if self._cart.phase is not CartPhase.AWAITING_PAYMENT:
            outcome = self._cart.checkout()
            if outcome.is_rejected:
                return outcome

        method = method.strip().upper()
        snapshot = self._cart.snapshot()
        now = self._clock.now_utc()
        # ledger timestamps carry millisecond precision, matching END_OF_DAY
        paid_at = now.replace(microsecond=now.microsecond // 1000 * 1000)
        batch_id = self._batch_ids.next_id(paid_at)
        entries = build_transaction_entries(
            snapshot,
            batch_id=batch_id,
            payment_method=method,
            paid_at=paid_at,
        )

        try:
            self._ledger.append(entries)
        except Exception as exc:
            logger.error(
                f"Checkout {batch_id} failed, nothing committed: {exc}",
                exc_info=True,
            )
            return self._reject(RejectionReason(
                code=ReasonCode.LEDGER_APPEND_FAILED,
                message=RETRY_MESSAGE,
                policy_name="ledger_append",
            ))

        completed = build_sale_completed(
            entries,
            batch_id=batch_id,
            payment_method=method,
            paid_at=paid_at,
            customer_name=snapshot.customer.name,
            staff_name=snapshot.staff.name,
        )
        logger.info(
            f"Checkout {batch_id} committed: {len(entries)} lines, "
            f"net {completed.net_amount} via {method}"
        )
        safe_notify(
            self._notifier,
            "success",
            f"Payment processed via {method.capitalize()}"
            f"{describe(snapshot.discount)} for {snapshot.customer.name} "
            f"by {snapshot.staff.name}. Thank you!",
        )
        self._cart.finish_sale()
        self._dispatch(completed)
        return Outcome.accepted(completed)

    def _dispatch(self, completed: SaleCompleted) -> None:
        for listener in self._listeners:
            try:
                listener(completed)
            except Exception as exc:
                name = getattr(listener, "__qualname__", str(listener))
                logger.error(
                    f"Completion listener {name} failed for "
                    f"{completed.batch_id}: {exc}",
                    exc_info=True,
                )

    def _reject(self, reason: RejectionReason) -> Outcome:
        logger.info(f"Payment rejected: {reason.code} ({reason.message})")
        safe_notify(self._notifier, "error", reason.message)
        return Outcome.rejected(reason)
