"""
POS Notifications — Operator Message Sink
===========================================
Toast/notification delivery is an external collaborator.
The core only fires messages at it:

    notify_success(message)
    notify_error(message)

Fire-and-forget: return values are ignored and a failing sink must
never break a cart or checkout operation.
"""

from __future__ import annotations

import logging
from typing import List, Protocol, Tuple

logger = logging.getLogger("pos.notify")


class NotificationSink(Protocol):
    def notify_success(self, message: str) -> None:
        ...  # pragma: no cover

    def notify_error(self, message: str) -> None:
        ...  # pragma: no cover


class LoggingNotificationSink:
    """Default sink for headless hosts: messages go to the pos.notify logger."""

    def notify_success(self, message: str) -> None:
        logger.info(message)

    def notify_error(self, message: str) -> None:
        logger.warning(message)


class RecordingNotificationSink:
    """Collects messages in order. Used by tests and by UIs that poll."""

    def __init__(self) -> None:
        self.messages: List[Tuple[str, str]] = []

    def notify_success(self, message: str) -> None:
        self.messages.append(("success", message))

    def notify_error(self, message: str) -> None:
        self.messages.append(("error", message))

    @property
    def successes(self) -> List[str]:
        return [m for kind, m in self.messages if kind == "success"]

    @property
    def errors(self) -> List[str]:
        return [m for kind, m in self.messages if kind == "error"]


def safe_notify(sink: NotificationSink, kind: str, message: str) -> None:
    """
    Deliver one message. Sink failures are logged, never raised.
    """
    try:
        if kind == "success":
            sink.notify_success(message)
        else:
            sink.notify_error(message)
    except Exception as exc:
        logger.error(
            f"Notification sink failed for {kind} message: {exc}",
            exc_info=True,
        )


__all__ = [
    "NotificationSink",
    "LoggingNotificationSink",
    "RecordingNotificationSink",
    "safe_notify",
]
