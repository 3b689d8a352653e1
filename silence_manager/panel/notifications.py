"""
Notification surface: a bounded feed of operator messages.
"""

from __future__ import annotations

import logging
from collections import deque

from silence_manager.api.models import Notification
from silence_manager.core.constants import NotificationSeverity
from silence_manager.core.logging import EventType, get_logger, log_event

logger = get_logger(__name__)

_LOG_LEVELS = {
    NotificationSeverity.INFO: logging.INFO,
    NotificationSeverity.SUCCESS: logging.INFO,
    NotificationSeverity.ERROR: logging.WARNING,
}


class NotificationFeed:
    """Keeps the most recent notifications, newest last, and logs each one."""

    def __init__(self, max_items: int = 50) -> None:
        self._items: deque[Notification] = deque(maxlen=max(1, max_items))

    def notify(self, message: str, severity: NotificationSeverity = NotificationSeverity.INFO) -> None:
        severity = NotificationSeverity(severity)
        self._items.append(Notification(message=message, severity=severity))
        log_event(logger, _LOG_LEVELS[severity], EventType.NOTIFICATION, severity.value, message)

    def recent(self, limit: int | None = None) -> list[Notification]:
        items = list(self._items)
        if limit is not None:
            items = items[-limit:] if limit > 0 else []
        return items

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)
