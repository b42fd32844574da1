"""Transient, dismissible user notifications."""

import itertools
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

logger = logging.getLogger(__name__)


@dataclass
class Notification:
    id: int
    message: str
    level: str = "error"
    chat_id: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    dismissed: bool = False


class NotificationCenter:
    """Collects notifications raised by background operations."""

    def __init__(self):
        self._notifications: List[Notification] = []
        self._ids = itertools.count(1)

    def notify(
        self, message: str, level: str = "error", chat_id: Optional[str] = None
    ) -> Notification:
        notification = Notification(
            id=next(self._ids), message=message, level=level, chat_id=chat_id
        )
        self._notifications.append(notification)
        logger.debug(f"Notification {notification.id} ({level}): {message}")
        return notification

    def dismiss(self, notification_id: int) -> bool:
        """Dismiss a notification. Returns False if it is unknown or already dismissed."""
        for notification in self._notifications:
            if notification.id == notification_id and not notification.dismissed:
                notification.dismissed = True
                return True
        return False

    def active(self) -> List[Notification]:
        return [n for n in self._notifications if not n.dismissed]

    def history(self) -> List[Notification]:
        return list(self._notifications)

    def clear(self) -> None:
        self._notifications.clear()

    def __len__(self) -> int:
        return len(self._notifications)
