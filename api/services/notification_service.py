"""
Transient user-visible notifications (toasts).
"""

import time
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, List

from api.schemas.notification_schemas import Notification, NotificationType
from api.utils.logger import configure_logging

logger = configure_logging()

DEFAULT_TTL_SECONDS = 4.0


class NotificationCenter:
    """
    Holds notifications for ``ttl`` seconds after they are raised.
    Expiry is evaluated lazily on read so no timer task is needed.
    """

    def __init__(self, ttl: float = DEFAULT_TTL_SECONDS, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._items: Dict[str, tuple[float, Notification]] = {}

    def add(self, message: str, type: NotificationType = "info") -> Notification:
        notification = Notification(
            id=uuid.uuid4().hex,
            message=message,
            type=type,
            created_at=datetime.now(timezone.utc),
        )
        self._items[notification.id] = (self._clock(), notification)
        log = logger.warning if type == "error" else logger.info
        log("notification type=%s message=%s", type, message)
        return notification

    def dismiss(self, notification_id: str) -> bool:
        return self._items.pop(notification_id, None) is not None

    def active(self) -> List[Notification]:
        now = self._clock()
        expired = [nid for nid, (raised, _) in self._items.items() if now - raised >= self.ttl]
        for nid in expired:
            del self._items[nid]
        return [n for _, n in self._items.values()]

    def clear(self) -> None:
        self._items.clear()
