"""
User-facing notices for analysis runs.

Analysis failures never propagate to callers; they are reported here instead,
logged at the matching level and kept in a bounded feed for the dashboard.
"""

import logging
import threading
from collections import deque
from datetime import datetime
from typing import List

from ..config import app_config
from ..models import Notification, NotificationSeverity


class NotificationService:
    """Records notices and logs them by severity."""

    def __init__(self, history_size: int = None):
        self.logger = logging.getLogger(__name__)
        self._history = deque(maxlen=history_size or app_config.analytics.notification_history)
        self._lock = threading.Lock()

    def notify(self, title: str, description: str, severity: NotificationSeverity) -> Notification:
        """Record a notice and return it."""
        notification = Notification(
            title=title,
            description=description,
            severity=severity,
            created_at=datetime.now()
        )

        if severity == NotificationSeverity.ERROR:
            self.logger.error(f"{title}: {description}")
        else:
            self.logger.info(f"{title}: {description}")

        with self._lock:
            self._history.append(notification)
        return notification

    def success(self, title: str, description: str) -> Notification:
        return self.notify(title, description, NotificationSeverity.SUCCESS)

    def info(self, title: str, description: str) -> Notification:
        return self.notify(title, description, NotificationSeverity.INFO)

    def error(self, title: str, description: str) -> Notification:
        return self.notify(title, description, NotificationSeverity.ERROR)

    def recent(self, limit: int = 20) -> List[Notification]:
        """Most recent notices first."""
        with self._lock:
            items = list(self._history)
        return list(reversed(items))[:limit]
