"""
Transient notifications for refused operations.
"""

import time
from typing import Optional

from .config import NOTIFICATION_TIMEOUT


class NotificationChannel:
    """
    Holds at most one message, which expires NOTIFICATION_TIMEOUT seconds
    after it is published. A newer message replaces the older one.
    Messages are never persisted.
    """

    def __init__(self, timeout: float = NOTIFICATION_TIMEOUT, clock=time.monotonic):
        self.timeout = timeout
        self._clock = clock
        self._message = None
        self._published_at = 0.0

    def publish(self, message: str):
        self._message = message
        self._published_at = self._clock()

    def current(self) -> Optional[str]:
        """The live message, or None once it has been dismissed or expired."""
        if self._message is None:
            return None
        if self._clock() - self._published_at >= self.timeout:
            self._message = None
        return self._message

    def dismiss(self):
        self._message = None
