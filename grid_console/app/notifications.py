from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from grid_console.app.infrastructure.logging.logger import get_logger

NOTIFICATION_SECONDS = 5.0
HISTORY_LIMIT = 50

logger = get_logger(__name__)


class Severity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    message: str
    severity: Severity
    expires_at: float


class NotificationChannel:
    """Single-slot status line: a new message replaces the visible one."""

    def __init__(
        self,
        sink: Callable[[Notification], None] | None = None,
        now: Callable[[], float] | None = None,
        duration_seconds: float = NOTIFICATION_SECONDS,
    ) -> None:
        self._sink = sink
        self._now = now or time.monotonic
        self.duration_seconds = duration_seconds
        self._current: Notification | None = None
        self.history: list[Notification] = []

    def notify(self, message: str, severity: Severity | str = Severity.INFO) -> Notification:
        notification = Notification(
            message=message,
            severity=Severity(severity),
            expires_at=self._now() + self.duration_seconds,
        )
        self._current = notification
        self.history.append(notification)
        del self.history[:-HISTORY_LIMIT]
        logger.debug("notification %s: %s", notification.severity.value, message)
        if self._sink:
            self._sink(notification)
        return notification

    def current(self) -> Notification | None:
        if self._current is None:
            return None
        if self._current.expires_at <= self._now():
            self._current = None
        return self._current

    def dismiss(self) -> None:
        self._current = None
