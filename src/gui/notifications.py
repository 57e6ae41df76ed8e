"""Desktop notifications delivered through the tray icon balloon."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

__all__ = ["NotificationService"]

_log = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, tray_provider: Callable[[], Optional[Any]], *, timeout_ms: int = 5000):
        self._tray_provider = tray_provider
        self._timeout_ms = timeout_ms

    def show_notification(self, title: str, body: str) -> bool:
        """Show a balloon message. Returns False when no tray icon can carry it."""
        tray = self._tray_provider()
        if tray is None or not tray.supportsMessages():
            _log.info("Notification not delivered (no tray): %s", title)
            return False
        from PyQt6.QtWidgets import QSystemTrayIcon

        tray.showMessage(title, body, QSystemTrayIcon.MessageIcon.Information, self._timeout_ms)
        return True

    def request_notification_permission(self) -> bool:
        # Desktop platforms deliver tray messages without a permission prompt
        return True
