"""Desktop notifications through the system tray icon."""

from __future__ import annotations

import logging

from PyQt6.QtWidgets import QSystemTrayIcon

from .timer.types import SessionType


logger = logging.getLogger(__name__)

MESSAGE_TIMEOUT_MS = 5000

COMPLETION_MESSAGES: dict[SessionType, tuple[str, str]] = {
    SessionType.WORK: (
        "Work session complete!",
        "Time to take a break.",
    ),
    SessionType.SHORT_BREAK: (
        "Break is over!",
        "Ready to get back to work?",
    ),
    SessionType.LONG_BREAK: (
        "Long break complete!",
        "You're refreshed and ready to focus.",
    ),
}


def completion_message(session_type: SessionType) -> tuple[str, str]:
    """``(title, body)`` announcing the end of *session_type*."""
    return COMPLETION_MESSAGES[session_type]


class TrayNotificationSender:
    """Shows session-complete balloons on a ``QSystemTrayIcon``.

    Qt has no permission prompt of its own; ``request_permission`` only
    checks that the platform can show tray messages and remembers the
    answer.  ``showMessage`` returns immediately.
    """

    def __init__(self, tray_icon: QSystemTrayIcon) -> None:
        self._tray = tray_icon
        self._available = True

    @property
    def available(self) -> bool:
        return self._available

    def request_permission(self) -> None:
        self._available = (
            QSystemTrayIcon.isSystemTrayAvailable()
            and QSystemTrayIcon.supportsMessages()
        )
        if not self._available:
            logger.info("Tray notifications not supported on this platform")

    def send_session_complete(
        self, session_type: SessionType, sound_enabled: bool,
    ) -> None:
        if not self._available:
            return
        title, body = completion_message(session_type)
        # NoIcon is the silent style on platforms that chime for the others
        icon = (
            QSystemTrayIcon.MessageIcon.Information
            if sound_enabled
            else QSystemTrayIcon.MessageIcon.NoIcon
        )
        self._tray.showMessage(title, body, icon, MESSAGE_TIMEOUT_MS)
