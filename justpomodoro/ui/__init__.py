"""UI package."""

from .menu_bar import StatusBarController
from .popover import TimerPopover
from .settings_dialog import SettingsDialog

__all__ = [
    "StatusBarController",
    "TimerPopover",
    "SettingsDialog",
]
