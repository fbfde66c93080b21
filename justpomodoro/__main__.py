"""Allow running Just Pomodoro as a module: python -m justpomodoro."""

import logging
import sys

from PyQt6.QtWidgets import QApplication, QSystemTrayIcon

from .audio.sounds import SoundManager
from .database import DailyStatsStore, dispose_engine, init_db
from .logging_setup import configure_logging
from .notifications import TrayNotificationSender
from .settings import APP_SUPPORT_DIR, SettingsStore
from .timer.engine import TimerEngine
from .ui.menu_bar import APP_NAME, StatusBarController


logger = logging.getLogger(__name__)


def main() -> None:
    configure_logging(APP_SUPPORT_DIR)
    init_db()

    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setOrganizationName(APP_NAME)
    # Lives in the menu bar; closing the popover or a dialog must not quit.
    app.setQuitOnLastWindowClosed(False)

    tray_icon = QSystemTrayIcon(app)
    engine = TimerEngine(
        SettingsStore(),
        DailyStatsStore(),
        TrayNotificationSender(tray_icon),
        SoundManager(parent=app),
        parent=app,
    )
    controller = StatusBarController(engine, tray_icon, parent=app)
    app.aboutToQuit.connect(engine.shutdown)
    app.aboutToQuit.connect(dispose_engine)

    logger.info("%s ready", APP_NAME)
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
