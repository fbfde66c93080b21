"""Menu-bar (system tray) presence: icon, title, context menu, popover."""

from __future__ import annotations

from PyQt6.QtCore import Qt, QObject
from PyQt6.QtGui import QCursor, QIcon, QImage, QPainter, QColor, QPen, QPixmap
from PyQt6.QtWidgets import QApplication, QMenu, QSystemTrayIcon

from ..settings import Settings
from ..timer.engine import TimerEngine
from ..timer.types import SessionType, TimerState
from .popover import TimerPopover


APP_NAME = "Just Pomodoro"


# ── pure helpers ──────────────────────────────────────────────────────────


def icon_key(state: TimerState, session_type: SessionType) -> str:
    """Which glyph the tray shows for a given state."""
    if state is TimerState.IDLE:
        return "timer"
    if state is TimerState.PAUSED:
        return "paused"
    return session_type.icon


def menu_bar_title(settings: Settings, state: TimerState, time_string: str) -> str:
    """Countdown text next to the icon; empty unless enabled and running."""
    if settings.show_timer_in_menu_bar and state is TimerState.RUNNING:
        return f" {time_string}"
    return ""


def start_action_label(state: TimerState) -> str:
    if state is TimerState.RUNNING:
        return "Pause"
    if state is TimerState.PAUSED:
        return "Resume"
    return "Start"


# ── tray‑icon image generation ────────────────────────────────────────────


def make_tray_icon(key: str) -> QIcon:
    """Draw a 32×32 monochrome template icon for *key*.

    - timer:        circle outline with a clock hand
    - work:         filled circle
    - short_break:  circle outline with a centre dot
    - long_break:   circle outline with two dots
    - paused:       two vertical bars
    """
    size = 64  # draw at 2× for Retina
    img = QImage(size, size, QImage.Format.Format_ARGB32_Premultiplied)
    img.fill(Qt.GlobalColor.transparent)
    p = QPainter(img)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    colour = QColor(0, 0, 0, 220)
    outline = QPen(colour, 4)

    cx, cy, r = size // 2, size // 2, size // 2 - 4

    def dot(x: int, y: int, radius: int = 6) -> None:
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(colour)
        p.drawEllipse(x - radius, y - radius, radius * 2, radius * 2)

    if key == "work":
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(colour)
        p.drawEllipse(cx - r, cy - r, r * 2, r * 2)
    elif key == "paused":
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(colour)
        bar_w, bar_h, gap = 8, 28, 6
        y = cy - bar_h // 2
        p.drawRoundedRect(cx - gap - bar_w, y, bar_w, bar_h, 3, 3)
        p.drawRoundedRect(cx + gap, y, bar_w, bar_h, 3, 3)
    else:
        p.setPen(outline)
        p.setBrush(Qt.BrushStyle.NoBrush)
        p.drawEllipse(cx - r, cy - r, r * 2, r * 2)
        if key == "short_break":
            dot(cx, cy)
        elif key == "long_break":
            dot(cx - 10, cy)
            dot(cx + 10, cy)
        else:
            p.drawLine(cx, cy, cx, cy - r + 10)
            p.drawLine(cx, cy, cx + r // 2, cy)

    p.end()

    img.setDevicePixelRatio(2.0)
    icon = QIcon(QPixmap.fromImage(img))
    icon.setIsMask(True)
    return icon


# ── controller ────────────────────────────────────────────────────────────


class StatusBarController(QObject):
    """Keeps the tray icon in sync with the engine and hosts the popover."""

    def __init__(
        self,
        engine: TimerEngine,
        tray_icon: QSystemTrayIcon,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._tray = tray_icon
        self._popover = TimerPopover(engine)
        self._popover.quit_requested.connect(self.quit)

        self._build_menu()
        self._tray.activated.connect(self._on_activated)

        engine.tick.connect(lambda _remaining: self._refresh_title())
        engine.state_changed.connect(self._on_state_changed)
        engine.settings_changed.connect(lambda _settings: self._refresh_title())

        self._on_state_changed(engine.state)
        self._tray.show()

    @property
    def popover(self) -> TimerPopover:
        return self._popover

    @property
    def title(self) -> str:
        return menu_bar_title(
            self._engine.settings, self._engine.state, self._engine.time_string,
        )

    # ── menu ──────────────────────────────────────────────────────────

    def _build_menu(self) -> None:
        menu = QMenu()

        self._start_action = menu.addAction("Start")
        self._start_action.triggered.connect(self._toggle_start)

        self._skip_action = menu.addAction("Skip")
        self._skip_action.triggered.connect(self._engine.skip_session)

        self._reset_action = menu.addAction("Reset")
        self._reset_action.triggered.connect(self._engine.reset_timer)

        menu.addSeparator()

        settings_action = menu.addAction("Settings…")
        settings_action.triggered.connect(self._popover.open_settings)

        menu.addSeparator()

        quit_action = menu.addAction("Quit")
        quit_action.triggered.connect(self.quit)

        self._menu = menu
        self._tray.setContextMenu(menu)

    def _toggle_start(self) -> None:
        if self._engine.is_running:
            self._engine.pause_timer()
        else:
            self._engine.start_timer()

    # ── slots ─────────────────────────────────────────────────────────

    def _on_activated(self, reason: QSystemTrayIcon.ActivationReason) -> None:
        if reason == QSystemTrayIcon.ActivationReason.Trigger:
            self.toggle_popover()

    def toggle_popover(self) -> None:
        if self._popover.isVisible():
            self._popover.hide()
        else:
            self._popover.show_at(QCursor.pos())

    def _on_state_changed(self, state: TimerState) -> None:
        self._tray.setIcon(make_tray_icon(icon_key(state, self._engine.session_type)))
        self._start_action.setText(start_action_label(state))
        self._refresh_title()

    def _refresh_title(self) -> None:
        title = self.title.strip()
        self._tray.setToolTip(f"{APP_NAME}: {title}" if title else APP_NAME)

    def quit(self) -> None:
        self._engine.shutdown()
        self._tray.hide()
        app = QApplication.instance()
        if app is not None:
            app.quit()
