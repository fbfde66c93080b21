"""Popover shown when the menu-bar icon is clicked.

Layout (top → bottom):
    - Session type label + "Paused" marker
    - MM:SS countdown
    - Progress bar and "n of N" cycle position
    - Reset/Skip + Start/Pause buttons
    - Today: work / breaks / total
    - Settings + Quit
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, QPoint, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QLabel, QPushButton, QProgressBar, QFrame,
)

from ..stats import DailyStats
from ..timer.engine import TimerEngine
from ..timer.types import TimerState
from .settings_dialog import SettingsDialog


POPOVER_WIDTH = 320
PROGRESS_STEPS = 1000


class TimerPopover(QWidget):
    """Compact control panel for the single timer."""

    quit_requested = pyqtSignal()

    def __init__(self, engine: TimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent, Qt.WindowType.Popup)
        self._engine = engine
        self.setFixedWidth(POPOVER_WIDTH)
        self._build_ui()
        self._connect_signals()
        self._refresh()
        self._refresh_stats(engine.daily_stats)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(16, 14, 16, 14)
        root.setSpacing(10)

        header = QHBoxLayout()
        self._session_label = QLabel(self)
        self._session_label.setStyleSheet("font-size: 13px; font-weight: 600;")
        self._paused_label = QLabel("Paused", self)
        self._paused_label.setStyleSheet("font-size: 11px; color: gray;")
        header.addWidget(self._session_label)
        header.addStretch()
        header.addWidget(self._paused_label)
        root.addLayout(header)

        self._time_label = QLabel(self)
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._time_label.setStyleSheet("font-size: 44px; font-weight: 300;")
        root.addWidget(self._time_label)

        self._progress = QProgressBar(self)
        self._progress.setRange(0, PROGRESS_STEPS)
        self._progress.setTextVisible(False)
        self._progress.setFixedHeight(6)
        root.addWidget(self._progress)

        cycle_row = QHBoxLayout()
        cycle_row.addWidget(QLabel("Progress", self))
        cycle_row.addStretch()
        self._cycle_label = QLabel(self)
        cycle_row.addWidget(self._cycle_label)
        root.addLayout(cycle_row)

        # ── controls ─────────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._reset_skip_btn = QPushButton(self)
        self._start_pause_btn = QPushButton(self)
        self._start_pause_btn.setDefault(True)
        self._start_pause_btn.setMinimumWidth(96)
        btn_row.addWidget(self._reset_skip_btn)
        btn_row.addWidget(self._start_pause_btn)
        root.addLayout(btn_row)

        root.addWidget(self._separator())

        # ── today ────────────────────────────────────────────────────
        today = QLabel("Today", self)
        today.setStyleSheet("font-size: 11px; font-weight: 600; color: gray;")
        root.addWidget(today)

        grid = QGridLayout()
        grid.setHorizontalSpacing(12)
        self._work_value = QLabel(self)
        self._break_value = QLabel(self)
        self._total_value = QLabel(self)
        for col, (caption, value) in enumerate((
            ("Work", self._work_value),
            ("Breaks", self._break_value),
            ("Total", self._total_value),
        )):
            grid.addWidget(QLabel(caption, self), 0, col)
            value.setStyleSheet("font-size: 15px; font-weight: 600;")
            grid.addWidget(value, 1, col)
        root.addLayout(grid)

        root.addWidget(self._separator())

        footer = QHBoxLayout()
        self._settings_btn = QPushButton("Settings", self)
        self._quit_btn = QPushButton("Quit", self)
        footer.addWidget(self._settings_btn)
        footer.addStretch()
        footer.addWidget(self._quit_btn)
        root.addLayout(footer)

    @staticmethod
    def _separator() -> QFrame:
        line = QFrame()
        line.setFrameShape(QFrame.Shape.HLine)
        line.setFixedHeight(1)
        return line

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self._on_start_pause)
        self._reset_skip_btn.clicked.connect(self._on_reset_skip)
        self._settings_btn.clicked.connect(self.open_settings)
        self._quit_btn.clicked.connect(self.quit_requested)

        self._engine.tick.connect(lambda _remaining: self._refresh())
        self._engine.state_changed.connect(lambda _state: self._refresh())
        self._engine.settings_changed.connect(lambda _settings: self._refresh())
        self._engine.stats_changed.connect(self._refresh_stats)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_start_pause(self) -> None:
        if self._engine.is_running:
            self._engine.pause_timer()
        else:
            self._engine.start_timer()

    def _on_reset_skip(self) -> None:
        if self._engine.is_running:
            self._engine.skip_session()
        else:
            self._engine.reset_timer()

    def open_settings(self) -> None:
        dlg = SettingsDialog(self._engine.settings, on_save=self._engine.update_settings)
        dlg.exec()

    def show_at(self, pos: QPoint) -> None:
        self.adjustSize()
        self.move(pos.x() - self.width() // 2, pos.y())
        self.show()
        self.raise_()
        self.activateWindow()

    # ── display ───────────────────────────────────────────────────────────

    def _refresh(self) -> None:
        engine = self._engine
        running = engine.is_running
        self._session_label.setText(engine.session_type.label)
        self._paused_label.setVisible(engine.state is TimerState.PAUSED)
        self._time_label.setText(engine.time_string)
        self._progress.setValue(round(engine.progress_fraction * PROGRESS_STEPS))
        self._cycle_label.setText(engine.session_progress_text)
        self._start_pause_btn.setText("Pause" if running else "Start")
        self._reset_skip_btn.setText("Skip" if running else "Reset")

    def _refresh_stats(self, stats: DailyStats) -> None:
        self._work_value.setText(stats.formatted_work_time)
        self._break_value.setText(stats.formatted_break_time)
        self._total_value.setText(stats.formatted_total_time)
