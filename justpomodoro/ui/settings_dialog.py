"""Settings dialog for Just Pomodoro.

The dialog edits a copy of the current settings.  Nothing is applied
until "Save Changes", which builds a new :class:`Settings` snapshot and
hands it to ``on_save`` (normally ``TimerEngine.update_settings``).
"Reset" only puts the defaults back into the form.
"""

from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QSpinBox, QSlider, QCheckBox, QPushButton,
    QFrame, QWidget,
)

from .. import settings as cfg
from ..settings import Settings


class SettingsDialog(QDialog):
    """Modal dialog for all user preferences."""

    def __init__(
        self,
        settings: Settings,
        parent: QWidget | None = None,
        *,
        on_save: Callable[[Settings], None] | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setMinimumWidth(360)
        self.setModal(True)

        self._on_save = on_save

        self._build_ui()
        self._populate(settings)

    # ══════════════════════════════════════════════════════════════════
    #  BUILD UI
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(20, 16, 20, 16)
        root.setSpacing(14)

        # ── Timer section ────────────────────────────────────────────
        root.addWidget(self._section_label("Timer"))
        timer_form = QFormLayout()
        timer_form.setHorizontalSpacing(20)
        timer_form.setVerticalSpacing(10)

        self._work_spin = self._minutes_spin(
            cfg.MIN_WORK_DURATION, cfg.MAX_WORK_DURATION,
        )
        timer_form.addRow("Work:", self._work_spin)

        self._short_spin = self._minutes_spin(
            cfg.MIN_BREAK_DURATION, cfg.MAX_SHORT_BREAK_DURATION,
        )
        timer_form.addRow("Short break:", self._short_spin)

        self._long_spin = self._minutes_spin(
            cfg.MIN_BREAK_DURATION, cfg.MAX_LONG_BREAK_DURATION,
        )
        timer_form.addRow("Long break:", self._long_spin)

        sessions_row = QHBoxLayout()
        self._sessions_slider = QSlider(Qt.Orientation.Horizontal)
        self._sessions_slider.setRange(
            cfg.MIN_SESSIONS_BEFORE_LONG_BREAK, cfg.MAX_SESSIONS_BEFORE_LONG_BREAK,
        )
        self._sessions_slider.setSingleStep(1)
        self._sessions_slider.setTickInterval(1)
        self._sessions_label = QLabel()
        self._sessions_label.setMinimumWidth(20)
        self._sessions_slider.valueChanged.connect(
            lambda v: self._sessions_label.setText(str(v))
        )
        sessions_row.addWidget(self._sessions_slider)
        sessions_row.addWidget(self._sessions_label)
        sessions_wrapper = QWidget()
        sessions_wrapper.setLayout(sessions_row)
        timer_form.addRow("Sessions before long break:", sessions_wrapper)

        root.addLayout(timer_form)
        root.addWidget(self._separator())

        # ── Behaviour section ────────────────────────────────────────
        root.addWidget(self._section_label("Behaviour"))
        self._auto_breaks_cb = QCheckBox("Auto-start breaks")
        self._auto_work_cb = QCheckBox("Auto-start work sessions")
        self._menu_bar_cb = QCheckBox("Show timer in menu bar")
        self._sound_cb = QCheckBox("Sound alerts")
        self._notif_cb = QCheckBox("Notification alerts")
        for cb in (
            self._auto_breaks_cb,
            self._auto_work_cb,
            self._menu_bar_cb,
            self._sound_cb,
            self._notif_cb,
        ):
            root.addWidget(cb)

        # ── buttons ──────────────────────────────────────────────────
        root.addStretch()
        btn_row = QHBoxLayout()
        reset_btn = QPushButton("Reset")
        reset_btn.clicked.connect(self.reset_to_defaults)
        save_btn = QPushButton("Save Changes")
        save_btn.setDefault(True)
        save_btn.clicked.connect(self.save)
        btn_row.addWidget(reset_btn)
        btn_row.addStretch()
        btn_row.addWidget(save_btn)
        root.addLayout(btn_row)

    # ── helpers ──────────────────────────────────────────────────────

    @staticmethod
    def _minutes_spin(low: int, high: int) -> QSpinBox:
        spin = QSpinBox()
        spin.setRange(low, high)
        spin.setSuffix(" min")
        return spin

    @staticmethod
    def _section_label(text: str) -> QLabel:
        lbl = QLabel(text)
        lbl.setStyleSheet("font-size: 14px; font-weight: 700; margin-top: 4px;")
        return lbl

    @staticmethod
    def _separator() -> QFrame:
        line = QFrame()
        line.setFrameShape(QFrame.Shape.HLine)
        line.setFixedHeight(1)
        return line

    # ══════════════════════════════════════════════════════════════════
    #  FORM ↔ SETTINGS
    # ══════════════════════════════════════════════════════════════════

    def _populate(self, s: Settings) -> None:
        self._work_spin.setValue(s.work_duration)
        self._short_spin.setValue(s.short_break_duration)
        self._long_spin.setValue(s.long_break_duration)
        self._sessions_slider.setValue(s.sessions_before_long_break)
        self._sessions_label.setText(str(s.sessions_before_long_break))
        self._auto_breaks_cb.setChecked(s.auto_start_breaks)
        self._auto_work_cb.setChecked(s.auto_start_work)
        self._menu_bar_cb.setChecked(s.show_timer_in_menu_bar)
        self._sound_cb.setChecked(s.sound_enabled)
        self._notif_cb.setChecked(s.notifications_enabled)

    def edited_settings(self) -> Settings:
        """Snapshot of what the form currently shows."""
        return Settings(
            work_duration=self._work_spin.value(),
            short_break_duration=self._short_spin.value(),
            long_break_duration=self._long_spin.value(),
            sessions_before_long_break=self._sessions_slider.value(),
            auto_start_breaks=self._auto_breaks_cb.isChecked(),
            auto_start_work=self._auto_work_cb.isChecked(),
            sound_enabled=self._sound_cb.isChecked(),
            notifications_enabled=self._notif_cb.isChecked(),
            show_timer_in_menu_bar=self._menu_bar_cb.isChecked(),
        )

    # ══════════════════════════════════════════════════════════════════
    #  ACTIONS
    # ══════════════════════════════════════════════════════════════════

    def reset_to_defaults(self) -> None:
        self._populate(cfg.DEFAULT_SETTINGS)

    def save(self) -> None:
        if self._on_save is not None:
            self._on_save(self.edited_settings())
        self.accept()
