"""Tests for settings snapshots and JSON persistence."""

import dataclasses
import json
import logging

import pytest

from justpomodoro.settings import DEFAULT_SETTINGS, Settings, SettingsStore
from justpomodoro.timer.types import SessionType


class TestSettings:

    def test_defaults(self):
        s = Settings()
        assert s.work_duration == 25
        assert s.short_break_duration == 5
        assert s.long_break_duration == 15
        assert s.sessions_before_long_break == 4
        assert s.auto_start_breaks is False
        assert s.auto_start_work is False
        assert s.sound_enabled is True
        assert s.notifications_enabled is True
        assert s.show_timer_in_menu_bar is True
        assert s == DEFAULT_SETTINGS

    @pytest.mark.parametrize("field, given, expected", [
        ("work_duration", 0, 1),
        ("work_duration", 90, 60),
        ("short_break_duration", -5, 1),
        ("short_break_duration", 20, 15),
        ("long_break_duration", 0, 1),
        ("long_break_duration", 45, 30),
        ("sessions_before_long_break", 1, 2),
        ("sessions_before_long_break", 12, 8),
    ])
    def test_values_clamped(self, field, given, expected):
        assert getattr(Settings(**{field: given}), field) == expected

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Settings().work_duration = 50

    def test_replace_clamps_too(self):
        s = dataclasses.replace(Settings(), work_duration=500)
        assert s.work_duration == 60

    def test_bool_fields_coerced(self):
        s = Settings(sound_enabled=0, auto_start_work=1)
        assert s.sound_enabled is False
        assert s.auto_start_work is True

    @pytest.mark.parametrize("session_type, minutes", [
        (SessionType.WORK, 25),
        (SessionType.SHORT_BREAK, 5),
        (SessionType.LONG_BREAK, 15),
    ])
    def test_duration_for(self, session_type, minutes):
        assert Settings().duration_for(session_type) == minutes
        assert Settings().seconds_for(session_type) == minutes * 60


class TestSettingsStore:

    def test_missing_file_gives_defaults(self, tmp_path):
        store = SettingsStore(tmp_path / "settings.json")
        assert store.load() == Settings()

    def test_save_then_load(self, tmp_path):
        store = SettingsStore(tmp_path / "sub" / "settings.json")
        s = Settings(work_duration=50, auto_start_breaks=True, sound_enabled=False)
        store.save(s)
        assert store.path.exists()
        assert SettingsStore(store.path).load() == s

    def test_saved_file_is_plain_json(self, tmp_path):
        store = SettingsStore(tmp_path / "settings.json")
        store.save(Settings(work_duration=30))
        data = json.loads(store.path.read_text(encoding="utf-8"))
        assert data["work_duration"] == 30
        assert data["show_timer_in_menu_bar"] is True

    def test_unknown_keys_ignored(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"work_duration": 40, "theme": "dark"}))
        s = SettingsStore(path).load()
        assert s.work_duration == 40
        assert s.short_break_duration == 5

    def test_out_of_range_values_clamped_on_load(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"work_duration": 999, "sessions_before_long_break": 0}))
        s = SettingsStore(path).load()
        assert s.work_duration == 60
        assert s.sessions_before_long_break == 2

    @pytest.mark.parametrize("content", [
        "{not json",
        "[1, 2, 3]",
        '{"work_duration": "abc"}',
        '{"work_duration": Infinity}',
    ])
    def test_unreadable_file_gives_defaults(self, tmp_path, caplog, content):
        path = tmp_path / "settings.json"
        path.write_text(content)
        with caplog.at_level(logging.WARNING, logger="justpomodoro.settings"):
            assert SettingsStore(path).load() == Settings()
        assert "using defaults" in caplog.text

    def test_failed_save_is_logged(self, tmp_path, caplog):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        store = SettingsStore(blocker / "settings.json")
        with caplog.at_level(logging.ERROR, logger="justpomodoro.settings"):
            store.save(Settings())
        assert "Could not save settings" in caplog.text
