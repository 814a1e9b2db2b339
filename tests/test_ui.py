"""Tests for the window, the control strip and time formatting.

Covers:
- format_time
- TimerWidget button gating and bar rendering
- PomodoroApp wiring: status text, keyboard, settings fallback
"""

from __future__ import annotations

import pytest
from PyQt6.QtCore import Qt, QEvent
from PyQt6.QtGui import QKeyEvent

from pomodoro.app import PomodoroApp
from pomodoro.settings import Settings
from pomodoro.timer.session import Phase
from pomodoro.ui.timer_widget import TimerWidget, format_time, BAR_RESOLUTION

from helpers import FakeClock


# ═══════════════════════════════════════════════════════════════════════
#  FORMATTING
# ═══════════════════════════════════════════════════════════════════════


class TestFormatTime:
    @pytest.mark.parametrize("seconds, text", [
        (0, "0:00"),
        (24.0, "0:24"),
        (59.9, "0:59"),
        (60, "1:00"),
        (1500, "25:00"),
        (3725, "62:05"),
        (-3, "0:00"),
    ])
    def test_format(self, seconds, text):
        assert format_time(seconds) == text


# ═══════════════════════════════════════════════════════════════════════
#  CONTROL STRIP
# ═══════════════════════════════════════════════════════════════════════


@pytest.fixture
def widget(driver_no_db):
    return TimerWidget(driver_no_db)


class TestTimerWidget:
    def test_idle_buttons(self, widget):
        assert widget._start_btn.isEnabled()
        assert not widget._pause_btn.isEnabled()
        assert not widget._resume_btn.isEnabled()
        assert not widget._stop_btn.isEnabled()

    def test_idle_bars(self, widget):
        assert widget._work_bar.value() == 0
        assert widget._work_bar.format() == "0:10"
        assert widget._rest_bar.value() == 0
        assert widget._rest_bar.format() == "0:05"

    def test_start_button_starts(self, widget, driver_no_db):
        widget._start_btn.click()
        assert not driver_no_db.view.can_start
        assert not widget._start_btn.isEnabled()
        assert widget._pause_btn.isEnabled()
        assert widget._stop_btn.isEnabled()

    def test_pause_resume_buttons(self, widget):
        widget._start_btn.click()
        widget._pause_btn.click()
        assert widget._resume_btn.isEnabled()
        assert not widget._pause_btn.isEnabled()
        widget._resume_btn.click()
        assert widget._pause_btn.isEnabled()

    def test_stop_button_returns_to_idle(self, widget):
        widget._start_btn.click()
        widget._stop_btn.click()
        assert widget._start_btn.isEnabled()
        assert not widget._stop_btn.isEnabled()

    def test_live_work_bar(self, widget, driver_no_db, clock):
        driver_no_db.start()
        clock.set(5)
        driver_no_db.tick()
        assert widget._work_bar.value() == BAR_RESOLUTION // 2
        assert widget._work_bar.format() == "0:05"
        assert widget._rest_bar.value() == 0

    def test_warning_colours_live_bar(self, widget, driver_no_db, clock):
        driver_no_db.start()
        clock.set(8)
        driver_no_db.tick()
        assert "background-color" in widget._work_bar.styleSheet()
        assert widget._rest_bar.styleSheet() == ""

    def test_rest_phase_bars(self, widget, driver_no_db, clock):
        driver_no_db.start()
        clock.set(10)
        driver_no_db.tick()
        assert widget._work_bar.value() == BAR_RESOLUTION
        assert widget._work_bar.format() == "0:10"
        assert widget._work_bar.styleSheet() == ""
        assert widget._rest_bar.format() == "0:05"


# ═══════════════════════════════════════════════════════════════════════
#  MAIN WINDOW
# ═══════════════════════════════════════════════════════════════════════


@pytest.fixture
def app_clock():
    return FakeClock()


@pytest.fixture
def window(qapp, tmp_path, app_clock, monkeypatch):
    monkeypatch.setattr("pomodoro.settings.SETTINGS_PATH", tmp_path / "settings.json")
    monkeypatch.setattr("pomodoro.settings.APP_SUPPORT_DIR", tmp_path)
    settings = Settings(work_duration=10, rest_duration=5)
    return PomodoroApp(settings, clock=app_clock, sounds_dir=tmp_path / "sounds")


def _key(key: Qt.Key) -> QKeyEvent:
    return QKeyEvent(QEvent.Type.KeyPress, key.value, Qt.KeyboardModifier.NoModifier)


@pytest.mark.usefixtures("qapp")
class TestPomodoroApp:
    def test_uses_settings_durations(self, window):
        controller = window.driver.controller
        assert controller.duration_for(Phase.WORK) == 10
        assert controller.duration_for(Phase.REST) == 5

    def test_tick_interval_from_settings(self, window):
        assert window.driver.interval_ms == Settings().tick_interval_ms

    def test_idle_status(self, window):
        assert window._phase_label.text() == "Work: ready"
        assert window._count_label.text() == "Today: 0"

    def test_status_follows_driver(self, window, app_clock):
        window.driver.start()
        app_clock.set(3)
        window.driver.tick()
        assert window._phase_label.text() == "Work: 0:07 left"
        window.driver.pause()
        assert window._phase_label.text() == "Work: paused at 0:07"

    def test_completed_work_phase_counted(self, window, app_clock):
        window.driver.start()
        app_clock.set(10)
        window.driver.tick()
        assert window._count_label.text() == "Today: 1"
        assert window._phase_label.text().startswith("Rest")

    def test_space_cycles_commands(self, window):
        window.keyPressEvent(_key(Qt.Key.Key_Space))
        assert window.driver.view.can_pause
        window.keyPressEvent(_key(Qt.Key.Key_Space))
        assert window.driver.view.can_resume
        window.keyPressEvent(_key(Qt.Key.Key_Space))
        assert window.driver.view.can_pause

    def test_escape_stops(self, window):
        window.driver.start()
        window.keyPressEvent(_key(Qt.Key.Key_Escape))
        assert window.driver.view.can_start

    def test_invalid_settings_fall_back_to_defaults(self, qapp, tmp_path):
        bad = Settings(work_duration=-1, warning_ratio=3.0, history_enabled=False)
        w = PomodoroApp(bad, clock=FakeClock(), sounds_dir=tmp_path)
        assert w.driver.controller.duration_for(Phase.WORK) == pytest.approx(24.0)
        assert w._count_label.text() == ""

    def test_wrong_typed_settings_fall_back_to_defaults(self, qapp, tmp_path):
        bad = Settings(work_duration="25", history_enabled=False)
        w = PomodoroApp(bad, clock=FakeClock(), sounds_dir=tmp_path)
        assert w.driver.controller.duration_for(Phase.WORK) == pytest.approx(24.0)

    def test_sounds_follow_settings(self, qapp, tmp_path):
        s = Settings(sound_enabled=False, sound_volume=30, history_enabled=False)
        w = PomodoroApp(s, clock=FakeClock(), sounds_dir=tmp_path)
        assert w._sound_manager.enabled is False
        assert w._sound_manager.volume == 30
