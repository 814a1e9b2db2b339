"""Main application window for the Pomodoro Timer."""

from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import QMainWindow, QLabel

from .audio.sounds import SoundManager
from .clock import Clock, MonotonicClock
from .settings import Settings, load_settings, save_settings
from .timer.driver import SessionDriver
from .timer.session import Phase, SessionController, SessionView
from .ui.timer_widget import TimerWidget, format_time

log = logging.getLogger(__name__)

PHASE_LABELS: dict[Phase, str] = {
    Phase.WORK: "Work",
    Phase.REST: "Rest",
}


class PomodoroApp(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        clock: Clock | None = None,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Pomodoro Timer")
        self.setMinimumSize(320, 100)

        # ── geometry save timer ───────────────────────────────────────
        self._geometry_save_timer = QTimer(self)
        self._geometry_save_timer.setSingleShot(True)
        self._geometry_save_timer.setInterval(500)
        self._geometry_save_timer.timeout.connect(self._save_geometry)

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings if settings is not None else load_settings()

        # ── timer core + driver ───────────────────────────────────────
        self._controller = self._build_controller(clock or MonotonicClock())
        self._driver = SessionDriver(
            self._controller,
            self,
            interval_ms=self._settings.tick_interval_ms,
            history_enabled=self._settings.history_enabled,
        )

        # ── sound manager ─────────────────────────────────────────────
        self._sound_manager = SoundManager(parent=self, sounds_dir=sounds_dir)
        self._sound_manager.set_volume(self._settings.sound_volume)
        self._sound_manager.set_enabled(self._settings.sound_enabled)

        # ── widgets ───────────────────────────────────────────────────
        self._timer_widget = TimerWidget(self._driver, self)
        self.setCentralWidget(self._timer_widget)

        self._phase_label = QLabel(self)
        self._count_label = QLabel(self)
        self.statusBar().addWidget(self._phase_label, 1)
        self.statusBar().addPermanentWidget(self._count_label)

        self._build_menu_bar()
        self._connect_signals()
        self._restore_geometry()
        if self._settings.always_on_top:
            self.setWindowFlags(self.windowFlags() | Qt.WindowType.WindowStaysOnTopHint)

        self._on_updated(self._driver.view)
        self._refresh_count()

    # ── properties ────────────────────────────────────────────────────

    @property
    def driver(self) -> SessionDriver:
        return self._driver

    @property
    def timer_widget(self) -> TimerWidget:
        return self._timer_widget

    # ══════════════════════════════════════════════════════════════════
    #  SETUP
    # ══════════════════════════════════════════════════════════════════

    def _build_controller(self, clock: Clock) -> SessionController:
        try:
            return SessionController.from_settings(self._settings, clock)
        except (ValueError, TypeError):
            log.error(
                "Invalid timer values in settings, using defaults.", exc_info=True,
            )
            return SessionController.from_settings(Settings(), clock)

    def _build_menu_bar(self) -> None:
        menu_bar = self.menuBar()

        app_menu = menu_bar.addMenu("Pomodoro")
        quit_action = QAction("Quit Pomodoro Timer", self)
        quit_action.setMenuRole(QAction.MenuRole.QuitRole)
        quit_action.setShortcut(QKeySequence("Ctrl+Q"))
        quit_action.triggered.connect(self.close)
        app_menu.addAction(quit_action)

        view_menu = menu_bar.addMenu("View")
        self._aot_action = QAction("Always on Top", self)
        self._aot_action.setCheckable(True)
        self._aot_action.setChecked(self._settings.always_on_top)
        self._aot_action.triggered.connect(self._toggle_always_on_top)
        view_menu.addAction(self._aot_action)

    def _connect_signals(self) -> None:
        self._driver.updated.connect(self._on_updated)
        self._driver.sound_requested.connect(self._sound_manager.play)
        self._driver.phase_finished.connect(self._on_phase_finished)

    def start_ticking(self) -> None:
        self._driver.run()

    # ══════════════════════════════════════════════════════════════════
    #  TIMER SIGNALS
    # ══════════════════════════════════════════════════════════════════

    def _on_updated(self, view: SessionView) -> None:
        label = PHASE_LABELS[view.phase]
        if view.can_start:
            text = f"{label}: ready"
        elif view.can_resume:
            text = f"{label}: paused at {format_time(view.remaining)}"
        else:
            text = f"{label}: {format_time(view.remaining)} left"
        self._phase_label.setText(text)

    def _on_phase_finished(self, data: dict) -> None:
        if data["completed"]:
            self._refresh_count()

    def _refresh_count(self) -> None:
        if not self._settings.history_enabled:
            self._count_label.setText("")
            return
        from .database.history import completed_count

        self._count_label.setText(f"Today: {completed_count('work')}")

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW STATE
    # ══════════════════════════════════════════════════════════════════

    def _restore_geometry(self) -> None:
        """Restore window position and size from settings."""
        s = self._settings
        if s.window_x is not None and s.window_y is not None:
            self.move(s.window_x, s.window_y)
        if s.window_width and s.window_height:
            self.resize(s.window_width, s.window_height)

    def _save_geometry(self) -> None:
        """Persist current window geometry to settings."""
        if not self.isVisible():
            return
        pos = self.pos()
        size = self.size()
        self._settings.window_x = pos.x()
        self._settings.window_y = pos.y()
        self._settings.window_width = size.width()
        self._settings.window_height = size.height()
        save_settings(self._settings)

    def _schedule_geometry_save(self) -> None:
        """Debounce geometry saves; restart the 500 ms timer on each move or resize."""
        if hasattr(self, "_geometry_save_timer"):
            self._geometry_save_timer.start()

    def _toggle_always_on_top(self) -> None:
        on_top = not self._settings.always_on_top
        self._settings.always_on_top = on_top
        save_settings(self._settings)
        self._aot_action.setChecked(on_top)

        flags = self.windowFlags()
        if on_top:
            flags |= Qt.WindowType.WindowStaysOnTopHint
        else:
            flags &= ~Qt.WindowType.WindowStaysOnTopHint
        self.setWindowFlags(flags)
        self.show()  # Required: setWindowFlags hides the window

    # ══════════════════════════════════════════════════════════════════
    #  KEYBOARD
    # ══════════════════════════════════════════════════════════════════

    def _on_space(self) -> None:
        """Start, pause, or resume the timer."""
        view = self._driver.view
        if view.can_start:
            self._driver.start()
        elif view.can_resume:
            self._driver.resume()
        elif view.can_pause:
            self._driver.pause()

    # ══════════════════════════════════════════════════════════════════
    #  QT EVENTS
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._save_geometry()
        self._driver.halt()
        event.accept()

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._schedule_geometry_save()

    def moveEvent(self, event) -> None:  # type: ignore[override]
        super().moveEvent(event)
        self._schedule_geometry_save()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Handle Space (start/pause/resume) and Escape (stop) globally."""
        key = event.key()
        if key == Qt.Key.Key_Space and not event.modifiers():
            self._on_space()
            event.accept()
            return
        if key == Qt.Key.Key_Escape:
            self._driver.stop()
            event.accept()
            return
        super().keyPressEvent(event)
