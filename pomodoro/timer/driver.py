"""Qt adapter that drives a :class:`SessionController` from the event loop.

A ``QTimer`` calls :meth:`SessionDriver.tick` every ``interval_ms``; the
controller's results are re-published as Qt signals so widgets and the
sound manager can connect to them.  Finished phases are written to the
history database when ``history_enabled`` is set.
"""

from __future__ import annotations

import logging
from datetime import datetime

from PyQt6.QtCore import QObject, QTimer, pyqtSignal
from sqlalchemy.exc import SQLAlchemyError

from .session import Phase, SessionController, SessionEvent, SessionView

log = logging.getLogger(__name__)

DEFAULT_INTERVAL_MS = 250


class SessionDriver(QObject):
    """Schedules ticks and turns controller output into signals.

    Signals
    -------
    updated(view: SessionView)
        Emitted after every tick and every command.
    sound_requested(name: str)
        One per event: ``"start"``, ``"warning"`` or ``"phase_end"``.
    phase_changed(phase: Phase)
        Emitted when expiry flips to the next phase.
    phase_finished(data: dict)
        Emitted when a phase ends, by expiry or manual stop.  Keys:
        ``phase``, ``started_at``, ``ended_at``, ``planned_seconds``,
        ``elapsed_seconds``, ``completed``.
    """

    updated = pyqtSignal(object)
    sound_requested = pyqtSignal(str)
    phase_changed = pyqtSignal(object)
    phase_finished = pyqtSignal(object)

    def __init__(
        self,
        controller: SessionController,
        parent: QObject | None = None,
        *,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        history_enabled: bool = True,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._history_enabled = history_enabled
        self._phase_started_at: datetime | None = None

        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(interval_ms)
        self._qt_timer.timeout.connect(self.tick)

    # ── properties ────────────────────────────────────────────────────

    @property
    def controller(self) -> SessionController:
        return self._controller

    @property
    def view(self) -> SessionView:
        return self._controller.view()

    @property
    def is_ticking(self) -> bool:
        return self._qt_timer.isActive()

    @property
    def interval_ms(self) -> int:
        return self._qt_timer.interval()

    # ── scheduling ────────────────────────────────────────────────────

    def run(self) -> None:
        """Start periodic ticking."""
        self._qt_timer.start()
        self.updated.emit(self._controller.view())

    def halt(self) -> None:
        self._qt_timer.stop()

    # ── commands ──────────────────────────────────────────────────────

    def start(self) -> None:
        events = self._controller.start()
        if events:
            self._phase_started_at = datetime.now()
        self._dispatch(events)

    def pause(self) -> None:
        self._dispatch(self._controller.pause())

    def resume(self) -> None:
        self._dispatch(self._controller.resume())

    def stop(self) -> None:
        before = self._controller.view()
        events = self._controller.stop()
        if before.can_stop:
            self._finish(before.phase, before.duration, before.elapsed, completed=False)
        self._dispatch(events)

    def tick(self) -> None:
        timer = self._controller.active_timer
        if timer is None:
            self._dispatch([])
            return

        finished_phase = self._controller.phase
        elapsed = timer.elapsed()
        events = self._controller.tick()

        if SessionEvent.PLAY_PHASE_END_SOUND in events:
            self._finish(finished_phase, timer.duration, elapsed, completed=True)
            self._phase_started_at = datetime.now()
            self.phase_changed.emit(self._controller.phase)

        self._dispatch(events)

    # ── internal ──────────────────────────────────────────────────────

    def _dispatch(self, events: list[SessionEvent]) -> None:
        for event in events:
            self.sound_requested.emit(event.value)
        self.updated.emit(self._controller.view())

    def _finish(
        self, phase: Phase, planned: float, elapsed: float, *, completed: bool
    ) -> None:
        ended_at = datetime.now()
        data = {
            "phase": phase.value,
            "started_at": self._phase_started_at or ended_at,
            "ended_at": ended_at,
            "planned_seconds": planned,
            "elapsed_seconds": max(0.0, elapsed),
            "completed": completed,
        }
        self._phase_started_at = None

        if self._history_enabled:
            self._persist(data)
        self.phase_finished.emit(data)

    def _persist(self, data: dict) -> None:
        from ..database.history import record_phase

        try:
            record_phase(**data)
        except SQLAlchemyError:
            log.exception("Could not record %s phase in history", data["phase"])
