"""Single-phase countdown with pause/resume/stop.

States
------
RUNNING   Counting down (initial state).
PAUSED    Frozen; elapsed time holds at the pause instant.
STOPPED   Terminal; elapsed reads as zero.

Transitions
-----------
RUNNING → PAUSED            (pause)
PAUSED → RUNNING            (resume)
RUNNING | PAUSED → STOPPED  (stop)

Commands issued in any other state are ignored.

Paused time is excluded by sliding ``start_time`` forward by the length
of each pause when the timer resumes.
"""

from __future__ import annotations

import logging
from enum import Enum

from ..clock import Clock

log = logging.getLogger(__name__)


class TimerState(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"


class Timer:
    """One countdown of ``duration`` seconds read against ``clock``.

    ``remaining()`` goes negative once the countdown has run out; the
    owner treats ``remaining() <= 0`` as expiry.
    """

    def __init__(self, duration: float, start_time: float, clock: Clock) -> None:
        if duration <= 0:
            raise ValueError(f"duration must be positive, got {duration!r}")

        self._duration = float(duration)
        self._clock = clock

        self._start_time = float(start_time)
        self._pause_time = 0.0
        self._resume_time = 0.0
        self._state = TimerState.RUNNING

    # ── properties ────────────────────────────────────────────────────

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def start_time(self) -> float:
        """Clock reading the countdown is measured from (pause-adjusted)."""
        return self._start_time

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == TimerState.RUNNING

    @property
    def is_paused(self) -> bool:
        return self._state == TimerState.PAUSED

    @property
    def is_stopped(self) -> bool:
        return self._state == TimerState.STOPPED

    # ── controls ──────────────────────────────────────────────────────

    def pause(self) -> None:
        if self._state != TimerState.RUNNING:
            log.debug("pause ignored in state %s", self._state.value)
            return
        self._pause_time = self._clock.now()
        self._state = TimerState.PAUSED

    def resume(self) -> None:
        if self._state != TimerState.PAUSED:
            log.debug("resume ignored in state %s", self._state.value)
            return
        self._resume_time = self._clock.now()
        self._start_time += self._resume_time - self._pause_time
        self._state = TimerState.RUNNING

    def stop(self) -> None:
        self._state = TimerState.STOPPED

    # ── readings ──────────────────────────────────────────────────────

    def elapsed(self) -> float:
        if self._state == TimerState.STOPPED:
            return 0.0
        if self._state == TimerState.PAUSED:
            return self._pause_time - self._start_time
        return self._clock.now() - self._start_time

    def remaining(self) -> float:
        return self._duration - self.elapsed()

    def __repr__(self) -> str:
        return (
            f"<Timer duration={self._duration:g} state={self._state.value} "
            f"elapsed={self.elapsed():.2f}>"
        )
