"""Work/rest phase cycling on top of :class:`~pomodoro.timer.engine.Timer`.

The controller owns at most one Timer at a time.  The host calls
:meth:`SessionController.tick` periodically and the command methods
(start / pause / resume / stop) when buttons are pressed.  Each call
returns the one-shot :class:`SessionEvent` list the host should act on
(play a sound); :meth:`SessionController.view` returns everything the
host needs to draw.

Phases
------
WORK → REST → WORK → …   (flip when remaining <= 0, on the same tick)

A manual ``stop()`` discards the timer but keeps the phase, so the next
``start()`` resumes the cycle where it left off.

Warning window
--------------
The last ``warning_ratio × duration`` seconds of a phase.  The first tick
inside the window raises ``PLAY_WARNING_SOUND``; later ticks in the same
phase stay quiet.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..clock import Clock
from .engine import Timer

if TYPE_CHECKING:
    from ..settings import Settings

log = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class Phase(Enum):
    WORK = "work"
    REST = "rest"

    @property
    def next(self) -> Phase:
        return Phase.REST if self is Phase.WORK else Phase.WORK


class SessionEvent(Enum):
    PLAY_START_SOUND = "start"
    PLAY_WARNING_SOUND = "warning"
    PLAY_PHASE_END_SOUND = "phase_end"


# ── constants ─────────────────────────────────────────────────────────────

SECONDS_IN_MINUTE = 60
DEFAULT_WORK_DURATION = 0.4 * SECONDS_IN_MINUTE
DEFAULT_REST_DURATION = 0.1 * SECONDS_IN_MINUTE
DEFAULT_WARNING_RATIO = 0.2


# ── read model ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class BarState:
    """What one of the two progress bars should show."""

    progress: float
    remaining: float
    warn: bool = False


@dataclass(frozen=True)
class SessionView:
    """Snapshot of everything the window renders."""

    phase: Phase
    duration: float
    remaining: float
    elapsed: float
    progress: float
    warn: bool
    running: bool
    can_start: bool
    can_pause: bool
    can_resume: bool
    can_stop: bool
    work_bar: BarState
    rest_bar: BarState


# ── controller ────────────────────────────────────────────────────────────


class SessionController:
    """Alternates work and rest timers and tracks the warning window."""

    def __init__(
        self,
        clock: Clock,
        *,
        work_duration: float = DEFAULT_WORK_DURATION,
        rest_duration: float = DEFAULT_REST_DURATION,
        warning_ratio: float = DEFAULT_WARNING_RATIO,
    ) -> None:
        if work_duration <= 0 or rest_duration <= 0:
            raise ValueError(
                f"durations must be positive, got work={work_duration!r} "
                f"rest={rest_duration!r}"
            )
        if not 0.0 <= warning_ratio <= 1.0:
            raise ValueError(
                f"warning_ratio must be within [0, 1], got {warning_ratio!r}"
            )

        self._clock = clock
        self._durations: dict[Phase, float] = {
            Phase.WORK: float(work_duration),
            Phase.REST: float(rest_duration),
        }
        self._warning_ratio = float(warning_ratio)

        self._phase: Phase = Phase.WORK
        self._active_timer: Timer | None = None
        self._warning_acknowledged: bool = False

    @classmethod
    def from_settings(cls, settings: Settings, clock: Clock) -> SessionController:
        return cls(
            clock,
            work_duration=settings.work_duration,
            rest_duration=settings.rest_duration,
            warning_ratio=settings.warning_ratio,
        )

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def active_timer(self) -> Timer | None:
        return self._active_timer

    @property
    def warning_acknowledged(self) -> bool:
        return self._warning_acknowledged

    @property
    def warning_ratio(self) -> float:
        return self._warning_ratio

    def duration_for(self, phase: Phase) -> float:
        return self._durations[phase]

    @property
    def can_start(self) -> bool:
        return self._active_timer is None

    @property
    def can_pause(self) -> bool:
        return self._active_timer is not None and self._active_timer.is_running

    @property
    def can_resume(self) -> bool:
        return self._active_timer is not None and self._active_timer.is_paused

    @property
    def can_stop(self) -> bool:
        return self._active_timer is not None

    # ══════════════════════════════════════════════════════════════════
    #  COMMANDS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> list[SessionEvent]:
        """Begin a timer for the current phase.  Only valid when idle."""
        if not self.can_start:
            log.debug("start ignored: a timer is already active")
            return []
        self._begin_phase()
        return [SessionEvent.PLAY_START_SOUND]

    def pause(self) -> list[SessionEvent]:
        if not self.can_pause:
            log.debug("pause ignored: no running timer")
            return []
        self._active_timer.pause()
        log.info("Paused %s phase", self._phase.value)
        return []

    def resume(self) -> list[SessionEvent]:
        if not self.can_resume:
            log.debug("resume ignored: no paused timer")
            return []
        self._active_timer.resume()
        log.info("Resumed %s phase", self._phase.value)
        return []

    def stop(self) -> list[SessionEvent]:
        """Discard the active timer.  The phase is kept."""
        if not self.can_stop:
            log.debug("stop ignored: no active timer")
            return []
        self._active_timer.stop()
        self._active_timer = None
        log.info("Stopped %s phase", self._phase.value)
        return []

    def tick(self) -> list[SessionEvent]:
        """Check the warning window and expiry of the active timer.

        On expiry the next phase's timer is created before returning, so
        there is never a tick without a timer after a rollover.
        """
        timer = self._active_timer
        if timer is None:
            return []

        events: list[SessionEvent] = []
        remaining = timer.remaining()

        if self._in_warning_window(remaining, timer.duration):
            if not self._warning_acknowledged:
                self._warning_acknowledged = True
                events.append(SessionEvent.PLAY_WARNING_SOUND)

        if remaining <= 0:
            timer.stop()
            self._active_timer = None
            finished = self._phase
            self._phase = self._phase.next
            self._begin_phase()
            log.info("%s phase ended, %s phase begins", finished.value, self._phase.value)
            events.append(SessionEvent.PLAY_PHASE_END_SOUND)

        return events

    # ══════════════════════════════════════════════════════════════════
    #  READ MODEL
    # ══════════════════════════════════════════════════════════════════

    def view(self) -> SessionView:
        timer = self._active_timer
        if timer is None:
            duration = self._durations[self._phase]
            elapsed = 0.0
            warn = False
            running = False
        else:
            duration = timer.duration
            elapsed = timer.elapsed()
            warn = self._in_warning_window(duration - elapsed, duration)
            running = timer.is_running

        remaining = duration - elapsed
        progress = max(0.0, min(1.0, elapsed / duration))
        work_bar, rest_bar = self._bars(progress, remaining, warn)

        return SessionView(
            phase=self._phase,
            duration=duration,
            remaining=remaining,
            elapsed=elapsed,
            progress=progress,
            warn=warn,
            running=running,
            can_start=self.can_start,
            can_pause=self.can_pause,
            can_resume=self.can_resume,
            can_stop=self.can_stop,
            work_bar=work_bar,
            rest_bar=rest_bar,
        )

    def bars(self) -> tuple[BarState, BarState]:
        """(work bar, rest bar) for a two-bar display."""
        view = self.view()
        return view.work_bar, view.rest_bar

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _begin_phase(self) -> None:
        self._active_timer = Timer(
            self._durations[self._phase], self._clock.now(), self._clock,
        )
        self._warning_acknowledged = False
        log.info(
            "Started %s timer for %.1f s", self._phase.value, self._active_timer.duration,
        )

    def _in_warning_window(self, remaining: float, duration: float) -> bool:
        return remaining <= duration * self._warning_ratio

    def _bars(
        self, progress: float, remaining: float, warn: bool
    ) -> tuple[BarState, BarState]:
        live = BarState(progress, remaining, warn)
        # During work the rest bar waits untouched; during rest the work
        # bar stays full.
        if self._phase == Phase.WORK:
            return live, BarState(0.0, self._durations[Phase.REST])
        return BarState(1.0, self._durations[Phase.WORK]), live
