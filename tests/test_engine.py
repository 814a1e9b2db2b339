"""Tests for the single-phase countdown Timer.

Covers: construction, pause/resume offset correction, stop semantics,
ignored commands in the wrong state, and remaining/elapsed bookkeeping.
"""

import pytest

from pomodoro.timer.engine import Timer, TimerState

from helpers import FakeClock


# ═══════════════════════════════════════════════════════════════════════════
#  CONSTRUCTION
# ═══════════════════════════════════════════════════════════════════════════


class TestConstruction:

    def test_new_timer_is_running(self, clock):
        timer = Timer(10, clock.now(), clock)
        assert timer.state == TimerState.RUNNING
        assert timer.is_running
        assert timer.duration == 10.0

    def test_elapsed_starts_at_zero(self, clock):
        timer = Timer(10, clock.now(), clock)
        assert timer.elapsed() == 0.0
        assert timer.remaining() == 10.0

    @pytest.mark.parametrize("duration", [0, -1, -0.5])
    def test_non_positive_duration_rejected(self, clock, duration):
        with pytest.raises(ValueError):
            Timer(duration, 0.0, clock)

    def test_start_time_need_not_be_zero(self):
        clock = FakeClock(start=1000.0)
        timer = Timer(10, clock.now(), clock)
        clock.advance(3)
        assert timer.elapsed() == pytest.approx(3.0)


# ═══════════════════════════════════════════════════════════════════════════
#  PAUSE / RESUME
# ═══════════════════════════════════════════════════════════════════════════


class TestPauseResume:

    def test_pause_then_resume_excludes_gap(self, clock):
        """Timer(10) from 0, pause at 4, resume at 9, read at 12 → 7 elapsed."""
        timer = Timer(10, 0.0, clock)
        clock.set(4)
        timer.pause()
        clock.set(9)
        timer.resume()
        clock.set(12)
        assert timer.elapsed() == pytest.approx(7.0)
        assert timer.remaining() == pytest.approx(3.0)

    def test_elapsed_frozen_while_paused(self, clock):
        timer = Timer(10, 0.0, clock)
        clock.set(2)
        timer.pause()
        clock.set(8)
        assert timer.elapsed() == pytest.approx(2.0)
        assert timer.is_paused

    def test_resume_shifts_start_time(self, clock):
        timer = Timer(10, 0.0, clock)
        clock.set(1)
        timer.pause()
        clock.set(6)
        timer.resume()
        assert timer.start_time == pytest.approx(5.0)

    @pytest.mark.parametrize("pauses", [
        [(1, 2)],
        [(1, 2), (3, 7)],
        [(0.5, 0.75), (2, 2), (4, 10), (11, 11.5)],
    ])
    def test_many_pauses_excluded(self, clock, pauses):
        timer = Timer(100, 0.0, clock)
        for pause_at, resume_at in pauses:
            clock.set(pause_at)
            timer.pause()
            clock.set(resume_at)
            timer.resume()
        clock.set(20)
        paused_total = sum(r - p for p, r in pauses)
        assert timer.elapsed() == pytest.approx(20 - paused_total)

    def test_remaining_plus_elapsed_is_duration(self, clock):
        timer = Timer(10, 0.0, clock)
        for t, action in [(1, None), (2, "pause"), (4, None), (5, "resume"), (7, None)]:
            clock.set(t)
            if action:
                getattr(timer, action)()
            assert timer.remaining() + timer.elapsed() == pytest.approx(10.0)

    def test_pause_is_noop_when_paused(self, clock):
        timer = Timer(10, 0.0, clock)
        clock.set(2)
        timer.pause()
        clock.set(5)
        timer.pause()  # must not move the pause instant
        assert timer.elapsed() == pytest.approx(2.0)

    def test_resume_is_noop_when_running(self, clock):
        timer = Timer(10, 0.0, clock)
        clock.set(3)
        timer.resume()
        assert timer.start_time == 0.0
        assert timer.elapsed() == pytest.approx(3.0)


# ═══════════════════════════════════════════════════════════════════════════
#  STOP / EXPIRY
# ═══════════════════════════════════════════════════════════════════════════


class TestStop:

    def test_stop_zeroes_elapsed(self, clock):
        timer = Timer(10, 0.0, clock)
        clock.set(6)
        timer.stop()
        assert timer.is_stopped
        assert timer.elapsed() == 0.0
        assert timer.remaining() == 10.0

    def test_stop_from_paused(self, clock):
        timer = Timer(10, 0.0, clock)
        timer.pause()
        timer.stop()
        assert timer.state == TimerState.STOPPED

    def test_stopped_is_terminal(self, clock):
        timer = Timer(10, 0.0, clock)
        timer.stop()
        timer.pause()
        assert timer.state == TimerState.STOPPED
        timer.resume()
        assert timer.state == TimerState.STOPPED
        assert timer.elapsed() == 0.0

    def test_remaining_goes_negative_past_duration(self, clock):
        timer = Timer(10, 0.0, clock)
        clock.set(12.5)
        assert timer.remaining() == pytest.approx(-2.5)
        assert timer.is_running
