"""Pomodoro Timer: work/rest interval timer with a two-bar display."""

__version__ = "0.1.0"
