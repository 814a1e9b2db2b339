"""Timer package."""

from .engine import Timer, TimerState
from .session import (
    BarState,
    Phase,
    SessionController,
    SessionEvent,
    SessionView,
    DEFAULT_WORK_DURATION,
    DEFAULT_REST_DURATION,
    DEFAULT_WARNING_RATIO,
)

__all__ = [
    "Timer",
    "TimerState",
    "BarState",
    "Phase",
    "SessionController",
    "SessionEvent",
    "SessionView",
    "DEFAULT_WORK_DURATION",
    "DEFAULT_REST_DURATION",
    "DEFAULT_WARNING_RATIO",
]
