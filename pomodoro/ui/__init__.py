"""UI package."""

from .timer_widget import TimerWidget, format_time

__all__ = ["TimerWidget", "format_time"]
