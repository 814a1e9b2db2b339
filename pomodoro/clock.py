"""Monotonic time sources.

The timer core never calls ``time`` directly; it reads whatever object
the host hands it through :class:`Clock`.
"""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Anything with a ``now()`` returning monotonic seconds."""

    def now(self) -> float:
        ...


class MonotonicClock:
    """Production clock backed by ``time.monotonic()``."""

    def now(self) -> float:
        return time.monotonic()
