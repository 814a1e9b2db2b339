"""Shared test helpers for the Pomodoro Timer."""


class FakeClock:
    """Hand-driven clock: ``now()`` returns whatever the test last set."""

    def __init__(self, start: float = 0.0):
        self.time = float(start)

    def now(self) -> float:
        return self.time

    def set(self, value: float) -> None:
        self.time = float(value)

    def advance(self, seconds: float) -> None:
        self.time += seconds


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()
