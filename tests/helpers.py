"""Shared test helpers for Timekeeper."""

from timekeeper.timer.engine import TimerEngine


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


class CallCounter:
    """Zero-argument callback that counts how often it ran."""

    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1


class FakeClock:
    """Stands in for ``unix_seconds``; moves only when told to."""

    def __init__(self, now: int):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int = 1) -> None:
        self.now += seconds


def tick(engine: TimerEngine, clock: FakeClock, seconds: int = 1) -> None:
    """Move the clock forward and deliver one scheduler tick."""
    clock.advance(seconds)
    engine._on_tick()
