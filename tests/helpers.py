"""Shared test helpers for Focus Timer."""

from focustimer.timer.engine import TimerEngine


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


class FakeAlert:
    """Stands in for AlertDispatcher; records every ``play`` call."""

    def __init__(self, error: Exception | None = None):
        self.calls: list[str] = []
        self._error = error

    def play(self, sound_type):
        self.calls.append(sound_type)
        if self._error is not None:
            raise self._error
        return True


def run_ticks(engine: TimerEngine, count: int) -> None:
    """Deliver *count* ticks directly, as the Qt timer would."""
    for _ in range(count):
        engine.tick()
