"""Shared test helpers for WorkoutTimer."""

from workouttimer.timer.engine import IntervalTimer


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


def tick(timer: IntervalTimer, times: int = 1) -> None:
    """Fire the timer's one-second slot *times* times without waiting."""
    for _ in range(times):
        timer._on_tick()


def finish_phase(timer: IntervalTimer) -> None:
    """Tick until the current countdown runs out and the phase flips."""
    ticks = timer.total_millis // 1000
    tick(timer, ticks)
