"""Shared test helpers for PanelTimer."""

from paneltimer.timer.engine import CountdownEngine, TimerObserver


class RecordingObserver(TimerObserver):
    """Records every observer callback as ``(name, *args)`` tuples."""

    def __init__(self):
        self.events: list[tuple] = []
        # Called from inside on_tick, e.g. to press a button mid-tick.
        self.tick_hook = None

    def on_tick(self, formatted_time):
        self.events.append(("tick", formatted_time))
        if self.tick_hook is not None:
            self.tick_hook()

    def on_status_text(self, label):
        self.events.append(("status", label))

    def on_finished(self):
        self.events.append(("finished",))

    def on_invalid_input(self):
        self.events.append(("invalid",))

    def on_stopped(self):
        self.events.append(("stopped",))

    @property
    def ticks(self) -> list[str]:
        return [e[1] for e in self.events if e[0] == "tick"]

    @property
    def statuses(self) -> list[str]:
        return [e[1] for e in self.events if e[0] == "status"]

    def count(self, name: str) -> int:
        return sum(1 for e in self.events if e[0] == name)

    @property
    def last(self):
        return self.events[-1] if self.events else None

    def clear(self):
        self.events.clear()


class FakeAlarm:
    """Stands in for AlarmPlayer; counts ring/silence calls."""

    def __init__(self):
        self.rings = 0
        self.silences = 0

    def ring(self):
        self.rings += 1

    def silence(self):
        self.silences += 1


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def __call__(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __len__(self):
        return len(self.items)

    @property
    def last(self):
        return self.items[-1] if self.items else None


def run_ticks(engine: CountdownEngine, n: int) -> None:
    """Deliver *n* ticks synchronously instead of waiting on the QTimer."""
    for _ in range(n):
        engine._on_tick()


def run_to_finish(engine: CountdownEngine, limit: int = 10_000) -> int:
    """Tick until the engine leaves RUNNING; return how many ticks it took."""
    ticks = 0
    while engine.is_running and ticks < limit:
        engine._on_tick()
        ticks += 1
    return ticks
