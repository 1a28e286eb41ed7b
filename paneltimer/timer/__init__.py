"""Timer package."""

from .engine import (
    CountdownEngine,
    TimerObserver,
    TimerState,
    TICK_INTERVAL_MS,
    IDLE_LABEL,
    PAUSED_LABEL,
)
from .parser import parse_duration, format_hms

__all__ = [
    "CountdownEngine",
    "TimerObserver",
    "TimerState",
    "TICK_INTERVAL_MS",
    "IDLE_LABEL",
    "PAUSED_LABEL",
    "parse_duration",
    "format_hms",
]
