"""Countdown state machine for PanelTimer.

States
------
STOPPED   Idle; the panel shows "Timer".
RUNNING   Counting down, one tick per second.
PAUSED    Frozen; ``remaining`` is kept, the panel shows "Paused".

Transitions
-----------
any      → RUNNING   (start, only when the text parses to > 0)
RUNNING  → PAUSED    (pause)
PAUSED   → RUNNING   (resume)
any      → STOPPED   (stop)
RUNNING  → STOPPED   (finish, when the tick at 0 fires)

Anything else is a silent no-op, so buttons clicked out of order are
harmless.

Tick boundary
-------------
Each tick shows the current value *before* decrementing, and the countdown
finishes on the tick that shows ``00:00:00``.  A duration of ``d`` seconds
therefore produces ``d + 1`` ticks; ``start("2s")`` displays
``00:00:02``, ``00:00:01``, ``00:00:00`` and finishes on the third.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Protocol

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .parser import format_hms, parse_duration

_LOGGER = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class TimerState(Enum):
    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED = "paused"


# ── constants ─────────────────────────────────────────────────────────────

TICK_INTERVAL_MS = 1000
IDLE_LABEL = "Timer"
PAUSED_LABEL = "Paused"

# (from_state, action) → to_state.  ``None`` as from_state means "any".
_TRANSITIONS: dict[tuple[TimerState | None, str], TimerState] = {
    (None, "start"): TimerState.RUNNING,
    (TimerState.RUNNING, "pause"): TimerState.PAUSED,
    (TimerState.PAUSED, "resume"): TimerState.RUNNING,
    (None, "stop"): TimerState.STOPPED,
    (TimerState.RUNNING, "finish"): TimerState.STOPPED,
}


def next_state(state: TimerState, action: str) -> TimerState | None:
    """Target state for *action* taken in *state*, or ``None`` if illegal."""
    target = _TRANSITIONS.get((state, action))
    if target is None:
        target = _TRANSITIONS.get((None, action))
    return target


# ── observer ──────────────────────────────────────────────────────────────


class TimerObserver:
    """Presentation-side callbacks.  Override what you need.

    on_tick(formatted_time)
        Once per tick with the remaining time as ``HH:MM:SS``.
    on_status_text(label)
        Non-numeric label: "Timer" when idle, "Paused" when paused.
    on_finished()
        The countdown reached zero.  Time to sound the alarm.
    on_invalid_input()
        ``start`` got text with no usable duration.
    on_stopped()
        The user stopped the timer; clear any input field.
    """

    def on_tick(self, formatted_time: str) -> None:
        pass

    def on_status_text(self, label: str) -> None:
        pass

    def on_finished(self) -> None:
        pass

    def on_invalid_input(self) -> None:
        pass

    def on_stopped(self) -> None:
        pass


class Alarm(Protocol):
    def ring(self) -> None: ...

    def silence(self) -> None: ...


# ── engine ────────────────────────────────────────────────────────────────


class CountdownEngine(QObject):
    """Qt-based countdown timer driven by a single owned ``QTimer``.

    The tick source exists only while RUNNING and is cancelled before any
    transition away from RUNNING returns, so no stale tick can reach the
    observer after ``pause()``, ``stop()`` or ``destroy()``.

    Signals
    -------
    state_changed(new_state: TimerState)
        Emitted on every state transition.
    """

    state_changed = pyqtSignal(object)

    def __init__(
        self,
        observer: TimerObserver | None = None,
        parent: QObject | None = None,
        *,
        alarm: Alarm | None = None,
        interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._observer: TimerObserver = observer or TimerObserver()
        self._alarm = alarm
        self._interval_ms = interval_ms

        self._state: TimerState = TimerState.STOPPED
        self._remaining: int = 0
        self._duration: int = 0
        self._tick_timer: QTimer | None = None

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def remaining(self) -> int:
        """Seconds left on the clock."""
        return self._remaining

    @property
    def duration(self) -> int:
        """The most recently parsed duration, in seconds."""
        return self._duration

    @property
    def is_running(self) -> bool:
        return self._state == TimerState.RUNNING

    @property
    def has_tick_source(self) -> bool:
        return self._tick_timer is not None

    @property
    def display_text(self) -> str:
        """What the panel label should currently read."""
        if self._state == TimerState.PAUSED:
            return PAUSED_LABEL
        if self._state == TimerState.STOPPED:
            return IDLE_LABEL
        return format_hms(self._remaining)

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self, text: str) -> bool:
        """Parse *text* and count it down.  Returns False on invalid input.

        Works from any state as a fresh start.  Invalid input leaves the
        state and any running countdown untouched.
        """
        seconds = parse_duration(text)
        if seconds <= 0:
            _LOGGER.info("Invalid time format: %r", text)
            self._observer.on_invalid_input()
            return False

        _LOGGER.info("Starting timer for %r (%d s)", text.strip(), seconds)
        self._cancel_ticks()
        self._duration = seconds
        self._remaining = seconds
        self._schedule_ticks()
        self._transition("start")
        return True

    def start_or_resume(self, text: str) -> bool:
        """Start button: resume when paused, otherwise start from *text*."""
        if self._state == TimerState.PAUSED:
            self.resume()
            return True
        return self.start(text)

    def pause(self) -> None:
        """Freeze the countdown.  No-op unless RUNNING."""
        if not self._allowed("pause"):
            return
        self._cancel_ticks()
        self._transition("pause")
        _LOGGER.info("Timer paused at %d s", self._remaining)
        self._observer.on_status_text(PAUSED_LABEL)

    def resume(self) -> None:
        """Continue from the current ``remaining``.  No-op unless PAUSED."""
        if not self._allowed("resume"):
            return
        self._schedule_ticks()
        self._transition("resume")
        _LOGGER.info("Timer resumed at %d s", self._remaining)

    def stop(self) -> None:
        """Cancel the countdown from any state and return to STOPPED."""
        self._cancel_ticks()
        self._remaining = 0
        self._transition("stop")
        if self._alarm is not None:
            self._alarm.silence()
        _LOGGER.info("Timer stopped")
        self._observer.on_status_text(IDLE_LABEL)
        self._observer.on_stopped()

    def destroy(self) -> None:
        """Release the tick source and any pending alarm-silence timer.

        Safe to call more than once.  No observer callbacks or signals are
        emitted; the owning widget is going away.
        """
        self._cancel_ticks()
        if self._alarm is not None:
            self._alarm.silence()
        self._state = TimerState.STOPPED
        self._remaining = 0
        _LOGGER.debug("Countdown engine torn down")

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _allowed(self, action: str) -> bool:
        if next_state(self._state, action) is None:
            _LOGGER.debug("Ignoring %s while %s", action, self._state.value)
            return False
        return True

    def _transition(self, action: str) -> bool:
        target = next_state(self._state, action)
        if target is None:
            _LOGGER.debug("Ignoring %s while %s", action, self._state.value)
            return False
        self._state = target
        self.state_changed.emit(target)
        return True

    def _schedule_ticks(self) -> None:
        # Never two tick sources at once.
        self._cancel_ticks()
        timer = QTimer(self)
        timer.setInterval(self._interval_ms)
        timer.timeout.connect(self._on_tick)
        timer.start()
        self._tick_timer = timer

    def _cancel_ticks(self) -> None:
        timer = self._tick_timer
        if timer is None:
            return
        self._tick_timer = None
        timer.stop()
        timer.timeout.disconnect(self._on_tick)
        timer.deleteLater()

    def _on_tick(self) -> None:
        if self._state != TimerState.RUNNING:
            return
        timer = self._tick_timer

        self._observer.on_tick(format_hms(self._remaining))

        # The observer may have paused, stopped or restarted us.
        if self._state != TimerState.RUNNING or self._tick_timer is not timer:
            return

        if self._remaining <= 0:
            self._finish()
            return

        self._remaining -= 1

    def _finish(self) -> None:
        self._cancel_ticks()
        if not self._transition("finish"):
            return
        _LOGGER.info("Timer finished after %d s", self._duration)
        self._observer.on_status_text(IDLE_LABEL)
        self._observer.on_finished()
        if self._alarm is not None:
            self._alarm.ring()
