"""Pomodoro countdown for a single habit.

State is ``phase`` (work/break) x ``running``. Countdown ticks arrive once a
second from a ``TimeSource`` while running. Reaching zero, or ``skip()``,
completes the phase: the timer pauses, flips phase, refills ``remaining``
and tells its phase listeners which phase just finished.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from habitpomo_cli.services.time_source import TickSubscription, TimeSource
from habitpomo_cli.utils.signals import Signal
from habitpomo_cli.utils.ui.formatters import format_countdown

WORK_DURATION = 25 * 60  # seconds
BREAK_DURATION = 5 * 60  # seconds
TICK_INTERVAL = 1  # seconds

PhaseListener = Callable[["Phase", "Phase"], None]


class Phase(str, Enum):
    """Current mode of a SessionTimer."""

    WORK = "work"
    BREAK = "break"

    @property
    def duration(self) -> int:
        """Full length of this phase in seconds."""
        return WORK_DURATION if self is Phase.WORK else BREAK_DURATION

    @property
    def label(self) -> str:
        return "Work Time" if self is Phase.WORK else "Break Time"

    def toggled(self) -> Phase:
        return Phase.BREAK if self is Phase.WORK else Phase.WORK


class SessionTimer:
    """Work/break countdown driven by one-second ticks."""

    def __init__(self, time_source: TimeSource, phase: Phase = Phase.WORK):
        self._time_source = time_source
        self._subscription: TickSubscription | None = None
        self._phase_listeners: list[PhaseListener] = []

        self.phase = phase
        self.remaining = phase.duration
        self.running = False
        self.changed = Signal()

    def __repr__(self) -> str:
        state = "running" if self.running else "paused"
        return f"<SessionTimer {self.phase.value} {self.formatted_time()} {state}>"

    @property
    def is_work_session(self) -> bool:
        return self.phase is Phase.WORK

    @property
    def progress(self) -> float:
        """Fraction of the current phase already elapsed, 0.0 to 1.0."""
        total = self.phase.duration
        return (total - self.remaining) / total

    def formatted_time(self) -> str:
        return format_countdown(self.remaining)

    def on_phase_complete(self, listener: PhaseListener) -> Callable[[], None]:
        """Register ``listener(finished, next)``; returns an unsubscribe function."""
        self._phase_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._phase_listeners:
                self._phase_listeners.remove(listener)

        return unsubscribe

    def start(self) -> None:
        """Begin counting down. Does nothing while already running."""
        if self.running:
            return
        self._cancel_subscription()
        self._subscription = self._time_source.subscribe_tick(
            TICK_INTERVAL, self.tick
        )
        self.running = True
        self.changed.emit()

    def pause(self) -> None:
        """Stop counting down, keeping ``remaining``."""
        if not self.running and self._subscription is None:
            return
        self._cancel_subscription()
        self.running = False
        self.changed.emit()

    def reset(self) -> None:
        """Pause and refill the current phase."""
        with self.changed.coalesce():
            self.pause()
            self.remaining = self.phase.duration
            self.changed.emit()

    def skip(self) -> None:
        """Finish the current phase immediately."""
        self._complete_phase()

    def tick(self) -> None:
        """Account for one elapsed second; ignored while paused."""
        if not self.running:
            return
        if self.remaining <= 0:
            self._complete_phase()
            return
        self.remaining -= 1
        if self.remaining == 0:
            self._complete_phase()
        else:
            self.changed.emit()

    def _complete_phase(self) -> None:
        with self.changed.coalesce():
            self.pause()
            finished = self.phase
            self.phase = finished.toggled()
            self.remaining = self.phase.duration
            for listener in list(self._phase_listeners):
                listener(finished, self.phase)
            self.changed.emit()

    def _cancel_subscription(self) -> None:
        if self._subscription is not None:
            self._time_source.cancel(self._subscription)
            self._subscription = None
