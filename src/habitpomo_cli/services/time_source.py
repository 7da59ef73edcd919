"""Wall clock and periodic tick delivery.

Everything runs on one thread: a ``PollingTimeSource`` never fires on its
own, the owning loop calls ``pump()`` and due callbacks run synchronously
inside that call. ``ManualTimeSource`` replaces the clocks with a counter so
countdowns can be driven deterministically.
"""

from __future__ import annotations

import itertools
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta

TickCallback = Callable[[], None]


@dataclass
class TickSubscription:
    """Handle returned by ``subscribe_tick``; pass it to ``cancel``."""

    interval: float
    callback: TickCallback
    next_due: float
    id: int = field(default_factory=itertools.count(1).__next__)
    cancelled: bool = False


class TimeSource(ABC):
    """Source of 'now' and of periodic ticks."""

    @abstractmethod
    def now(self) -> datetime:
        """Current wall-clock time (timezone aware)."""
        raise NotImplementedError("TimeSource.now() must be implemented")

    @abstractmethod
    def subscribe_tick(
        self, interval_seconds: float, callback: TickCallback
    ) -> TickSubscription:
        """Call *callback* every *interval_seconds* until cancelled."""
        raise NotImplementedError("TimeSource.subscribe_tick() must be implemented")

    @abstractmethod
    def cancel(self, subscription: TickSubscription) -> None:
        """Stop a subscription. Cancelling twice is harmless."""
        raise NotImplementedError("TimeSource.cancel() must be implemented")


class PollingTimeSource(TimeSource):
    """Tick source driven by the caller's loop."""

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], datetime] | None = None,
    ):
        self._clock = clock
        self._wall_clock = wall_clock or (lambda: datetime.now().astimezone())
        self._subscriptions: dict[int, TickSubscription] = {}

    def now(self) -> datetime:
        return self._wall_clock()

    def subscribe_tick(
        self, interval_seconds: float, callback: TickCallback
    ) -> TickSubscription:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        subscription = TickSubscription(
            interval=interval_seconds,
            callback=callback,
            next_due=self._clock() + interval_seconds,
        )
        self._subscriptions[subscription.id] = subscription
        return subscription

    def cancel(self, subscription: TickSubscription) -> None:
        subscription.cancelled = True
        self._subscriptions.pop(subscription.id, None)

    @property
    def active_subscriptions(self) -> int:
        return len(self._subscriptions)

    def next_due(self) -> float | None:
        """Clock reading at which the earliest subscription fires next."""
        if not self._subscriptions:
            return None
        return min(s.next_due for s in self._subscriptions.values())

    def pump(self) -> int:
        """Fire every callback that is due; returns how many ran.

        A subscription that fell behind fires once per missed interval.
        Callbacks may cancel any subscription, including their own.
        """
        fired = 0
        now = self._clock()
        while True:
            due = [
                s for s in self._subscriptions.values() if s.next_due <= now
            ]
            if not due:
                return fired
            subscription = min(due, key=lambda s: (s.next_due, s.id))
            subscription.next_due += subscription.interval
            subscription.callback()
            fired += 1


class ManualTimeSource(PollingTimeSource):
    """Deterministic time source whose clock only moves on ``advance()``."""

    def __init__(self, start: datetime):
        if start.tzinfo is None:
            raise ValueError("start must be timezone aware")
        self._start = start
        self._elapsed = 0.0
        super().__init__(
            clock=lambda: self._elapsed,
            wall_clock=lambda: self._start + timedelta(seconds=self._elapsed),
        )

    def advance(self, seconds: float) -> int:
        """Move time forward, firing ticks in order as their moments pass.

        ``now()`` reads the tick's own moment while its callback runs.
        """
        if seconds < 0:
            raise ValueError("Cannot move time backwards")
        target = self._elapsed + seconds
        fired = 0
        while True:
            upcoming = self.next_due()
            if upcoming is None or upcoming > target:
                break
            self._elapsed = max(self._elapsed, upcoming)
            fired += self.pump()
        self._elapsed = target
        return fired
