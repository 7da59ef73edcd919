"""Payload-free change notification with coalescing.

A ``Signal`` is an invalidation pulse: subscribers are told *that* something
changed, never *what*. Emits made inside ``coalesce()`` collapse into a
single pulse delivered when the outermost block exits.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

Callback = Callable[[], None]


class Signal:
    """Observer registry for a single 'changed' event."""

    def __init__(self) -> None:
        self._subscribers: list[Callback] = []
        self._depth = 0
        self._pending = False

    def subscribe(self, callback: Callback) -> Callable[[], None]:
        """Register *callback*; returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def emit(self) -> None:
        """Notify subscribers now, or once at the end of the current batch."""
        if self._depth:
            self._pending = True
            return
        self._fire()

    @contextmanager
    def coalesce(self) -> Iterator[None]:
        """Fold every emit inside the block into at most one pulse."""
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1
            if self._depth == 0 and self._pending:
                self._pending = False
                self._fire()

    def _fire(self) -> None:
        # Snapshot so callbacks may unsubscribe while being notified
        for callback in list(self._subscribers):
            callback()
