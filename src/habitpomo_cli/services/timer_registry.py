"""Live timers, at most one per habit.

The registry forwards every change of the timers it owns to its own
``changed`` signal, one pulse per registry operation, timer operation or
tick. When a timer leaves a work phase the habit is credited with a
completed session for today; leaving a break credits nothing.

A credited completion therefore pulses two signals: ``repository.changed``
fires first, from inside the phase listener, and ``registry.changed``
fires once the timer has settled in its new phase. Timer views watch the
registry; totals views watch the repository. A view that shows both only
needs the registry pulse, which always comes last.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from habitpomo_cli.models.focus.timer import Phase, SessionTimer
from habitpomo_cli.repositories.habit_repository import HabitRepository
from habitpomo_cli.services.time_source import TimeSource
from habitpomo_cli.utils.signals import Signal

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    timer: SessionTimer
    unsubscribe: list[Callable[[], None]]


class TimerRegistry:
    """Maps habit ids to their live SessionTimer."""

    def __init__(self, repository: HabitRepository, time_source: TimeSource):
        self._repository = repository
        self._time_source = time_source
        self._entries: dict[str, _Entry] = {}
        self.changed = Signal()

    def timer_for(self, habit_id: str) -> SessionTimer | None:
        entry = self._entries.get(habit_id)
        return entry.timer if entry else None

    def active_habit_ids(self) -> list[str]:
        return list(self._entries)

    def start_for(self, habit_id: str) -> SessionTimer:
        """Start (or resume) the habit's timer, creating a fresh one if needed."""
        with self.changed.coalesce():
            entry = self._entries.get(habit_id)
            if entry is None:
                entry = self._create(habit_id)
            entry.timer.start()
            self.changed.emit()
        return entry.timer

    def stop_for(self, habit_id: str) -> None:
        """Pause and forget the habit's timer; progress in the phase is lost."""
        entry = self._entries.pop(habit_id, None)
        if entry is None:
            return
        for unsubscribe in entry.unsubscribe:
            unsubscribe()
        entry.timer.pause()
        logger.info("timer stopped for habit %s", habit_id)
        self.changed.emit()

    def stop_all(self) -> None:
        with self.changed.coalesce():
            for habit_id in list(self._entries):
                self.stop_for(habit_id)

    def _create(self, habit_id: str) -> _Entry:
        timer = SessionTimer(self._time_source)

        def on_phase_complete(finished: Phase, next_phase: Phase) -> None:
            logger.info(
                "habit %s: %s phase finished", habit_id, finished.value
            )
            if finished is Phase.WORK and next_phase is Phase.BREAK:
                self._repository.record_completed_session(habit_id)

        entry = _Entry(
            timer=timer,
            unsubscribe=[
                timer.on_phase_complete(on_phase_complete),
                timer.changed.subscribe(self.changed.emit),
            ],
        )
        self._entries[habit_id] = entry
        logger.info("timer created for habit %s", habit_id)
        return entry
