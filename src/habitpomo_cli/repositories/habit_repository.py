"""In-memory habit collection with same-day aggregation.

The repository owns every Habit. Callers get copies; changes go back in
through ``update`` (or the helpers built on it), and each mutating call
writes the whole collection through the storage gateway and emits one
``changed`` pulse.

"Today" is recomputed from the time source on every call in the
configured timezone, so a midnight rollover between two calls is seen.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, tzinfo

from pydantic import ValidationError

from habitpomo_cli.models.habit import (
    DailyRecord,
    Habit,
    HabitNote,
    decode_habits,
    encode_habits,
)
from habitpomo_cli.repositories.repository import StorageGateway
from habitpomo_cli.services.time_source import TimeSource
from habitpomo_cli.utils.calendar import start_of_day
from habitpomo_cli.utils.signals import Signal
from habitpomo_cli.utils.uuid_utils import resolve_prefix

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Outcome of reading the stored collection.

    ``error`` is set when a blob existed but could not be read or parsed;
    ``habits`` is then empty. A missing blob is not an error.
    """

    habits: list[Habit] = field(default_factory=list)
    error: Exception | None = None


def load_collection(gateway: StorageGateway) -> LoadResult:
    """Read and decode the collection, falling back to empty on any failure."""
    try:
        blob = gateway.load()
    except OSError as e:
        return LoadResult(error=e)

    if blob is None:
        return LoadResult()

    try:
        return LoadResult(habits=decode_habits(blob))
    except ValidationError as e:
        return LoadResult(error=e)


class HabitRepository:
    """Owns the habit collection and answers 'today' questions about it."""

    def __init__(self, gateway: StorageGateway, time_source: TimeSource, tz: tzinfo):
        self._gateway = gateway
        self._time_source = time_source
        self.tz = tz
        self.changed = Signal()
        self.save_error: Exception | None = None

        result = load_collection(gateway)
        self._habits: list[Habit] = result.habits
        self.load_error = result.error
        if result.error is not None:
            logger.warning(
                "could not load saved habits, starting empty: %s", result.error
            )
        else:
            logger.debug("loaded %d habits", len(self._habits))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def habits(self) -> list[Habit]:
        """Snapshot of all habits in insertion order."""
        return [h.model_copy(deep=True) for h in self._habits]

    def __len__(self) -> int:
        return len(self._habits)

    def get(self, habit_id: str) -> Habit | None:
        habit = self._find(habit_id)
        return habit.model_copy(deep=True) if habit else None

    def resolve(self, id_or_prefix: str) -> Habit | None:
        """Look a habit up by full id or unique id prefix.

        Raises:
            AmbiguousPrefixError: If the prefix matches several habits
        """
        habit_id = resolve_prefix(id_or_prefix, (h.id for h in self._habits))
        return self.get(habit_id) if habit_id else None

    def today_record(self, habit_id: str) -> DailyRecord | None:
        """Today's record for a habit, or None if it has none yet."""
        habit = self._find(habit_id)
        if habit is None:
            return None
        record = habit.record_for(self._now(), self.tz)
        return record.model_copy() if record else None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, title: str, description: str = "") -> Habit:
        """Create a habit with a fresh id and no daily records."""
        habit = Habit(title=title, description=description, created_at=self._now())
        self._habits.append(habit)
        logger.info("added habit %s (%s)", habit.id, title)
        self._persist()
        self.changed.emit()
        return habit.model_copy(deep=True)

    def update(self, habit: Habit) -> None:
        """Replace the stored habit with the same id; unknown ids are ignored.

        ``created_at`` is kept from the stored habit.
        """
        for index, existing in enumerate(self._habits):
            if existing.id == habit.id:
                self._habits[index] = habit.model_copy(
                    update={"created_at": existing.created_at}, deep=True
                )
                self._persist()
                self.changed.emit()
                return
        logger.debug("update ignored, no habit %s", habit.id)

    def delete(self, habit_id: str) -> None:
        self._habits = [h for h in self._habits if h.id != habit_id]
        logger.info("deleted habit %s", habit_id)
        self._persist()
        self.changed.emit()

    def record_completed_session(self, habit_id: str) -> None:
        """Credit one finished work phase to today's record."""
        habit, record = self._editable_today(habit_id)
        if habit is None:
            return
        record.completed_sessions += 1
        logger.info(
            "habit %s: %d sessions today", habit_id, record.completed_sessions
        )
        self.update(habit)

    def set_note(self, habit_id: str, text: str) -> None:
        """Overwrite today's note for a habit."""
        habit, record = self._editable_today(habit_id)
        if habit is None:
            return
        record.notes = text
        self.update(habit)

    def clear_note(self, habit_id: str) -> None:
        """Empty today's note; does nothing when the habit has no record today."""
        current = self._find(habit_id)
        if current is None or current.record_for(self._now(), self.tz) is None:
            return
        self.set_note(habit_id, "")

    # ------------------------------------------------------------------
    # Today's aggregates
    # ------------------------------------------------------------------

    def todays_total_sessions(self) -> int:
        now = self._now()
        return sum(
            record.completed_sessions
            for record in (h.record_for(now, self.tz) for h in self._habits)
            if record is not None
        )

    def todays_habits_touched(self) -> int:
        now = self._now()
        return sum(1 for h in self._habits if h.record_for(now, self.tz) is not None)

    def todays_notes(self) -> list[str]:
        return [entry.note for entry in self.todays_notes_with_habit()]

    def todays_notes_with_habit(self) -> list[HabitNote]:
        now = self._now()
        notes = []
        for habit in self._habits:
            record = habit.record_for(now, self.tz)
            if record is not None and record.notes:
                notes.append(HabitNote(habit.id, habit.title, record.notes))
        return notes

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _now(self) -> datetime:
        return self._time_source.now()

    def _find(self, habit_id: str) -> Habit | None:
        for habit in self._habits:
            if habit.id == habit_id:
                return habit
        return None

    def _editable_today(
        self, habit_id: str
    ) -> tuple[Habit, DailyRecord] | tuple[None, None]:
        """Copy of the habit plus its today-record, created if missing."""
        current = self._find(habit_id)
        if current is None:
            logger.debug("no habit %s", habit_id)
            return None, None

        habit = current.model_copy(deep=True)
        now = self._now()
        record = habit.record_for(now, self.tz)
        if record is None:
            record = DailyRecord(date=start_of_day(now, self.tz))
            habit.daily_pomodoros.append(record)
        return habit, record

    def _persist(self) -> None:
        # Write failures are logged and kept on save_error, never raised
        try:
            self._gateway.save(encode_habits(self._habits))
        except Exception as e:
            self.save_error = e
            logger.error("failed to save habits: %s", e, exc_info=True)
        else:
            self.save_error = None
