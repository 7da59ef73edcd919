"""Habit data models and their storage encoding.

The wire format is a JSON array of habits using camelCase field names
(``createdAt``, ``dailyPomodoros``, ``completedSessions``). Timestamps are
ISO 8601 with UTC offset, so a round trip is lossless.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, tzinfo

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from habitpomo_cli.utils.calendar import same_day


class _StoredModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DailyRecord(_StoredModel):
    """Per-day aggregate of completed sessions and note text for one habit.

    Attributes:
        date: Start of the day this record represents (compared by day only)
        completed_sessions: Work phases finished that day
        notes: Free text for the day; empty string means no note
    """

    date: datetime
    completed_sessions: int = Field(default=0, ge=0)
    notes: str = ""


class Habit(_StoredModel):
    """A habit the user logs pomodoros against.

    Attributes:
        id: Unique identifier (UUID4 string), never changes
        title: Display name
        description: Free text, may be empty
        created_at: Creation timestamp, never changes
        daily_pomodoros: One record per touched day, in first-touch order
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), frozen=True)
    title: str
    description: str = ""
    created_at: datetime = Field(frozen=True)
    daily_pomodoros: list[DailyRecord] = Field(default_factory=list)

    def record_for(self, moment: datetime, tz: tzinfo) -> DailyRecord | None:
        """Return the record for the day containing *moment*, if any."""
        for record in self.daily_pomodoros:
            if same_day(record.date, moment, tz):
                return record
        return None


@dataclass(frozen=True)
class HabitNote:
    """A non-empty note for today, paired with the habit it belongs to."""

    habit_id: str
    habit_title: str
    note: str


_HABIT_LIST = TypeAdapter(list[Habit])


def encode_habits(habits: list[Habit]) -> bytes:
    """Serialize the whole collection to one JSON blob."""
    return _HABIT_LIST.dump_json(habits, by_alias=True)


def decode_habits(blob: bytes) -> list[Habit]:
    """Parse a blob written by :func:`encode_habits`.

    Raises:
        pydantic.ValidationError: If the blob is not a valid habit list
    """
    return _HABIT_LIST.validate_json(blob)
