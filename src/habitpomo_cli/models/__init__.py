"""habitpomo-cli domain models.

Pydantic models for habits and their daily records, plus the application
configuration. The focus subpackage holds the Pomodoro timer.
"""

from .config_models import AppConfig, FocusConfig, OutputConfig
from .habit import DailyRecord, Habit, HabitNote, decode_habits, encode_habits

__all__ = [
    "AppConfig",
    "FocusConfig",
    "OutputConfig",
    "DailyRecord",
    "Habit",
    "HabitNote",
    "decode_habits",
    "encode_habits",
]
