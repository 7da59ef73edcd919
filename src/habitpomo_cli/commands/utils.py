"""Shared helpers for habit commands."""

from habitpomo_cli.models.habit import Habit
from habitpomo_cli.repositories.habit_repository import HabitRepository
from habitpomo_cli.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from habitpomo_cli.utils.ui.formatters import format_warning
from habitpomo_cli.utils.uuid_utils import AmbiguousPrefixError

from .decorators import AppError


def resolve_habit(repository: HabitRepository, habit_id: str) -> Habit:
    """Find a habit by id or unique prefix, or fail the command."""
    try:
        habit = repository.resolve(habit_id)
    except AmbiguousPrefixError as e:
        raise AppError(str(e), exit_code=ERROR_INVALID_ARGS) from e
    if habit is None:
        raise AppError(f"Habit '{habit_id}' not found", exit_code=ERROR_NOT_FOUND)
    return habit


def warn_if_unsaved(repository: HabitRepository) -> None:
    """Tell the user when the last change only lives in memory."""
    if repository.save_error is not None:
        format_warning(f"Changes could not be saved: {repository.save_error}")
