"""Habit management commands."""

from typing import Any

import typer

from habitpomo_cli.models.habit import Habit
from habitpomo_cli.services.config_service import (
    get_config_service,
    get_habit_repository,
)
from habitpomo_cli.utils.exit_codes import ERROR_INVALID_ARGS, SUCCESS
from habitpomo_cli.utils.typer_helpers import SuggestingGroup
from habitpomo_cli.utils.ui.console import get_console
from habitpomo_cli.utils.ui.formatters import (
    format_dict_table,
    format_info,
    format_output,
    format_single_item,
    format_success,
)
from habitpomo_cli.utils.uuid_utils import shorten_uuid

from .decorators import AppError, command_wrapper
from .utils import resolve_habit, warn_if_unsaved

app = typer.Typer(cls=SuggestingGroup, help="Habit management commands")
console = get_console()


def _summary(habit: Habit, today_sessions: int) -> dict[str, Any]:
    return {
        "id": shorten_uuid(habit.id),
        "title": habit.title,
        "today": today_sessions,
        "total": sum(r.completed_sessions for r in habit.daily_pomodoros),
        "created": habit.created_at.strftime("%Y-%m-%d"),
    }


@app.command("add")
@command_wrapper
def add_habit(
    title: str = typer.Argument(..., help="Habit title"),
    description: str = typer.Option(
        "", "--description", "-d", help="Optional description"
    ),
) -> None:
    """Create a new habit."""
    title = title.strip()
    if not title:
        raise AppError("Habit title cannot be empty", exit_code=ERROR_INVALID_ARGS)

    repository = get_habit_repository()
    habit = repository.add(title, description)
    format_success(f"Habit created: {habit.title} ({shorten_uuid(habit.id)})")
    warn_if_unsaved(repository)


@app.command("list")
@command_wrapper
def list_habits(
    output: str = typer.Option(
        None, "--output", "-o", help="Output format (pretty/json/yaml)"
    ),
) -> None:
    """List all habits with today's pomodoro count."""
    output = output or get_config_service().config.output.format
    repository = get_habit_repository()

    rows = []
    for habit in repository.habits:
        record = repository.today_record(habit.id)
        rows.append(_summary(habit, record.completed_sessions if record else 0))

    if not rows:
        format_info("No habits yet. Add one with 'habitpomo habits add TITLE'.")
        return

    if output == "pretty":
        format_dict_table(rows, title="Habits")
    else:
        format_output(rows, output)


@app.command("show")
@command_wrapper
def show_habit(
    habit_id: str = typer.Argument(..., help="Habit ID or prefix"),
    output: str = typer.Option(
        None, "--output", "-o", help="Output format (pretty/json/yaml)"
    ),
) -> None:
    """Show a habit and its daily history."""
    output = output or get_config_service().config.output.format
    repository = get_habit_repository()
    habit = resolve_habit(repository, habit_id)

    if output != "pretty":
        format_output(habit.model_dump(mode="json", by_alias=True), output)
        return

    record = repository.today_record(habit.id)
    format_single_item(
        {
            "id": habit.id,
            "title": habit.title,
            "description": habit.description or None,
            "created": habit.created_at.strftime("%Y-%m-%d %H:%M"),
            "pomodoros_today": record.completed_sessions if record else 0,
            "note_today": (record.notes if record else "") or None,
        }
    )

    if habit.daily_pomodoros:
        console.print()
        format_dict_table(
            [
                {
                    "date": r.date.strftime("%Y-%m-%d"),
                    "sessions": r.completed_sessions,
                    "notes": r.notes or None,
                }
                for r in habit.daily_pomodoros
            ],
            title="History",
        )


@app.command("edit")
@command_wrapper
def edit_habit(
    habit_id: str = typer.Argument(..., help="Habit ID or prefix"),
    title: str | None = typer.Option(None, "--title", "-t", help="New title"),
    description: str | None = typer.Option(
        None, "--description", "-d", help="New description"
    ),
) -> None:
    """Change a habit's title or description."""
    if title is None and description is None:
        raise AppError(
            "Nothing to change: pass --title and/or --description",
            exit_code=ERROR_INVALID_ARGS,
        )

    repository = get_habit_repository()
    habit = resolve_habit(repository, habit_id)

    if title is not None:
        if not title.strip():
            raise AppError("Habit title cannot be empty", exit_code=ERROR_INVALID_ARGS)
        habit.title = title.strip()
    if description is not None:
        habit.description = description

    repository.update(habit)
    format_success(f"Habit updated: {habit.title}")
    warn_if_unsaved(repository)


@app.command("delete")
@command_wrapper
def delete_habit(
    habit_id: str = typer.Argument(..., help="Habit ID or prefix"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a habit and all of its history."""
    repository = get_habit_repository()
    habit = resolve_habit(repository, habit_id)

    if not yes and not typer.confirm(f"Delete habit '{habit.title}'?"):
        format_info("Cancelled")
        raise typer.Exit(SUCCESS)

    repository.delete(habit.id)
    format_success(f"Habit deleted: {habit.title}")
    warn_if_unsaved(repository)
