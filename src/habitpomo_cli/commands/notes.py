"""Commands for today's per-habit notes."""

import typer

from habitpomo_cli.services.config_service import (
    get_config_service,
    get_habit_repository,
)
from habitpomo_cli.utils.typer_helpers import SuggestingGroup
from habitpomo_cli.utils.ui.console import get_console
from habitpomo_cli.utils.ui.formatters import format_info, format_output, format_success
from habitpomo_cli.utils.uuid_utils import shorten_uuid

from .decorators import command_wrapper
from .utils import resolve_habit, warn_if_unsaved

app = typer.Typer(cls=SuggestingGroup, help="Today's notes per habit")
console = get_console()


@app.command("set")
@command_wrapper
def set_note(
    habit_id: str = typer.Argument(..., help="Habit ID or prefix"),
    text: str = typer.Argument(..., help="Note text (replaces today's note)"),
) -> None:
    """Save today's note for a habit."""
    repository = get_habit_repository()
    habit = resolve_habit(repository, habit_id)
    repository.set_note(habit.id, text)
    format_success(f"Note saved for {habit.title}")
    warn_if_unsaved(repository)


@app.command("clear")
@command_wrapper
def clear_note(
    habit_id: str = typer.Argument(..., help="Habit ID or prefix"),
) -> None:
    """Remove today's note for a habit."""
    repository = get_habit_repository()
    habit = resolve_habit(repository, habit_id)
    record = repository.today_record(habit.id)
    if record is None or not record.notes:
        format_info(f"No note today for {habit.title}")
        return
    repository.clear_note(habit.id)
    format_success(f"Note cleared for {habit.title}")
    warn_if_unsaved(repository)


@app.command("list")
@command_wrapper
def list_notes(
    output: str = typer.Option(
        None, "--output", "-o", help="Output format (pretty/json/yaml)"
    ),
) -> None:
    """Show today's notes across all habits."""
    output = output or get_config_service().config.output.format
    notes = get_habit_repository().todays_notes_with_habit()

    if not notes:
        format_info("No notes today")
        return

    if output != "pretty":
        format_output(
            [
                {"habit_id": n.habit_id, "habit": n.habit_title, "note": n.note}
                for n in notes
            ],
            output,
        )
        return

    for entry in notes:
        console.print(
            f"[bold blue]{entry.habit_title}[/bold blue] [dim]({shorten_uuid(entry.habit_id)})[/dim]"
        )
        console.print(f"  {entry.note}")
