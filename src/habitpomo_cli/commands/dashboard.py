"""Today's progress across all habits."""

from datetime import datetime

import typer
from rich.panel import Panel
from rich.table import Table

from habitpomo_cli.services.config_service import (
    get_config_service,
    get_habit_repository,
    get_time_source,
)
from habitpomo_cli.utils.ui.console import get_console
from habitpomo_cli.utils.ui.formatters import format_output

from .decorators import command_wrapper

app = typer.Typer()
console = get_console()


@app.command("dashboard")
@command_wrapper
def dashboard(
    output: str = typer.Option(
        None, "--output", "-o", help="Output format (pretty/json/yaml)"
    ),
) -> None:
    """Show today's pomodoros, habits worked on and notes."""
    config_service = get_config_service()
    output = output or config_service.config.output.format
    repository = get_habit_repository()
    today = get_time_source().now().astimezone(config_service.timezone)

    summary = {
        "date": today.date().isoformat(),
        "total_pomodoros": repository.todays_total_sessions(),
        "habits_worked_on": repository.todays_habits_touched(),
        "notes": [
            {"habit_id": n.habit_id, "habit": n.habit_title, "note": n.note}
            for n in repository.todays_notes_with_habit()
        ],
    }

    if output != "pretty":
        format_output(summary, output)
        return

    date_str = datetime.fromisoformat(summary["date"]).strftime("%B %d, %Y")
    console.print(f"\n[bold cyan]🍅 Today's Progress - {date_str}[/bold cyan]\n")

    stats = Table.grid(padding=(0, 4))
    stats.add_row(
        f"[blue]Total Pomodoros[/blue]\n[bold]{summary['total_pomodoros']}[/bold]",
        f"[green]Habits Worked On[/green]\n[bold]{summary['habits_worked_on']}[/bold]",
    )
    console.print(stats)

    if summary["notes"]:
        lines = [
            f"[bold blue]{n['habit']}[/bold blue]\n{n['note']}" for n in summary["notes"]
        ]
        console.print()
        console.print(Panel("\n\n".join(lines), title="Today's Notes", padding=(1, 2)))
    console.print()
