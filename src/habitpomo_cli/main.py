"""Main entry point for habitpomo-cli."""

import typer

from habitpomo_cli.commands import config, dashboard, focus, habits, notes
from habitpomo_cli.commands import version_command
from habitpomo_cli.services.config_service import get_config_service
from habitpomo_cli.utils.exit_codes import ERROR_GENERAL
from habitpomo_cli.utils.logger import configure_logging
from habitpomo_cli.utils.typer_helpers import SuggestingGroup
from habitpomo_cli.utils.ui.console import set_color
from habitpomo_cli.utils.ui.formatters import format_error

app = typer.Typer(
    name="habitpomo",
    cls=SuggestingGroup,
    help="Pomodoro timer with per-habit daily logging",
    no_args_is_help=True,
)


@app.callback()
def main() -> None:
    """Pomodoro timer with per-habit daily logging."""
    # Runs before every subcommand: apply output and logging settings
    try:
        settings = get_config_service().config
    except RuntimeError as e:
        format_error(str(e))
        raise typer.Exit(ERROR_GENERAL) from e

    set_color(settings.output.color)
    configure_logging(settings.log_level)


app.add_typer(habits.app, name="habits", help="Habit management commands")
app.add_typer(notes.app, name="notes", help="Today's notes per habit")
app.add_typer(config.app, name="config", help="Configuration management")

# Top-level commands
app.add_typer(focus.app)
app.add_typer(dashboard.app)
app.add_typer(version_command.app)


if __name__ == "__main__":
    app()
