"""Focus mode: full-screen Pomodoro timer for one habit."""

import typer

from habitpomo_cli.models.focus.keyboard import get_keyboard_handler
from habitpomo_cli.models.focus.ui import TimerDisplay, show_stopped_message
from habitpomo_cli.services.config_service import (
    get_config_service,
    get_habit_repository,
    get_time_source,
    get_timer_registry,
)
from habitpomo_cli.utils.logger import get_logger
from habitpomo_cli.utils.ui.console import get_console

from .decorators import command_wrapper
from .utils import resolve_habit, warn_if_unsaved

app = typer.Typer()
console = get_console()


@app.command("focus")
@command_wrapper
def focus(
    habit_id: str = typer.Argument(..., help="Habit ID or prefix"),
) -> None:
    """Run the Pomodoro timer for a habit.

    Keys: p start/pause, r reset, s skip phase, q stop.
    Each finished work phase counts as one pomodoro for today.
    """
    config = get_config_service().config
    repository = get_habit_repository()
    registry = get_timer_registry()
    time_source = get_time_source()
    habit = resolve_habit(repository, habit_id)

    timer = registry.start_for(habit.id)
    if config.focus.bell:
        timer.on_phase_complete(lambda finished, next_phase: console.bell())

    def sessions_today() -> int:
        record = repository.today_record(habit.id)
        return record.completed_sessions if record else 0

    def toggle() -> None:
        if timer.running:
            timer.pause()
        else:
            registry.start_for(habit.id)

    display = TimerDisplay(console, refresh_per_second=config.focus.refresh_per_second)
    try:
        result = display.run_timer(
            habit.title,
            timer,
            keyboard=get_keyboard_handler(),
            pump=time_source.pump,
            on_toggle=toggle,
            sessions_today=sessions_today,
        )
    finally:
        registry.stop_for(habit.id)

    get_logger("commands.focus").info("focus on %s ended: %s", habit.id, result)
    show_stopped_message(habit.title, sessions_today(), console)
    warn_if_unsaved(repository)
