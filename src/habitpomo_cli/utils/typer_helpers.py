"""Command lookup for habitpomo groups.

Command names resolve like habit ids: an exact name or any unique prefix
works (``habitpomo dash``, ``habitpomo habits sh ID``). A name that matches
nothing gets "did you mean" suggestions and exits with ERROR_INVALID_ARGS.
"""

from difflib import get_close_matches

import click
import typer
from typer.core import TyperGroup

from habitpomo_cli.utils.exit_codes import ERROR_INVALID_ARGS
from habitpomo_cli.utils.ui.console import get_console
from habitpomo_cli.utils.ui.formatters import format_error


class SuggestingGroup(TyperGroup):
    """Typer group with prefix matching and typo suggestions."""

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        command = super().get_command(ctx, cmd_name)
        if command is not None:
            return command

        matches = [n for n in self.list_commands(ctx) if n.startswith(cmd_name)]
        if len(matches) == 1:
            return super().get_command(ctx, matches[0])
        return None

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            if not args:
                raise
            attempted = args[0]
            names = self.list_commands(ctx)
            ambiguous = [n for n in names if n.startswith(attempted)]
            suggestions = ambiguous or get_close_matches(attempted, names, n=3, cutoff=0.6)
            if not suggestions:
                raise

            format_error(f'unknown command "{attempted}" for "{ctx.info_name}"')
            console = get_console()
            console.print()
            if len(suggestions) == 1:
                console.print("[yellow]Did you mean this?[/yellow]")
            else:
                console.print("[yellow]Did you mean one of these?[/yellow]")
            for suggestion in suggestions:
                console.print(f"        {suggestion}")
            raise typer.Exit(ERROR_INVALID_ARGS) from e
