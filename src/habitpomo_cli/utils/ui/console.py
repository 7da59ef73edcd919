"""Console utilities for habitpomo-cli.

Every module prints through a console from ``get_console`` so the
``output.color`` setting reaches all of them, including consoles created
at import time before the configuration was read.
"""

from rich.console import Console

_consoles: dict[bool, Console] = {}
_color = True


def get_console(highlight: bool = True) -> Console:
    """Get a shared Rich Console instance for consistent output formatting."""
    console = _consoles.get(highlight)
    if console is None:
        console = Console(highlight=highlight, no_color=not _color)
        _consoles[highlight] = console
    return console


def set_color(enabled: bool) -> None:
    """Turn colour on or off for the shared consoles."""
    global _color
    _color = enabled
    for console in _consoles.values():
        console.no_color = not enabled
