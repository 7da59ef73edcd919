"""Focus mode - Pomodoro timer for habitpomo-cli."""

from .timer import BREAK_DURATION, WORK_DURATION, Phase, SessionTimer

__all__ = [
    "Phase",
    "SessionTimer",
    "WORK_DURATION",
    "BREAK_DURATION",
]
