"""habitpomo-cli - Pomodoro timer with per-habit daily logging."""

__version__ = "0.1.0"
