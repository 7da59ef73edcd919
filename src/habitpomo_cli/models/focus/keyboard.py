"""Non-blocking single-key input for the focus screen."""

from __future__ import annotations

import sys


class KeyboardHandler:
    """Reads keypresses from a POSIX terminal in cbreak mode."""

    def __init__(self):
        self.fd = sys.stdin.fileno()
        self.old_settings = None
        self._setup()

    def _setup(self):
        """Setup terminal for non-blocking input."""
        import termios
        import tty

        try:
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except (termios.error, OSError):
            # Not a terminal (piped input, test runner)
            self.old_settings = None

    def get_key(self) -> str | None:
        """
        Get a single keypress without blocking.

        Returns the key character or None if no key pressed.
        """
        import select

        try:
            if select.select([sys.stdin], [], [], 0)[0]:
                key = sys.stdin.read(1)
                return key.lower() if key else None
        except (OSError, ValueError):
            return None
        return None

    def stop(self):
        """Restore terminal settings."""
        if self.old_settings:
            import termios

            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)


class WindowsKeyboardHandler:
    """Keyboard handler for Windows using msvcrt."""

    def __init__(self):
        import msvcrt

        self.msvcrt = msvcrt

    def get_key(self) -> str | None:
        """Get key on Windows."""
        if self.msvcrt.kbhit():
            key = self.msvcrt.getch()
            if isinstance(key, bytes):
                key = key.decode("utf-8", errors="ignore")
            return key.lower()
        return None

    def stop(self):
        """No cleanup needed on Windows."""


def get_keyboard_handler() -> KeyboardHandler | WindowsKeyboardHandler:
    if sys.platform == "win32":
        return WindowsKeyboardHandler()
    return KeyboardHandler()
