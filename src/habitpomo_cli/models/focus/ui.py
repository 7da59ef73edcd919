"""Full-screen timer UI for focus mode."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Literal, Protocol

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from .timer import Phase, SessionTimer

FocusResult = Literal["stopped", "interrupted"]


class KeySource(Protocol):
    def get_key(self) -> str | None: ...

    def stop(self) -> None: ...


class TimerDisplay:
    """Manages the fullscreen timer display."""

    def __init__(self, console: Console | None = None, refresh_per_second: int = 4):
        self.console = console or Console()
        self.refresh_per_second = refresh_per_second

    def create_layout(
        self, habit_title: str, timer: SessionTimer, sessions_today: int = 0
    ) -> Layout:
        """Create the timer layout with all components."""
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=3),
        )

        color = "cyan" if timer.phase is Phase.WORK else "green"
        if not timer.running:
            title = f"PAUSED - {timer.phase.label}"
            color = "yellow"
        else:
            title = timer.phase.label

        header_text = Text(f"🍅  {title}", style=f"bold {color}", justify="center")
        layout["header"].update(Align.center(header_text, vertical="middle"))

        body = self._create_body_content(habit_title, timer, sessions_today, color)
        layout["body"].update(Align.center(body, vertical="middle"))

        footer_text = self._create_footer_text(timer.running)
        layout["footer"].update(Align.center(footer_text, vertical="middle"))

        return layout

    def _create_body_content(
        self, habit_title: str, timer: SessionTimer, sessions_today: int, color: str
    ) -> Group:
        components = [
            Text(habit_title[:50], style="bold white", justify="center"),
            Text(""),
            Text(timer.formatted_time(), style=f"bold {color}", justify="center"),
            Text(""),
        ]

        bar_width = 40
        progress_pct = int(timer.progress * 100)
        filled = int(bar_width * timer.progress)
        progress_text = Text(justify="center")
        progress_text.append(
            "▓" * filled + "░" * (bar_width - filled) + f"  {progress_pct}%",
            style="dim",
        )
        components.append(progress_text)
        components.append(Text(""))
        components.append(
            Text(f"Pomodoros today: {sessions_today}", style="dim", justify="center")
        )
        return Group(*components)

    def _create_footer_text(self, running: bool) -> Text:
        """Create footer with keyboard hints."""
        toggle = "'p' to pause" if running else "'p' to start"
        hints = f"Press {toggle}  •  'r' to reset  •  's' to skip  •  'q' to stop"
        return Text(hints, style="dim", justify="center")

    def run_timer(
        self,
        habit_title: str,
        timer: SessionTimer,
        keyboard: KeySource,
        pump: Callable[[], object],
        on_toggle: Callable[[], None],
        sessions_today: Callable[[], int] = lambda: 0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> FocusResult:
        """
        Run the fullscreen timer until the user stops it.

        ``pump`` delivers due ticks to the timer; ``on_toggle`` starts or
        pauses it. Returns 'stopped' or 'interrupted'.
        """
        interval = 1 / self.refresh_per_second
        try:
            with Live(
                self.create_layout(habit_title, timer, sessions_today()),
                console=self.console,
                refresh_per_second=self.refresh_per_second,
                screen=True,
            ) as live:
                while True:
                    key = keyboard.get_key()

                    if key == "p":
                        on_toggle()
                    elif key == "r":
                        timer.reset()
                    elif key == "s":
                        timer.skip()
                    elif key == "q":
                        return "stopped"

                    pump()
                    live.update(
                        self.create_layout(habit_title, timer, sessions_today())
                    )
                    sleep(interval)

        except KeyboardInterrupt:
            return "interrupted"
        finally:
            keyboard.stop()


def show_stopped_message(
    habit_title: str, sessions_today: int, console: Console | None = None
):
    """Show a summary once the focus screen closes."""
    console = console or Console()

    panel = Panel(
        f"""[bold]Focus session ended[/bold]

Habit: {habit_title}
Pomodoros today: {sessions_today}""",
        border_style="green" if sessions_today else "yellow",
        padding=(1, 2),
    )

    console.print(panel)
