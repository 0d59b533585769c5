"""Rich terminal rendering and effect hooks."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from hourglass.easing import blend
from hourglass.encouragement import break_over_message, focus_done_message
from hourglass.machine import TimerEffects
from hourglass.models import (
    DurationConfig,
    DurationTarget,
    Mode,
    Preferences,
    SessionRecord,
    Theme,
    TimerSnapshot,
)

log = logging.getLogger(__name__)

console = Console()

BAR_WIDTH = 30

# (calm, urgent) colour stops of the hourglass gradient.
_GRADIENT: dict[Theme, dict[Mode, tuple[str, str]]] = {
    Theme.DARK: {
        Mode.WORK: ("#6a9fb5", "#e06c75"),
        Mode.BREAK: ("#98c379", "#e5c07b"),
    },
    Theme.LIGHT: {
        Mode.WORK: ("#1f5f8b", "#c0392b"),
        Mode.BREAK: ("#2e7d32", "#b9770e"),
    },
}

_BORDER: dict[Theme, str] = {
    Theme.DARK: "grey50",
    Theme.LIGHT: "grey30",
}

_RECORD_ICON: dict[Mode, str] = {
    Mode.WORK: "●",
    Mode.BREAK: "○",
}

_TARGET_LABEL: dict[DurationTarget, str] = {
    DurationTarget.WORK: "Focus",
    DurationTarget.BREAK: "Break",
    DurationTarget.LONG_BREAK: "Long break",
}


def format_time(seconds: int) -> str:
    """Format seconds as MM:SS (minutes may exceed 59)."""
    mins, secs = divmod(max(0, seconds), 60)
    return f"{mins:02d}:{secs:02d}"


def gradient_colour(snapshot: TimerSnapshot, theme: Theme) -> str:
    calm, urgent = _GRADIENT[theme][snapshot.mode]
    return blend(calm, urgent, snapshot.urgency)


def hourglass_bar(snapshot: TimerSnapshot, theme: Theme, width: int = BAR_WIDTH) -> Text:
    """A bar that drains from full to empty as the interval runs down."""
    filled = round(snapshot.pct * width)
    bar = Text()
    bar.append("█" * filled, style=gradient_colour(snapshot, theme))
    bar.append("░" * (width - filled), style="dim")
    return bar


def ledger_strip(records: Sequence[SessionRecord]) -> Text:
    strip = Text()
    for record in records:
        style = "bold" if record.kind is Mode.WORK else "dim"
        strip.append(_RECORD_ICON[record.kind] + " ", style=style)
    return strip


def render_snapshot(snapshot: TimerSnapshot, prefs: Optional[Preferences] = None) -> Panel:
    """Build the full timer view for one snapshot."""
    prefs = prefs or Preferences()
    theme = prefs.theme
    colour = gradient_colour(snapshot, theme)

    clock = Text(format_time(snapshot.remaining_seconds), style=f"bold {colour}", justify="center")
    state = "running" if snapshot.is_running else "paused"
    footer = Text(justify="center")
    footer.append(f"{state}  ·  {snapshot.work_count} focus done")
    if prefs.muted:
        footer.append("  ·  muted", style="dim")

    parts = [clock, Text(justify="center").append_text(hourglass_bar(snapshot, theme)), footer]
    if snapshot.ledger:
        parts.append(Text(justify="center").append_text(ledger_strip(snapshot.ledger)))

    return Panel(
        Group(*parts),
        title=snapshot.label,
        border_style=_BORDER[theme],
        padding=(1, 4),
    )


class TerminalEffects(TimerEffects):
    """Bell and messages for the terminal."""

    def __init__(self, prefs: Preferences, out: Optional[Console] = None) -> None:
        self.prefs = prefs
        self.out = out or console

    def on_interval_completed(self, finished: Mode, long_break_next: bool) -> None:
        if not self.prefs.muted:
            self.out.bell()
        if finished is Mode.WORK:
            message = focus_done_message(long_break_next)
        elif finished is Mode.BREAK:
            message = break_over_message()
        else:
            raise ValueError(f"unknown mode: {finished!r}")
        print_nudge(message, out=self.out)

    def on_start_pause(self, running: bool) -> None:
        log.debug("Timer %s", "running" if running else "paused")

    def on_reset(self) -> None:
        log.debug("Timer reset")


def print_history(
    records: Sequence[SessionRecord],
    work_count: int,
    long_break_next: bool,
) -> None:
    """Print the session ledger as a table."""
    if not records:
        console.print(Panel("No completed sessions yet.", title="History", border_style="dim"))
        return

    table = Table(show_header=True, box=None, pad_edge=False)
    table.add_column("#", width=4)
    table.add_column("kind")
    table.add_column("completed")

    for index, record in enumerate(records, start=1):
        style = "bold cyan" if record.kind is Mode.WORK else "green"
        table.add_row(
            str(index),
            "focus" if record.kind is Mode.WORK else "break",
            record.completed_at.strftime("%Y-%m-%d %H:%M"),
            style=style,
        )

    console.print(Panel(table, title="History", border_style="blue"))
    next_break = "long" if long_break_next else "regular"
    console.print(f"Focus sessions: {work_count}  ·  next break after focus: {next_break}")


def print_settings(config: DurationConfig, prefs: Preferences) -> None:
    lines = [
        f"{label}: {config.minutes_for(target)} min" for target, label in _TARGET_LABEL.items()
    ]
    lines += [
        "",
        f"Theme: {prefs.theme.value}",
        f"Sound: {'muted' if prefs.muted else 'on'}",
    ]
    console.print(Panel("\n".join(lines), title="Settings", border_style="green"))


def print_nudge(message: str, out: Optional[Console] = None) -> None:
    """Print a completion message in a styled panel."""
    text = Text(message, justify="center")
    (out or console).print(Panel(text, border_style="magenta", padding=(1, 4)))


def print_success(message: str) -> None:
    console.print(f"[green]{message}[/green]")


def print_info(message: str) -> None:
    console.print(f"[blue]{message}[/blue]")


def print_warning(message: str) -> None:
    console.print(f"[yellow]{message}[/yellow]")
