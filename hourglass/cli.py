"""Hourglass CLI -- a pomodoro timer for the terminal."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.live import Live
from rich.logging import RichHandler

from hourglass import display
from hourglass.machine import DurationChange, TimerMachine
from hourglass.models import DurationTarget, Theme
from hourglass.storage import Storage
from hourglass.ticks import SleepTickSource

log = logging.getLogger(__name__)

app = typer.Typer(
    name="hourglass",
    help="Focus for a while, rest for a while. Every fourth break is a long one.",
    no_args_is_help=True,
)


def _storage() -> Storage:
    """Storage in the default data directory (convenience wrapper)."""
    return Storage()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log state changes"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=display.console, show_path=False)],
        force=True,
    )


# ---------------------------------------------------------------------------
# Timer
# ---------------------------------------------------------------------------


def _after_interrupt() -> str:
    """Ask what to do after Ctrl-C. Returns 'r', 's' or 'q'."""
    while True:
        choice = typer.prompt(
            "Paused. [r]esume, re[s]tart interval or [q]uit",
            default="r",
        )
        choice = choice.strip().lower()[:1]
        if choice in ("r", "s", "q"):
            return choice
        display.print_warning("Please answer r, s or q.")


@app.command()
def run(
    ticks: Optional[int] = typer.Option(
        None, "--ticks", min=1, help="Stop after this many seconds (for scripting)"
    ),
) -> None:
    """Run the timer. Press Ctrl-C to pause."""
    storage = _storage()
    prefs = storage.load_preferences()
    source = SleepTickSource()
    machine = TimerMachine.from_storage(
        storage, source, effects=display.TerminalEffects(prefs)
    )

    while True:
        budget = None if ticks is None else ticks - source.fired
        if budget is not None and budget <= 0:
            break

        interrupted = False
        with Live(
            display.render_snapshot(machine.snapshot(), prefs),
            console=display.console,
            refresh_per_second=4,
        ) as live:
            machine.renderer = lambda snap: live.update(display.render_snapshot(snap, prefs))
            machine.start()
            try:
                source.run(max_ticks=budget)
            except KeyboardInterrupt:
                interrupted = True
            machine.pause()
            machine.renderer = None

        if not interrupted:
            break
        choice = _after_interrupt()
        if choice == "q":
            break
        if choice == "s":
            machine.restart()

    snap = machine.snapshot()
    display.print_info(
        f"Stopped in {snap.label.lower()} at {display.format_time(snap.remaining_seconds)}. "
        f"Focus sessions so far: {snap.work_count}."
    )


@app.command()
def status() -> None:
    """Show the timer as it would start now."""
    storage = _storage()
    machine = TimerMachine.from_storage(storage)
    display.console.print(
        display.render_snapshot(machine.snapshot(), storage.load_preferences())
    )


@app.command()
def history() -> None:
    """List completed sessions."""
    machine = TimerMachine.from_storage(_storage())
    ledger = machine.ledger
    display.print_history(
        ledger.records(),
        ledger.work_count(),
        ledger.long_break_due(pending_work=1),
    )


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@app.command()
def settings() -> None:
    """Show interval lengths and preferences."""
    storage = _storage()
    display.print_settings(storage.load_config(), storage.load_preferences())


@app.command(name="set")
def set_duration(
    target: DurationTarget = typer.Argument(..., help="Which interval to change"),
    minutes: int = typer.Argument(..., help="New length in minutes"),
) -> None:
    """Change the length of the focus, break or long-break interval."""
    machine = TimerMachine.from_storage(_storage())
    outcome = machine.change_duration(target, minutes)
    if outcome is DurationChange.REJECTED:
        display.print_warning(f"{minutes} is not a valid length. Use a whole number of minutes, 1 or more.")
        raise typer.Exit(1)
    display.print_success(f"{target.value} set to {minutes} min.")


@app.command()
def reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Clear session history and restore default interval lengths."""
    if not yes and not typer.confirm("Clear history and restore default lengths?", default=False):
        display.print_info("Nothing changed.")
        raise typer.Exit(0)
    machine = TimerMachine.from_storage(_storage())
    machine.reset()
    display.print_success("History cleared, default lengths restored.")


@app.command()
def theme(
    value: Optional[Theme] = typer.Argument(None, help="light or dark; omit to toggle"),
) -> None:
    """Set or toggle the colour theme."""
    storage = _storage()
    prefs = storage.load_preferences()
    if value is None:
        value = Theme.LIGHT if prefs.theme is Theme.DARK else Theme.DARK
    prefs.theme = value
    storage.save_preferences(prefs)
    display.print_success(f"Theme: {value.value}")


@app.command()
def mute() -> None:
    """Silence the bell at the end of each interval."""
    _set_muted(True)


@app.command()
def unmute() -> None:
    """Ring the bell at the end of each interval."""
    _set_muted(False)


def _set_muted(muted: bool) -> None:
    storage = _storage()
    prefs = storage.load_preferences()
    prefs.muted = muted
    storage.save_preferences(prefs)
    display.print_success("Sound muted." if muted else "Sound on.")
