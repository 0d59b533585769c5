"""Pydantic models — single source of truth for all data types."""

from __future__ import annotations

import enum
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_WORK_MINUTES = 25
DEFAULT_BREAK_MINUTES = 5
DEFAULT_LONG_BREAK_MINUTES = 15

# A long break follows every Nth completed focus interval.
LONG_BREAK_EVERY = 4


class Mode(str, enum.Enum):
    """The kind of interval being counted down."""

    WORK = "work"
    BREAK = "break"

    @property
    def other(self) -> Mode:
        if self is Mode.WORK:
            return Mode.BREAK
        if self is Mode.BREAK:
            return Mode.WORK
        raise ValueError(f"unknown mode: {self!r}")


class DurationTarget(str, enum.Enum):
    """A configurable duration slot."""

    WORK = "work"
    BREAK = "break"
    LONG_BREAK = "long-break"


class Theme(str, enum.Enum):
    """Colour theme of the terminal view."""

    LIGHT = "light"
    DARK = "dark"


class SessionRecord(BaseModel):
    """A completed interval. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    kind: Mode
    completed_at: datetime = Field(default_factory=datetime.now)


class DurationConfig(BaseModel):
    """Interval lengths in minutes (persisted to settings.json)."""

    work_minutes: int = Field(default=DEFAULT_WORK_MINUTES, gt=0)
    break_minutes: int = Field(default=DEFAULT_BREAK_MINUTES, gt=0)
    long_break_minutes: int = Field(default=DEFAULT_LONG_BREAK_MINUTES, gt=0)

    def minutes_for(self, target: DurationTarget) -> int:
        if target is DurationTarget.WORK:
            return self.work_minutes
        if target is DurationTarget.BREAK:
            return self.break_minutes
        if target is DurationTarget.LONG_BREAK:
            return self.long_break_minutes
        raise ValueError(f"unknown duration target: {target!r}")

    def seconds_for(self, mode: Mode, long_break: bool = False) -> int:
        """Full length of an interval of *mode*, in seconds."""
        if mode is Mode.WORK:
            return self.work_minutes * 60
        if mode is Mode.BREAK:
            minutes = self.long_break_minutes if long_break else self.break_minutes
            return minutes * 60
        raise ValueError(f"unknown mode: {mode!r}")


class Preferences(BaseModel):
    """Presentation preferences (persisted to preferences.json)."""

    theme: Theme = Theme.DARK
    muted: bool = False


class TimerState(BaseModel):
    """Mutable countdown state owned by the timer machine."""

    mode: Mode = Mode.WORK
    remaining_seconds: int = Field(default=DEFAULT_WORK_MINUTES * 60, ge=0)
    is_running: bool = False


class TimerSnapshot(BaseModel):
    """Read-only view of the timer handed to renderers after every change."""

    model_config = ConfigDict(frozen=True)

    mode: Mode
    remaining_seconds: int = Field(ge=0)
    total_seconds: int = Field(gt=0)
    is_running: bool
    pct: float = Field(ge=0.0, le=1.0)
    urgency: float = Field(ge=0.0, le=1.0)
    ledger: tuple[SessionRecord, ...] = ()
    work_count: int = Field(default=0, ge=0)
    is_long_break_now: bool = False

    @property
    def label(self) -> str:
        if self.mode is Mode.WORK:
            return "Focus"
        if self.mode is Mode.BREAK:
            return "Long break" if self.is_long_break_now else "Break"
        raise ValueError(f"unknown mode: {self.mode!r}")


class SessionHistory(BaseModel):
    """On-disk form of the session ledger (history.json)."""

    records: list[SessionRecord] = Field(default_factory=list)
