"""Work/break state machine driven by a tick source."""

from __future__ import annotations

import enum
import logging
from typing import Callable, Optional

from hourglass.easing import ease, progress_pct
from hourglass.ledger import SessionLedger
from hourglass.models import (
    DurationConfig,
    DurationTarget,
    Mode,
    TimerSnapshot,
    TimerState,
)
from hourglass.storage import Storage
from hourglass.ticks import ManualTickSource, TickSource

log = logging.getLogger(__name__)

Renderer = Callable[[TimerSnapshot], None]


class TimerEffects:
    """Side-effect hooks (sound, animation). Subclass and override as needed.

    Within one tick the order is: ``on_interval_completed`` (if the interval
    ran out), then ``on_tick``.
    """

    def on_tick(self, snapshot: TimerSnapshot) -> None:
        pass

    def on_interval_completed(self, finished: Mode, long_break_next: bool) -> None:
        pass

    def on_start_pause(self, running: bool) -> None:
        pass

    def on_reset(self) -> None:
        pass


class DurationChange(str, enum.Enum):
    """Outcome of ``TimerMachine.change_duration``."""

    REJECTED = "rejected"  # invalid value, nothing changed
    STORED = "stored"  # takes effect when the slot next becomes active
    APPLIED = "applied"  # active countdown was paused and reset


def _valid_minutes(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


class TimerMachine:
    """Owns the countdown state and applies every transition to it.

    All mutations run on the caller's thread, one at a time. Collaborator
    failures (storage, effects, renderer) are logged and never leave the
    machine.
    """

    def __init__(
        self,
        config: Optional[DurationConfig] = None,
        ledger: Optional[SessionLedger] = None,
        ticks: Optional[TickSource] = None,
        *,
        storage: Optional[Storage] = None,
        effects: Optional[TimerEffects] = None,
        renderer: Optional[Renderer] = None,
    ) -> None:
        self.config = config if config is not None else DurationConfig()
        self.ledger = ledger if ledger is not None else SessionLedger()
        self.ticks: TickSource = ticks if ticks is not None else ManualTickSource()
        self.storage = storage
        self.effects = effects if effects is not None else TimerEffects()
        self.renderer = renderer
        self.state = TimerState(
            mode=Mode.WORK,
            remaining_seconds=self.config.seconds_for(Mode.WORK),
        )

    @classmethod
    def from_storage(
        cls,
        storage: Storage,
        ticks: Optional[TickSource] = None,
        **kwargs,
    ) -> TimerMachine:
        """Build a machine from persisted settings and history."""
        ledger = SessionLedger.from_records(storage.load_ledger())
        return cls(storage.load_config(), ledger, ticks, storage=storage, **kwargs)

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def mode(self) -> Mode:
        return self.state.mode

    @property
    def remaining_seconds(self) -> int:
        return self.state.remaining_seconds

    @property
    def is_running(self) -> bool:
        return self.state.is_running

    @property
    def is_long_break_now(self) -> bool:
        if self.state.mode is Mode.WORK:
            return False
        if self.state.mode is Mode.BREAK:
            return self.ledger.long_break_due()
        raise ValueError(f"unknown mode: {self.state.mode!r}")

    @property
    def total_seconds(self) -> int:
        """Full length of the current interval."""
        return self.config.seconds_for(self.state.mode, long_break=self.is_long_break_now)

    def snapshot(self) -> TimerSnapshot:
        remaining = self.state.remaining_seconds
        total = self.total_seconds
        return TimerSnapshot(
            mode=self.state.mode,
            remaining_seconds=remaining,
            total_seconds=total,
            is_running=self.state.is_running,
            pct=progress_pct(remaining, total),
            urgency=ease(remaining, total),
            ledger=self.ledger.records(),
            work_count=self.ledger.work_count(),
            is_long_break_now=self.is_long_break_now,
        )

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the countdown. No-op when already running."""
        if self.state.is_running:
            return
        self.state.is_running = True
        self.ticks.start(self.tick)
        log.info("Timer started: mode=%s remaining=%ss", self.state.mode.value, self.state.remaining_seconds)
        self._emit("on_start_pause", True)
        self._render()

    def pause(self) -> None:
        """Pause the countdown. No-op when already paused."""
        if not self.state.is_running:
            return
        self._halt()
        self._render()

    def toggle(self) -> None:
        if self.state.is_running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        """Pause, forget all history and restore default durations."""
        self._halt()
        self.ledger.clear()
        self.config = DurationConfig()
        self.state.mode = Mode.WORK
        self.state.remaining_seconds = self.config.seconds_for(Mode.WORK)
        if self.storage is not None:
            self.storage.clear_config()
            self.storage.clear_ledger()
        log.info("Timer reset to defaults")
        self._emit("on_reset")
        self._render()

    def restart(self) -> None:
        """Pause and rewind the current interval. History and settings stay."""
        self._halt()
        self.state.remaining_seconds = self.total_seconds
        log.info("Interval restarted: mode=%s", self.state.mode.value)
        self._render()

    def change_duration(self, target: DurationTarget, minutes: int) -> DurationChange:
        """Update one configured interval length.

        Changing the slot that is currently counting down pauses the timer
        and restarts the interval at the new length.
        """
        if not _valid_minutes(minutes):
            log.debug("Rejected duration %r for %s", minutes, target)
            return DurationChange.REJECTED

        # Decided before the update so the active slot is judged on the old config.
        active = self._is_active_slot(target)
        if target is DurationTarget.WORK:
            self.config = self.config.model_copy(update={"work_minutes": minutes})
        elif target is DurationTarget.BREAK:
            self.config = self.config.model_copy(update={"break_minutes": minutes})
        elif target is DurationTarget.LONG_BREAK:
            self.config = self.config.model_copy(update={"long_break_minutes": minutes})
        else:
            return DurationChange.REJECTED
        self._save_config()

        if not active:
            log.info("Stored %s duration: %s min", target.value, minutes)
            return DurationChange.STORED

        self._halt()
        self.state.remaining_seconds = minutes * 60
        log.info("Applied %s duration: %s min", target.value, minutes)
        self._render()
        return DurationChange.APPLIED

    # ------------------------------------------------------------------
    # Clock
    # ------------------------------------------------------------------

    def tick(self) -> None:
        """Advance the countdown by one second."""
        if not self.state.is_running:
            return

        self.state.remaining_seconds = max(0, self.state.remaining_seconds - 1)
        if self.state.remaining_seconds == 0:
            self._complete_interval()

        self._emit("on_tick", self.snapshot())
        self._render()

    def _complete_interval(self) -> None:
        finished = self.state.mode
        long_break_next = finished is Mode.WORK and self.ledger.long_break_due(pending_work=1)
        next_mode = finished.other
        next_remaining = self.config.seconds_for(next_mode, long_break=long_break_next)
        self._emit("on_interval_completed", finished, long_break_next)

        # Next interval is fixed before anything is committed.
        self.ledger.append(finished)
        self.state.mode, self.state.remaining_seconds = next_mode, next_remaining
        log.info(
            "Completed %s interval; now %s for %ss (work sessions: %s)",
            finished.value,
            self.state.mode.value,
            self.state.remaining_seconds,
            self.ledger.work_count(),
        )
        if self.storage is not None:
            self.storage.save_ledger(self.ledger.records())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _is_active_slot(self, target: DurationTarget) -> bool:
        mode = self.state.mode
        if target is DurationTarget.WORK:
            return mode is Mode.WORK
        if target is DurationTarget.BREAK:
            return mode is Mode.BREAK
        if target is DurationTarget.LONG_BREAK:
            return mode is Mode.BREAK and self.ledger.long_break_due()
        return False

    def _halt(self) -> None:
        """Force-pause without rendering."""
        self.ticks.stop()
        if not self.state.is_running:
            return
        self.state.is_running = False
        log.info("Timer paused: mode=%s remaining=%ss", self.state.mode.value, self.state.remaining_seconds)
        self._emit("on_start_pause", False)

    def _save_config(self) -> None:
        if self.storage is not None:
            self.storage.save_config(self.config)

    def _emit(self, hook: str, *args: object) -> None:
        try:
            getattr(self.effects, hook)(*args)
        except Exception:
            log.exception("Effect hook %s failed", hook)

    def _render(self) -> None:
        if self.renderer is None:
            return
        try:
            self.renderer(self.snapshot())
        except Exception:
            log.exception("Renderer failed")
