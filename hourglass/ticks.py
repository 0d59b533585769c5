"""Tick sources that drive the countdown once per second."""

from __future__ import annotations

import itertools
import logging
import signal
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

log = logging.getLogger(__name__)

TickCallback = Callable[[], None]

_handle_ids = itertools.count(1)


@dataclass(frozen=True)
class TickHandle:
    """Identifies one started tick stream."""

    id: int


class TickSource(Protocol):
    """Something that calls a callback once per tick until stopped."""

    @property
    def active(self) -> bool: ...

    def start(self, callback: TickCallback) -> TickHandle: ...

    def stop(self) -> None: ...


class _BaseTickSource:
    def __init__(self) -> None:
        self._callback: Optional[TickCallback] = None
        self._handle: Optional[TickHandle] = None
        self.fired = 0

    @property
    def active(self) -> bool:
        return self._handle is not None

    def start(self, callback: TickCallback) -> TickHandle:
        """Begin ticking. Starting an active source returns its current handle."""
        if self._handle is not None:
            log.debug("Tick source already active (handle=%s)", self._handle.id)
            return self._handle
        self._callback = callback
        self._handle = TickHandle(next(_handle_ids))
        log.debug("Tick source started (handle=%s)", self._handle.id)
        return self._handle

    def stop(self) -> None:
        if self._handle is None:
            return
        log.debug("Tick source stopped (handle=%s)", self._handle.id)
        self._callback = None
        self._handle = None

    def _fire(self) -> bool:
        callback = self._callback
        if callback is None:
            return False
        callback()
        self.fired += 1
        return True


class ManualTickSource(_BaseTickSource):
    """Ticks only when told to. Used for tests and scripted runs."""

    def advance(self, ticks: int = 1) -> int:
        """Fire up to *ticks* callbacks. Returns how many actually fired."""
        fired = 0
        for _ in range(ticks):
            if not self._fire():
                break
            fired += 1
        return fired


class SleepTickSource(_BaseTickSource):
    """Blocking one-second ticker that runs in the caller's thread."""

    def __init__(self, interval: float = 1.0) -> None:
        super().__init__()
        self.interval = interval

    def run(self, max_ticks: Optional[int] = None) -> int:
        """Tick until stopped (or *max_ticks* fired). Returns ticks fired.

        A ``KeyboardInterrupt`` stops the source and is re-raised so the
        caller can decide what an interrupt means. Ctrl-C pressed while a
        callback runs is held until the callback returns.
        """
        fired = 0
        try:
            while self.active and (max_ticks is None or fired < max_ticks):
                time.sleep(self.interval)
                if not self._fire_holding_interrupts():
                    break
                fired += 1
        except KeyboardInterrupt:
            self.stop()
            raise
        return fired

    def _fire_holding_interrupts(self) -> bool:
        if threading.current_thread() is not threading.main_thread():
            return self._fire()

        held: list[int] = []

        def hold(signum: int, frame: object) -> None:
            held.append(signum)

        previous = signal.signal(signal.SIGINT, hold)
        try:
            fired = self._fire()
        finally:
            signal.signal(signal.SIGINT, previous if previous is not None else signal.default_int_handler)
        if held:
            log.debug("Interrupt held until tick finished")
            raise KeyboardInterrupt
        return fired
