"""Append-only history of completed intervals."""

from __future__ import annotations

from typing import Iterable, Iterator

from hourglass.models import LONG_BREAK_EVERY, Mode, SessionRecord


class SessionLedger:
    """Completed intervals in the order they finished.

    Entries are never reordered or removed individually; ``clear`` is the
    only way to drop history.
    """

    def __init__(self) -> None:
        self._records: list[SessionRecord] = []
        self._work_count = 0

    @classmethod
    def from_records(cls, records: Iterable[SessionRecord]) -> SessionLedger:
        ledger = cls()
        for record in records:
            ledger._add(record)
        return ledger

    def _add(self, record: SessionRecord) -> None:
        self._records.append(record)
        if record.kind is Mode.WORK:
            self._work_count += 1

    def append(self, kind: Mode) -> SessionRecord:
        """Record a completed interval of *kind*."""
        record = SessionRecord(kind=kind)
        self._add(record)
        return record

    def clear(self) -> None:
        self._records.clear()
        self._work_count = 0

    def work_count(self) -> int:
        return self._work_count

    def long_break_due(self, pending_work: int = 0) -> bool:
        """True when a break starting now should be a long one.

        *pending_work* counts focus intervals that have finished but are not
        appended yet.
        """
        count = self._work_count + pending_work
        return count > 0 and count % LONG_BREAK_EVERY == 0

    def records(self) -> tuple[SessionRecord, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[SessionRecord]:
        return iter(tuple(self._records))
