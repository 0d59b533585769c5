"""Tests for the session ledger."""

from __future__ import annotations

from hourglass.ledger import SessionLedger
from hourglass.models import Mode, SessionRecord


class TestAppend:
    def test_empty(self) -> None:
        ledger = SessionLedger()
        assert len(ledger) == 0
        assert ledger.work_count() == 0
        assert ledger.records() == ()

    def test_keeps_completion_order(self) -> None:
        ledger = SessionLedger()
        ledger.append(Mode.WORK)
        ledger.append(Mode.BREAK)
        ledger.append(Mode.WORK)
        assert [r.kind for r in ledger] == [Mode.WORK, Mode.BREAK, Mode.WORK]

    def test_work_count_ignores_breaks(self) -> None:
        ledger = SessionLedger()
        for kind in (Mode.WORK, Mode.BREAK, Mode.WORK, Mode.BREAK, Mode.BREAK):
            ledger.append(kind)
        assert ledger.work_count() == 2

    def test_records_is_a_copy(self) -> None:
        ledger = SessionLedger()
        ledger.append(Mode.WORK)
        records = ledger.records()
        ledger.append(Mode.BREAK)
        assert len(records) == 1


class TestClear:
    def test_clear_resets_counter(self) -> None:
        ledger = SessionLedger()
        ledger.append(Mode.WORK)
        ledger.append(Mode.BREAK)
        ledger.clear()
        assert len(ledger) == 0
        assert ledger.work_count() == 0
        assert not ledger.long_break_due()


class TestLongBreakCadence:
    def test_due_after_every_fourth_work(self) -> None:
        ledger = SessionLedger()
        due = []
        for _ in range(12):
            ledger.append(Mode.WORK)
            due.append(ledger.long_break_due())
            ledger.append(Mode.BREAK)
        assert due == [False, False, False, True] * 3

    def test_not_due_when_empty(self) -> None:
        assert not SessionLedger().long_break_due()

    def test_pending_work(self) -> None:
        ledger = SessionLedger()
        for _ in range(3):
            ledger.append(Mode.WORK)
        assert not ledger.long_break_due()
        assert ledger.long_break_due(pending_work=1)


class TestFromRecords:
    def test_recomputes_work_count(self) -> None:
        records = [SessionRecord(kind=Mode.WORK), SessionRecord(kind=Mode.BREAK)] * 4
        ledger = SessionLedger.from_records(records)
        assert len(ledger) == 8
        assert ledger.work_count() == 4
