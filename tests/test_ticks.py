"""Tests for tick sources."""

from __future__ import annotations

import signal
from unittest.mock import patch

import pytest

from hourglass.ticks import ManualTickSource, SleepTickSource


class TestManualTickSource:
    def test_inactive_by_default(self) -> None:
        source = ManualTickSource()
        assert not source.active
        assert source.advance(3) == 0

    def test_advance_fires_callback(self) -> None:
        calls: list[int] = []
        source = ManualTickSource()
        source.start(lambda: calls.append(1))
        assert source.advance(5) == 5
        assert len(calls) == 5
        assert source.fired == 5

    def test_double_start_keeps_one_stream(self) -> None:
        calls: list[str] = []
        source = ManualTickSource()
        first = source.start(lambda: calls.append("a"))
        second = source.start(lambda: calls.append("b"))
        assert first == second
        source.advance(2)
        assert calls == ["a", "a"]

    def test_stop_is_idempotent(self) -> None:
        source = ManualTickSource()
        source.stop()
        source.start(lambda: None)
        source.stop()
        source.stop()
        assert not source.active

    def test_restart_gives_new_handle(self) -> None:
        source = ManualTickSource()
        first = source.start(lambda: None)
        source.stop()
        second = source.start(lambda: None)
        assert first != second

    def test_callback_can_stop_source(self) -> None:
        source = ManualTickSource()
        calls: list[int] = []

        def callback() -> None:
            calls.append(1)
            if len(calls) == 2:
                source.stop()

        source.start(callback)
        assert source.advance(10) == 2


class TestSleepTickSource:
    @patch("hourglass.ticks.time.sleep")
    def test_run_max_ticks(self, mock_sleep) -> None:
        calls: list[int] = []
        source = SleepTickSource()
        source.start(lambda: calls.append(1))
        assert source.run(max_ticks=3) == 3
        assert mock_sleep.call_count == 3
        assert len(calls) == 3
        assert source.active

    @patch("hourglass.ticks.time.sleep")
    def test_run_until_stopped(self, mock_sleep) -> None:
        source = SleepTickSource()
        calls: list[int] = []

        def callback() -> None:
            calls.append(1)
            if len(calls) == 4:
                source.stop()

        source.start(callback)
        assert source.run() == 4

    @patch("hourglass.ticks.time.sleep")
    def test_run_when_inactive(self, mock_sleep) -> None:
        assert SleepTickSource().run() == 0
        mock_sleep.assert_not_called()

    @patch("hourglass.ticks.time.sleep", side_effect=KeyboardInterrupt)
    def test_interrupt_stops_and_propagates(self, mock_sleep) -> None:
        source = SleepTickSource()
        source.start(lambda: None)
        with pytest.raises(KeyboardInterrupt):
            source.run()
        assert not source.active

    @patch("hourglass.ticks.time.sleep")
    def test_interrupt_during_callback_waits_for_it(self, mock_sleep) -> None:
        source = SleepTickSource()
        calls: list[int] = []

        def callback() -> None:
            signal.raise_signal(signal.SIGINT)
            calls.append(1)

        previous = signal.getsignal(signal.SIGINT)
        source.start(callback)
        with pytest.raises(KeyboardInterrupt):
            source.run()
        assert calls == [1]
        assert source.fired == 1
        assert not source.active
        assert signal.getsignal(signal.SIGINT) is previous
