"""
Tests for frame schedulers.

Tests frame delivery, cancellation and the realtime run loop.
"""

import pytest
from unittest.mock import MagicMock

from scheduler import ManualScheduler, RealtimeScheduler


class TestManualScheduler:
    """Tests for the virtual-clock scheduler."""

    def test_callbacks_receive_frame_time(self):
        sched = ManualScheduler(start_ms=100.0)
        seen = []
        sched.request_frame(seen.append)
        sched.advance(16.0)
        assert seen == [116.0]

    def test_callbacks_run_once(self):
        sched = ManualScheduler()
        cb = MagicMock()
        sched.request_frame(cb)
        assert sched.advance(10) == 1
        assert sched.advance(10) == 0
        cb.assert_called_once()

    def test_cancel_before_frame(self):
        sched = ManualScheduler()
        cb = MagicMock()
        handle = sched.request_frame(cb)
        sched.cancel(handle)
        sched.advance(10)
        cb.assert_not_called()
        assert sched.pending == 0

    def test_cancel_is_idempotent(self):
        sched = ManualScheduler()
        handle = sched.request_frame(MagicMock())
        sched.cancel(handle)
        sched.cancel(handle)
        sched.cancel(None)
        sched.cancel(9999)

    def test_cancel_within_same_frame(self):
        """A callback can cancel a sibling queued for the same frame."""
        sched = ManualScheduler()
        second = MagicMock()
        handles = {}

        def first(_):
            sched.cancel(handles["second"])

        sched.request_frame(first)
        handles["second"] = sched.request_frame(second)
        sched.advance(1)
        second.assert_not_called()

    def test_requests_during_frame_defer_to_next(self):
        sched = ManualScheduler()
        calls = []

        def again(t):
            calls.append(t)
            if len(calls) < 3:
                sched.request_frame(again)

        sched.request_frame(again)
        assert sched.advance(5) == 1
        assert sched.advance(5) == 1
        assert sched.advance(5) == 1
        assert calls == [5, 10, 15]

    def test_advance_rejects_negative(self):
        with pytest.raises(ValueError):
            ManualScheduler().advance(-1)

    def test_run_until_idle(self):
        sched = ManualScheduler()
        calls = []

        def again(t):
            calls.append(t)
            if len(calls) < 4:
                sched.request_frame(again)

        sched.request_frame(again)
        frames = sched.run_until_idle(frame_ms=10)
        assert frames == 4
        assert calls == [0, 10, 20, 30]


class TestRealtimeScheduler:
    """Tests for the wall-clock scheduler."""

    def test_rejects_non_positive_interval(self):
        with pytest.raises(ValueError):
            RealtimeScheduler(frame_interval_ms=0)

    def test_now_in_milliseconds(self):
        sched = RealtimeScheduler(clock=lambda: 2.5)
        assert sched.now() == 2500.0

    def test_run_sleeps_between_frames(self):
        clock = MagicMock(return_value=1.0)
        sleep = MagicMock()
        sched = RealtimeScheduler(frame_interval_ms=20, clock=clock, sleep=sleep)
        calls = []

        def again(t):
            calls.append(t)
            if len(calls) < 3:
                sched.request_frame(again)

        sched.request_frame(again)
        assert sched.run() == 3
        assert len(calls) == 3
        # No sleep after the final frame
        assert sleep.call_count == 2
        sleep.assert_called_with(pytest.approx(0.02))

    def test_run_when_idle(self):
        sleep = MagicMock()
        assert RealtimeScheduler(sleep=sleep).run() == 0
        sleep.assert_not_called()
