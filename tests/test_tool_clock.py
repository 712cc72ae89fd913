# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from datetime import datetime, timedelta, timezone

from fitcoach.timeutil import to_iso
from fitcoach.tools.clock import elapsed_millis, elapsed_seconds, reconstruct_stopwatch
from fitcoach.tools.models import MAX_STOPWATCH_MS, StopwatchState

T0 = datetime(2026, 3, 1, 8, 0, 0, tzinfo=timezone.utc)


class TestStopwatchReconstruction(unittest.TestCase):
    def test_running_stopwatch_adds_elapsed_wall_time(self) -> None:
        state = StopwatchState(elapsed_ms=4000, running=True, updated_at=to_iso(T0))
        projected = reconstruct_stopwatch(state, T0 + timedelta(milliseconds=1500))
        self.assertEqual(projected.elapsed_ms, 5500)
        self.assertTrue(projected.running)
        self.assertEqual(projected.updated_at, state.updated_at)

    def test_stored_state_is_not_mutated(self) -> None:
        state = StopwatchState(elapsed_ms=0, running=True, updated_at=to_iso(T0))
        reconstruct_stopwatch(state, T0 + timedelta(seconds=30))
        self.assertEqual(state.elapsed_ms, 0)

    def test_future_updated_at_never_rewinds(self) -> None:
        state = StopwatchState(elapsed_ms=2000, running=True, updated_at=to_iso(T0 + timedelta(minutes=5)))
        projected = reconstruct_stopwatch(state, T0)
        self.assertEqual(projected.elapsed_ms, 2000)

    def test_paused_stopwatch_is_unchanged(self) -> None:
        state = StopwatchState(elapsed_ms=7000, running=False)
        projected = reconstruct_stopwatch(state, T0 + timedelta(hours=3))
        self.assertEqual(projected.elapsed_ms, 7000)
        self.assertIsNone(projected.updated_at)

    def test_unparseable_updated_at_is_ignored(self) -> None:
        state = StopwatchState(elapsed_ms=1200, running=True, updated_at="yesterday-ish")
        projected = reconstruct_stopwatch(state, T0)
        self.assertEqual(projected.elapsed_ms, 1200)

    def test_projection_is_not_capped(self) -> None:
        state = StopwatchState(elapsed_ms=MAX_STOPWATCH_MS - 1000, running=True, updated_at=to_iso(T0))
        projected = reconstruct_stopwatch(state, T0 + timedelta(seconds=10))
        self.assertEqual(projected.elapsed_ms, MAX_STOPWATCH_MS + 9000)

    def test_naive_timestamps_are_utc(self) -> None:
        state = StopwatchState(elapsed_ms=0, running=True, updated_at="2026-03-01T08:00:00")
        projected = reconstruct_stopwatch(state, T0 + timedelta(seconds=2))
        self.assertEqual(projected.elapsed_ms, 2000)


class TestElapsedPrimitives(unittest.TestCase):
    def test_elapsed_seconds_floors(self) -> None:
        self.assertEqual(elapsed_seconds(to_iso(T0), T0 + timedelta(milliseconds=2999)), 2)

    def test_elapsed_seconds_negative_for_future(self) -> None:
        self.assertEqual(elapsed_seconds(to_iso(T0), T0 - timedelta(milliseconds=500)), -1)

    def test_elapsed_millis_none_when_unparseable(self) -> None:
        self.assertIsNone(elapsed_millis("not a time", T0))
        self.assertIsNone(elapsed_millis(None, T0))


if __name__ == "__main__":
    unittest.main()
