# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from datetime import datetime, timezone

from fitcoach.summary.aggregate import compute_weekly_stats, week_windows

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


def _set(exercise: str, load: float, reps: int, performed_at: str, unit: str = "kg") -> dict:
    return {"exercise": exercise, "load": load, "reps": reps, "unit": unit, "performed_at": performed_at}


def _scan(calories: float, protein: float, created_at: str) -> dict:
    return {
        "created_at": created_at,
        "result": {"total_calories": calories, "macros": {"protein_grams": protein}},
    }


class TestWeekWindows(unittest.TestCase):
    def test_windows_align_to_utc_days(self) -> None:
        windows = week_windows(NOW)
        self.assertEqual(windows.current_start, datetime(2026, 10, 13, tzinfo=timezone.utc))
        self.assertEqual(windows.previous_start, datetime(2026, 10, 6, tzinfo=timezone.utc))
        self.assertTrue(windows.in_current(datetime(2026, 10, 13, tzinfo=timezone.utc)))
        self.assertTrue(windows.in_previous(datetime(2026, 10, 12, 23, 59, 59, tzinfo=timezone.utc)))
        self.assertFalse(windows.in_current(datetime(2026, 10, 19, 12, 0, 1, tzinfo=timezone.utc)))


class TestWeeklyPerformance(unittest.TestCase):
    def test_volume_sessions_and_best_lift(self) -> None:
        entries = [
            _set("Bench Press", 100, 5, "2026-10-15T18:00:00.000Z"),
            _set("Squat", 60, 5, "2026-10-14"),
            _set("bench press", 90, 5, "2026-10-08T18:00:00.000Z"),
            _set("Squat", 60, 5, "2026-10-07"),
            _set("Deadlift", 200, 1, "2026-09-01"),
        ]
        stats = compute_weekly_stats(entries, [], protein_target=30, now=NOW)
        perf = stats["performance"]
        self.assertEqual(stats["period_start"], "2026-10-13T00:00:00.000Z")
        self.assertEqual(perf["sessions"], 2)
        self.assertEqual(perf["volume"], 800)
        self.assertEqual(perf["previous_volume"], 750)
        self.assertEqual(perf["volume_delta"], 50)
        self.assertEqual(perf["best_lift_delta"], {"exercise": "Bench Press", "delta": 10})

    def test_sessions_count_distinct_days(self) -> None:
        entries = [
            _set("Row", 50, 10, "2026-10-16T07:00:00Z"),
            _set("Row", 50, 10, "2026-10-16T19:00:00Z"),
            _set("Press", 40, 8, "2026-10-18T10:00:00Z"),
        ]
        stats = compute_weekly_stats(entries, [], protein_target=30, now=NOW)
        self.assertEqual(stats["performance"]["sessions"], 2)

    def test_pounds_are_converted(self) -> None:
        entries = [_set("Curl", 100, 1, "2026-10-17", unit="lb")]
        stats = compute_weekly_stats(entries, [], protein_target=30, now=NOW)
        self.assertEqual(stats["performance"]["volume"], 45.4)

    def test_no_improvement_reports_nothing(self) -> None:
        entries = [
            _set("Squat", 100, 3, "2026-10-15"),
            _set("Squat", 110, 3, "2026-10-08"),
            _set("Lunge", 40, 10, "2026-10-15"),
        ]
        stats = compute_weekly_stats(entries, [], protein_target=30, now=NOW)
        self.assertEqual(stats["performance"]["best_lift_delta"], {"exercise": None, "delta": 0})
        self.assertEqual(stats["performance"]["volume_delta"], 370)

    def test_ties_keep_the_first_exercise(self) -> None:
        entries = [
            _set("Squat", 105, 3, "2026-10-14"),
            _set("Bench", 85, 3, "2026-10-15"),
            _set("Squat", 100, 3, "2026-10-07"),
            _set("Bench", 80, 3, "2026-10-08"),
        ]
        stats = compute_weekly_stats(entries, [], protein_target=30, now=NOW)
        self.assertEqual(stats["performance"]["best_lift_delta"], {"exercise": "Squat", "delta": 5})

    def test_empty_week(self) -> None:
        stats = compute_weekly_stats([], [], protein_target=30, now=NOW)
        self.assertEqual(
            stats["performance"],
            {
                "sessions": 0,
                "volume": 0,
                "previous_volume": 0,
                "volume_delta": 0,
                "best_lift_delta": {"exercise": None, "delta": 0},
            },
        )
        self.assertEqual(
            stats["nutrition"],
            {"scans": 0, "avg_calories": 0, "protein_warnings": 0, "protein_target": 30},
        )

    def test_unparseable_dates_are_skipped(self) -> None:
        entries = [_set("Row", 50, 10, "someday"), _set("Row", 50, 10, "2026-10-16")]
        stats = compute_weekly_stats(entries, [], protein_target=30, now=NOW)
        self.assertEqual(stats["performance"]["volume"], 500)


class TestWeeklyNutrition(unittest.TestCase):
    def test_average_and_protein_warnings(self) -> None:
        scans = [
            _scan(600, 20, "2026-10-14T12:00:00.000Z"),
            _scan(800, 40, "2026-10-15T12:00:00.000Z"),
            _scan(2000, 5, "2026-10-01T12:00:00.000Z"),
        ]
        stats = compute_weekly_stats([], scans, protein_target=30, now=NOW)
        self.assertEqual(stats["nutrition"]["scans"], 2)
        self.assertEqual(stats["nutrition"]["avg_calories"], 700)
        self.assertEqual(stats["nutrition"]["protein_warnings"], 1)
        self.assertEqual(stats["nutrition"]["protein_target"], 30)

    def test_target_is_configurable(self) -> None:
        scans = [_scan(500, 35, "2026-10-18T08:00:00Z")]
        stats = compute_weekly_stats([], scans, protein_target=40, now=NOW)
        self.assertEqual(stats["nutrition"]["protein_warnings"], 1)


if __name__ == "__main__":
    unittest.main()
