# -*- coding: utf-8 -*-

from __future__ import annotations

import random
import unittest
from datetime import datetime, timedelta, timezone

from fitcoach.gamification.engine import (
    BADGE_RULES,
    build_snapshot,
    calculate_streak,
    calculate_xp,
    level_for_xp,
)
from fitcoach.timeutil import to_iso

NOW = datetime(2026, 5, 20, 15, 0, 0, tzinfo=timezone.utc)


def _earned(snapshot: dict) -> set:
    return {b["id"] for b in snapshot["badges"] if b["earned"]}


class TestStreak(unittest.TestCase):
    def test_empty(self) -> None:
        self.assertEqual(calculate_streak([]), 0)

    def test_single_day(self) -> None:
        self.assertEqual(calculate_streak(["2026-05-01"]), 1)

    def test_consecutive_days(self) -> None:
        self.assertEqual(calculate_streak(["2026-05-10", "2026-05-09", "2026-05-08"]), 3)

    def test_stops_at_first_gap(self) -> None:
        self.assertEqual(calculate_streak(["2026-05-10", "2026-05-09", "2026-05-07", "2026-05-06"]), 2)

    def test_crosses_month_boundary(self) -> None:
        self.assertEqual(calculate_streak(["2026-03-01", "2026-02-28", "2026-02-27"]), 3)

    def test_invariant_under_duplication_and_permutation(self) -> None:
        days = ["2026-05-10", "2026-05-09", "2026-05-08", "2026-05-05", "2026-05-04"]
        expected = calculate_streak(days)
        rng = random.Random(7)
        for _ in range(20):
            shuffled = days + rng.sample(days, 3)
            rng.shuffle(shuffled)
            self.assertEqual(calculate_streak(shuffled), expected)


class TestXpAndLevel(unittest.TestCase):
    def test_xp_weights(self) -> None:
        self.assertEqual(calculate_xp(3, 2, 4), 3 * 10 + 2 * 15 + 4 * 5)

    def test_level_boundaries(self) -> None:
        self.assertEqual(level_for_xp(0), 1)
        self.assertEqual(level_for_xp(99), 1)
        self.assertEqual(level_for_xp(100), 2)
        self.assertEqual(level_for_xp(550), 6)


class TestSnapshot(unittest.TestCase):
    def test_empty_user(self) -> None:
        snap = build_snapshot([], plans_created=0, goals_completed=0, now=NOW)
        self.assertEqual(snap["total_analyses"], 0)
        self.assertEqual(snap["streak_days"], 0)
        self.assertEqual(snap["xp"], 0)
        self.assertEqual(snap["level"], 1)
        self.assertEqual(snap["next_level_xp"], 100)
        self.assertIsNone(snap["last_activity_date"])
        self.assertEqual(_earned(snap), set())
        self.assertEqual([b["id"] for b in snap["badges"]], [badge_id for badge_id, _ in BADGE_RULES])

    def test_streak_weekly_and_badges(self) -> None:
        # Two analyses a day for the last four days, plus an older burst.
        recent = [to_iso(NOW - timedelta(days=d, hours=h)) for d in range(4) for h in (1, 3)]
        older = [to_iso(NOW - timedelta(days=30, minutes=m)) for m in range(12)]
        snap = build_snapshot(recent + older + ["garbage"], plans_created=5, goals_completed=3, now=NOW)

        self.assertEqual(snap["total_analyses"], 21)
        self.assertEqual(snap["weekly_analyses"], 8)
        self.assertEqual(snap["streak_days"], 4)
        self.assertEqual(snap["last_activity_date"], "2026-05-20")
        self.assertEqual(snap["xp"], 21 * 10 + 5 * 15 + 3 * 5)
        self.assertEqual(snap["level"], 4)
        self.assertEqual(snap["next_level_xp"], 400)
        self.assertEqual(
            _earned(snap),
            {
                "first-analysis",
                "form-apprentice",
                "form-elite",
                "consistency",
                "weekly-warrior",
                "planner",
                "program-architect",
                "goal-crusher",
            },
        )

    def test_weekly_window_is_six_days_back(self) -> None:
        stamps = [to_iso(NOW - timedelta(days=6)), to_iso(NOW - timedelta(days=6, seconds=1))]
        snap = build_snapshot(stamps, plans_created=0, goals_completed=0, now=NOW)
        self.assertEqual(snap["weekly_analyses"], 1)

    def test_xp_hustler_and_long_streak(self) -> None:
        stamps = [to_iso(NOW - timedelta(days=d)) for d in range(10)]
        snap = build_snapshot(stamps, plans_created=20, goals_completed=30, now=NOW)
        self.assertEqual(snap["xp"], 10 * 10 + 20 * 15 + 30 * 5)
        earned = _earned(snap)
        self.assertIn("xp-hustler", earned)
        self.assertIn("streak-warrior", earned)
        self.assertIn("goal-champion", earned)
        self.assertNotIn("form-elite", earned)

    def test_badges_follow_current_counts(self) -> None:
        before = build_snapshot([to_iso(NOW)], plans_created=1, goals_completed=0, now=NOW)
        after = build_snapshot([], plans_created=0, goals_completed=0, now=NOW)
        self.assertIn("planner", _earned(before))
        self.assertNotIn("planner", _earned(after))


if __name__ == "__main__":
    unittest.main()
