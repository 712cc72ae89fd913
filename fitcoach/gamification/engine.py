# -*- coding: utf-8 -*-
"""Streaks, XP, levels and badges derived from raw activity.

Nothing here is persisted: every snapshot is recomputed from the current
rows, so a badge disappears again if the data behind it is deleted.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, Iterable, List, Optional, Tuple

from ..timeutil import date_key, parse_timestamp, utc_now

XP_PER_ANALYSIS = 10
XP_PER_PLAN = 15
XP_PER_GOAL = 5
XP_PER_LEVEL = 100
WEEKLY_LOOKBACK_DAYS = 6


@dataclass(frozen=True)
class ActivityCounts:
    total_analyses: int
    weekly_analyses: int
    streak_days: int
    plans_created: int
    goals_completed: int
    xp: int


BadgeRule = Tuple[str, Callable[[ActivityCounts], bool]]

BADGE_RULES: List[BadgeRule] = [
    ("first-analysis", lambda c: c.total_analyses >= 1),
    ("form-apprentice", lambda c: c.total_analyses >= 5),
    ("form-elite", lambda c: c.total_analyses >= 20),
    ("consistency", lambda c: c.streak_days >= 3),
    ("streak-warrior", lambda c: c.streak_days >= 7),
    ("weekly-warrior", lambda c: c.weekly_analyses >= 5),
    ("weekly-legend", lambda c: c.weekly_analyses >= 10),
    ("planner", lambda c: c.plans_created >= 1),
    ("program-architect", lambda c: c.plans_created >= 5),
    ("goal-crusher", lambda c: c.goals_completed >= 3),
    ("goal-champion", lambda c: c.goals_completed >= 10),
    ("xp-hustler", lambda c: c.xp >= 500),
]


def calculate_streak(date_keys: Iterable[str]) -> int:
    """Consecutive calendar days ending at the most recent day in `date_keys`."""
    unique_days = sorted(set(date_keys), reverse=True)
    if not unique_days:
        return 0
    streak = 1
    for newer, older in zip(unique_days, unique_days[1:]):
        gap = (date.fromisoformat(newer) - date.fromisoformat(older)).days
        if gap == 1:
            streak += 1
        elif gap > 1:
            break
    return streak


def calculate_xp(total_analyses: int, plans_created: int, goals_completed: int) -> int:
    return total_analyses * XP_PER_ANALYSIS + plans_created * XP_PER_PLAN + goals_completed * XP_PER_GOAL


def level_for_xp(xp: int) -> int:
    return max(1, xp // XP_PER_LEVEL + 1)


def count_since(timestamps: Iterable[str], since: datetime) -> int:
    count = 0
    for value in timestamps:
        parsed = parse_timestamp(value)
        if parsed is not None and parsed >= since:
            count += 1
    return count


def evaluate_badges(counts: ActivityCounts) -> List[dict]:
    return [{"id": badge_id, "earned": bool(rule(counts))} for badge_id, rule in BADGE_RULES]


def build_snapshot(
    analysis_timestamps: List[str],
    plans_created: int,
    goals_completed: int,
    now: Optional[datetime] = None,
) -> dict:
    current = now or utc_now()
    total_analyses = len(analysis_timestamps)
    weekly_analyses = count_since(analysis_timestamps, current - timedelta(days=WEEKLY_LOOKBACK_DAYS))

    day_keys = sorted({k for k in (date_key(ts) for ts in analysis_timestamps) if k}, reverse=True)
    streak_days = calculate_streak(day_keys)

    xp = calculate_xp(total_analyses, plans_created, goals_completed)
    level = level_for_xp(xp)
    counts = ActivityCounts(
        total_analyses=total_analyses,
        weekly_analyses=weekly_analyses,
        streak_days=streak_days,
        plans_created=plans_created,
        goals_completed=goals_completed,
        xp=xp,
    )
    return {
        "total_analyses": total_analyses,
        "weekly_analyses": weekly_analyses,
        "streak_days": streak_days,
        "xp": xp,
        "level": level,
        "next_level_xp": level * XP_PER_LEVEL,
        "plans_created": plans_created,
        "goals_completed": goals_completed,
        "last_activity_date": day_keys[0] if day_keys else None,
        "badges": evaluate_badges(counts),
    }
