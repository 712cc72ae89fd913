# -*- coding: utf-8 -*-
"""Gamification (streaks, XP, levels, badges)."""

from .engine import BADGE_RULES, build_snapshot, calculate_streak, calculate_xp, level_for_xp

__all__ = [
    "BADGE_RULES",
    "build_snapshot",
    "calculate_streak",
    "calculate_xp",
    "level_for_xp",
]
