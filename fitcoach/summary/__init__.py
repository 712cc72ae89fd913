# -*- coding: utf-8 -*-
"""Weekly aggregation and AI summary."""

from .aggregate import compute_weekly_stats, week_windows

__all__ = ["compute_weekly_stats", "week_windows"]
