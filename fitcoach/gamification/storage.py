# -*- coding: utf-8 -*-
"""Gamification — reads the activity tables behind a snapshot."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from ..analyses.storage import list_analysis_timestamps
from ..goals.storage import count_completed_goals
from ..plans.storage import count_plans
from .engine import build_snapshot


def get_snapshot(user_id: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    return build_snapshot(
        list_analysis_timestamps(user_id),
        plans_created=count_plans(user_id),
        goals_completed=count_completed_goals(user_id),
        now=now,
    )
