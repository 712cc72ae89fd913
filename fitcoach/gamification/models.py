# -*- coding: utf-8 -*-
"""Gamification — Pydantic models.

Responses use the camelCase keys the dashboard reads; constructors accept
the snake_case names the engine produces.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Badge(BaseModel):
    id: str
    earned: bool


class GamificationSnapshot(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_analyses: int = Field(0, ge=0)
    weekly_analyses: int = Field(0, ge=0)
    streak_days: int = Field(0, ge=0)
    xp: int = Field(0, ge=0)
    level: int = Field(1, ge=1)
    next_level_xp: int = Field(100, ge=100)
    plans_created: int = Field(0, ge=0)
    goals_completed: int = Field(0, ge=0)
    last_activity_date: Optional[str] = Field(None, description="YYYY-MM-DD (UTC)")
    badges: List[Badge] = []
