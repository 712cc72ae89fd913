# -*- coding: utf-8 -*-
"""Weekly summary — Pydantic models (camelCase on the wire)."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BestLiftDelta(_CamelModel):
    exercise: Optional[str] = None
    delta: float = 0.0


class WeeklyPerformance(_CamelModel):
    sessions: int = 0
    volume: float = 0.0
    previous_volume: float = 0.0
    volume_delta: float = 0.0
    best_lift_delta: BestLiftDelta = BestLiftDelta()


class WeeklyNutrition(_CamelModel):
    scans: int = 0
    avg_calories: float = 0.0
    protein_warnings: int = 0
    protein_target: float = 30.0


class WeeklyStats(_CamelModel):
    period_start: str
    performance: WeeklyPerformance
    nutrition: WeeklyNutrition


class WeeklySummaryResponse(_CamelModel):
    summary: str
    stats: WeeklyStats
