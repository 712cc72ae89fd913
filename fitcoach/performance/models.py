# -*- coding: utf-8 -*-
"""Performance log — Pydantic models."""

from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..timeutil import iso_now, parse_timestamp, to_iso

LoadUnit = Literal["kg", "lb"]
RangeKey = Literal["week", "month", "year"]

RANGE_DAYS = {"week": 7, "month": 30, "year": 365}


class PerformanceCreateRequest(BaseModel):
    exercise: str = Field(..., min_length=1, max_length=120)
    load: float = Field(..., ge=0)
    reps: int = Field(..., ge=0)
    unit: LoadUnit = "kg"
    rpe: Optional[float] = Field(None, ge=0, le=10)
    notes: Optional[str] = Field(None, max_length=1000)
    performed_at: Optional[str] = Field(None, description="YYYY-MM-DD or ISO8601; defaults to now")

    @field_validator("exercise", mode="before")
    @classmethod
    def _strip_exercise(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("performed_at", mode="before")
    @classmethod
    def _normalize_performed_at(cls, value: Any) -> str:
        if value is None or (isinstance(value, str) and not value.strip()):
            return iso_now()
        parsed = parse_timestamp(value)
        if parsed is None:
            raise ValueError("performed_at must be an ISO date or timestamp")
        return to_iso(parsed)


class PerformanceEntry(BaseModel):
    id: str
    exercise: str
    load: float
    reps: int
    unit: LoadUnit = "kg"
    rpe: Optional[float] = None
    notes: Optional[str] = None
    performed_at: str
    created_at: str


class PerformanceListResponse(BaseModel):
    range: RangeKey
    entries: List[PerformanceEntry]


class ExerciseAnalytics(BaseModel):
    exercise: str
    entries: int
    volume: float
    best_load: float


class PerformanceAnalytics(BaseModel):
    """Range totals; loads are normalized to kg."""

    total_entries: int = 0
    total_volume: float = 0.0
    best_load: float = 0.0
    average_load: float = 0.0
    exercises: List[ExerciseAnalytics] = []


class PerformanceAnalyticsResponse(BaseModel):
    range: RangeKey
    analytics: PerformanceAnalytics
