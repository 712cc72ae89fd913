# -*- coding: utf-8 -*-
"""Workout plan models for API payloads."""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class PlanCreateRequest(BaseModel):
    plan_name: str = Field(..., min_length=1, max_length=200)
    plan: Dict[str, Any] = Field(default_factory=dict, description="Generated plan body (days, exercises)")


class PlanItem(BaseModel):
    plan_id: str
    plan_name: str
    plan: Dict[str, Any]
    created_at: str


class PlanListResponse(BaseModel):
    items: List[PlanItem]
