# -*- coding: utf-8 -*-
"""Meal plan models for API payloads."""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class MealPlanCreateRequest(BaseModel):
    plan_name: str = Field(..., min_length=1, max_length=200)
    plan: Dict[str, Any] = Field(..., min_length=1, description="Days, meals and macro targets")


class MealPlanItem(BaseModel):
    id: str
    plan_name: str
    plan: Dict[str, Any]
    created_at: str


class MealPlanListResponse(BaseModel):
    items: List[MealPlanItem]
