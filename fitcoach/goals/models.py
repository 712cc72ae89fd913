# -*- coding: utf-8 -*-
"""Goals — Pydantic models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class GoalCreateRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=500)


class GoalUpdateRequest(BaseModel):
    text: Optional[str] = Field(None, min_length=1, max_length=500)
    completed: Optional[bool] = None


class Goal(BaseModel):
    id: str
    text: str
    completed: bool = False
    created_at: str


class GoalListResponse(BaseModel):
    items: List[Goal]
