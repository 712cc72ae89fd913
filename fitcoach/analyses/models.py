# -*- coding: utf-8 -*-
"""Analyses — Pydantic models."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

AnalysisType = Literal["video", "image", "live"]


class AnalysisCreateRequest(BaseModel):
    type: AnalysisType
    exercise_name: Optional[str] = Field(None, max_length=120)
    prompt: Optional[str] = Field(None, max_length=4000)
    result: str = Field(..., min_length=1)


class AnalysisRecord(BaseModel):
    id: str
    type: AnalysisType
    exercise_name: Optional[str] = None
    prompt: Optional[str] = None
    result: str
    created_at: str


class AnalysisListResponse(BaseModel):
    count: int
    items: List[AnalysisRecord]


class AnalysisStatsResponse(BaseModel):
    video: int = 0
    image: int = 0
    live: int = 0
