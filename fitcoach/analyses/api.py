# -*- coding: utf-8 -*-
"""Analyses — API endpoints (stored form-analysis results)."""

from __future__ import annotations

from datetime import timedelta

from fastapi import APIRouter, Depends, Query

from ..auth.security import get_current_user
from ..timeutil import to_iso, utc_now
from .models import AnalysisCreateRequest, AnalysisListResponse, AnalysisRecord, AnalysisStatsResponse
from .storage import count_analyses, count_by_type_since, create_analysis, list_analyses

router = APIRouter(prefix="/api/analysis", tags=["Analyses"])


@router.post("", response_model=AnalysisRecord, status_code=201, summary="Save an analysis result")
def create(request: AnalysisCreateRequest, user: dict = Depends(get_current_user)):
    record = create_analysis(
        user_id=user["id"],
        analysis_type=request.type,
        exercise_name=request.exercise_name,
        prompt=request.prompt,
        result=request.result,
    )
    return AnalysisRecord(**record)


@router.get("", response_model=AnalysisListResponse, summary="List analyses, newest first")
def list_all(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    user: dict = Depends(get_current_user),
):
    items = [AnalysisRecord(**r) for r in list_analyses(user["id"], limit=limit, offset=offset)]
    return AnalysisListResponse(count=count_analyses(user["id"]), items=items)


@router.get("/stats", response_model=AnalysisStatsResponse, summary="Analyses per type over the last 30 days")
def stats(user: dict = Depends(get_current_user)):
    since = to_iso(utc_now() - timedelta(days=30))
    return AnalysisStatsResponse(**count_by_type_since(user["id"], since))
