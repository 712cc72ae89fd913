# -*- coding: utf-8 -*-
"""Performance log — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ..auth.security import get_current_user
from .analytics import summarize_entries
from .models import (
    PerformanceAnalytics,
    PerformanceAnalyticsResponse,
    PerformanceCreateRequest,
    PerformanceEntry,
    PerformanceListResponse,
    RangeKey,
)
from .storage import create_entry, delete_entry, list_entries_since, range_start

router = APIRouter(prefix="/api/performance", tags=["Performance"])


@router.post("", response_model=PerformanceEntry, status_code=201, summary="Log a set")
def create_entry_api(request: PerformanceCreateRequest, user: dict = Depends(get_current_user)):
    entry = create_entry(
        user_id=user["id"],
        exercise=request.exercise,
        load=request.load,
        reps=request.reps,
        unit=request.unit,
        rpe=request.rpe,
        notes=request.notes,
        performed_at=request.performed_at,
    )
    return PerformanceEntry(**entry)


@router.get("", response_model=PerformanceListResponse, summary="Logged sets in a range")
def list_entries_api(range: RangeKey = Query(default="month"), user: dict = Depends(get_current_user)):
    entries = list_entries_since(user["id"], range_start(range))
    return PerformanceListResponse(range=range, entries=[PerformanceEntry(**e) for e in entries])


@router.get("/analytics", response_model=PerformanceAnalyticsResponse, summary="Volume and load analytics")
def analytics_api(range: RangeKey = Query(default="month"), user: dict = Depends(get_current_user)):
    entries = list_entries_since(user["id"], range_start(range))
    return PerformanceAnalyticsResponse(range=range, analytics=PerformanceAnalytics(**summarize_entries(entries)))


@router.delete("/{entry_id}", summary="Delete a logged set")
def delete_entry_api(entry_id: str, user: dict = Depends(get_current_user)):
    delete_entry(user_id=user["id"], entry_id=entry_id)
    return {"status": "ok"}
