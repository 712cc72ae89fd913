# -*- coding: utf-8 -*-
"""Meal scans — API endpoints."""

from __future__ import annotations

import base64
import binascii
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user
from ..config import settings
from ..genai.client import GenAIConfigError, GenAIError
from ..timeutil import start_of_month, to_iso, utc_now
from .models import (
    MealScanCreateResponse,
    MealScanListResponse,
    MealScanQuota,
    MealScanRecord,
    MealScanRequest,
)
from .storage import count_scans_since, image_ref_for, list_scans, save_scan
from .vision import MealAnalyzer, get_meal_analyzer

router = APIRouter(prefix="/api/meal-scans", tags=["Meal scans"])


def _decode_image_or_400(image_base64: str, max_bytes: int) -> bytes:
    raw = image_base64.strip()
    if raw.startswith("data:") and "," in raw:
        raw = raw.split(",", 1)[1]
    try:
        data = base64.b64decode(raw, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise HTTPException(status_code=400, detail=f"Invalid base64 image: {exc}") from exc
    if len(data) > max_bytes:
        raise HTTPException(status_code=400, detail=f"Image too large: {len(data)} bytes > {max_bytes}")
    return data


def monthly_limit(tier: str) -> Optional[int]:
    return settings.meal_scan_limits.get(tier, 0)


def quota_for(user: dict) -> MealScanQuota:
    since = to_iso(start_of_month(utc_now()))
    return MealScanQuota(used=count_scans_since(user["id"], since), limit=monthly_limit(user["subscription_tier"]))


@router.get("/stats", response_model=MealScanQuota, summary="Scans used this month and the tier limit")
def stats(user: dict = Depends(get_current_user)):
    return quota_for(user)


@router.get("", response_model=MealScanListResponse, summary="Recent meal scans")
def history(limit: int = Query(default=20, ge=1, le=100), user: dict = Depends(get_current_user)):
    return MealScanListResponse(scans=[MealScanRecord(**s) for s in list_scans(user["id"], limit=limit)])


@router.post("", response_model=MealScanCreateResponse, status_code=201, summary="Analyze a meal photo")
def scan(
    request: MealScanRequest,
    user: dict = Depends(get_current_user),
    analyzer: MealAnalyzer = Depends(get_meal_analyzer),
):
    quota = quota_for(user)
    if quota.limit == 0:
        raise HTTPException(status_code=403, detail="Meal scans require a paid subscription")
    if quota.limit is not None and quota.used >= quota.limit:
        raise HTTPException(status_code=429, detail="Monthly meal scan limit reached")

    image_bytes = _decode_image_or_400(request.image_base64, settings.max_image_bytes)
    try:
        result = analyzer.analyze(
            image_bytes=image_bytes,
            image_mime=request.image_mime,
            notes=request.notes,
            language=request.language,
        )
    except GenAIConfigError as exc:
        raise HTTPException(status_code=500, detail=f"AI service misconfigured: {exc}") from exc
    except GenAIError as exc:
        raise HTTPException(status_code=502, detail=f"Meal analysis failed: {exc}") from exc

    record = save_scan(
        user_id=user["id"],
        result=result,
        image_ref=image_ref_for(image_bytes),
        user_notes=request.notes,
        language=request.language,
    )
    return MealScanCreateResponse(scan=MealScanRecord(**record))
