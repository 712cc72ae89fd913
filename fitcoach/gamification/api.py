# -*- coding: utf-8 -*-
"""Gamification — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ..auth.security import get_current_user
from .models import GamificationSnapshot
from .storage import get_snapshot

router = APIRouter(prefix="/api/gamification", tags=["Gamification"])


@router.get("", response_model=GamificationSnapshot, summary="XP, level, streak and badges (computed fresh)")
def gamification(user: dict = Depends(get_current_user)):
    return GamificationSnapshot(**get_snapshot(user["id"]))
