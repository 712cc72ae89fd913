# -*- coding: utf-8 -*-
"""Weekly summary — API endpoints."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user
from ..genai.client import GenAIConfigError, GenAIError
from .models import WeeklySummaryResponse
from .storage import build_weekly_summary
from .writer import SummaryWriter, get_summary_writer

router = APIRouter(prefix="/api/summary", tags=["Summary"])


@router.get("/weekly", response_model=WeeklySummaryResponse, summary="AI recap of the last seven days")
def weekly_summary(
    lang: Literal["en", "fr", "es"] = Query(default="en"),
    user: dict = Depends(get_current_user),
    writer: SummaryWriter = Depends(get_summary_writer),
):
    try:
        payload = build_weekly_summary(user["id"], lang, writer)
    except GenAIConfigError as exc:
        raise HTTPException(status_code=500, detail=f"AI service misconfigured: {exc}") from exc
    except GenAIError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return WeeklySummaryResponse.model_validate(payload)
