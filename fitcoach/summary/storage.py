# -*- coding: utf-8 -*-
"""Weekly summary — gathers both windows from the DB and asks the writer for text."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from ..config import settings
from ..genai.client import GenAIConfigError, GenAIError
from ..meal_scans.storage import list_scans_since
from ..performance.storage import list_entries_since
from ..timeutil import to_iso
from .aggregate import compute_weekly_stats, week_windows
from .models import WeeklyStats
from .writer import SummaryWriter

logger = logging.getLogger(__name__)


def get_weekly_stats(user_id: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    windows = week_windows(now)
    entries = list_entries_since(user_id, to_iso(windows.previous_start))
    scans = list_scans_since(user_id, to_iso(windows.current_start))
    return compute_weekly_stats(
        entries,
        scans,
        protein_target=settings.protein_target_g,
        now=windows.now,
    )


def build_weekly_summary(
    user_id: str,
    language: str,
    writer: SummaryWriter,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    # The writer sees exactly the stats object the client receives.
    stats = WeeklyStats.model_validate(get_weekly_stats(user_id, now=now)).model_dump(by_alias=True)
    try:
        summary = writer.write(stats=stats, language=language)
    except (GenAIError, GenAIConfigError):
        raise
    except Exception as exc:
        logger.error("weekly summary writer failed for user %s: %s", user_id, exc)
        raise GenAIError(f"Weekly summary generation failed: {exc}") from exc
    if not summary or not summary.strip():
        raise GenAIError("AI service returned an empty weekly summary")
    return {"summary": summary.strip(), "stats": stats}
