# -*- coding: utf-8 -*-
"""Meal scans — DB storage helpers (image bytes are not retained)."""

from __future__ import annotations

import hashlib
import json
import logging
from typing import Any, Dict, List, Optional
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings
from ..timeutil import iso_now
from .models import MealScanResult

logger = logging.getLogger(__name__)


def image_ref_for(image_bytes: bytes) -> str:
    return "sha256:" + hashlib.sha256(image_bytes).hexdigest()


def _row_to_scan(row: Dict[str, Any]) -> Dict[str, Any]:
    try:
        result = json.loads(row.get("result_json") or "{}")
    except ValueError:
        logger.warning("meal scan %s has an unreadable result", row.get("id"))
        result = {}
    return {
        "id": row["id"],
        "result": result,
        "image_ref": row.get("image_ref"),
        "user_notes": row.get("user_notes"),
        "language": row.get("language") or "en",
        "created_at": row["created_at"],
    }


def save_scan(
    *,
    user_id: str,
    result: MealScanResult,
    image_ref: Optional[str],
    user_notes: Optional[str],
    language: str,
) -> Dict[str, Any]:
    scan_id = str(uuid4())
    now = iso_now()
    result_json = result.model_dump_json()
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO meal_scans (id, user_id, result_json, image_ref, user_notes, language, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (scan_id, user_id, result_json, image_ref, user_notes, language, now),
        )
    return {
        "id": scan_id,
        "result": result.model_dump(),
        "image_ref": image_ref,
        "user_notes": user_notes,
        "language": language,
        "created_at": now,
    }


def list_scans(user_id: str, *, limit: int = 20) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM meal_scans WHERE user_id = ? ORDER BY created_at DESC LIMIT ?",
            (user_id, int(limit)),
        ).fetchall()
    return [_row_to_scan(dict(r)) for r in rows]


def list_scans_since(user_id: str, since: str) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM meal_scans WHERE user_id = ? AND created_at >= ? ORDER BY created_at ASC",
            (user_id, since),
        ).fetchall()
    return [_row_to_scan(dict(r)) for r in rows]


def count_scans_since(user_id: str, since: str) -> int:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(
            "SELECT COUNT(*) AS n FROM meal_scans WHERE user_id = ? AND created_at >= ?",
            (user_id, since),
        ).fetchone()
    return int(row["n"])
