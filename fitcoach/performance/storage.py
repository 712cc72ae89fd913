# -*- coding: utf-8 -*-
"""Performance log — DB storage helpers."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn
from ..config import settings
from ..timeutil import iso_now, start_of_day, to_iso, utc_now
from .models import RANGE_DAYS


def _row_to_entry(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "exercise": row["exercise"],
        "load": float(row["load"]),
        "reps": int(row["reps"]),
        "unit": row.get("unit") or "kg",
        "rpe": row.get("rpe"),
        "notes": row.get("notes"),
        "performed_at": row["performed_at"],
        "created_at": row["created_at"],
    }


def range_start(range_key: str, now: Optional[datetime] = None) -> str:
    """First instant of a week/month/year window ending today (UTC days)."""
    days = RANGE_DAYS.get(range_key, RANGE_DAYS["month"])
    today = start_of_day(now or utc_now())
    return to_iso(today - timedelta(days=days - 1))


def create_entry(
    *,
    user_id: str,
    exercise: str,
    load: float,
    reps: int,
    unit: str,
    rpe: Optional[float],
    notes: Optional[str],
    performed_at: Optional[str],
) -> Dict[str, Any]:
    entry_id = str(uuid4())
    now = iso_now()
    performed = performed_at or now
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO performance_logs (id, user_id, exercise, load, reps, unit, rpe, notes, performed_at, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (entry_id, user_id, exercise, float(load), int(reps), unit, rpe, notes, performed, now),
        )
    return {
        "id": entry_id,
        "exercise": exercise,
        "load": float(load),
        "reps": int(reps),
        "unit": unit,
        "rpe": rpe,
        "notes": notes,
        "performed_at": performed,
        "created_at": now,
    }


def list_entries_since(user_id: str, since: str) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            """
            SELECT * FROM performance_logs
            WHERE user_id = ? AND performed_at >= ?
            ORDER BY performed_at DESC, created_at DESC
            """,
            (user_id, since),
        ).fetchall()
    return [_row_to_entry(dict(r)) for r in rows]


def delete_entry(*, user_id: str, entry_id: str) -> None:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute(
            "DELETE FROM performance_logs WHERE id = ? AND user_id = ?",
            (entry_id, user_id),
        )
        if cur.rowcount == 0:
            raise HTTPException(status_code=404, detail="Performance log not found")
