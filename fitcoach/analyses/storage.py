# -*- coding: utf-8 -*-
"""Analyses — DB storage helpers."""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings
from ..timeutil import iso_now


def create_analysis(
    *,
    user_id: str,
    analysis_type: str,
    exercise_name: Optional[str],
    prompt: Optional[str],
    result: str,
) -> Dict[str, Any]:
    record = {
        "id": str(uuid4()),
        "type": analysis_type,
        "exercise_name": exercise_name,
        "prompt": prompt,
        "result": result,
        "created_at": iso_now(),
    }
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO analyses (id, user_id, type, exercise_name, prompt, result, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                record["id"],
                user_id,
                analysis_type,
                exercise_name,
                prompt,
                result,
                record["created_at"],
            ),
        )
    return record


def list_analyses(user_id: str, *, limit: int = 100, offset: int = 0) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            """
            SELECT id, type, exercise_name, prompt, result, created_at FROM analyses
            WHERE user_id = ? ORDER BY created_at DESC LIMIT ? OFFSET ?
            """,
            (user_id, int(limit), int(offset)),
        ).fetchall()
    return [dict(r) for r in rows]


def count_analyses(user_id: str) -> int:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT COUNT(*) AS n FROM analyses WHERE user_id = ?", (user_id,)).fetchone()
    return int(row["n"])


def list_analysis_timestamps(user_id: str) -> List[str]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute("SELECT created_at FROM analyses WHERE user_id = ?", (user_id,)).fetchall()
    return [r["created_at"] for r in rows]


def count_by_type_since(user_id: str, since: str) -> Dict[str, int]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            """
            SELECT type, COUNT(*) AS n FROM analyses
            WHERE user_id = ? AND created_at >= ?
            GROUP BY type
            """,
            (user_id, since),
        ).fetchall()
    return {r["type"]: int(r["n"]) for r in rows}
