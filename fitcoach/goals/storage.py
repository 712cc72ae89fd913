# -*- coding: utf-8 -*-
"""Goals — DB storage helpers."""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn
from ..config import settings
from ..timeutil import iso_now


def _row_to_goal(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "text": row["text"],
        "completed": bool(row["completed"]),
        "created_at": row["created_at"],
    }


def create_goal(*, user_id: str, text: str) -> Dict[str, Any]:
    goal_id = str(uuid4())
    now = iso_now()
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            "INSERT INTO goals (id, user_id, text, completed, created_at) VALUES (?, ?, ?, 0, ?)",
            (goal_id, user_id, text, now),
        )
    return {"id": goal_id, "text": text, "completed": False, "created_at": now}


def list_goals(user_id: str) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM goals WHERE user_id = ? ORDER BY created_at DESC",
            (user_id,),
        ).fetchall()
    return [_row_to_goal(dict(r)) for r in rows]


def update_goal(*, user_id: str, goal_id: str, text: Optional[str], completed: Optional[bool]) -> Dict[str, Any]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(
            "SELECT * FROM goals WHERE id = ? AND user_id = ?",
            (goal_id, user_id),
        ).fetchone()
        if not row:
            raise HTTPException(status_code=404, detail="Goal not found")
        current = dict(row)
        new_text = text if text is not None else current["text"]
        new_completed = int(completed) if completed is not None else current["completed"]
        conn.execute(
            "UPDATE goals SET text = ?, completed = ? WHERE id = ?",
            (new_text, new_completed, goal_id),
        )
    current.update({"text": new_text, "completed": new_completed})
    return _row_to_goal(current)


def delete_goal(*, user_id: str, goal_id: str) -> None:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM goals WHERE id = ? AND user_id = ?", (goal_id, user_id))
        if cur.rowcount == 0:
            raise HTTPException(status_code=404, detail="Goal not found")


def count_completed_goals(user_id: str) -> int:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(
            "SELECT COUNT(*) AS n FROM goals WHERE user_id = ? AND completed = 1",
            (user_id,),
        ).fetchone()
    return int(row["n"])
