# -*- coding: utf-8 -*-
"""Workout plan storage helpers (SQLite)."""

from __future__ import annotations

import json
from typing import Any, Dict, List
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn
from ..config import settings
from ..timeutil import iso_now


def _row_to_plan(row: Dict[str, Any]) -> Dict[str, Any]:
    plan = {}
    raw = row.get("plan_json")
    if raw:
        try:
            plan = json.loads(raw)
        except ValueError:
            plan = {}
    return {
        "plan_id": row.get("id"),
        "plan_name": row.get("plan_name") or "",
        "plan": plan if isinstance(plan, dict) else {},
        "created_at": row.get("created_at"),
    }


def create_plan(*, user_id: str, plan_name: str, plan: Dict[str, Any]) -> Dict[str, Any]:
    plan_id = str(uuid4())
    now = iso_now()
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            "INSERT INTO workout_plans (id, user_id, plan_name, plan_json, created_at) VALUES (?, ?, ?, ?, ?)",
            (plan_id, user_id, plan_name, json.dumps(plan, ensure_ascii=False), now),
        )
    return {"plan_id": plan_id, "plan_name": plan_name, "plan": plan, "created_at": now}


def list_plans(user_id: str) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM workout_plans WHERE user_id = ? ORDER BY created_at DESC",
            (user_id,),
        ).fetchall()
    return [_row_to_plan(dict(r)) for r in rows]


def get_plan(*, user_id: str, plan_id: str) -> Dict[str, Any]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(
            "SELECT * FROM workout_plans WHERE id = ? AND user_id = ?",
            (plan_id, user_id),
        ).fetchone()
    if not row:
        raise HTTPException(status_code=404, detail="Plan not found")
    return _row_to_plan(dict(row))


def delete_plan(*, user_id: str, plan_id: str) -> None:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM workout_plans WHERE id = ? AND user_id = ?", (plan_id, user_id))
        if cur.rowcount == 0:
            raise HTTPException(status_code=404, detail="Plan not found")


def count_plans(user_id: str) -> int:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT COUNT(*) AS n FROM workout_plans WHERE user_id = ?", (user_id,)).fetchone()
    return int(row["n"])
