# -*- coding: utf-8 -*-
"""Meal plan storage helpers (SQLite)."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn
from ..config import settings
from ..timeutil import iso_now

logger = logging.getLogger(__name__)


def _decode_plan(meal_plan_id: str, raw: str | None) -> Dict[str, Any]:
    try:
        plan = json.loads(raw) if raw else {}
    except ValueError:
        logger.warning("meal plan %s has unreadable plan_json", meal_plan_id)
        return {}
    return plan if isinstance(plan, dict) else {}


def create_meal_plan(*, user_id: str, plan_name: str, plan: Dict[str, Any]) -> Dict[str, Any]:
    record = {"id": str(uuid4()), "plan_name": plan_name, "plan": plan, "created_at": iso_now()}
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            "INSERT INTO meal_plans (id, user_id, plan_name, plan_json, created_at) VALUES (?, ?, ?, ?, ?)",
            (record["id"], user_id, plan_name, json.dumps(plan, ensure_ascii=False), record["created_at"]),
        )
    return record


def list_meal_plans(user_id: str) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT id, plan_name, plan_json, created_at FROM meal_plans WHERE user_id = ? ORDER BY created_at DESC",
            (user_id,),
        ).fetchall()
    return [
        {
            "id": row["id"],
            "plan_name": row["plan_name"],
            "plan": _decode_plan(row["id"], row["plan_json"]),
            "created_at": row["created_at"],
        }
        for row in rows
    ]


def delete_meal_plan(*, user_id: str, meal_plan_id: str) -> None:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM meal_plans WHERE id = ? AND user_id = ?", (meal_plan_id, user_id))
        if cur.rowcount == 0:
            raise HTTPException(status_code=404, detail="Meal plan not found")
