# -*- coding: utf-8 -*-
"""Admin console — cross-user reads and the admin audit log."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional
from uuid import uuid4

from ..app_db import db_conn
from ..auth.security import is_admin_email
from ..config import settings
from ..gamification.engine import calculate_xp
from ..timeutil import iso_now, start_of_day, to_iso, utc_now

logger = logging.getLogger(__name__)

METRICS_MIN_DAYS = 7
METRICS_MAX_DAYS = 90
DETAILS_LIMIT = 5
LOGS_LIMIT = 50


def list_users_with_counts() -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            """
            SELECT
                u.id, u.email, u.subscription_tier, u.first_name, u.created_at,
                (SELECT COUNT(*) FROM analyses a WHERE a.user_id = u.id) AS analysis_count,
                (SELECT COUNT(*) FROM workout_plans w WHERE w.user_id = u.id) AS plan_count,
                (SELECT COUNT(*) FROM goals g WHERE g.user_id = u.id AND g.completed = 1) AS goals_completed
            FROM users u
            ORDER BY u.created_at DESC
            """
        ).fetchall()
    users = []
    for r in rows:
        item = dict(r)
        item["is_admin"] = is_admin_email(item["email"])
        users.append(item)
    return users


def get_user_details(user_id: str) -> Dict[str, List[Dict[str, Any]]]:
    with db_conn(settings.app_db_path) as conn:
        analyses = conn.execute(
            """
            SELECT id, type, exercise_name, prompt, created_at FROM analyses
            WHERE user_id = ? ORDER BY created_at DESC LIMIT ?
            """,
            (user_id, DETAILS_LIMIT),
        ).fetchall()
        plans = conn.execute(
            "SELECT id, plan_name, created_at FROM workout_plans WHERE user_id = ? ORDER BY created_at DESC LIMIT ?",
            (user_id, DETAILS_LIMIT),
        ).fetchall()
        goals = conn.execute(
            "SELECT id, text, completed, created_at FROM goals WHERE user_id = ? ORDER BY created_at DESC LIMIT ?",
            (user_id, DETAILS_LIMIT),
        ).fetchall()
    return {
        "analyses": [dict(r) for r in analyses],
        "plans": [dict(r) for r in plans],
        "goals": [{**dict(r), "completed": bool(r["completed"])} for r in goals],
    }


def _count(conn, sql: str) -> int:
    row = conn.execute(sql).fetchone()
    return int(row[0] or 0)


def compute_admin_stats() -> Dict[str, Any]:
    with db_conn(settings.app_db_path) as conn:
        total_users = _count(conn, "SELECT COUNT(*) FROM users")
        total_analyses = _count(conn, "SELECT COUNT(*) FROM analyses")
        total_plans = _count(conn, "SELECT COUNT(*) FROM workout_plans")
        total_goals = _count(conn, "SELECT COUNT(*) FROM goals WHERE completed = 1")
        top_rows = conn.execute(
            """
            SELECT u.email AS email, COUNT(a.id) AS analyses
            FROM users u LEFT JOIN analyses a ON a.user_id = u.id
            GROUP BY u.id
            ORDER BY analyses DESC
            LIMIT 5
            """
        ).fetchall()
    xp_total = calculate_xp(total_analyses, total_plans, total_goals)
    return {
        "total_users": total_users,
        "total_analyses": total_analyses,
        "total_plans": total_plans,
        "total_goals_completed": total_goals,
        "avg_xp": round(xp_total / total_users) if total_users else 0,
        "top_users": [dict(r) for r in top_rows],
    }


def clamp_metrics_range(value: Optional[int]) -> int:
    if not value:
        return 14
    return min(max(int(value), METRICS_MIN_DAYS), METRICS_MAX_DAYS)


def _daily_series(conn, table: str, since: str, day_keys: List[str]) -> List[Dict[str, Any]]:
    rows = conn.execute(
        f"SELECT substr(created_at, 1, 10) AS day, COUNT(*) AS n FROM {table} WHERE created_at >= ? GROUP BY day",
        (since,),
    ).fetchall()
    counts = {r["day"]: int(r["n"]) for r in rows}
    return [{"day": day, "count": counts.get(day, 0)} for day in day_keys]


def compute_metrics(range_days: int, now: Optional[datetime] = None) -> Dict[str, Any]:
    since_dt = start_of_day(now or utc_now()) - timedelta(days=range_days - 1)
    since = to_iso(since_dt)
    day_keys = [(since_dt + timedelta(days=i)).date().isoformat() for i in range(range_days)]
    with db_conn(settings.app_db_path) as conn:
        analysis_series = _daily_series(conn, "analyses", since, day_keys)
        signup_series = _daily_series(conn, "users", since, day_keys)
    return {"range": range_days, "analysis_series": analysis_series, "signup_series": signup_series}


def record_admin_log(admin_email: str, action: str, payload: Dict[str, Any]) -> None:
    logger.info("admin action %s by %s: %s", action, admin_email, payload)
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            "INSERT INTO admin_logs (id, admin_email, action, payload_json, created_at) VALUES (?, ?, ?, ?, ?)",
            (str(uuid4()), admin_email, action, json.dumps(payload, ensure_ascii=False), iso_now()),
        )


def list_admin_logs(limit: int = LOGS_LIMIT) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM admin_logs ORDER BY created_at DESC LIMIT ?",
            (int(limit),),
        ).fetchall()
    out: List[Dict[str, Any]] = []
    for r in rows:
        item = dict(r)
        try:
            payload = json.loads(item.pop("payload_json") or "{}")
        except ValueError:
            payload = {}
        item["payload"] = payload if isinstance(payload, dict) else {"value": payload}
        out.append(item)
    return out
