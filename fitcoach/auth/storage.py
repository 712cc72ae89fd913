# -*- coding: utf-8 -*-
"""Auth — DB storage helpers."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn
from ..config import settings
from ..timeutil import iso_now

SUBSCRIPTION_TIERS = ("free", "pro", "elite")


def get_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM users WHERE email = ?", (email.lower().strip(),)).fetchone()
        return dict(row) if row else None


def get_user_by_id(user_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        return dict(row) if row else None


def create_user(*, email: str, password_hash: str, first_name: Optional[str] = None) -> Dict[str, Any]:
    user_id = str(uuid4())
    now = iso_now()
    email_norm = email.lower().strip()
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO users (id, email, password_hash, subscription_tier, first_name, created_at)
            VALUES (?, ?, ?, 'free', ?, ?)
            """,
            (user_id, email_norm, password_hash, first_name, now),
        )
    return {
        "id": user_id,
        "email": email_norm,
        "password_hash": password_hash,
        "subscription_tier": "free",
        "first_name": first_name,
        "created_at": now,
    }


def set_subscription_tier(user_id: str, tier: str) -> Dict[str, Any]:
    """Persist a new tier and return the fresh user row."""
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("UPDATE users SET subscription_tier = ? WHERE id = ?", (tier, user_id))
        if cur.rowcount == 0:
            raise HTTPException(status_code=404, detail="User not found")
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
    return dict(row)


def set_subscription_tier_bulk(user_ids: Iterable[str], tier: str) -> int:
    ids = list(user_ids)
    if not ids:
        return 0
    placeholders = ",".join("?" for _ in ids)
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute(
            f"UPDATE users SET subscription_tier = ? WHERE id IN ({placeholders})",
            [tier, *ids],
        )
        return cur.rowcount


def update_profile(
    user_id: str,
    *,
    first_name: str,
    birth_date: str,
    height_cm: Optional[float],
    weight_kg: Optional[float],
    sex: Optional[str],
) -> Dict[str, Any]:
    """Overwrite the profile fields and return the fresh user row; a null `sex` keeps the stored one."""
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute(
            """
            UPDATE users
            SET first_name = ?, birth_date = ?, height_cm = ?, weight_kg = ?, sex = COALESCE(?, sex)
            WHERE id = ?
            """,
            (first_name, birth_date, height_cm, weight_kg, sex, user_id),
        )
        if cur.rowcount == 0:
            raise HTTPException(status_code=404, detail="User not found")
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
    return dict(row)
