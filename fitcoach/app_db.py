# -*- coding: utf-8 -*-
"""App database — SQLite schema and connection helpers.

Every per-user table cascades on user deletion. Timestamps are stored as
ISO-8601 UTC strings so lexical order equals chronological order.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Tuple

_OWNED = "FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE"

SCHEMA: Tuple[str, ...] = (
    """CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        email TEXT NOT NULL UNIQUE,
        password_hash TEXT NOT NULL,
        subscription_tier TEXT NOT NULL DEFAULT 'free',
        first_name TEXT,
        birth_date TEXT,
        height_cm REAL,
        weight_kg REAL,
        sex TEXT,
        created_at TEXT NOT NULL
    )""",
    # One JSON document per user; a write replaces it whole.
    f"""CREATE TABLE IF NOT EXISTS user_tool_states (
        user_id TEXT PRIMARY KEY,
        data_json TEXT NOT NULL,
        updated_at TEXT NOT NULL,
        {_OWNED}
    )""",
    f"""CREATE TABLE IF NOT EXISTS analyses (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        type TEXT NOT NULL,
        exercise_name TEXT,
        prompt TEXT,
        result TEXT NOT NULL,
        created_at TEXT NOT NULL,
        {_OWNED}
    )""",
    "CREATE INDEX IF NOT EXISTS idx_analyses_user_created ON analyses(user_id, created_at DESC)",
    f"""CREATE TABLE IF NOT EXISTS workout_plans (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        plan_name TEXT NOT NULL,
        plan_json TEXT NOT NULL,
        created_at TEXT NOT NULL,
        {_OWNED}
    )""",
    f"""CREATE TABLE IF NOT EXISTS meal_plans (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        plan_name TEXT NOT NULL,
        plan_json TEXT NOT NULL,
        created_at TEXT NOT NULL,
        {_OWNED}
    )""",
    f"""CREATE TABLE IF NOT EXISTS goals (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        text TEXT NOT NULL,
        completed INTEGER NOT NULL DEFAULT 0,
        created_at TEXT NOT NULL,
        {_OWNED}
    )""",
    f"""CREATE TABLE IF NOT EXISTS performance_logs (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        exercise TEXT NOT NULL,
        load REAL NOT NULL,
        reps INTEGER NOT NULL,
        unit TEXT NOT NULL,
        rpe REAL,
        notes TEXT,
        performed_at TEXT NOT NULL,
        created_at TEXT NOT NULL,
        {_OWNED}
    )""",
    "CREATE INDEX IF NOT EXISTS idx_performance_user_performed ON performance_logs(user_id, performed_at DESC)",
    f"""CREATE TABLE IF NOT EXISTS meal_scans (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        result_json TEXT NOT NULL,
        image_ref TEXT,
        user_notes TEXT,
        language TEXT NOT NULL,
        created_at TEXT NOT NULL,
        {_OWNED}
    )""",
    "CREATE INDEX IF NOT EXISTS idx_meal_scans_user_created ON meal_scans(user_id, created_at DESC)",
    # Audit rows outlive the users they mention.
    """CREATE TABLE IF NOT EXISTS admin_logs (
        id TEXT PRIMARY KEY,
        admin_email TEXT NOT NULL,
        action TEXT NOT NULL,
        payload_json TEXT NOT NULL,
        created_at TEXT NOT NULL
    )""",
)


def connect(db_path: Path) -> sqlite3.Connection:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def db_conn(db_path: Path) -> Iterator[sqlite3.Connection]:
    """Connection that commits on a clean exit and always closes."""
    conn = connect(db_path)
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()


def init_app_db(db_path: Path) -> None:
    """Create any missing tables and indexes; safe to call repeatedly."""
    with db_conn(db_path) as conn:
        for statement in SCHEMA:
            conn.execute(statement)
