# -*- coding: utf-8 -*-
"""Tools — persisted tool state (one JSON document per user)."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Iterable, Optional

from pydantic import ValidationError

from ..app_db import db_conn
from ..config import settings
from ..timeutil import iso_now
from .boxing import replay_boxing
from .clock import reconstruct_stopwatch
from .models import ToolState, default_tool_state, sanitize_tool_state

logger = logging.getLogger(__name__)


def project_tool_state(state: ToolState, now: Optional[datetime] = None) -> ToolState:
    """Fast-forward running timers to `now`. Hydration has no clock."""
    return ToolState(
        hydration=state.hydration,
        stopwatch=reconstruct_stopwatch(state.stopwatch, now),
        boxing=replay_boxing(state.boxing, now),
    )


def read_tool_state(user_id: str, now: Optional[datetime] = None) -> ToolState:
    """Current view of the user's tools; never fails on a bad stored document.

    The projection is returned only; the stored row keeps the state as of
    its last write.
    """
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(
            "SELECT data_json FROM user_tool_states WHERE user_id = ?",
            (user_id,),
        ).fetchone()
    if not row:
        return default_tool_state()
    try:
        stored = sanitize_tool_state(json.loads(row["data_json"]))
    except (ValueError, TypeError, ValidationError) as exc:
        logger.warning("tool state for user %s is unreadable, using defaults: %s", user_id, exc)
        return default_tool_state()
    return project_tool_state(stored, now)


def write_tool_state(user_id: str, payload: Any) -> ToolState:
    """Replace the user's tool state with the sanitized payload.

    Last write wins; concurrent writers are not detected.
    """
    state = sanitize_tool_state(payload)
    data_json = json.dumps(state.to_wire(), ensure_ascii=False)
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO user_tool_states (user_id, data_json, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT(user_id) DO UPDATE SET data_json = excluded.data_json, updated_at = excluded.updated_at
            """,
            (user_id, data_json, iso_now()),
        )
    return state


def reset_tool_states(user_ids: Iterable[str]) -> int:
    ids = list(user_ids)
    if not ids:
        return 0
    placeholders = ",".join("?" for _ in ids)
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute(f"DELETE FROM user_tool_states WHERE user_id IN ({placeholders})", ids)
        return cur.rowcount
