# -*- coding: utf-8 -*-
"""Lazy clock reconstruction for persisted timers.

Stored timer state reflects the instant of the last write. Reads project a
running timer forward by the wall-clock time elapsed since `updatedAt`;
nothing ticks in memory between requests.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Optional

from ..timeutil import parse_timestamp, utc_now
from .models import StopwatchState


def elapsed_millis(updated_at: Optional[str], now: Optional[datetime] = None) -> Optional[int]:
    """Milliseconds since `updated_at`, or None when it does not parse."""
    last_update = parse_timestamp(updated_at)
    if last_update is None:
        return None
    current = now or utc_now()
    return int((current - last_update).total_seconds() * 1000)


def elapsed_seconds(updated_at: Optional[str], now: Optional[datetime] = None) -> Optional[int]:
    """Whole seconds (floored) since `updated_at`, or None when it does not parse."""
    last_update = parse_timestamp(updated_at)
    if last_update is None:
        return None
    current = now or utc_now()
    return math.floor((current - last_update).total_seconds())


def reconstruct_stopwatch(state: StopwatchState, now: Optional[datetime] = None) -> StopwatchState:
    if not state.running or not state.updated_at:
        return state
    delta = elapsed_millis(state.updated_at, now)
    if delta is None:
        return state
    # Clock skew must never rewind the stopwatch.
    return state.model_copy(update={"elapsed_ms": state.elapsed_ms + max(delta, 0)})
