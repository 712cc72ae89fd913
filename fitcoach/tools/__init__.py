# -*- coding: utf-8 -*-
"""
Timer tools (hydration tracker, stopwatch, boxing round timer).

State is persisted per user and advanced lazily at read time.
"""

from .boxing import advance_phase, replay_boxing, total_duration
from .clock import reconstruct_stopwatch
from .models import ToolState, default_tool_state, sanitize_tool_state

__all__ = [
    "ToolState",
    "advance_phase",
    "default_tool_state",
    "reconstruct_stopwatch",
    "replay_boxing",
    "sanitize_tool_state",
    "total_duration",
]
