# -*- coding: utf-8 -*-
"""Interval (boxing round) timer state machine."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from .clock import elapsed_seconds
from .models import BoxingState


def total_duration(state: BoxingState) -> int:
    """Seconds from the first bell until the timer stops.

    Rests only sit between rounds; the final bell ends the session.
    """
    return state.rounds * state.round_length + (state.rounds - 1) * state.rest_length


def is_finished(state: BoxingState) -> bool:
    return not state.running and state.current_round == state.rounds and state.time_left == 0


def advance_phase(state: BoxingState) -> BoxingState:
    """Apply one phase completion.

    round -> rest (restLength, possibly 0); rest -> next round. The end of
    the last round, or of a rest that has no round after it, stops the timer.
    """
    if state.phase == "round" and state.current_round < state.rounds:
        return state.model_copy(update={"phase": "rest", "time_left": state.rest_length})
    if state.current_round >= state.rounds:
        return state.model_copy(update={"running": False, "time_left": 0, "updated_at": None})
    return state.model_copy(
        update={
            "current_round": state.current_round + 1,
            "phase": "round",
            "time_left": state.round_length,
        }
    )


def replay_boxing(state: BoxingState, now: Optional[datetime] = None) -> BoxingState:
    """Fast-forward a running timer by the whole seconds since `updatedAt`.

    Works phase by phase, so the cost grows with the number of phases that
    elapsed, not with the number of seconds.
    """
    if not state.running or not state.updated_at:
        return state
    delta = elapsed_seconds(state.updated_at, now)
    if delta is None or delta <= 0:
        return state

    current = state
    while delta > 0 and current.running:
        if delta < current.time_left:
            current = current.model_copy(update={"time_left": current.time_left - delta})
            delta = 0
            break
        delta -= current.time_left
        current = advance_phase(current)
        if not current.running:
            break
        if current.time_left == 0:
            # Zero-length rest: go straight into the next round.
            current = advance_phase(current)
    return current
