# -*- coding: utf-8 -*-
"""Tools — Pydantic models for the persisted hydration/stopwatch/boxing state.

Every field coerces instead of rejecting: clients write whatever the widget
holds and the server clamps it into range. The stored document keeps the
camelCase keys the widgets use.
"""

from __future__ import annotations

import math
from typing import Any, ClassVar, Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..timeutil import iso_now

MAX_STOPWATCH_MS = 1000 * 60 * 60 * 10

BoxingPhase = Literal["round", "rest"]


def clamp_number(value: Any, default: int, lo: int, hi: int) -> int:
    """Coerce an arbitrary JSON value into an integer within [lo, hi].

    Missing values take the default, non-numeric values fall to the lower
    bound, finite floats round to the nearest integer.
    """
    if value is None:
        value = default
    if isinstance(value, (bool, int, float)):
        try:
            number = float(value)
        except OverflowError:
            # Integers past the float range still saturate at a bound.
            return hi if value > 0 else lo
    elif isinstance(value, str):
        raw = value.strip()
        try:
            number = float(raw) if raw else 0.0
        except ValueError:
            number = math.nan
    else:
        number = math.nan
    if math.isnan(number):
        return lo
    if number <= lo:
        return lo
    if number >= hi:
        return hi
    return int(round(number))


class _ToolModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    # field name -> (default, lower bound, upper bound)
    BOUNDS: ClassVar[Dict[str, Tuple[int, int, int]]] = {}

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class HydrationState(_ToolModel):
    BOUNDS: ClassVar[Dict[str, Tuple[int, int, int]]] = {
        "target_ml": (2500, 500, 5000),
        "consumed_ml": (0, 0, 10000),
    }

    target_ml: int = Field(2500, ge=500, le=5000)
    consumed_ml: int = Field(0, ge=0, le=10000)

    @field_validator("target_ml", "consumed_ml", mode="before")
    @classmethod
    def _clamp(cls, value: Any, info: ValidationInfo) -> int:
        default, lo, hi = cls.BOUNDS[info.field_name]
        return clamp_number(value, default, lo, hi)


class _TimerState(_ToolModel):
    running: bool = False
    updated_at: Optional[str] = None

    @field_validator("running", mode="before")
    @classmethod
    def _coerce_running(cls, value: Any) -> bool:
        return bool(value)

    @field_validator("updated_at", mode="before")
    @classmethod
    def _coerce_updated_at(cls, value: Any) -> Optional[str]:
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None

    @model_validator(mode="after")
    def _stamp_running(self):
        # updatedAt is set iff the timer runs.
        if not self.running:
            self.updated_at = None
        elif not self.updated_at:
            self.updated_at = iso_now()
        return self


class StopwatchState(_TimerState):
    BOUNDS: ClassVar[Dict[str, Tuple[int, int, int]]] = {
        "elapsed_ms": (0, 0, MAX_STOPWATCH_MS),
    }

    elapsed_ms: int = Field(0, ge=0)

    @field_validator("elapsed_ms", mode="before")
    @classmethod
    def _clamp(cls, value: Any, info: ValidationInfo) -> int:
        default, lo, hi = cls.BOUNDS[info.field_name]
        return clamp_number(value, default, lo, hi)


class BoxingState(_TimerState):
    BOUNDS: ClassVar[Dict[str, Tuple[int, int, int]]] = {
        "round_length": (180, 10, 900),
        "rest_length": (60, 0, 600),
        "rounds": (3, 1, 20),
        "current_round": (1, 1, 20),
        "time_left": (180, 0, 1800),
    }

    round_length: int = Field(180, ge=10, le=900)
    rest_length: int = Field(60, ge=0, le=600)
    rounds: int = Field(3, ge=1, le=20)
    current_round: int = Field(1, ge=1, le=20)
    phase: BoxingPhase = "round"
    time_left: int = Field(180, ge=0, le=1800)

    @field_validator("round_length", "rest_length", "rounds", "current_round", "time_left", mode="before")
    @classmethod
    def _clamp(cls, value: Any, info: ValidationInfo) -> int:
        default, lo, hi = cls.BOUNDS[info.field_name]
        return clamp_number(value, default, lo, hi)

    @field_validator("phase", mode="before")
    @classmethod
    def _coerce_phase(cls, value: Any) -> str:
        return "rest" if value == "rest" else "round"

    @model_validator(mode="after")
    def _cap_current_round(self):
        if self.current_round > self.rounds:
            self.current_round = self.rounds
        return self


class ToolState(_ToolModel):
    hydration: HydrationState = Field(default_factory=HydrationState)
    stopwatch: StopwatchState = Field(default_factory=StopwatchState)
    boxing: BoxingState = Field(default_factory=BoxingState)


def default_tool_state() -> ToolState:
    return ToolState()


def _as_object(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def sanitize_tool_state(payload: Any) -> ToolState:
    """Build a fully clamped ToolState from untrusted JSON.

    Missing sub-objects take the defaults, never a previously stored value.
    """
    body = _as_object(payload)
    return ToolState(
        hydration=HydrationState.model_validate(_as_object(body.get("hydration"))),
        stopwatch=StopwatchState.model_validate(_as_object(body.get("stopwatch"))),
        boxing=BoxingState.model_validate(_as_object(body.get("boxing"))),
    )


class ToolStateSaveResponse(BaseModel):
    message: str
    state: Dict[str, Any]
