# -*- coding: utf-8 -*-
"""Meal scans — Pydantic models."""

from __future__ import annotations

import re
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

Language = Literal["en", "fr", "es"]

_NUM_RE = re.compile(r"-?\d+(?:\.\d+)?")


def _coerce_grams(value: Any) -> float:
    """Model numbers arrive as 32, "32", "32g" or "~32 g"."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return max(0.0, float(value))
    if isinstance(value, str):
        match = _NUM_RE.search(value.replace(",", "."))
        if match:
            return max(0.0, float(match.group(0)))
    return 0.0


class MealScanMacros(BaseModel):
    protein_grams: float = Field(0.0, ge=0)
    carbs_grams: float = Field(0.0, ge=0)
    fat_grams: float = Field(0.0, ge=0)

    @field_validator("protein_grams", "carbs_grams", "fat_grams", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> float:
        return _coerce_grams(value)


class CaloriesRange(BaseModel):
    min: float = Field(0.0, ge=0)
    max: float = Field(0.0, ge=0)

    @field_validator("min", "max", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> float:
        return _coerce_grams(value)


class MealScanIngredient(BaseModel):
    name: str = Field(..., min_length=1)
    estimated_portion: str = ""
    macro_role: Optional[str] = None

    @field_validator("estimated_portion", mode="before")
    @classmethod
    def _coerce_portion(cls, value: Any) -> str:
        return "" if value is None else str(value).strip()


class MealScanResult(BaseModel):
    total_calories: float = Field(0.0, ge=0)
    calories_range: Optional[CaloriesRange] = None
    macros: MealScanMacros = Field(default_factory=MealScanMacros)
    ingredients: List[MealScanIngredient] = []
    confidence: str = "medium"
    notes: Optional[str] = None
    recommendations: Optional[str] = None

    @field_validator("total_calories", mode="before")
    @classmethod
    def _coerce_calories(cls, value: Any) -> float:
        return _coerce_grams(value)

    @field_validator("confidence", mode="before")
    @classmethod
    def _coerce_confidence(cls, value: Any) -> str:
        if value is None:
            return "medium"
        return str(value).strip().lower() or "medium"

    @field_validator("ingredients", mode="before")
    @classmethod
    def _drop_unnamed(cls, value: Any) -> List[Any]:
        if not isinstance(value, list):
            return []
        return [i for i in value if isinstance(i, dict) and str(i.get("name") or "").strip()]


class MealScanRequest(BaseModel):
    image_base64: str = Field(..., min_length=16, description="Raw base64, data-url prefix allowed")
    image_mime: str = Field("image/jpeg", pattern=r"^image/(jpeg|jpg|png|webp|heic)$")
    notes: Optional[str] = Field(None, max_length=2000)
    language: Language = "en"


class MealScanRecord(BaseModel):
    id: str
    result: MealScanResult
    image_ref: Optional[str] = None
    user_notes: Optional[str] = None
    language: Language = "en"
    created_at: str


class MealScanListResponse(BaseModel):
    scans: List[MealScanRecord]


class MealScanCreateResponse(BaseModel):
    scan: MealScanRecord


class MealScanQuota(BaseModel):
    used: int = Field(0, ge=0)
    limit: Optional[int] = Field(None, description="None means unlimited")
