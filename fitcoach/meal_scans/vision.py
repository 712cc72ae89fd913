# -*- coding: utf-8 -*-
"""Meal scans — meal-photo analysis through the generative AI collaborator."""

from __future__ import annotations

import base64
import logging
from typing import Optional, Protocol

from pydantic import ValidationError

from ..genai.client import GenAIError, chat_completion, language_name, resolve_genai_settings
from ..genai.parsing import parse_model_json
from .models import MealScanResult

logger = logging.getLogger(__name__)


class MealAnalyzer(Protocol):
    def analyze(
        self,
        *,
        image_bytes: bytes,
        image_mime: str,
        notes: Optional[str],
        language: str,
    ) -> MealScanResult: ...


SYSTEM_PROMPT = (
    "You are a sports nutritionist. Return STRICT JSON only, no markdown. "
    "Estimate the meal shown in the photo for the visible portion. "
    "If unsure, lower the confidence instead of inventing precise numbers."
)

_SCHEMA_HINT = (
    "{\n"
    '  "totalCalories": number,\n'
    '  "caloriesRange": {"min": number, "max": number} | null,\n'
    '  "macros": {"proteinGrams": number, "carbsGrams": number, "fatGrams": number},\n'
    '  "ingredients": [{"name": "string", "estimatedPortion": "string", "macroRole": "string|null"}],\n'
    '  "confidence": "low" | "medium" | "high",\n'
    '  "notes": "string|null",\n'
    '  "recommendations": "string|null"\n'
    "}\n"
)

_KEY_ALIASES = {
    "totalCalories": "total_calories",
    "calories": "total_calories",
    "caloriesRange": "calories_range",
    "proteinGrams": "protein_grams",
    "protein": "protein_grams",
    "carbsGrams": "carbs_grams",
    "carbs": "carbs_grams",
    "carbohydrates": "carbs_grams",
    "fatGrams": "fat_grams",
    "fat": "fat_grams",
    "estimatedPortion": "estimated_portion",
    "portion": "estimated_portion",
    "macroRole": "macro_role",
}


def build_user_prompt(notes: Optional[str], language: str) -> str:
    lines = [
        "Analyze this meal photo.",
        f"All text values must be written in {language_name(language)}.",
    ]
    if notes:
        lines.append(f"User notes: {notes}")
    lines.append("Output JSON schema (STRICT):")
    lines.append(_SCHEMA_HINT)
    return "\n".join(lines)


def _normalize_keys(value: object) -> object:
    if isinstance(value, dict):
        return {_KEY_ALIASES.get(k, k): _normalize_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_normalize_keys(v) for v in value]
    return value


def normalize_meal_result(parsed: dict) -> MealScanResult:
    """Map camelCase/alias keys onto MealScanResult; ValueError if it still fails."""
    known = _normalize_keys(parsed)
    try:
        return MealScanResult.model_validate(known)
    except ValidationError as exc:
        raise ValueError(f"Unexpected meal analysis shape: {exc}") from exc


def _data_url(mime: str, image_bytes: bytes) -> str:
    b64 = base64.b64encode(image_bytes).decode("ascii")
    return f"data:{mime};base64,{b64}"


class GenAIMealAnalyzer:
    """Default analyzer backed by an OpenAI-compatible vision model."""

    def analyze(
        self,
        *,
        image_bytes: bytes,
        image_mime: str,
        notes: Optional[str],
        language: str,
    ) -> MealScanResult:
        cfg = resolve_genai_settings()
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": build_user_prompt(notes, language)},
                    {"type": "image_url", "image_url": {"url": _data_url(image_mime, image_bytes)}},
                ],
            },
        ]
        content = chat_completion(messages, model=cfg.vision_model, cfg=cfg, json_output=True)
        try:
            return normalize_meal_result(parse_model_json(content))
        except ValueError as exc:
            logger.warning("meal analysis output unusable: %s", exc)
            raise GenAIError(f"AI service returned malformed meal analysis: {exc}") from exc


def get_meal_analyzer() -> MealAnalyzer:
    return GenAIMealAnalyzer()
