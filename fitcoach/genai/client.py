# -*- coding: utf-8 -*-
"""Generative AI — OpenAI-compatible chat completions over httpx."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from ..config import settings
from .parsing import extract_text_from_completion

logger = logging.getLogger(__name__)

LANGUAGE_NAMES = {"en": "English", "fr": "French", "es": "Spanish"}


class GenAIError(RuntimeError):
    """The collaborator could not be reached or answered with something unusable."""


class GenAIConfigError(ValueError):
    """The collaborator is not configured (e.g. no API key)."""


@dataclass(frozen=True)
class GenAISettings:
    base_url: str
    api_key: str
    text_model: str
    vision_model: str
    timeout: Optional[float]
    temperature: float


def resolve_genai_settings() -> GenAISettings:
    if not settings.genai_api_key:
        raise GenAIConfigError("FITCOACH_GENAI_API_KEY is not set")
    return GenAISettings(
        base_url=settings.genai_base_url.rstrip("/"),
        api_key=settings.genai_api_key,
        text_model=settings.genai_text_model,
        vision_model=settings.genai_vision_model,
        timeout=settings.genai_timeout,
        temperature=settings.genai_temperature,
    )


def language_name(code: str) -> str:
    return LANGUAGE_NAMES.get(code, LANGUAGE_NAMES["en"])


def chat_completion(
    messages: List[Dict[str, Any]],
    *,
    model: str,
    cfg: GenAISettings,
    json_output: bool = False,
) -> str:
    """Single blocking call; no retry. Returns the assistant text."""
    payload: Dict[str, Any] = {
        "model": model,
        "messages": messages,
        "temperature": cfg.temperature,
    }
    if json_output:
        payload["response_format"] = {"type": "json_object"}
    headers = {
        "Authorization": f"Bearer {cfg.api_key}",
        "Content-Type": "application/json",
    }
    url = f"{cfg.base_url}/chat/completions"
    try:
        with httpx.Client(timeout=cfg.timeout, follow_redirects=True) as client:
            resp = client.post(url, headers=headers, json=payload)
            resp.raise_for_status()
            data = resp.json()
    except httpx.HTTPStatusError as exc:
        snippet = (exc.response.text or "").replace("\n", " ").strip()[:200]
        logger.error("genai call failed with status %s: %s", exc.response.status_code, snippet)
        raise GenAIError(f"AI service returned {exc.response.status_code}: {snippet}") from exc
    except httpx.HTTPError as exc:
        logger.error("genai call failed: %s", exc)
        raise GenAIError(f"AI service unreachable: {exc}") from exc
    except ValueError as exc:
        raise GenAIError("AI service returned non-JSON response") from exc

    content = extract_text_from_completion(data)
    if not content.strip():
        raise GenAIError("AI service returned an empty answer")
    return content
