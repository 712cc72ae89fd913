# -*- coding: utf-8 -*-
"""Weekly summary — coaching text written by the generative AI collaborator."""

from __future__ import annotations

import json
from typing import Any, Dict, Protocol

from ..genai.client import chat_completion, language_name, resolve_genai_settings


class SummaryWriter(Protocol):
    def write(self, *, stats: Dict[str, Any], language: str) -> str: ...


SYSTEM_PROMPT = (
    "You are an encouraging strength and nutrition coach. "
    "Write a short weekly recap (3 to 5 sentences) from the stats you are given. "
    "Mention training volume versus last week, the best lift improvement if any, "
    "and protein intake against the target. Do not invent numbers. Plain text, no markdown."
)


def build_user_prompt(stats: Dict[str, Any], language: str) -> str:
    return "\n".join(
        [
            f"Answer in {language_name(language)}.",
            "Volumes and loads are in kilograms.",
            "Weekly stats (JSON):",
            json.dumps(stats, ensure_ascii=False, indent=2),
        ]
    )


class GenAISummaryWriter:
    """Default writer backed by an OpenAI-compatible text model."""

    def write(self, *, stats: Dict[str, Any], language: str) -> str:
        cfg = resolve_genai_settings()
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_user_prompt(stats, language)},
        ]
        return chat_completion(messages, model=cfg.text_model, cfg=cfg).strip()


def get_summary_writer() -> SummaryWriter:
    return GenAISummaryWriter()
