# -*- coding: utf-8 -*-
"""Generative AI — tolerant extraction of text and JSON from model answers.

Models wrap JSON in prose or code fences and occasionally emit trailing
commas, typographic quotes or NaN. Everything here works on the raw string
and never trusts the answer to be well formed.
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Iterator, List, Tuple

_CODE_FENCE = re.compile(r"^\s*```[a-zA-Z]*\s*|\s*```\s*$")
_TRAILING_COMMA = re.compile(r",(\s*[}\]])")
_NON_FINITE = re.compile(r"-?\b(?:NaN|Infinity)\b", flags=re.IGNORECASE)
_SMART_QUOTES = str.maketrans({"“": '"', "”": '"'})


def _structural_chars(text: str) -> Iterator[Tuple[int, str]]:
    """Yield (index, char) for characters outside JSON string literals."""
    quoted = False
    escape_next = False
    for index, char in enumerate(text):
        if quoted:
            if escape_next:
                escape_next = False
            elif char == "\\":
                escape_next = True
            elif char == '"':
                quoted = False
            continue
        if char == '"':
            quoted = True
            continue
        yield index, char


def json_object_spans(text: str) -> List[str]:
    """Balanced top-level ``{...}`` spans, in order of appearance."""
    body = _CODE_FENCE.sub("", text)
    spans: List[str] = []
    depth = 0
    opened_at = 0
    for index, char in _structural_chars(body):
        if char == "{":
            if depth == 0:
                opened_at = index
            depth += 1
        elif char == "}" and depth:
            depth -= 1
            if not depth:
                spans.append(body[opened_at : index + 1])
    return spans


def repair_json(text: str) -> str:
    repaired = text.translate(_SMART_QUOTES)
    # Only commas outside string literals are candidates for removal.
    outside = {index for index, char in _structural_chars(repaired) if char == ","}
    repaired = _TRAILING_COMMA.sub(
        lambda m: m.group(1) if m.start() in outside else m.group(0),
        repaired,
    )
    return _NON_FINITE.sub("null", repaired)


def parse_model_json(content: str) -> Dict[str, Any]:
    """First JSON object found in `content`; ValueError when there is none."""
    failure: Exception | None = None
    for span in json_object_spans(content or ""):
        for attempt in (span, repair_json(span)):
            try:
                value = json.loads(attempt)
            except ValueError as exc:
                failure = exc
                continue
            if isinstance(value, dict):
                return value
    raise ValueError(f"Model output does not contain a JSON object: {failure}")


def _message_text(message: Any) -> str:
    content = message.get("content") if isinstance(message, dict) else None
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        # Content-part lists from providers that split the answer.
        return "".join(p["text"] for p in content if isinstance(p, dict) and isinstance(p.get("text"), str))
    return ""


def extract_text_from_completion(data: object) -> str:
    """Assistant text of an OpenAI-compatible chat completion body."""
    choices = data.get("choices") if isinstance(data, dict) else None
    if not isinstance(choices, list):
        return ""
    return "".join(_message_text(c.get("message")) for c in choices if isinstance(c, dict))
