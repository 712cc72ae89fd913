# -*- coding: utf-8 -*-
"""Generative AI collaborator (meal-photo analysis, weekly summaries)."""

from .client import GenAIConfigError, GenAIError, chat_completion, language_name, resolve_genai_settings

__all__ = [
    "GenAIConfigError",
    "GenAIError",
    "chat_completion",
    "language_name",
    "resolve_genai_settings",
]
