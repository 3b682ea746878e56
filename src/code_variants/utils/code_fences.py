"""Cleanup for markdown fences the model sometimes adds around code."""

from __future__ import annotations

import re

OPENING_FENCE_PATTERN = re.compile(r"^```[ \t]*(?:python|py)?[ \t]*(?:\r?\n|$)", flags=re.IGNORECASE)
CLOSING_FENCE = "```"


def strip_code_fences(text: str) -> str:
    cleaned = text.strip()
    cleaned = OPENING_FENCE_PATTERN.sub("", cleaned, count=1)
    if cleaned.endswith(CLOSING_FENCE):
        cleaned = cleaned[: -len(CLOSING_FENCE)]
    return cleaned.strip()
