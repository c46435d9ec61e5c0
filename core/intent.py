"""Keyword intent detection for chat messages."""

from __future__ import annotations

import re

# order matters: the first pattern that matches wins
_INTENT_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    ("weight_loss", re.compile(r"lose|fat|slim|weight loss")),
    ("weight_gain", re.compile(r"gain|bulk|muscle|weight gain")),
    ("maintenance", re.compile(r"maintain|maintenance")),
    ("medical", re.compile(r"thyroid|diabetes|pcod|bp|cholesterol|acidity|pain|bloating")),
]


def detect_intent(query: str) -> str | None:
    q = query.lower()
    for intent, pattern in _INTENT_PATTERNS:
        if pattern.search(q):
            return intent
    return None


def active_intent(query: str, goal: str | None) -> str:
    """Detected intent, else the stored goal, else "general"."""
    return detect_intent(query) or goal or "general"
