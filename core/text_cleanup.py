from __future__ import annotations

import re

_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"^#{1,6}\s*", re.MULTILINE), ""),
    (re.compile(r"\*\*(.*?)\*\*"), r"\1"),
    (re.compile(r"\*(.*?)\*"), r"\1"),
    (re.compile(r"^\d+\.\s*", re.MULTILINE), ""),
    (re.compile(r"^[-•]\s*", re.MULTILINE), ""),
    (re.compile(r"[⭐★]"), ""),
    (re.compile(r"\n{3,}"), "\n\n"),
]


def sanitize_text(text: str) -> str:
    """Strip markdown artefacts so replies read as plain prose."""
    for pattern, repl in _RULES:
        text = pattern.sub(repl, text)
    return text.strip()
