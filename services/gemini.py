# services/gemini.py
from __future__ import annotations

import functools
import logging
from typing import Iterable

from google import genai
from google.genai import types

from config import settings

_LOG = logging.getLogger(__name__)


# ───────────── API Key & Client ─────────────
def is_configured() -> bool:
    return bool(settings.gemini_api_key)


@functools.lru_cache(maxsize=4)
def _client(api_key: str) -> genai.Client:
    return genai.Client(api_key=api_key)


def _turn(role: str, text: str) -> types.Content:
    return types.Content(role=role, parts=[types.Part(text=text)])


# ───────────── Generation (async) ─────────────
async def generate_reply(
    system_prompt: str,
    message: str,
    history: Iterable[tuple[str, str]] = (),
    temperature: float = 0.7,
) -> str | None:
    """
    Send `history` (pairs of role ∈ {"user", "model"} and text) plus the new
    user `message` under `system_prompt`; return the first candidate’s text.

    Errors from the API bubble up, the caller decides on a fallback.
    """
    if not settings.gemini_api_key:
        raise RuntimeError("GEMINI_API_KEY not set in environment")

    contents = [_turn(role, text) for role, text in history]
    contents.append(_turn("user", message))

    resp = await _client(settings.gemini_api_key).aio.models.generate_content(
        model=settings.gemini_model,
        contents=contents,
        config=types.GenerateContentConfig(
            system_instruction=system_prompt,
            temperature=temperature,
        ),
    )
    if not resp.candidates:
        _LOG.warning("Gemini returned no candidates")
        return None
    parts = resp.candidates[0].content.parts if resp.candidates[0].content else None
    if not parts:
        return None
    return parts[0].text
