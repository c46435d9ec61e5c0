"""
core/allergies.py
────────────────────────────────────────────────────────────────────────
Allergy vocabulary and hard enforcement.

Matching is a literal, lowercase substring test of every alias against
the query text, there is no tokenisation.
"""

from __future__ import annotations

import json
import logging
from typing import Iterable, List

from core.text_cleanup import sanitize_text

_LOG = logging.getLogger(__name__)

ALLERGY_VOCABULARY: dict[str, list[str]] = {
    "oats": ["oats", "oatmeal", "rolled oats", "oat flour", "muesli"],
    "peanut": ["peanut", "peanuts", "peanut butter", "groundnut"],
    "milk": ["milk", "dairy", "curd", "yogurt", "cheese", "paneer", "whey"],
    "egg": ["egg", "eggs", "omelette", "mayonnaise"],
    "soy": ["soy", "soya", "tofu", "soy milk"],
    "gluten": ["wheat", "barley", "rye", "maida", "flour", "bread", "roti"],
    "fish": ["fish", "seafood", "prawns", "shrimp"],
}


def detect_allergies(query: str) -> List[str]:
    """Base allergens mentioned anywhere in `query`, in vocabulary order."""
    q = query.lower()
    return [
        base
        for base, aliases in ALLERGY_VOCABULARY.items()
        if any(a in q for a in aliases)
    ]


def merge_allergies(saved: Iterable[str], detected: Iterable[str]) -> List[str]:
    merged: List[str] = []
    for a in [*saved, *detected]:
        if a not in merged:
            merged.append(a)
    return merged


def enforce_allergy_rules(query: str, allergies: Iterable[str]) -> str | None:
    """Refusal text if the query mentions any registered allergy, else None."""
    q = query.lower()
    for allergy in allergies:
        aliases = ALLERGY_VOCABULARY.get(allergy, [allergy])
        matched = next((a for a in aliases if a in q), None)
        if matched:
            return sanitize_text(
                f"Warning: You have a registered {allergy} allergy. "
                f"Since {matched} is a form of {allergy}, it is not safe for you. "
                "Please avoid this and choose a safe alternative."
            )
    return None


def decode_allergies(raw: str | None) -> List[str]:
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except ValueError:
        _LOG.warning("unreadable allergies column: %r", raw)
        return []
    if not isinstance(data, list):
        return []
    return [str(a) for a in data]


def encode_allergies(allergies: Iterable[str]) -> str:
    return json.dumps(list(allergies))
