from __future__ import annotations

import math
from typing import Any, Mapping

from kapa_docs.app.upstream.contracts import (
    DEFAULT_SOURCE_TITLE,
    MISSING_SOURCE_URL,
    NO_ANSWER_PLACEHOLDER,
    NormalizedResponse,
    SourceEntry,
)

ANSWER_KEYS = ("answer",)
SOURCE_LIST_KEYS = ("relevant_sources", "sources")
TITLE_KEYS = ("title", "name")
URL_KEYS = ("source_url", "url")
SNIPPET_KEYS = ("snippet", "content", "excerpt")

UNCERTAIN_CONFIDENCE = 0.5
DEFAULT_CONFIDENCE = 0.8


def normalize(raw: object) -> NormalizedResponse:
    if not isinstance(raw, Mapping):
        return NormalizedResponse()

    is_uncertain = raw.get("is_uncertain") is True
    return NormalizedResponse(
        answer=_first_text(raw, ANSWER_KEYS, NO_ANSWER_PLACEHOLDER),
        sources=tuple(_source_entry(item) for item in _source_items(raw)),
        confidence=_confidence(raw.get("confidence"), is_uncertain),
        thread_id=_first_text(raw, ("thread_id",), None),
        question_answer_id=_first_text(raw, ("question_answer_id",), None),
        is_uncertain=is_uncertain,
    )


def _first_text(
    payload: Mapping[str, Any],
    keys: tuple[str, ...],
    default: str | None,
) -> str | None:
    for key in keys:
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return default


def _source_items(raw: Mapping[str, Any]) -> list[Any]:
    for key in SOURCE_LIST_KEYS:
        value = raw.get(key)
        if value is None:
            continue
        return list(value) if isinstance(value, (list, tuple)) else []
    return []


def _source_entry(item: Any) -> SourceEntry:
    if not isinstance(item, Mapping):
        return SourceEntry()
    return SourceEntry(
        title=_first_text(item, TITLE_KEYS, DEFAULT_SOURCE_TITLE) or DEFAULT_SOURCE_TITLE,
        url=_first_text(item, URL_KEYS, MISSING_SOURCE_URL) or MISSING_SOURCE_URL,
        snippet=_first_text(item, SNIPPET_KEYS, "") or "",
    )


def _confidence(value: Any, is_uncertain: bool) -> float:
    if (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    ):
        return min(max(float(value), 0.0), 1.0)
    return UNCERTAIN_CONFIDENCE if is_uncertain else DEFAULT_CONFIDENCE
