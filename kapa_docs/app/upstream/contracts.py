from __future__ import annotations

from dataclasses import dataclass
from typing import Any

NO_ANSWER_PLACEHOLDER = "No answer available"
DEFAULT_SOURCE_TITLE = "Documentation"
MISSING_SOURCE_URL = "#"


@dataclass(frozen=True)
class QueryRequest:
    query: str
    context: str | None = None
    integration_id: str | None = None
    source_filters: tuple[str, ...] = tuple()
    max_sources: int | None = None

    def __post_init__(self) -> None:
        if not self.query.strip():
            raise ValueError("query must not be empty")

    def to_payload(self, client_source: str = "mcp-server") -> dict[str, Any]:
        user_data: dict[str, Any] = {"source": client_source}
        if self.context:
            user_data["context"] = self.context
        payload: dict[str, Any] = {"query": self.query, "user_data": user_data}
        if self.integration_id:
            payload["integration_id"] = self.integration_id
        if self.source_filters:
            payload["source_filters"] = list(self.source_filters)
        if self.max_sources is not None:
            payload["max_sources"] = self.max_sources
        return payload


@dataclass(frozen=True)
class SourceEntry:
    title: str = DEFAULT_SOURCE_TITLE
    url: str = MISSING_SOURCE_URL
    snippet: str = ""


@dataclass(frozen=True)
class NormalizedResponse:
    answer: str = NO_ANSWER_PLACEHOLDER
    sources: tuple[SourceEntry, ...] = tuple()
    confidence: float = 0.8
    thread_id: str | None = None
    question_answer_id: str | None = None
    is_uncertain: bool = False
