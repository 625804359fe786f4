from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UpstreamCallTrace:
    trace_id: str
    tool_name: str
    latency_ms: int
    status: str
    http_status: int | None = None
    error_kind: str | None = None
    source_count: int = 0
    thread_id: str | None = None
