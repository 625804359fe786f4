from __future__ import annotations

import json
import logging
import sys
import time
from dataclasses import asdict
from uuid import uuid4

from kapa_docs.app.observability.contracts import UpstreamCallTrace

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "INFO") -> None:
    # stdout carries the MCP stream, so logs go to stderr only
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("httpx").setLevel(logging.WARNING)


def new_trace_id() -> str:
    return f"trace-{uuid4().hex[:10]}"


def upstream_trace(
    trace_id: str,
    tool_name: str,
    started_at: float,
    *,
    status: str = "ok",
    http_status: int | None = None,
    error_kind: str | None = None,
    source_count: int = 0,
    thread_id: str | None = None,
) -> UpstreamCallTrace:
    elapsed_ms = int((time.perf_counter() - started_at) * 1000)
    return UpstreamCallTrace(
        trace_id=trace_id,
        tool_name=tool_name,
        latency_ms=max(elapsed_ms, 0),
        status=status,
        http_status=http_status,
        error_kind=error_kind,
        source_count=source_count,
        thread_id=thread_id,
    )


def emit_trace(
    trace: UpstreamCallTrace,
    logger: logging.Logger | None = None,
) -> None:
    active_logger = logger or logging.getLogger(__name__)
    payload = json.dumps(asdict(trace), sort_keys=True)
    if trace.status == "ok":
        active_logger.info("kapa_event %s", payload)
    else:
        active_logger.warning("kapa_event %s", payload)
