from __future__ import annotations

import logging
import time
from typing import Any, Mapping, Protocol

from pydantic import BaseModel, ValidationError

from kapa_docs.app.observability.service import emit_trace, new_trace_id, upstream_trace
from kapa_docs.app.tools.contracts import (
    BestPracticesArgs,
    DocsQueryArgs,
    ToolName,
    ToolResult,
    TroubleshootArgs,
)
from kapa_docs.app.tools.formatting import (
    UNCERTAIN_SOLUTION_WARNING,
    RenderStyle,
    render_response,
)
from kapa_docs.app.tools.templates import (
    BEST_PRACTICES_CONTEXT_TAG,
    DOCUMENTATION_CONTEXT_TAG,
    TROUBLESHOOTING_CONTEXT_TAG,
    best_practices_query,
    build_request,
    documentation_query,
    troubleshooting_query,
)
from kapa_docs.app.upstream.client import KapaApiError, KapaClient
from kapa_docs.app.upstream.contracts import QueryRequest
from kapa_docs.app.upstream.normalizer import normalize
from kapa_docs.core.config import AppConfig

LOGGER = logging.getLogger(__name__)


class UpstreamClient(Protocol):
    async def query(self, request: QueryRequest) -> Any: ...

    async def aclose(self) -> None: ...


class DocsAssistantService:
    def __init__(
        self,
        config: AppConfig,
        client: UpstreamClient | None = None,
    ) -> None:
        self._config = config
        self._client: UpstreamClient = client or KapaClient(config)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def call_tool(
        self,
        name: str,
        arguments: Mapping[str, Any] | None,
    ) -> ToolResult:
        if name == ToolName.QUERY_DOCS.value:
            return await self._run(name, DocsQueryArgs, arguments, self._query_docs)
        if name == ToolName.BEST_PRACTICES.value:
            return await self._run(
                name, BestPracticesArgs, arguments, self._best_practices
            )
        if name == ToolName.TROUBLESHOOT.value:
            return await self._run(name, TroubleshootArgs, arguments, self._troubleshoot)
        return ToolResult(text=f"Error: Unknown tool: {name}", is_error=True)

    async def _query_docs(self, args: DocsQueryArgs) -> str:
        return await self._answer(
            ToolName.QUERY_DOCS.value,
            build_request(
                documentation_query(args), DOCUMENTATION_CONTEXT_TAG, self._config
            ),
            RenderStyle(show_thread_id=self._config.show_thread_id),
        )

    async def _best_practices(self, args: BestPracticesArgs) -> str:
        return await self._answer(
            ToolName.BEST_PRACTICES.value,
            build_request(
                best_practices_query(args, self._config.product_name),
                BEST_PRACTICES_CONTEXT_TAG,
                self._config,
            ),
            RenderStyle(
                heading=f"**Best Practices for {args.topic}:**",
                show_thread_id=self._config.show_thread_id,
            ),
        )

    async def _troubleshoot(self, args: TroubleshootArgs) -> str:
        return await self._answer(
            ToolName.TROUBLESHOOT.value,
            build_request(
                troubleshooting_query(args, self._config.product_name),
                TROUBLESHOOTING_CONTEXT_TAG,
                self._config,
            ),
            RenderStyle(
                heading="**Troubleshooting Solution:**",
                uncertainty_warning=UNCERTAIN_SOLUTION_WARNING,
                show_thread_id=self._config.show_thread_id,
            ),
        )

    async def _answer(
        self,
        tool_name: str,
        request: QueryRequest,
        style: RenderStyle,
    ) -> str:
        trace_id = new_trace_id()
        started_at = time.perf_counter()
        try:
            raw = await self._client.query(request)
        except KapaApiError as exc:
            emit_trace(
                upstream_trace(
                    trace_id,
                    tool_name,
                    started_at,
                    status="error",
                    http_status=exc.status_code,
                    error_kind=exc.kind,
                ),
                LOGGER,
            )
            raise

        response = normalize(raw)
        emit_trace(
            upstream_trace(
                trace_id,
                tool_name,
                started_at,
                source_count=len(response.sources),
                thread_id=response.thread_id,
            ),
            LOGGER,
        )
        return render_response(response, style)

    async def _run(
        self,
        tool_name: str,
        model: type[BaseModel],
        arguments: Mapping[str, Any] | None,
        handler: Any,
    ) -> ToolResult:
        if arguments is not None and not isinstance(arguments, Mapping):
            return ToolResult(
                text=f"Error: Invalid arguments for {tool_name}: expected an object",
                is_error=True,
            )
        try:
            args = model.model_validate(dict(arguments or {}))
        except ValidationError as exc:
            return ToolResult(
                text=f"Error: Invalid arguments for {tool_name}: {_validation_summary(exc)}",
                is_error=True,
            )
        return await self._guarded(tool_name, handler, args)

    async def _guarded(self, tool_name: str, handler: Any, args: BaseModel) -> ToolResult:
        try:
            return ToolResult(text=await handler(args))
        except KapaApiError as exc:
            return ToolResult(text=f"Error: {exc}", is_error=True)
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception(
                "Tool call failed unexpectedly",
                extra={"tool_name": tool_name},
            )
            return ToolResult(
                text=f"Error: Unexpected failure: {exc.__class__.__name__}",
                is_error=True,
            )


def _validation_summary(exc: ValidationError) -> str:
    messages: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "arguments"
        messages.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(messages)
