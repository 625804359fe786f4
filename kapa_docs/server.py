from __future__ import annotations

import logging
from typing import Any

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from pydantic import BaseModel

from kapa_docs.app.tools.contracts import (
    BestPracticesArgs,
    DocsQueryArgs,
    ToolName,
    ToolResult,
    TroubleshootArgs,
)
from kapa_docs.app.tools.service import DocsAssistantService
from kapa_docs.core.config import APP_VERSION, AppConfig

LOGGER = logging.getLogger(__name__)

TOOL_DESCRIPTIONS: dict[ToolName, str] = {
    ToolName.QUERY_DOCS: (
        "Query {product} documentation using the Kapa AI assistant. Provides "
        "detailed answers with sources from the official {product} documentation."
    ),
    ToolName.BEST_PRACTICES: (
        "Get {product} best practices and recommendations for specific topics "
        "or features."
    ),
    ToolName.TROUBLESHOOT: "Get help troubleshooting specific {product} issues or errors.",
}

TOOL_ARGUMENTS: dict[ToolName, type[BaseModel]] = {
    ToolName.QUERY_DOCS: DocsQueryArgs,
    ToolName.BEST_PRACTICES: BestPracticesArgs,
    ToolName.TROUBLESHOOT: TroubleshootArgs,
}


def tool_input_schema(model: type[BaseModel]) -> dict[str, Any]:
    properties: dict[str, Any] = {}
    required: list[str] = []
    for field_name, field in model.model_fields.items():
        properties[field_name] = {
            "type": "string",
            "description": field.description or field_name,
        }
        if field.is_required():
            required.append(field_name)
    return {"type": "object", "properties": properties, "required": required}


def tool_definitions(product_name: str) -> list[types.Tool]:
    return [
        types.Tool(
            name=name.value,
            description=TOOL_DESCRIPTIONS[name].format(product=product_name),
            inputSchema=tool_input_schema(TOOL_ARGUMENTS[name]),
        )
        for name in ToolName
    ]


def to_call_tool_result(result: ToolResult) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=result.text)],
        isError=result.is_error,
    )


def build_server(config: AppConfig, service: DocsAssistantService) -> Server:
    server: Server = Server(config.server_name, version=APP_VERSION)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return tool_definitions(config.product_name)

    @server.call_tool(validate_input=False)
    async def call_tool(
        name: str, arguments: dict[str, Any] | None
    ) -> types.CallToolResult:
        result = await service.call_tool(name, arguments)
        if result.is_error:
            LOGGER.info("Tool call returned an error", extra={"tool_name": name})
        return to_call_tool_result(result)

    return server


async def serve(config: AppConfig) -> None:
    service = DocsAssistantService(config)
    server = build_server(config, service)
    LOGGER.info(
        "Starting MCP server",
        extra={"server_name": config.server_name, "version": APP_VERSION},
    )
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
    finally:
        await service.aclose()
