from __future__ import annotations

from kapa_docs.app.tools.contracts import (
    BestPracticesArgs,
    DocsQueryArgs,
    TroubleshootArgs,
)
from kapa_docs.app.upstream.contracts import QueryRequest
from kapa_docs.core.config import AppConfig

DOCUMENTATION_CONTEXT_TAG = "documentation"
BEST_PRACTICES_CONTEXT_TAG = "best-practices"
TROUBLESHOOTING_CONTEXT_TAG = "troubleshooting"


def documentation_query(args: DocsQueryArgs) -> str:
    if args.context:
        return f"Context: {args.context}\n\n{args.query}"
    return args.query


def best_practices_query(args: BestPracticesArgs, product_name: str) -> str:
    project_suffix = (
        f" for {args.project_type} projects" if args.project_type else ""
    )
    return (
        f"What are the best practices for {args.topic} in {product_name}"
        f"{project_suffix}? Please provide detailed recommendations and examples."
    )


def troubleshooting_query(args: TroubleshootArgs, product_name: str) -> str:
    query = f"I'm having an issue with {product_name}: {args.issue_description}"
    if args.error_message:
        query += f"\n\nError message: {args.error_message}"
    if args.strapi_version:
        query += f"\n\n{product_name} version: {args.strapi_version}"
    query += "\n\nHow can I fix this? Please provide step-by-step solutions."
    return query


def build_request(query: str, context_tag: str, config: AppConfig) -> QueryRequest:
    return QueryRequest(
        query=query,
        context=context_tag,
        integration_id=config.integration_id,
        source_filters=config.source_filters,
        max_sources=config.max_sources,
    )
