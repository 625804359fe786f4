from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ToolName(str, Enum):
    QUERY_DOCS = "query_strapi_docs"
    BEST_PRACTICES = "get_strapi_best_practices"
    TROUBLESHOOT = "troubleshoot_strapi_issue"


@dataclass(frozen=True)
class ToolResult:
    text: str
    is_error: bool = False


class DocsQueryArgs(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    query: str = Field(
        min_length=1,
        description="The question or topic you want to search in the documentation",
    )
    context: str | None = Field(
        default=None,
        description=(
            "Optional context about your current development situation "
            "(e.g., version, specific feature)"
        ),
    )


class BestPracticesArgs(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    topic: str = Field(
        min_length=1,
        description=(
            'The topic or feature you want best practices for '
            '(e.g., "content types", "plugins", "deployment")'
        ),
    )
    project_type: str | None = Field(
        default=None,
        description='Type of project (e.g., "REST API", "GraphQL", "headless CMS")',
    )


class TroubleshootArgs(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    issue_description: str = Field(
        min_length=1,
        description="Detailed description of the issue or error you are experiencing",
    )
    error_message: str | None = Field(
        default=None,
        description="The exact error message if available",
    )
    strapi_version: str | None = Field(
        default=None,
        description='Your Strapi version (e.g., "4.15.0", "5.0.0")',
    )
