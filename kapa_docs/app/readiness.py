from __future__ import annotations

from typing import Any

from kapa_docs.app.upstream.client import CHAT_PATH_TEMPLATE
from kapa_docs.core.config import (
    AppConfig,
    ConfigurationError,
    load_config,
    mask_secret,
    missing_required_variables,
)


def build_readiness_report(config: AppConfig | None = None) -> dict[str, Any]:
    if config is None:
        try:
            config = load_config()
        except ConfigurationError as exc:
            return {
                "ready": False,
                "reason": str(exc),
                "missing": missing_required_variables(),
            }

    return {
        "ready": True,
        "reason": "configured",
        "missing": [],
        "kapa": {
            "api_url": config.kapa_api_url,
            "endpoint": config.kapa_api_url
            + CHAT_PATH_TEMPLATE.format(project_id=config.kapa_project_id),
            "api_key": mask_secret(config.kapa_api_key),
            "api_key_header": config.api_key_header,
            "project_id": config.kapa_project_id,
            "timeout_seconds": config.timeout_seconds,
        },
        "request_options": {
            "max_sources": config.max_sources,
            "integration_id": config.integration_id,
            "source_filters": list(config.source_filters),
        },
        "server": {
            "name": config.server_name,
            "product_name": config.product_name,
            "show_thread_id": config.show_thread_id,
        },
    }
