from __future__ import annotations

import os
from dataclasses import dataclass

APP_VERSION = "1.0.0"
DEFAULT_KAPA_API_URL = "https://api.kapa.ai"
DEFAULT_API_KEY_HEADER = "X-API-KEY"
DEFAULT_SERVER_NAME = "strapi-docs"
DEFAULT_PRODUCT_NAME = "Strapi"
DEFAULT_TIMEOUT_SECONDS = 120.0


class ConfigurationError(ValueError):
    pass


@dataclass(frozen=True)
class AppConfig:
    kapa_api_key: str
    kapa_project_id: str
    kapa_api_url: str
    api_key_header: str
    timeout_seconds: float
    max_sources: int | None
    integration_id: str | None
    source_filters: tuple[str, ...]
    server_name: str
    product_name: str
    show_thread_id: bool
    log_level: str


def _read_optional_env(name: str) -> str | None:
    value = os.getenv(name)
    if not value:
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _read_bool_env(name: str, default: bool) -> bool:
    value = _read_optional_env(name)
    if value is None:
        return default
    normalized = value.lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


def _read_int_env(name: str) -> int | None:
    value = _read_optional_env(name)
    if value is None:
        return None
    try:
        parsed = int(value)
    except ValueError:
        return None
    return parsed if parsed > 0 else None


def _read_float_env(name: str, default: float) -> float:
    value = _read_optional_env(name)
    if value is None:
        return default
    try:
        parsed = float(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_list_env(name: str) -> tuple[str, ...]:
    value = _read_optional_env(name)
    if value is None:
        return tuple()
    return tuple(item.strip() for item in value.split(",") if item.strip())


def missing_required_variables() -> list[str]:
    return [
        name
        for name in ("KAPA_API_KEY", "KAPA_PROJECT_ID")
        if _read_optional_env(name) is None
    ]


def load_config() -> AppConfig:
    missing = missing_required_variables()
    if missing:
        raise ConfigurationError(
            f"{' and '.join(missing)} environment variable"
            f"{'s are' if len(missing) > 1 else ' is'} required"
        )
    return AppConfig(
        kapa_api_key=_read_optional_env("KAPA_API_KEY") or "",
        kapa_project_id=_read_optional_env("KAPA_PROJECT_ID") or "",
        kapa_api_url=(
            _read_optional_env("KAPA_API_URL") or DEFAULT_KAPA_API_URL
        ).rstrip("/"),
        api_key_header=_read_optional_env("KAPA_API_KEY_HEADER")
        or DEFAULT_API_KEY_HEADER,
        timeout_seconds=_read_float_env(
            "KAPA_TIMEOUT_SECONDS", default=DEFAULT_TIMEOUT_SECONDS
        ),
        max_sources=_read_int_env("KAPA_MAX_SOURCES"),
        integration_id=_read_optional_env("KAPA_INTEGRATION_ID"),
        source_filters=_read_list_env("KAPA_SOURCE_FILTERS"),
        server_name=_read_optional_env("MCP_SERVER_NAME") or DEFAULT_SERVER_NAME,
        product_name=_read_optional_env("DOCS_PRODUCT_NAME") or DEFAULT_PRODUCT_NAME,
        show_thread_id=_read_bool_env("SHOW_THREAD_ID", default=True),
        log_level=(_read_optional_env("LOG_LEVEL") or "INFO").upper(),
    )


def mask_secret(value: str | None) -> str | None:
    if not value:
        return None
    if len(value) <= 8:
        return "***"
    return f"{value[:4]}***{value[-2:]}"
