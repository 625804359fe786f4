from __future__ import annotations

import pytest

CONFIG_VARIABLES = (
    "KAPA_API_KEY",
    "KAPA_PROJECT_ID",
    "KAPA_API_URL",
    "KAPA_API_KEY_HEADER",
    "KAPA_TIMEOUT_SECONDS",
    "KAPA_MAX_SOURCES",
    "KAPA_INTEGRATION_ID",
    "KAPA_SOURCE_FILTERS",
    "MCP_SERVER_NAME",
    "DOCS_PRODUCT_NAME",
    "SHOW_THREAD_ID",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolate_config_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in CONFIG_VARIABLES:
        monkeypatch.delenv(name, raising=False)
