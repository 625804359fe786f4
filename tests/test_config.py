import pytest

from kapa_docs.core.config import (
    ConfigurationError,
    load_config,
    mask_secret,
    missing_required_variables,
)


def test_load_config_requires_api_key_and_project_id() -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        load_config()

    assert "KAPA_API_KEY" in str(exc_info.value)
    assert "KAPA_PROJECT_ID" in str(exc_info.value)


def test_load_config_reports_single_missing_variable(monkeypatch) -> None:
    monkeypatch.setenv("KAPA_API_KEY", "secret-key")

    with pytest.raises(ConfigurationError, match="KAPA_PROJECT_ID environment variable is required"):
        load_config()

    assert missing_required_variables() == ["KAPA_PROJECT_ID"]


def test_load_config_treats_blank_values_as_missing(monkeypatch) -> None:
    monkeypatch.setenv("KAPA_API_KEY", "   ")
    monkeypatch.setenv("KAPA_PROJECT_ID", "project-1")

    with pytest.raises(ConfigurationError, match="KAPA_API_KEY"):
        load_config()


def test_load_config_applies_defaults(monkeypatch) -> None:
    monkeypatch.setenv("KAPA_API_KEY", "secret-key")
    monkeypatch.setenv("KAPA_PROJECT_ID", "project-1")

    config = load_config()

    assert config.kapa_api_url == "https://api.kapa.ai"
    assert config.api_key_header == "X-API-KEY"
    assert config.timeout_seconds == 120.0
    assert config.max_sources is None
    assert config.source_filters == tuple()
    assert config.server_name == "strapi-docs"
    assert config.product_name == "Strapi"
    assert config.show_thread_id is True
    assert config.log_level == "INFO"


def test_load_config_reads_overrides(monkeypatch) -> None:
    monkeypatch.setenv("KAPA_API_KEY", "secret-key")
    monkeypatch.setenv("KAPA_PROJECT_ID", "project-1")
    monkeypatch.setenv("KAPA_API_URL", "https://kapa.internal/")
    monkeypatch.setenv("KAPA_API_KEY_HEADER", "X-API-Key")
    monkeypatch.setenv("KAPA_TIMEOUT_SECONDS", "30")
    monkeypatch.setenv("KAPA_MAX_SOURCES", "5")
    monkeypatch.setenv("KAPA_SOURCE_FILTERS", "strapi-docs, ,strapi-blog")
    monkeypatch.setenv("SHOW_THREAD_ID", "off")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = load_config()

    assert config.kapa_api_url == "https://kapa.internal"
    assert config.api_key_header == "X-API-Key"
    assert config.timeout_seconds == 30.0
    assert config.max_sources == 5
    assert config.source_filters == ("strapi-docs", "strapi-blog")
    assert config.show_thread_id is False
    assert config.log_level == "DEBUG"


def test_load_config_ignores_invalid_numbers(monkeypatch) -> None:
    monkeypatch.setenv("KAPA_API_KEY", "secret-key")
    monkeypatch.setenv("KAPA_PROJECT_ID", "project-1")
    monkeypatch.setenv("KAPA_TIMEOUT_SECONDS", "-3")
    monkeypatch.setenv("KAPA_MAX_SOURCES", "many")

    config = load_config()

    assert config.timeout_seconds == 120.0
    assert config.max_sources is None


def test_mask_secret_hides_most_of_the_value() -> None:
    assert mask_secret(None) is None
    assert mask_secret("short") == "***"
    assert mask_secret("abcdefghijkl") == "abcd***kl"
