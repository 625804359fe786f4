from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from kapa_docs.app.upstream.contracts import QueryRequest
from kapa_docs.core.config import APP_VERSION, AppConfig

LOGGER = logging.getLogger(__name__)

CHAT_PATH_TEMPLATE = "/query/v1/projects/{project_id}/chat/"


class KapaApiError(RuntimeError):
    def __init__(
        self,
        message: str,
        *,
        kind: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code


def classify_http_error(status_code: int, body: object) -> KapaApiError:
    detail = _error_detail(body)
    if status_code == 401:
        return KapaApiError(
            "Invalid Kapa API key. Check the KAPA_API_KEY environment variable.",
            kind="unauthorized",
            status_code=status_code,
        )
    if status_code == 403:
        return KapaApiError(
            "Access forbidden. Check that the API key has permissions for this project.",
            kind="forbidden",
            status_code=status_code,
        )
    if status_code == 404:
        return KapaApiError(
            "Kapa project not found. Check the KAPA_PROJECT_ID environment variable.",
            kind="not_found",
            status_code=status_code,
        )
    if status_code == 422:
        message = "Invalid request sent to Kapa API"
        return KapaApiError(
            f"{message}: {detail}" if detail else message,
            kind="invalid_request",
            status_code=status_code,
        )
    if status_code == 429:
        return KapaApiError(
            "Rate limit exceeded for Kapa API. Please wait before retrying.",
            kind="rate_limited",
            status_code=status_code,
        )
    message = f"Kapa API error (HTTP {status_code})"
    return KapaApiError(
        f"{message}: {detail}" if detail else message,
        kind="upstream_error",
        status_code=status_code,
    )


def network_error(base_url: str, exc: Exception) -> KapaApiError:
    reason = str(exc).strip() or exc.__class__.__name__
    if isinstance(exc, httpx.TimeoutException):
        reason = f"request timed out ({exc.__class__.__name__})"
    return KapaApiError(
        f"Could not reach Kapa API at {base_url}: {reason}",
        kind="network",
    )


def _error_detail(body: object) -> str | None:
    if not isinstance(body, dict):
        if isinstance(body, str) and body.strip():
            return body.strip()[:300]
        return None
    for key in ("detail", "message", "error"):
        value = body.get(key)
        if value is None or value == "":
            continue
        if isinstance(value, str):
            return value
        return json.dumps(value, separators=(",", ":"), default=str)
    return None


def _response_body(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError:
        return response.text


class KapaClient:
    def __init__(
        self,
        config: AppConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = config.kapa_api_url
        self._endpoint = CHAT_PATH_TEMPLATE.format(project_id=config.kapa_project_id)
        self._client = httpx.AsyncClient(
            base_url=config.kapa_api_url,
            headers={
                config.api_key_header: config.kapa_api_key,
                "Content-Type": "application/json",
                "User-Agent": f"{config.server_name}-mcp/{APP_VERSION}",
            },
            timeout=config.timeout_seconds,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def query(self, request: QueryRequest) -> Any:
        try:
            response = await self._client.post(
                self._endpoint,
                json=request.to_payload(),
            )
        except httpx.HTTPError as exc:
            LOGGER.warning(
                "Kapa request failed before a response was received",
                extra={"base_url": self._base_url},
                exc_info=exc,
            )
            raise network_error(self._base_url, exc) from exc

        if not response.is_success:
            raise classify_http_error(response.status_code, _response_body(response))

        try:
            return response.json()
        except ValueError as exc:
            raise KapaApiError(
                f"Kapa API error (HTTP {response.status_code}): response was not valid JSON",
                kind="upstream_error",
                status_code=response.status_code,
            ) from exc

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> KapaClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
