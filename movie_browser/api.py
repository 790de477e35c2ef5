"""HTTP client wrapper for the movie REST API."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from . import config

__all__ = [
    "ApiClient",
    "ApiError",
    "build_params",
    "error_message",
]

logger = logging.getLogger(__name__)

ADMIN_HEADER = "x-admin-key"
_DEFAULT_HEADERS = {"Content-Type": "application/json"}


class ApiError(RuntimeError):
    """Raised by mutation calls when the API request fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def build_params(
    filters: Mapping[str, Any] | None, default_limit: int | None = None
) -> list[tuple[str, str]]:
    """Turn a filter mapping into ordered query parameters.

    ``None`` and empty-string values are dropped. When ``default_limit`` is
    given, ``limit`` is always sent, using the caller's value if present.

    Example:
        >>> build_params({"genre": "drama", "year": ""}, default_limit=12)
        [('genre', 'drama'), ('limit', '12')]
    """
    params: list[tuple[str, str]] = []
    for key, value in (filters or {}).items():
        if value is None or value == "":
            continue
        if key == "limit" and default_limit is not None:
            continue
        params.append((key, _to_query_value(value)))
    if default_limit is not None:
        limit = (filters or {}).get("limit")
        params.append(("limit", _to_query_value(limit or default_limit)))
    return params


def _to_query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def error_message(exc: BaseException, fallback: str) -> str:
    """Return the server-supplied ``message`` for a failed request, else ``fallback``."""
    response = getattr(exc, "response", None)
    if isinstance(exc, httpx.HTTPStatusError) and response is not None:
        try:
            body = response.json()
        except ValueError:
            return fallback
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
    return fallback


class ApiClient:
    """Async client bound to the API base URL with a fixed timeout."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or config.API_URL).rstrip("/")
        self.timeout = config.API_TIMEOUT_S if timeout is None else timeout
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=_DEFAULT_HEADERS,
            transport=transport,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *_exc: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: list[tuple[str, str]] | Mapping[str, Any] | None = None,
        json: Any = None,
        admin_key: str | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body, or the raw text
        when the body is not JSON.

        Raises:
            httpx.HTTPStatusError: On a non-2xx response.
            httpx.HTTPError: On transport failures and timeouts.
        """
        headers = {ADMIN_HEADER: admin_key} if admin_key is not None else None
        resp = await self._client.request(
            method, path, params=params, json=json, headers=headers
        )
        resp.raise_for_status()
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            return resp.text

    async def get(
        self, path: str, params: list[tuple[str, str]] | Mapping[str, Any] | None = None
    ) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None, admin_key: str | None = None) -> Any:
        return await self.request("POST", path, json=json, admin_key=admin_key)

    async def put(self, path: str, json: Any = None, admin_key: str | None = None) -> Any:
        return await self.request("PUT", path, json=json, admin_key=admin_key)

    async def patch(self, path: str, json: Any = None, admin_key: str | None = None) -> Any:
        return await self.request("PATCH", path, json=json, admin_key=admin_key)

    async def delete(self, path: str, admin_key: str | None = None) -> Any:
        return await self.request("DELETE", path, admin_key=admin_key)
