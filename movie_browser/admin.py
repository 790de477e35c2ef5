"""Admin mutation calls and the best-effort download counter.

Mutations return the decoded response body and raise ``ApiError`` on
failure. Nothing is retried and no local list state is touched; callers
refresh their hooks afterwards.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from . import config
from .api import ApiClient, ApiError, error_message
from .models.outcome import FetchOutcome

__all__ = [
    "create_movie",
    "update_movie",
    "delete_movie",
    "toggle_movie_status",
    "increment_download_count",
]

logger = logging.getLogger(__name__)


def _admin_key(admin_key: str | None) -> str:
    key = admin_key if admin_key is not None else config.ADMIN_KEY
    if not key:
        raise ApiError("Admin key is required")
    return key


async def _mutate(
    client: ApiClient,
    method: str,
    path: str,
    admin_key: str | None,
    json: Any = None,
    fallback: str = "Request failed",
) -> Any:
    key = _admin_key(admin_key)
    try:
        return await client.request(method, path, json=json, admin_key=key)
    except httpx.HTTPStatusError as exc:
        raise ApiError(error_message(exc, fallback), exc.response.status_code) from exc
    except httpx.HTTPError as exc:
        raise ApiError(f"{fallback}: {exc}") from exc


async def create_movie(
    client: ApiClient, movie_data: dict[str, Any], admin_key: str | None = None
) -> Any:
    logger.debug("Creating movie %r", movie_data.get("title"))
    return await _mutate(
        client, "POST", "/movies", admin_key, movie_data, "Failed to create movie"
    )


async def update_movie(
    client: ApiClient,
    movie_id: Any,
    movie_data: dict[str, Any],
    admin_key: str | None = None,
) -> Any:
    return await _mutate(
        client,
        "PUT",
        f"/movies/{movie_id}",
        admin_key,
        movie_data,
        "Failed to update movie",
    )


async def delete_movie(
    client: ApiClient, movie_id: Any, admin_key: str | None = None
) -> Any:
    return await _mutate(
        client, "DELETE", f"/movies/{movie_id}", admin_key, None, "Failed to delete movie"
    )


async def toggle_movie_status(
    client: ApiClient, movie_id: Any, action: str, admin_key: str | None = None
) -> Any:
    """Apply a status action such as ``publish`` or ``unpublish``."""
    return await _mutate(
        client,
        "PATCH",
        f"/movies/{movie_id}/{action}",
        admin_key,
        {},
        f"Failed to {action} movie",
    )


async def increment_download_count(client: ApiClient, movie_id: Any) -> FetchOutcome:
    """Bump the download counter; failures are ignored, never raised."""
    try:
        data = await client.post(f"/movies/{movie_id}/download")
    except Exception as exc:
        logger.debug("Failed to increment download count for %s: %s", movie_id, exc)
        return FetchOutcome.ignored(
            error_message(exc, "Failed to increment download count")
        )
    return FetchOutcome.success(data)
