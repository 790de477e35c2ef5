"""Memoizing read-through cache for API GET requests."""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Mapping

from . import config
from .api import ApiClient
from .models.cache import CacheEntry

logger = logging.getLogger(__name__)


def _now_ms() -> float:
    return time.time() * 1000


def cache_key(url: str, params: list[tuple[str, str]] | Mapping[str, Any] | None) -> str:
    if isinstance(params, Mapping):
        options: Any = sorted((str(k), v) for k, v in params.items())
    else:
        options = list(params or [])
    return f"{url}?{json.dumps(options, sort_keys=True, default=str)}"


class ResponseCache:
    """Process-local TTL cache of response payloads.

    Entries are never evicted; a stale entry is only replaced when the same
    key is fetched again.
    """

    def __init__(
        self,
        ttl_s: float | None = None,
        clock: Callable[[], float] = _now_ms,
    ) -> None:
        self.ttl_ms = (config.CACHE_TTL_S if ttl_s is None else ttl_s) * 1000
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get_fresh(self, key: str) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry and (self._clock() - entry.timestamp) < self.ttl_ms:
            return entry
        return None

    def store(self, key: str, data: object) -> CacheEntry:
        entry = CacheEntry(data=data, timestamp=self._clock())
        self._entries[key] = entry
        return entry

    def clear(self) -> None:
        self._entries.clear()


_default_cache: ResponseCache | None = None


def default_cache() -> ResponseCache:
    """Return the cache shared by every hook in this process."""
    global _default_cache
    if _default_cache is None:
        _default_cache = ResponseCache()
    return _default_cache


class CachedApi:
    """GET wrapper that serves fresh cached payloads without touching the network."""

    def __init__(self, client: ApiClient, cache: ResponseCache | None = None) -> None:
        self.client = client
        self.cache = cache if cache is not None else default_cache()

    async def get(
        self, url: str, params: list[tuple[str, str]] | Mapping[str, Any] | None = None
    ) -> Any:
        key = cache_key(url, params)
        entry = self.cache.get_fresh(key)
        if entry is not None:
            logger.debug("Cache hit for %s", key)
            return entry.data

        # Failures propagate before anything is stored.
        data = await self.client.get(url, params)
        self.cache.store(key, data)
        return data
