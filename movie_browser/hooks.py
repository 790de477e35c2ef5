"""Stateful fetch hooks over the movie API.

Each hook instance owns its own state record, debounce timer and in-flight
request task. Hooks never raise fetch errors; callers read ``hook.state``.
Use them as async context managers, or call ``close()``, so pending timers
and requests are cancelled when the owner goes away.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Mapping

from . import config
from .api import ApiClient, build_params, error_message
from .cache import CachedApi, ResponseCache
from .models.outcome import FetchOutcome
from .models.pagination import Pagination
from .models.state import ListState, ResourceState, SuggestionState

__all__ = [
    "ListHook",
    "MovieList",
    "SeriesList",
    "ResourceHook",
    "MovieDetail",
    "SeriesDetail",
    "RelatedMovies",
    "Categories",
    "Stats",
    "SearchSuggestions",
    "use_movies",
    "use_series",
    "use_search_suggestions",
]

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2


async def _wait_tasks(*tasks: asyncio.Task | None) -> None:
    pending = {t for t in tasks if t is not None and not t.done()}
    if pending:
        await asyncio.wait(pending)


class ListHook:
    """Debounced, cancellable fetch of one paginated list endpoint.

    The first ``set_filters`` call fetches immediately; later calls abort
    the in-flight request and restart the debounce timer, so a burst of
    changes produces a single request with the last filters. At most one
    request per instance is outstanding and an aborted response is never
    applied.
    """

    path = ""
    items_key = ""
    label = ""
    error_fallback = ""

    def __init__(self, client: ApiClient, *, debounce_s: float | None = None) -> None:
        self.client = client
        self.debounce_s = config.LIST_DEBOUNCE_S if debounce_s is None else debounce_s
        self.state = ListState()
        self.filters: dict[str, Any] = {}
        self._initial = True
        self._timer: asyncio.Task | None = None
        self._task: asyncio.Task | None = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *_exc: object) -> None:
        self.close()

    def set_filters(self, filters: Mapping[str, Any] | None = None) -> None:
        """Apply new filters and schedule a fetch. Requires a running loop."""
        self.filters = dict(filters or {})
        self._cancel_timer()
        self._abort()
        if self._initial:
            self._initial = False
            self._start()
            return
        self._timer = asyncio.create_task(self._debounced())

    def refetch(self) -> asyncio.Task:
        """Fetch now with the current filters, skipping the debounce."""
        self._initial = False
        self._cancel_timer()
        return self._start()

    async def settle(self) -> ListState:
        """Wait until no debounce timer or request is pending."""
        while True:
            if not any(t is not None and not t.done() for t in (self._timer, self._task)):
                return self.state
            await _wait_tasks(self._timer, self._task)

    def close(self) -> None:
        self._cancel_timer()
        if self._task is not None:
            self._task.cancel()
            self._task = None
        self.state.loading = False

    def params(self) -> list[tuple[str, str]]:
        return build_params(self.filters)

    async def _get(self, params: list[tuple[str, str]]) -> Any:
        return await self.client.get(self.path, params)

    async def _debounced(self) -> None:
        await asyncio.sleep(self.debounce_s)
        self._timer = None
        self._start()

    def _start(self) -> asyncio.Task:
        self._abort()
        task = asyncio.create_task(self._fetch())
        self._task = task
        return task

    def _cancel_timer(self) -> None:
        if self._timer is not None and self._timer is not asyncio.current_task():
            self._timer.cancel()
        self._timer = None

    def _abort(self) -> None:
        # The task reference is kept so the aborted request still clears
        # ``loading`` unless a newer request has taken over.
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def _fetch(self) -> None:
        task = asyncio.current_task()
        state = self.state
        state.loading = True
        params = self.params()
        started = time.perf_counter()
        try:
            data = await self._get(params)
            items = data.get(self.items_key)
            pagination = Pagination.from_payload(data)
        except asyncio.CancelledError:
            logger.debug("%s request aborted", self.label)
            raise
        except Exception as exc:
            logger.warning("Failed to fetch %s: %s", self.label, exc)
            state.error = error_message(exc, self.error_fallback)
        else:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.debug("%s loaded in %.2fms", self.label.capitalize(), elapsed_ms)
            state.items = list(items or [])
            state.pagination = pagination
            state.error = None
            state.is_data_loaded = True
        finally:
            if self._task is task:
                state.loading = False
                self._task = None


class MovieList(ListHook):
    """Movie list read through the shared response cache; ``limit`` defaults to 12."""

    path = "/movies"
    items_key = "movies"
    label = "movies"
    error_fallback = "Failed to fetch movies"

    def __init__(
        self,
        client: ApiClient,
        *,
        debounce_s: float | None = None,
        cache: ResponseCache | None = None,
        default_limit: int | None = None,
    ) -> None:
        super().__init__(client, debounce_s=debounce_s)
        self.cached = CachedApi(client, cache)
        self.default_limit = config.DEFAULT_LIMIT if default_limit is None else default_limit

    @property
    def movies(self) -> list[dict[str, Any]]:
        return self.state.items

    def params(self) -> list[tuple[str, str]]:
        return build_params(self.filters, default_limit=self.default_limit)

    async def _get(self, params: list[tuple[str, str]]) -> Any:
        return await self.cached.get(self.path, params)


class SeriesList(ListHook):
    path = "/movies/series"
    items_key = "series"
    label = "series"
    error_fallback = "Failed to fetch series"

    @property
    def series(self) -> list[dict[str, Any]]:
        return self.state.items


class ResourceHook:
    """One-shot fetch of a single resource, repeated only when its key changes."""

    path_template = ""
    requires_id = True
    error_fallback = ""
    initial_data: Any = None

    def __init__(self, client: ApiClient, resource_id: Any = None) -> None:
        self.client = client
        self.resource_id = resource_id
        self.state = ResourceState(data=self._initial())
        self._fetched = False

    def _initial(self) -> Any:
        return list(self.initial_data) if isinstance(self.initial_data, list) else self.initial_data

    @property
    def path(self) -> str:
        return self.path_template.format(id=self.resource_id)

    async def load(self) -> ResourceState:
        """Fetch once for the current key; later calls return the held state."""
        if self._fetched:
            return self.state
        if self.requires_id and not self.resource_id:
            self.state.loading = False
            return self.state
        self._fetched = True
        await self._fetch()
        return self.state

    async def set_id(self, resource_id: Any) -> ResourceState:
        if resource_id != self.resource_id:
            self.resource_id = resource_id
            self._fetched = False
        return await self.load()

    async def refetch(self) -> ResourceState:
        self._fetched = False
        return await self.load()

    async def _fetch(self) -> None:
        state = self.state
        state.loading = True
        try:
            state.data = await self.client.get(self.path)
            state.error = None
        except Exception as exc:
            logger.warning("GET %s failed: %s", self.path, exc)
            state.error = error_message(exc, self.error_fallback)
        finally:
            state.loading = False


class MovieDetail(ResourceHook):
    path_template = "/movies/{id}"
    error_fallback = "Failed to fetch movie"


class SeriesDetail(ResourceHook):
    path_template = "/movies/{id}"
    error_fallback = "Failed to fetch series details"


class RelatedMovies(ResourceHook):
    path_template = "/movies/related/{id}"
    error_fallback = "Failed to fetch related movies"
    initial_data: list[Any] = []


class Categories(ResourceHook):
    path_template = "/categories"
    requires_id = False
    error_fallback = "Failed to fetch categories"


class Stats(ResourceHook):
    path_template = "/categories/stats"
    requires_id = False
    error_fallback = "Failed to fetch stats"


class SearchSuggestions:
    """Debounced typeahead; failures fall back to an empty list.

    A new query cancels both the pending timer and any request still
    running for the previous one.
    """

    path = "/movies/search-suggestions"

    def __init__(self, client: ApiClient, *, debounce_s: float | None = None) -> None:
        self.client = client
        self.debounce_s = config.SUGGEST_DEBOUNCE_S if debounce_s is None else debounce_s
        self.state = SuggestionState()
        self.query = ""
        self._task: asyncio.Task | None = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *_exc: object) -> None:
        self.close()

    @property
    def suggestions(self) -> list[Any]:
        return self.state.suggestions

    def set_query(self, query: str | None) -> None:
        self.query = query or ""
        if self._task is not None:
            self._task.cancel()
        self._task = asyncio.create_task(self._debounced(self.query))

    async def settle(self) -> SuggestionState:
        while self._task is not None and not self._task.done():
            await _wait_tasks(self._task)
        return self.state

    def close(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
        self.state.loading = False

    async def _debounced(self, query: str) -> None:
        task = asyncio.current_task()
        await asyncio.sleep(self.debounce_s)
        state = self.state
        if len(query) < MIN_QUERY_LENGTH:
            state.loading = False
            state.suggestions = []
            state.last_outcome = FetchOutcome.success([])
            return
        state.loading = True
        try:
            data = await self.client.get(self.path, {"q": query})
            if data is not None and not isinstance(data, list):
                raise TypeError(f"unexpected suggestions payload: {type(data).__name__}")
            suggestions = list(data or [])
        except Exception as exc:
            logger.debug("Suggestions for %r failed: %s", query, exc)
            state.suggestions = []
            state.last_outcome = FetchOutcome.ignored(str(exc) or type(exc).__name__)
        else:
            state.suggestions = suggestions
            state.last_outcome = FetchOutcome.success(state.suggestions)
        finally:
            if self._task is task:
                state.loading = False


def use_movies(
    client: ApiClient, filters: Mapping[str, Any] | None = None, **kwargs: Any
) -> MovieList:
    """Create a movie list hook and start its first fetch."""
    hook = MovieList(client, **kwargs)
    hook.set_filters(filters)
    return hook


def use_series(
    client: ApiClient, filters: Mapping[str, Any] | None = None, **kwargs: Any
) -> SeriesList:
    hook = SeriesList(client, **kwargs)
    hook.set_filters(filters)
    return hook


def use_search_suggestions(
    client: ApiClient, query: str | None, **kwargs: Any
) -> SearchSuggestions:
    hook = SearchSuggestions(client, **kwargs)
    hook.set_query(query)
    return hook
