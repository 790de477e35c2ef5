"""Hook state dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .outcome import FetchOutcome
from .pagination import Pagination


@dataclass
class ListState:
    """State of a paginated list hook (movies or series)."""

    items: list[dict[str, Any]] = field(default_factory=list)
    loading: bool = False
    error: str | None = None
    pagination: Pagination | None = None
    is_data_loaded: bool = False


@dataclass
class ResourceState:
    data: Any = None
    loading: bool = True
    error: str | None = None


@dataclass
class SuggestionState:
    suggestions: list[Any] = field(default_factory=list)
    loading: bool = False
    last_outcome: FetchOutcome | None = None
