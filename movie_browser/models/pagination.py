"""Pagination dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def _as_int(value: Any) -> int | None:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class Pagination:
    total: int | None
    page: int | None
    pages: int | None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "Pagination":
        return cls(
            total=_as_int(data.get("total")),
            page=_as_int(data.get("page")),
            pages=_as_int(data.get("pages")),
        )
