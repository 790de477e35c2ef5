"""Fetch outcome dataclass for best-effort calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Status = Literal["ok", "ignored", "reported"]


@dataclass(frozen=True)
class FetchOutcome:
    """Result of a call whose failure may be dropped on purpose.

    ``ignored`` marks a non-critical failure that was swallowed, ``reported``
    one that was surfaced to the caller.
    """

    status: Status
    value: object | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @classmethod
    def success(cls, value: object | None = None) -> "FetchOutcome":
        return cls(status="ok", value=value)

    @classmethod
    def ignored(cls, error: str) -> "FetchOutcome":
        return cls(status="ignored", error=error)

    @classmethod
    def reported(cls, error: str) -> "FetchOutcome":
        return cls(status="reported", error=error)
