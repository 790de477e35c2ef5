"""Response cache dataclass."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CacheEntry:
    """Cached response payload with the epoch-millisecond time it was stored."""

    data: object
    timestamp: float
