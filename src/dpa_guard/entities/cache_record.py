"""Cached list domain entity."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheRecord:
    """The locally persisted copy of the remote list.

    Replaced wholesale on each successful synchronization and kept across
    fetch failures as the stale fallback.

    Attributes:
        entries: Raw JSON objects exactly as returned by the list endpoint
        fetched_at_ms: Unix timestamp (milliseconds) of the successful fetch
    """

    entries: list[dict[str, Any]]
    fetched_at_ms: int

    def age_ms(self, now_ms: int) -> int:
        """Milliseconds elapsed since the list was fetched."""
        return now_ms - self.fetched_at_ms

    def is_fresh(self, now_ms: int, ttl_ms: int) -> bool:
        """Whether the record is younger than the TTL."""
        return self.age_ms(now_ms) < ttl_ms
