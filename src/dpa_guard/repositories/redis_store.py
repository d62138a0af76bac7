"""Redis implementation of KeyValueStore.

Each slot lives under ``<prefix>:<slot>`` as a JSON string. This is the
default implementation and satisfies the KeyValueStore protocol.
"""

import json
import logging
from typing import Any

import redis

from dpa_guard.config import get_redis_client, settings

logger = logging.getLogger(__name__)


class RedisKeyValueStore:
    """Redis-backed slot store.

    This class satisfies the KeyValueStore protocol through structural
    typing - no explicit inheritance needed.

    Multi-slot writes go through a MULTI/EXEC pipeline, so a reader never
    sees a new list paired with an old fetch timestamp.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
    ) -> None:
        """Initialize the Redis store.

        Args:
            redis_client: Redis client instance. If None, creates default.
            prefix: Key prefix for all slots. Defaults to settings.
        """
        self._client = redis_client or get_redis_client()
        self._prefix = prefix or settings.store_prefix

    @classmethod
    def create(cls, prefix: str | None = None) -> "RedisKeyValueStore":
        """Factory method to create RedisKeyValueStore with defaults.

        Args:
            prefix: Key prefix. If None, uses settings.

        Returns:
            Configured RedisKeyValueStore
        """
        return cls(prefix=prefix)

    def _key(self, slot: str) -> str:
        return f"{self._prefix}:{slot}"

    def get(self, slot: str) -> Any | None:
        """Read and decode a slot.

        Args:
            slot: The slot name

        Returns:
            The decoded value, or None if the slot is empty or unreadable
        """
        raw = self._client.get(self._key(slot))
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding undecodable value in slot %s", slot)
            return None

    def set_many(self, values: dict[str, Any]) -> None:
        """Encode and write several slots in one transaction.

        Args:
            values: Mapping of slot name to JSON-compatible value
        """
        pipe = self._client.pipeline(transaction=True)
        for slot, value in values.items():
            pipe.set(self._key(slot), json.dumps(value))
        pipe.execute()

    def delete(self, slot: str) -> bool:
        """Delete a slot.

        Args:
            slot: The slot name

        Returns:
            True if deleted, False otherwise
        """
        result: int = self._client.delete(self._key(slot))  # type: ignore[assignment]
        return result > 0

    def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False
