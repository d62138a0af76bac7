"""Key-value storage protocol.

Defines the interface for the persistent store that holds the synchronizer's
named slots (access token, cached list, last fetch timestamp).

Implementations can include:
- Redis (default)
- In-memory dict (tests, single-process development)
- Any other backend that can store JSON-compatible values
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Protocol for the synchronizer's persistent storage.

    Values are JSON-compatible Python objects (dicts, lists, str, int...).

    Example:
        ```python
        store: KeyValueStore = RedisKeyValueStore.create()
        store.set_many({"dpa_list": [...], "last_fetch": 1700000000000})
        store.get("dpa_list")
        ```
    """

    def get(self, slot: str) -> Any | None:
        """Read a slot.

        Args:
            slot: The slot name

        Returns:
            The stored value, or None if the slot is empty
        """
        ...

    def set_many(self, values: dict[str, Any]) -> None:
        """Write several slots in one atomic operation.

        Args:
            values: Mapping of slot name to value
        """
        ...

    def delete(self, slot: str) -> bool:
        """Empty a slot.

        Args:
            slot: The slot name

        Returns:
            True if something was deleted, False otherwise
        """
        ...

    def health_check(self) -> bool:
        """Check if the store is accessible.

        Returns:
            True if healthy, False otherwise
        """
        ...
