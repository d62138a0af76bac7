"""In-memory implementation of KeyValueStore.

Keeps slots in a process-local dict. Useful for tests and for running the
API without Redis; nothing survives a restart.
"""

import copy
from typing import Any


class InMemoryKeyValueStore:
    """Dict-backed slot store.

    Values are deep-copied on the way in and out so callers can't mutate
    stored state through a returned reference.
    """

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._slots: dict[str, Any] = copy.deepcopy(initial) if initial else {}
        self.write_count = 0

    def get(self, slot: str) -> Any | None:
        return copy.deepcopy(self._slots.get(slot))

    def set_many(self, values: dict[str, Any]) -> None:
        self._slots.update(copy.deepcopy(values))
        self.write_count += 1

    def delete(self, slot: str) -> bool:
        return self._slots.pop(slot, None) is not None

    def health_check(self) -> bool:
        return True
