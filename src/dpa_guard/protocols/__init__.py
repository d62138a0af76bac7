"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Redis → in-memory, browser → static callback)
- Unit testing with fake implementations
- Clear separation between the matching core and its host environment

Usage:
    ```python
    from dpa_guard.protocols import KeyValueStore

    store: KeyValueStore = RedisKeyValueStore.create()
    store: KeyValueStore = InMemoryKeyValueStore()
    ```
"""

from .auth_flow import AuthFlow
from .key_value_store import KeyValueStore
from .status_presenter import StatusPresenter

__all__ = [
    "AuthFlow",
    "KeyValueStore",
    "StatusPresenter",
]
