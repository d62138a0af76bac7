"""Repository layer for external collaborators.

This layer hides the host environment (Redis, the OAuth provider, the UI)
behind protocol-based interfaces. This enables:
- Easy swapping of implementations (Redis → in-memory, browser → static callback)
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from dpa_guard.protocols import AuthFlow, KeyValueStore, StatusPresenter

from .auth_flows import BrowserAuthFlow, StaticCallbackAuthFlow
from .icon_presenter import IconPresenter, TabIcon
from .memory_store import InMemoryKeyValueStore
from .redis_store import RedisKeyValueStore

__all__ = [
    "AuthFlow",
    "KeyValueStore",
    "StatusPresenter",
    "BrowserAuthFlow",
    "StaticCallbackAuthFlow",
    "IconPresenter",
    "TabIcon",
    "InMemoryKeyValueStore",
    "RedisKeyValueStore",
]
