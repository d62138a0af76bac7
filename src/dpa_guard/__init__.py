"""DPA Guard - check URLs against a district's Data Processing Agreement list.

This package provides a layered architecture around a small matching core:

Layers:
    - protocols: Interface contracts (KeyValueStore, AuthFlow, StatusPresenter)
    - repositories: Implementations of those contracts (Redis, in-memory, auth flows, icons)
    - services: Business logic (classifier, list synchronizer, matching, timers)
    - handlers: Event dispatcher and HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from dpa_guard.services import ListSynchronizer, classify_url, derive_status, resolve_entry

    synchronizer = ListSynchronizer.create(store=store, auth_flow=auth_flow)
    info = classify_url("https://play.google.com/store/apps/details?id=com.example")
    status = derive_status(resolve_entry(info, await synchronizer.get_list()))
    ```

For HTTP API:
    ```python
    from dpa_guard.api.app import app
    ```
"""

from dpa_guard.config import get_redis_client, settings
from dpa_guard.dto import NavigationRequest, SiteInfoRequest
from dpa_guard.entities import CacheRecord, Credential, DomainInfo, ListEntry, SiteIndicator, SiteStatus
from dpa_guard.exceptions import AuthError, DpaGuardError, ListFetchError
from dpa_guard.handlers import EventDispatcher, SiteInfoHandler
from dpa_guard.protocols import AuthFlow, KeyValueStore, StatusPresenter
from dpa_guard.repositories import InMemoryKeyValueStore, RedisKeyValueStore
from dpa_guard.services import ListSynchronizer, classify_url, derive_status, resolve_entry

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Protocols (interfaces)
    "AuthFlow",
    "KeyValueStore",
    "StatusPresenter",
    # Services (business logic)
    "ListSynchronizer",
    "classify_url",
    "derive_status",
    "resolve_entry",
    # Handlers (events, HTTP)
    "EventDispatcher",
    "SiteInfoHandler",
    # Repositories (data access)
    "InMemoryKeyValueStore",
    "RedisKeyValueStore",
    # Entities (domain models)
    "CacheRecord",
    "Credential",
    "DomainInfo",
    "ListEntry",
    "SiteIndicator",
    "SiteStatus",
    # Errors
    "DpaGuardError",
    "AuthError",
    "ListFetchError",
    # DTOs (API contracts)
    "SiteInfoRequest",
    "NavigationRequest",
]
