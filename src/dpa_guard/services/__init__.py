"""Service layer for business logic.

This layer contains the matching core and its orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (Events/HTTP) -> (Classify, sync, match) -> (Store, auth, UI)

Usage:
    ```python
    from dpa_guard.services import ListSynchronizer, classify_url, derive_status, resolve_entry

    info = classify_url("https://www.example.com/login")
    entries = await synchronizer.get_list()
    status = derive_status(resolve_entry(info, entries))
    ```
"""

from .classifier import STOREFRONTS, Storefront, classify_url, registrable_domain
from .list_synchronizer import ListSynchronizer
from .matching import derive_status, resolve_entry
from .scheduler import PeriodicTimer

__all__ = [
    "STOREFRONTS",
    "Storefront",
    "classify_url",
    "registrable_domain",
    "ListSynchronizer",
    "derive_status",
    "resolve_entry",
    "PeriodicTimer",
]
