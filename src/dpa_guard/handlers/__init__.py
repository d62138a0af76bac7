"""Handler layer for host events and HTTP endpoints.

Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (Events/HTTP) -> (Business) -> (Data Access)
"""

from .event_dispatcher import EventDispatcher
from .events import (
    Event,
    ExtensionStarted,
    NavigationCompleted,
    QueryReceived,
    SiteInfoResult,
    TimerFired,
)
from .site_info_handler import SiteInfoHandler

__all__ = [
    "EventDispatcher",
    "Event",
    "ExtensionStarted",
    "NavigationCompleted",
    "QueryReceived",
    "SiteInfoResult",
    "TimerFired",
    "SiteInfoHandler",
]
