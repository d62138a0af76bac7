"""Typed host events and the query reply."""

from dataclasses import dataclass

from dpa_guard.entities import DomainInfo, ListEntry, SiteStatus


@dataclass(frozen=True)
class NavigationCompleted:
    """A tab finished loading a URL."""

    tab_id: int
    url: str | None


@dataclass(frozen=True)
class TimerFired:
    """A named periodic timer fired."""

    name: str


@dataclass(frozen=True)
class QueryReceived:
    """A UI surface asks for the site information of a URL."""

    url: str | None


@dataclass(frozen=True)
class ExtensionStarted:
    """The host started or the extension was (re)installed."""

    reason: str = "startup"


Event = NavigationCompleted | TimerFired | QueryReceived | ExtensionStarted


@dataclass(frozen=True)
class SiteInfoResult:
    """Reply to a QueryReceived event: either the site info or an error."""

    domain_info: DomainInfo | None = None
    entry: ListEntry | None = None
    status: SiteStatus | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
