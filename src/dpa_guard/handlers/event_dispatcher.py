"""Single entry point for host events.

Navigation, timers, startup and UI queries all go through
``EventDispatcher.dispatch`` and end up in the same core functions:
classify the URL, get the list, resolve the entry, derive the status.
"""

import logging

from dpa_guard.entities import ListEntry, SiteIndicator, SiteStatus
from dpa_guard.handlers.events import (
    Event,
    ExtensionStarted,
    NavigationCompleted,
    QueryReceived,
    SiteInfoResult,
    TimerFired,
)
from dpa_guard.protocols import StatusPresenter
from dpa_guard.services import ListSynchronizer, classify_url, derive_status, resolve_entry

logger = logging.getLogger(__name__)

INVALID_URL_ERROR = "Invalid URL provided."
LIST_UNAVAILABLE_ERROR = "DPA data is not yet available."


class EventDispatcher:
    """Routes typed events to the matching core.

    Example:
        ```python
        dispatcher = EventDispatcher(synchronizer=synchronizer, presenter=IconPresenter())
        await dispatcher.dispatch(NavigationCompleted(tab_id=3, url="https://example.com"))
        result = await dispatcher.dispatch(QueryReceived(url="https://example.com"))
        ```
    """

    def __init__(
        self,
        synchronizer: ListSynchronizer,
        presenter: StatusPresenter,
        refresh_timer_name: str | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            synchronizer: Source of the DPA list (required).
            presenter: UI collaborator receiving navigation indicators (required).
            refresh_timer_name: Timer that triggers a list refresh. Defaults to settings.
        """
        self._sync = synchronizer
        self._presenter = presenter
        self._refresh_timer_name = refresh_timer_name or synchronizer.settings.refresh_timer_name
        self._routes = {
            NavigationCompleted: self.on_navigation,
            TimerFired: self.on_timer,
            QueryReceived: self.on_query,
            ExtensionStarted: self.on_started,
        }

    async def dispatch(self, event: Event):
        """Handle one event.

        Returns:
            The handler's result: a SiteIndicator (or None) for navigation, a
            SiteInfoResult for queries, the list (or None) for refreshes

        Raises:
            TypeError: If the event type is unknown
        """
        handler = self._routes.get(type(event))
        if handler is None:
            raise TypeError(f"Unsupported event: {event!r}")
        return await handler(event)

    async def on_navigation(self, event: NavigationCompleted) -> SiteIndicator | None:
        """Compute and show the indicator for a loaded tab.

        Non-web URLs (``chrome://``, ``file://``...) are ignored.
        """
        if not event.url or not event.url.startswith("http"):
            return None

        domain_info = classify_url(event.url)
        if domain_info is None:
            return self._show(SiteIndicator(event.tab_id, SiteStatus.NEUTRAL))

        entries = await self._sync.get_list()
        if entries is None:
            logger.info("No DPA list available to check against. Setting icon to neutral")
            return self._show(
                SiteIndicator(event.tab_id, SiteStatus.NEUTRAL, domain_info.is_installed)
            )

        entry = resolve_entry(domain_info, entries)
        status = derive_status(entry)
        if entry is None:
            logger.info("Site not found in DPA list: %s", domain_info.hostname)
        else:
            logger.info("Site found: %s, status: %s", domain_info.hostname, status.value)
        return self._show(SiteIndicator(event.tab_id, status, domain_info.is_installed))

    def _show(self, indicator: SiteIndicator) -> SiteIndicator:
        self._presenter.show(indicator)
        return indicator

    async def on_timer(self, event: TimerFired) -> list[ListEntry] | None:
        """Refresh the list when the refresh timer fires; ignore other timers."""
        if event.name != self._refresh_timer_name:
            logger.debug("Ignoring unknown timer %s", event.name)
            return None
        logger.info("Periodic timer triggered. Refreshing DPA list")
        return await self._sync.get_list()

    async def on_started(self, event: ExtensionStarted) -> list[ListEntry] | None:
        """Warm the cache on startup or install."""
        logger.info("Warming DPA list on %s", event.reason)
        return await self._sync.get_list()

    async def on_query(self, event: QueryReceived) -> SiteInfoResult:
        """Answer a site information query for a URL."""
        domain_info = classify_url(event.url)
        if domain_info is None:
            return SiteInfoResult(error=INVALID_URL_ERROR)

        entries = await self._sync.get_list()
        if entries is None:
            return SiteInfoResult(error=LIST_UNAVAILABLE_ERROR)

        entry = resolve_entry(domain_info, entries)
        return SiteInfoResult(domain_info=domain_info, entry=entry, status=derive_status(entry))
