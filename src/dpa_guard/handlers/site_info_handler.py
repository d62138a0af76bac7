"""HTTP handlers for site lookups and list maintenance.

Handlers convert between DTOs (API contracts) and dispatcher/service calls.
They handle HTTP concerns like status codes and error responses.
"""

from fastapi import HTTPException, status

from dpa_guard.dto import (
    DomainInfoItem,
    HealthCheckResponse,
    IndicatorResponse,
    ListEntryItem,
    ListStatsResponse,
    NavigationRequest,
    RefreshResponse,
    SiteInfoRequest,
    SiteInfoResponse,
)
from dpa_guard.entities import DomainInfo, ListEntry
from dpa_guard.handlers.event_dispatcher import INVALID_URL_ERROR, EventDispatcher
from dpa_guard.handlers.events import NavigationCompleted, QueryReceived
from dpa_guard.repositories import IconPresenter, TabIcon
from dpa_guard.services import ListSynchronizer


def _domain_info_item(info: DomainInfo) -> DomainInfoItem:
    return DomainInfoItem(
        full_hostname=info.full_hostname,
        hostname=info.hostname,
        is_installed=info.is_installed,
        app_id=info.app_id,
        is_app_store=info.is_app_store,
        app_store_name=info.app_store_name,
    )


def _summary_lines(entry: ListEntry | None) -> list[str]:
    if entry is None:
        return ["This site is not in the district list.", "Recommend for review submission."]
    return [
        entry.software_name or entry.resource_link or "",
        f"T&L: {entry.current_tl_status or 'N/A'}",
        f"DPA: {entry.current_dpa_status or 'N/A'}",
    ]


def _indicator_response(icon: TabIcon) -> IndicatorResponse:
    return IndicatorResponse(
        tab_id=icon.indicator.tab_id,
        status=icon.indicator.status,
        is_installed=icon.indicator.is_installed,
        icon_path=icon.icon_path,
        badge_text=icon.badge_text,
        badge_color=icon.badge_color,
    )


class SiteInfoHandler:
    """HTTP handlers for the DPA guard API.

    Lookups and navigation reports are turned into events for the
    dispatcher; list maintenance goes straight to the synchronizer.

    Example:
        ```python
        handler = SiteInfoHandler(dispatcher=dispatcher, synchronizer=synchronizer, presenter=presenter)

        @app.post("/site-info", response_model=SiteInfoResponse)
        async def site_info(request: SiteInfoRequest):
            return await handler.get_site_info(request)
        ```
    """

    def __init__(
        self,
        dispatcher: EventDispatcher,
        synchronizer: ListSynchronizer,
        presenter: IconPresenter,
    ) -> None:
        """Initialize the handler.

        Args:
            dispatcher: Event dispatcher (required).
            synchronizer: List synchronizer, for refresh/stats/clear (required).
            presenter: Presenter holding per-tab icons (required).
        """
        self._dispatcher = dispatcher
        self._sync = synchronizer
        self._presenter = presenter

    async def get_site_info(self, request: SiteInfoRequest) -> SiteInfoResponse:
        """Handle POST /site-info requests.

        Raises:
            HTTPException: 400 for an invalid URL, 503 when no list is available
        """
        result = await self._dispatcher.dispatch(QueryReceived(url=request.url))

        if not result.ok:
            code = (
                status.HTTP_400_BAD_REQUEST
                if result.error == INVALID_URL_ERROR
                else status.HTTP_503_SERVICE_UNAVAILABLE
            )
            raise HTTPException(status_code=code, detail=result.error)

        info = result.domain_info
        installed_from = None
        if info.is_installed:
            source = f"the {info.app_store_name}." if info.app_store_name else "an unknown source."
            installed_from = f"Installed from {source}"

        return SiteInfoResponse(
            domain_info=_domain_info_item(info),
            entry=ListEntryItem(**result.entry.to_dict()) if result.entry else None,
            status=result.status,
            installed_from=installed_from,
            summary=_summary_lines(result.entry),
        )

    async def report_navigation(self, request: NavigationRequest) -> IndicatorResponse:
        """Handle POST /events/navigation requests.

        Raises:
            HTTPException: 422 if the URL is not a web page
        """
        indicator = await self._dispatcher.dispatch(
            NavigationCompleted(tab_id=request.tab_id, url=request.url)
        )
        if indicator is None:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Only http(s) navigations are checked",
            )
        return self.get_indicator(request.tab_id)

    def get_indicator(self, tab_id: int) -> IndicatorResponse:
        """Handle GET /tabs/{tab_id}/indicator requests.

        Raises:
            HTTPException: 404 if nothing was shown for the tab yet
        """
        icon = self._presenter.get(tab_id)
        if icon is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"No indicator for tab {tab_id}",
            )
        return _indicator_response(icon)

    async def forget_tab(self, tab_id: int) -> dict:
        """Handle DELETE /tabs/{tab_id} requests (tab closed)."""
        known = self._presenter.get(tab_id) is not None
        self._presenter.forget(tab_id)
        return {"success": True, "deleted": known}

    async def refresh_list(self) -> RefreshResponse:
        """Handle POST /list/refresh requests (TTL still applies)."""
        entries = await self._sync.get_list()
        stats = self._sync.get_stats()
        return RefreshResponse(
            available=entries is not None,
            total_entries=len(entries) if entries else 0,
            fetched_at_ms=stats["fetched_at_ms"],
        )

    async def clear_list(self) -> dict:
        """Handle DELETE /list/cache requests."""
        deleted = self._sync.clear()
        return {
            "success": True,
            "deleted": deleted,
            "message": "Cached list cleared" if deleted else "No cached list",
        }

    async def get_stats(self) -> ListStatsResponse:
        """Handle GET /stats requests."""
        return ListStatsResponse(**self._sync.get_stats())

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        store_healthy = self._sync.is_healthy()
        list_available = store_healthy and self._sync.cached_list() is not None
        return HealthCheckResponse(
            status="healthy" if store_healthy else "unhealthy",
            store_healthy=store_healthy,
            list_available=list_available,
        )
