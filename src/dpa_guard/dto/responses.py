"""Response DTOs for API endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from dpa_guard.entities import SiteStatus


class DomainInfoItem(BaseModel):
    """Classification of the requested URL."""

    full_hostname: str = Field(..., description="Hostname of the URL")
    hostname: str = Field(..., description="Key used for matching")
    is_installed: bool = Field(..., description="Whether the URL is a specific storefront app")
    app_id: str | None = Field(None, description="Storefront application identifier")
    is_app_store: bool = Field(..., description="Whether the host is a known storefront")
    app_store_name: str | None = Field(None, description="Display name of the storefront")


class ListEntryItem(BaseModel):
    """Matched DPA list entry. Extra fields from the source are passed through."""

    model_config = ConfigDict(extra="allow")

    resource_link: str | None = Field(None, description="URL of the resource")
    software_name: str | None = Field(None, description="Name of the resource")
    current_tl_status: str | None = Field(None, description="Teaching & Learning status")
    current_dpa_status: str | None = Field(None, description="Data Processing Agreement status")


class SiteInfoResponse(BaseModel):
    """Response DTO for a site information lookup.

    Besides the raw data, carries the display lines a popup shows.
    """

    domain_info: DomainInfoItem
    entry: ListEntryItem | None = Field(None, description="Matched entry, null when unlisted")
    status: SiteStatus = Field(..., description="Derived overall status")
    installed_from: str | None = Field(
        None,
        description="'Installed from the <store>.' for storefront apps",
    )
    summary: list[str] = Field(default_factory=list, description="Popup display lines")


class IndicatorResponse(BaseModel):
    """Response DTO for the icon shown on a tab."""

    tab_id: int
    status: SiteStatus
    is_installed: bool
    icon_path: str
    badge_text: str
    badge_color: str | None = None


class RefreshResponse(BaseModel):
    """Response DTO for a list refresh."""

    available: bool = Field(..., description="Whether any list (fresh or stale) is available")
    total_entries: int = Field(..., ge=0)
    fetched_at_ms: int | None = Field(None, description="When the cached list was fetched (ms)")


class ListStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    total_entries: int = Field(..., ge=0, description="Number of cached entries")
    fetched_at_ms: int | None = None
    age_seconds: float | None = None
    is_fresh: bool
    ttl_seconds: int = Field(..., ge=0)
    has_token: bool


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    store_healthy: bool = Field(..., description="Whether the cache store is reachable")
    list_available: bool = Field(..., description="Whether a cached list exists")
