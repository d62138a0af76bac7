"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class SiteInfoRequest(BaseModel):
    """Request DTO for looking up a URL in the DPA list."""

    url: str = Field(..., description="The URL to look up", min_length=1)


class NavigationRequest(BaseModel):
    """Request DTO reporting that a tab finished loading a URL."""

    tab_id: int = Field(..., description="Browser tab identifier", ge=0)
    url: str | None = Field(None, description="The URL the tab finished loading")
