"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import NavigationRequest, SiteInfoRequest
from .responses import (
    DomainInfoItem,
    HealthCheckResponse,
    IndicatorResponse,
    ListEntryItem,
    ListStatsResponse,
    RefreshResponse,
    SiteInfoResponse,
)

__all__ = [
    "SiteInfoRequest",
    "NavigationRequest",
    "DomainInfoItem",
    "ListEntryItem",
    "SiteInfoResponse",
    "IndicatorResponse",
    "RefreshResponse",
    "ListStatsResponse",
    "HealthCheckResponse",
]
