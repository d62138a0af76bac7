"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.

Entities should have:
- No JSON serialization logic beyond converting from/to the wire dicts
- No Pydantic validation
- No external dependencies
"""

from .cache_record import CacheRecord
from .credential import Credential
from .domain_info import DomainInfo
from .list_entry import ListEntry
from .site_status import SiteIndicator, SiteStatus

__all__ = [
    "CacheRecord",
    "Credential",
    "DomainInfo",
    "ListEntry",
    "SiteIndicator",
    "SiteStatus",
]
