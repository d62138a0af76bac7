"""Coarse compliance status of a site."""

from dataclasses import dataclass
from enum import Enum


class SiteStatus(str, Enum):
    """Status derived from an entry's T&L and DPA fields.

    ``NEUTRAL`` is never derived from an entry. It is the indicator shown when
    the URL could not be classified or no list is available at all.
    """

    APPROVED = "approved"
    DENIED = "denied"
    STAFF_ONLY = "staff_only"
    PENDING = "pending"
    UNLISTED = "unlisted"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class SiteIndicator:
    """What the UI collaborator shows for one tab after navigation."""

    tab_id: int
    status: SiteStatus
    is_installed: bool = False
