"""Matching a classified URL against the DPA list, and deriving its status."""

from collections.abc import Iterable

from dpa_guard.entities import DomainInfo, ListEntry, SiteStatus
from dpa_guard.services.classifier import classify_url

APPROVED_TL_STATUSES = frozenset({"Approved", "Not Required"})
RECEIVED_DPA_STATUSES = frozenset({"Received", "Not Required"})


def resolve_entry(domain_info: DomainInfo, entries: Iterable[ListEntry]) -> ListEntry | None:
    """Find the list entry that applies to a classified URL.

    Installed apps match entries pointing at the same app id (on any store).
    Regular sites match entries for the same registrable domain that are not
    themselves app listings. A store page without an app id matches nothing.
    The first matching entry in list order wins.

    Args:
        domain_info: The classified URL
        entries: The DPA list, in source order

    Returns:
        The matching entry, or None
    """
    if domain_info.is_installed:
        for entry in entries:
            candidate = classify_url(entry.resource_link)
            if candidate and candidate.is_installed and candidate.app_id == domain_info.app_id:
                return entry
        return None

    if domain_info.is_app_store:
        return None

    for entry in entries:
        candidate = classify_url(entry.resource_link)
        if candidate and not candidate.is_installed and candidate.hostname == domain_info.hostname:
            return entry
    return None


def derive_status(entry: ListEntry | None) -> SiteStatus:
    """Collapse an entry's T&L and DPA fields into one status.

    Precedence: denied, then staff only, then approved, then pending.
    Unknown or missing values end up as pending.
    """
    if entry is None:
        return SiteStatus.UNLISTED

    if entry.current_tl_status == "Rejected":
        return SiteStatus.DENIED

    # A denied DPA still allows staff use
    if entry.current_dpa_status == "Denied":
        return SiteStatus.STAFF_ONLY

    if (
        entry.current_tl_status in APPROVED_TL_STATUSES
        and entry.current_dpa_status in RECEIVED_DPA_STATUSES
    ):
        return SiteStatus.APPROVED

    return SiteStatus.PENDING
