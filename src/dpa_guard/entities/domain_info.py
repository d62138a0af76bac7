"""Classified URL domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DomainInfo:
    """Matching metadata derived from a single URL.

    Recomputed on every classification call and never persisted.

    Attributes:
        full_hostname: The URL's hostname, unmodified
        hostname: The matching key. The full hostname for storefront pages,
            otherwise the last two dot-separated labels
        app_id: Storefront application identifier, None when the page is not
            a specific app listing
        is_app_store: Whether the host is one of the known storefronts
        app_store_name: Display name of the storefront, None off-store
    """

    full_hostname: str
    hostname: str
    app_id: str | None = None
    is_app_store: bool = False
    app_store_name: str | None = None

    @property
    def is_installed(self) -> bool:
        """True when the URL points at a specific installable app."""
        return self.app_id is not None
