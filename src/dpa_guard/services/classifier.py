"""URL classification.

Turns a URL into a :class:`DomainInfo`: the key used to look the site up in
the DPA list, plus storefront metadata when the URL belongs to an app store.

Regular sites are matched on their registrable domain (the last two labels,
so ``www.example.com`` and ``app.example.com`` share ``example.com``).
Storefront pages are matched on the application identifier embedded in the
URL, and fall back to their full hostname so that a generic store page never
inherits the status of ``google.com`` or ``apple.com``.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from urllib.parse import SplitResult, parse_qs, urlsplit

from dpa_guard.entities import DomainInfo

logger = logging.getLogger(__name__)

_NUMERIC = re.compile(r"[0-9]+")


def _last_segment(path: str) -> str | None:
    return path.split("/")[-1] or None


def _apple_app_id(url: SplitResult) -> str | None:
    if "/app/" in url.path:
        return _last_segment(url.path)
    return None


def _chrome_app_id(url: SplitResult) -> str | None:
    parts = url.path.split("/")
    if len(parts) > 1 and parts[1] == "detail":
        return _last_segment(url.path)
    return None


def _play_app_id(url: SplitResult) -> str | None:
    if url.path.startswith("/store/apps/details"):
        values = parse_qs(url.query).get("id")
        if values:
            return values[0] or None
    return None


def _workspace_app_id(url: SplitResult) -> str | None:
    # Marketing pages live under the same prefix; only numeric ids are apps.
    if url.path.startswith("/marketplace/app/"):
        candidate = _last_segment(url.path)
        if candidate and _NUMERIC.fullmatch(candidate):
            return candidate
    return None


@dataclass(frozen=True)
class Storefront:
    """A known app store host and how to read an app id from its URLs."""

    name: str
    extract_app_id: Callable[[SplitResult], str | None]


# Adding a store means adding an entry here.
STOREFRONTS: dict[str, Storefront] = {
    "apps.apple.com": Storefront("Apple App Store", _apple_app_id),
    "chromewebstore.google.com": Storefront("Chrome Web Store", _chrome_app_id),
    "play.google.com": Storefront("Google Play Store", _play_app_id),
    "workspace.google.com": Storefront("Google Workspace Marketplace", _workspace_app_id),
}


def registrable_domain(hostname: str) -> str:
    """Collapse a hostname to its last two labels.

    A heuristic, not a public-suffix lookup: ``foo.co.uk`` becomes ``co.uk``.
    Single-label hosts such as ``localhost`` are returned unchanged.
    """
    labels = hostname.split(".")
    if len(labels) > 1:
        return ".".join(labels[-2:])
    return hostname


def classify_url(url: object) -> DomainInfo | None:
    """Classify a URL for DPA list matching.

    Args:
        url: The URL to classify. Anything that is not a non-empty string is
            rejected.

    Returns:
        The DomainInfo, or None if the URL is empty, not a string, or cannot
        be parsed into a scheme and a host
    """
    if not url or not isinstance(url, str):
        return None

    try:
        parsed = urlsplit(url)
        hostname = parsed.hostname
    except ValueError:
        logger.warning("Could not parse invalid URL: %s", url)
        return None

    if not parsed.scheme or not hostname:
        logger.debug("URL has no scheme or host: %s", url)
        return None

    storefront = STOREFRONTS.get(hostname)
    if storefront is None:
        return DomainInfo(full_hostname=hostname, hostname=registrable_domain(hostname))

    try:
        app_id = storefront.extract_app_id(parsed)
    except ValueError:
        logger.warning("Could not read an app id from store URL: %s", url)
        app_id = None

    return DomainInfo(
        full_hostname=hostname,
        hostname=hostname,
        app_id=app_id,
        is_app_store=True,
        app_store_name=storefront.name,
    )
