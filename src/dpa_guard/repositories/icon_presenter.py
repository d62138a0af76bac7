"""StatusPresenter that tracks the icon and badge of each tab."""

import logging
from dataclasses import dataclass

from dpa_guard.entities import SiteIndicator, SiteStatus

logger = logging.getLogger(__name__)

ICON_PATHS: dict[SiteStatus, str] = {
    SiteStatus.APPROVED: "images/icon-green-circle.png",
    SiteStatus.DENIED: "images/icon-red-x.png",
    SiteStatus.STAFF_ONLY: "images/icon-yellow-triangle.png",
    SiteStatus.PENDING: "images/icon-orange-square.png",
    SiteStatus.UNLISTED: "images/icon-purple-diamond.png",
    SiteStatus.NEUTRAL: "images/icon-neutral48.png",
}

INSTALLED_BADGE = "⇲"
INSTALLED_BADGE_COLOR = "#ebebeb"


@dataclass(frozen=True)
class TabIcon:
    """Rendered state of the action icon for one tab."""

    indicator: SiteIndicator
    icon_path: str
    badge_text: str
    badge_color: str | None


class IconPresenter:
    """In-memory UI state: the latest icon shown for every tab.

    This class satisfies the StatusPresenter protocol through structural
    typing.
    """

    def __init__(self) -> None:
        self._tabs: dict[int, TabIcon] = {}

    def show(self, indicator: SiteIndicator) -> None:
        icon = TabIcon(
            indicator=indicator,
            icon_path=ICON_PATHS.get(indicator.status, ICON_PATHS[SiteStatus.NEUTRAL]),
            badge_text=INSTALLED_BADGE if indicator.is_installed else "",
            badge_color=INSTALLED_BADGE_COLOR if indicator.is_installed else None,
        )
        self._tabs[indicator.tab_id] = icon
        logger.debug("Tab %s icon set to %s", indicator.tab_id, icon.icon_path)

    def get(self, tab_id: int) -> TabIcon | None:
        """Return the icon last shown for a tab, if any."""
        return self._tabs.get(tab_id)

    def forget(self, tab_id: int) -> None:
        """Drop state for a closed tab."""
        self._tabs.pop(tab_id, None)
