"""UI collaborator protocol."""

from typing import Protocol, runtime_checkable

from dpa_guard.entities import SiteIndicator


@runtime_checkable
class StatusPresenter(Protocol):
    """Receives the status indicator computed after each navigation."""

    def show(self, indicator: SiteIndicator) -> None:
        """Display the indicator for its tab."""
        ...
