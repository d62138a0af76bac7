"""Redirect-based authentication flow protocol."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class AuthFlow(Protocol):
    """Protocol for the provider redirect flow.

    Given an authorization URL, the flow lets the user (or an existing
    session) authenticate with the provider and returns the URL the
    provider redirected to. The access token travels in that URL's fragment.
    """

    async def launch(self, auth_url: str, interactive: bool) -> str | None:
        """Run the flow.

        Args:
            auth_url: Provider authorization URL, already bound to the redirect target
            interactive: Whether the user may be prompted. A silent flow must
                never block on user input.

        Returns:
            The callback URL, or None if the flow was cancelled or failed
        """
        ...
