"""AuthFlow implementations.

The list endpoint authenticates through the provider's implicit grant: the
access token comes back in the fragment of the redirect URL. Fragments are
never sent to a server, so the callback has to be handed over by whoever
saw it in their browser.
"""

import asyncio
import logging
import webbrowser
from collections.abc import Callable

logger = logging.getLogger(__name__)


class BrowserAuthFlow:
    """Opens the authorization URL in a browser and asks for the callback URL.

    This class satisfies the AuthFlow protocol through structural typing.

    A silent launch cannot complete without the user and returns None right
    away. An interactive launch opens the browser and waits for the user to
    paste the URL they were redirected to. An empty answer or no answer
    within the timeout cancels.
    """

    def __init__(
        self,
        prompt: Callable[[str], str] = input,
        open_browser: Callable[[str], bool] = webbrowser.open,
        timeout: float = 300,
    ) -> None:
        """Initialize the flow.

        Args:
            prompt: Reads one line from the user (blocking). Defaults to input().
            open_browser: Opens a URL in the user's browser.
            timeout: Seconds to wait for the callback URL before giving up.
        """
        self._prompt = prompt
        self._open_browser = open_browser
        self._timeout = timeout

    async def launch(self, auth_url: str, interactive: bool) -> str | None:
        if not interactive:
            logger.debug("Silent authentication is not available for the browser flow")
            return None

        if not self._open_browser(auth_url):
            logger.info("Open this URL to sign in: %s", auth_url)

        try:
            answer = await asyncio.wait_for(
                asyncio.to_thread(self._prompt, "Paste the URL you were redirected to: "),
                timeout=self._timeout,
            )
        except EOFError:
            logger.warning("Authentication prompt closed before a callback URL was entered")
            return None
        except asyncio.TimeoutError:
            logger.warning("No callback URL entered within %s seconds", self._timeout)
            return None

        answer = answer.strip()
        return answer or None


class StaticCallbackAuthFlow:
    """Replays a preconfigured callback URL.

    For headless deployments where the redirect was completed out of band
    and its URL provided through configuration (``DPA_AUTH_CALLBACK_URL``).
    """

    def __init__(self, callback_url: str | None) -> None:
        self._callback_url = callback_url

    async def launch(self, auth_url: str, interactive: bool) -> str | None:
        return self._callback_url
