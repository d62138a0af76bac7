"""Synchronization of the remote DPA list.

Owns the locally cached copy of the list and the access token. The list is
refetched only once the cache is older than the TTL; any failure along the
way (no token, network error, non-2xx answer) leaves the cache untouched and
the last known list keeps being served.

Token expiry is discovered reactively: a 401 from the list endpoint triggers
one interactive sign-in and exactly one retry.
"""

import logging
import time
from collections.abc import Callable
from typing import Any
from urllib.parse import parse_qs, urlsplit

import httpx

from dpa_guard.config import Settings, settings as default_settings
from dpa_guard.entities import CacheRecord, Credential, ListEntry
from dpa_guard.exceptions import AuthError, DpaGuardError, ListFetchError
from dpa_guard.protocols import AuthFlow, KeyValueStore

logger = logging.getLogger(__name__)

TOKEN_SLOT = "token"
LIST_SLOT = "dpa_list"
LAST_FETCH_SLOT = "last_fetch"


def parse_entries(raw_entries: list[Any]) -> list[ListEntry]:
    """Convert the raw JSON array into entries, skipping non-object items."""
    entries = []
    for item in raw_entries:
        if isinstance(item, dict):
            entries.append(ListEntry.from_dict(item))
        else:
            logger.debug("Skipping non-object list item: %r", item)
    return entries


def extract_access_token(callback_url: str) -> str | None:
    """Read ``access_token`` from the fragment of a provider callback URL.

    Returns None for callbacks that cannot be parsed.
    """
    try:
        fragment = urlsplit(callback_url).fragment
    except ValueError as e:
        logger.warning("Could not parse callback URL: %s", e)
        return None
    params = parse_qs(fragment)
    if "error" in params:
        logger.warning(
            "Provider returned an error: %s",
            params.get("error_description", params["error"])[0],
        )
    tokens = params.get("access_token")
    if tokens and tokens[0]:
        return tokens[0]
    return None


class ListSynchronizer:
    """Cache-first access to the remote DPA list.

    Storage, HTTP and the sign-in flow are injected, so the same logic runs
    against Redis and a real endpoint in production and against in-memory
    fakes in tests.

    Example:
        ```python
        synchronizer = ListSynchronizer.create(
            store=RedisKeyValueStore.create(),
            auth_flow=BrowserAuthFlow(),
        )
        entries = await synchronizer.get_list()
        ```
    """

    def __init__(
        self,
        store: KeyValueStore,
        http_client: httpx.AsyncClient,
        auth_flow: AuthFlow,
        settings: Settings | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the synchronizer.

        Args:
            store: Persistent slot store for the token and cached list.
            http_client: Client used to call the list endpoint.
            auth_flow: Provider redirect flow used to obtain tokens.
            settings: Endpoint, key and TTL configuration. Defaults to global settings.
            clock: Returns the current Unix time in seconds.
        """
        self._store = store
        self._http = http_client
        self._auth_flow = auth_flow
        self._settings = settings or default_settings
        self._clock = clock

    @classmethod
    def create(
        cls,
        store: KeyValueStore,
        auth_flow: AuthFlow,
        settings: Settings | None = None,
    ) -> "ListSynchronizer":
        """Factory method that builds the HTTP client from settings.

        Args:
            store: Persistent slot store (required).
            auth_flow: Provider redirect flow (required).
            settings: Configuration. If None, uses global settings.

        Returns:
            Configured ListSynchronizer
        """
        settings = settings or default_settings
        http_client = httpx.AsyncClient(timeout=settings.http_timeout)
        return cls(store=store, http_client=http_client, auth_flow=auth_flow, settings=settings)

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _read_record(self) -> CacheRecord | None:
        entries = self._store.get(LIST_SLOT)
        if not isinstance(entries, list):
            return None
        fetched_at = self._store.get(LAST_FETCH_SLOT)
        # A list without a timestamp is still usable, but always stale
        return CacheRecord(entries=entries, fetched_at_ms=int(fetched_at or 0))

    async def get_list(self) -> list[ListEntry] | None:
        """Return the DPA list, refreshing the cache when it is stale.

        Returns:
            The fresh cached list, a newly fetched list, or the stale list if
            the refresh failed. None only when nothing was ever fetched.
        """
        now_ms = self._now_ms()
        record = self._read_record()

        if record is not None and record.is_fresh(now_ms, self._settings.cache_ttl_ms):
            logger.debug("Using cached DPA list")
            return parse_entries(record.entries)

        logger.info("Cache is stale or missing. Fetching new DPA list from API")
        try:
            raw_entries = await self.fetch_list()
        except DpaGuardError as e:
            logger.warning("Failed to fetch new DPA list, using stale data if available: %s", e)
            return parse_entries(record.entries) if record is not None else None

        self._store.set_many({LIST_SLOT: raw_entries, LAST_FETCH_SLOT: now_ms})
        logger.info("Fetched and cached %d DPA list entries", len(raw_entries))
        return parse_entries(raw_entries)

    def cached_list(self) -> list[ListEntry] | None:
        """Return the cached list regardless of its age, without fetching."""
        record = self._read_record()
        return parse_entries(record.entries) if record is not None else None

    async def fetch_list(self) -> list[Any]:
        """Fetch the list from the endpoint, re-authenticating once on 401.

        Returns:
            The raw JSON array

        Raises:
            AuthError: If no token could be obtained
            ListFetchError: On transport errors, non-2xx answers (including a
                second 401) and bodies that are not a JSON array
        """
        credential = await self._obtain_credential()

        try:
            response = await self._request(credential)

            if response.status_code == httpx.codes.UNAUTHORIZED:
                logger.info("Token expired or invalid. Forcing interactive authentication")
                refreshed = await self.authenticate(interactive=True)
                if refreshed is not None:
                    response = await self._request(refreshed)
        except httpx.HTTPError as e:
            raise ListFetchError(f"Network error while getting DPA list: {e}") from e

        if not response.is_success:
            raise ListFetchError(
                f"API error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ListFetchError("List endpoint returned invalid JSON") from e

        if not isinstance(data, list):
            raise ListFetchError(f"Expected a JSON array, got {type(data).__name__}")
        return data

    async def _obtain_credential(self) -> Credential:
        token = self._store.get(TOKEN_SLOT)
        if isinstance(token, str) and token:
            return Credential(access_token=token)

        logger.info("No token found, attempting silent authentication")
        credential = await self.authenticate(interactive=False)
        if credential is None:
            raise AuthError("User is not authenticated. Cannot fetch DPA list")
        return credential

    async def _request(self, credential: Credential) -> httpx.Response:
        headers = {
            "apikey": self._settings.api_key,
            "User-Agent": self._settings.user_agent,
            "Authorization": credential.authorization_header,
        }
        return await self._http.get(self._settings.api_url, headers=headers)

    def build_auth_url(self) -> str:
        """Provider authorization URL bound to the configured redirect target."""
        url = httpx.URL(
            f"{self._settings.api_host.rstrip('/')}/auth/v1/authorize",
            params={
                "provider": self._settings.auth_provider,
                "redirect_to": self._settings.redirect_url,
            },
        )
        return str(url)

    async def authenticate(self, interactive: bool = False) -> Credential | None:
        """Run the sign-in flow and persist the resulting token.

        Args:
            interactive: Whether the user may be prompted

        Returns:
            The new credential, or None if the flow was cancelled, failed, or
            returned no token
        """
        try:
            callback_url = await self._auth_flow.launch(self.build_auth_url(), interactive)
        except Exception as e:
            logger.warning("Authentication failed: %s", e)
            return None

        if not callback_url:
            logger.warning("Authentication flow was cancelled or failed")
            return None

        token = extract_access_token(callback_url)
        if token is None:
            logger.warning("Authentication succeeded, but no access token was found in the response")
            return None

        self._store.set_many({TOKEN_SLOT: token})
        logger.info("Successfully authenticated and stored token")
        return Credential(access_token=token)

    def clear(self) -> bool:
        """Drop the cached list so the next ``get_list()`` refetches.

        The stored token is kept.

        Returns:
            True if a cached list was deleted
        """
        deleted = self._store.delete(LIST_SLOT)
        self._store.delete(LAST_FETCH_SLOT)
        return deleted

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with entry count, fetch time, age and freshness
        """
        record = self._read_record()
        now_ms = self._now_ms()
        stats: dict[str, Any] = {
            "total_entries": len(record.entries) if record else 0,
            "fetched_at_ms": record.fetched_at_ms if record else None,
            "age_seconds": record.age_ms(now_ms) / 1000 if record else None,
            "is_fresh": bool(record and record.is_fresh(now_ms, self._settings.cache_ttl_ms)),
            "ttl_seconds": self._settings.cache_ttl,
            "has_token": bool(self._store.get(TOKEN_SLOT)),
        }
        return stats

    def is_healthy(self) -> bool:
        """Check if the backing store is reachable."""
        return self._store.health_check()

    async def close(self) -> None:
        """Close the HTTP client.

        Should be called when shutting down the application.
        """
        await self._http.aclose()

    @property
    def settings(self) -> Settings:
        return self._settings
