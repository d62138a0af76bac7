"""
Shared fixtures: in-memory store, fake auth flow, mocked list endpoint.
"""

import httpx
import pytest

from dpa_guard.config import Settings
from dpa_guard.repositories import InMemoryKeyValueStore
from dpa_guard.services import ListSynchronizer

API_HOST = "https://project.supabase.co"
API_URL = f"{API_HOST}/rest/v1/dpa_list"

SAMPLE_LIST = [
    {
        "resource_link": "https://www.khanacademy.org",
        "software_name": "Khan Academy",
        "current_tl_status": "Approved",
        "current_dpa_status": "Received",
    },
    {
        "resource_link": "https://play.google.com/store/apps/details?id=com.duolingo",
        "software_name": "Duolingo",
        "current_tl_status": "Approved",
        "current_dpa_status": "Denied",
    },
    {
        "resource_link": "https://kahoot.com",
        "software_name": "Kahoot!",
        "current_tl_status": "Pending",
        "current_dpa_status": "Sent",
        "district_notes": "Under review",
    },
]


class FakeAuthFlow:
    """AuthFlow returning canned callback URLs and recording every launch."""

    def __init__(self, silent: str | None = None, interactive: str | None = None) -> None:
        self.silent = silent
        self.interactive = interactive
        self.launches: list[tuple[str, bool]] = []

    async def launch(self, auth_url: str, interactive: bool) -> str | None:
        self.launches.append((auth_url, interactive))
        return self.interactive if interactive else self.silent


class FakeClock:
    """Controllable replacement for time.time()."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ListEndpoint:
    """Scripted list endpoint for httpx.MockTransport.

    Each request pops the next response; the last one repeats.
    """

    def __init__(self, *responses: httpx.Response) -> None:
        self.responses = list(responses) or [httpx.Response(200, json=SAMPLE_LIST)]
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]


def callback_url(token: str) -> str:
    return f"http://localhost:8000/auth/callback#access_token={token}&token_type=bearer"


@pytest.fixture
def settings():
    """Settings pointing at a fake Supabase project."""
    return Settings(
        api_url=API_URL,
        api_key="anon-key",
        api_host=API_HOST,
        redirect_url="http://localhost:8000/auth/callback",
        cache_ttl=86400,
    )


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_synchronizer(settings, store, clock):
    """Factory building a ListSynchronizer around a scripted endpoint."""

    def _make(endpoint: ListEndpoint, auth_flow: FakeAuthFlow | None = None) -> ListSynchronizer:
        client = httpx.AsyncClient(transport=httpx.MockTransport(endpoint))
        return ListSynchronizer(
            store=store,
            http_client=client,
            auth_flow=auth_flow or FakeAuthFlow(),
            settings=settings,
            clock=clock,
        )

    return _make
