"""
Tests for the remote list synchronizer: TTL, auth and fallback behaviour.
"""

import httpx
import pytest
from conftest import SAMPLE_LIST, FakeAuthFlow, ListEndpoint, callback_url

from dpa_guard.exceptions import AuthError, ListFetchError
from dpa_guard.services.list_synchronizer import (
    LAST_FETCH_SLOT,
    LIST_SLOT,
    TOKEN_SLOT,
    extract_access_token,
)

DAY = 86400


def seed(store, clock, entries=SAMPLE_LIST, age_seconds=0, token="old-token"):
    values = {LIST_SLOT: entries, LAST_FETCH_SLOT: int((clock.now - age_seconds) * 1000)}
    if token:
        values[TOKEN_SLOT] = token
    store.set_many(values)
    store.write_count = 0


@pytest.mark.asyncio
async def test_fresh_cache_makes_no_network_call(make_synchronizer, store, clock):
    seed(store, clock, age_seconds=DAY - 1)
    endpoint = ListEndpoint()
    sync = make_synchronizer(endpoint)

    entries = await sync.get_list()

    assert [e.software_name for e in entries] == ["Khan Academy", "Duolingo", "Kahoot!"]
    assert endpoint.requests == []
    assert store.write_count == 0


@pytest.mark.asyncio
async def test_stale_cache_is_refetched(make_synchronizer, store, clock):
    seed(store, clock, age_seconds=DAY)
    fresh = [{"resource_link": "https://new.example.com", "software_name": "New"}]
    endpoint = ListEndpoint(httpx.Response(200, json=fresh))
    sync = make_synchronizer(endpoint)

    entries = await sync.get_list()

    assert [e.software_name for e in entries] == ["New"]
    assert len(endpoint.requests) == 1
    assert store.get(LIST_SLOT) == fresh
    assert store.get(LAST_FETCH_SLOT) == int(clock.now * 1000)
    assert store.write_count == 1


@pytest.mark.asyncio
async def test_request_headers(make_synchronizer, store, clock, settings):
    seed(store, clock, age_seconds=DAY, token="tok-123")
    endpoint = ListEndpoint()
    sync = make_synchronizer(endpoint)

    await sync.get_list()

    request = endpoint.requests[0]
    assert request.method == "GET"
    assert str(request.url) == settings.api_url
    assert request.headers["apikey"] == "anon-key"
    assert request.headers["User-Agent"] == "SB29-guard-chrome"
    assert request.headers["Authorization"] == "Bearer tok-123"


@pytest.mark.asyncio
async def test_missing_token_triggers_silent_auth(make_synchronizer, store):
    auth = FakeAuthFlow(silent=callback_url("silent-token"))
    endpoint = ListEndpoint()
    sync = make_synchronizer(endpoint, auth)

    entries = await sync.get_list()

    assert len(entries) == 3
    assert [interactive for _, interactive in auth.launches] == [False]
    assert store.get(TOKEN_SLOT) == "silent-token"
    assert endpoint.requests[0].headers["Authorization"] == "Bearer silent-token"


@pytest.mark.asyncio
async def test_no_credential_and_no_cache_returns_none(make_synchronizer, store):
    endpoint = ListEndpoint()
    sync = make_synchronizer(endpoint, FakeAuthFlow())

    assert await sync.get_list() is None
    assert endpoint.requests == []
    assert store.write_count == 0


@pytest.mark.asyncio
async def test_no_credential_falls_back_to_stale_cache(make_synchronizer, store, clock):
    seed(store, clock, age_seconds=3 * DAY, token=None)
    endpoint = ListEndpoint()
    sync = make_synchronizer(endpoint, FakeAuthFlow())

    entries = await sync.get_list()

    assert len(entries) == 3
    assert endpoint.requests == []
    assert store.write_count == 0


@pytest.mark.asyncio
async def test_401_then_successful_retry_writes_cache_once(make_synchronizer, store, clock):
    seed(store, clock, age_seconds=DAY)
    retried = [{"resource_link": "https://retried.example.com", "software_name": "Retried"}]
    endpoint = ListEndpoint(httpx.Response(401), httpx.Response(200, json=retried))
    auth = FakeAuthFlow(interactive=callback_url("fresh-token"))
    sync = make_synchronizer(endpoint, auth)

    entries = await sync.get_list()

    assert [e.software_name for e in entries] == ["Retried"]
    assert [interactive for _, interactive in auth.launches] == [True]
    assert [r.headers["Authorization"] for r in endpoint.requests] == [
        "Bearer old-token",
        "Bearer fresh-token",
    ]
    assert store.get(LIST_SLOT) == retried
    # One write for the token, one for the list
    assert store.write_count == 2
    assert store.get(TOKEN_SLOT) == "fresh-token"


@pytest.mark.asyncio
async def test_second_401_is_not_retried_again(make_synchronizer, store, clock):
    seed(store, clock, age_seconds=DAY)
    endpoint = ListEndpoint(httpx.Response(401))
    auth = FakeAuthFlow(interactive=callback_url("still-bad"))
    sync = make_synchronizer(endpoint, auth)

    entries = await sync.get_list()

    assert len(endpoint.requests) == 2
    assert len(entries) == 3  # stale fallback
    assert store.get(LIST_SLOT) == SAMPLE_LIST


@pytest.mark.asyncio
async def test_cancelled_interactive_auth_keeps_stale_cache(make_synchronizer, store, clock):
    seed(store, clock, age_seconds=DAY)
    endpoint = ListEndpoint(httpx.Response(401))
    sync = make_synchronizer(endpoint, FakeAuthFlow(interactive=None))

    entries = await sync.get_list()

    assert len(endpoint.requests) == 1
    assert len(entries) == 3
    assert store.write_count == 0


@pytest.mark.asyncio
async def test_server_error_keeps_stale_cache(make_synchronizer, store, clock):
    seed(store, clock, age_seconds=DAY)
    sync = make_synchronizer(ListEndpoint(httpx.Response(500)))

    entries = await sync.get_list()

    assert len(entries) == 3
    assert store.write_count == 0


@pytest.mark.asyncio
async def test_network_error_keeps_stale_cache(make_synchronizer, store, clock):
    seed(store, clock, age_seconds=DAY)

    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    sync = make_synchronizer(refuse)

    entries = await sync.get_list()

    assert len(entries) == 3
    assert store.write_count == 0


@pytest.mark.asyncio
async def test_fetch_list_errors_carry_status(make_synchronizer, store, clock):
    seed(store, clock, age_seconds=DAY)
    sync = make_synchronizer(ListEndpoint(httpx.Response(503)))

    with pytest.raises(ListFetchError) as exc_info:
        await sync.fetch_list()
    assert exc_info.value.status_code == 503


@pytest.mark.asyncio
async def test_non_array_body_is_rejected(make_synchronizer, store, clock):
    seed(store, clock, age_seconds=DAY)
    sync = make_synchronizer(ListEndpoint(httpx.Response(200, json={"message": "nope"})))

    with pytest.raises(ListFetchError):
        await sync.fetch_list()
    assert len(await sync.get_list()) == 3


@pytest.mark.asyncio
async def test_fetch_list_without_credential_raises_auth_error(make_synchronizer):
    sync = make_synchronizer(ListEndpoint())

    with pytest.raises(AuthError):
        await sync.fetch_list()


@pytest.mark.asyncio
async def test_cache_expires_after_ttl(make_synchronizer, store, clock):
    seed(store, clock)
    endpoint = ListEndpoint()
    sync = make_synchronizer(endpoint)

    await sync.get_list()
    clock.advance(DAY - 1)
    await sync.get_list()
    assert endpoint.requests == []

    clock.advance(1)
    await sync.get_list()
    assert len(endpoint.requests) == 1


@pytest.mark.asyncio
async def test_list_without_timestamp_is_stale(make_synchronizer, store):
    store.set_many({LIST_SLOT: SAMPLE_LIST, TOKEN_SLOT: "tok"})
    endpoint = ListEndpoint(httpx.Response(500))
    sync = make_synchronizer(endpoint)

    entries = await sync.get_list()

    assert len(endpoint.requests) == 1
    assert len(entries) == 3


@pytest.mark.asyncio
async def test_empty_remote_list_is_cached(make_synchronizer, store, clock):
    seed(store, clock, age_seconds=DAY)
    sync = make_synchronizer(ListEndpoint(httpx.Response(200, json=[])))

    assert await sync.get_list() == []
    assert store.get(LIST_SLOT) == []
    assert sync.get_stats()["is_fresh"] is True


@pytest.mark.asyncio
async def test_non_object_items_are_skipped(make_synchronizer, store, clock):
    seed(store, clock, entries=[{"resource_link": "https://a.com"}, "junk", 7])
    sync = make_synchronizer(ListEndpoint())

    entries = await sync.get_list()

    assert [e.resource_link for e in entries] == ["https://a.com"]


@pytest.mark.asyncio
async def test_build_auth_url(make_synchronizer):
    sync = make_synchronizer(ListEndpoint())
    url = httpx.URL(sync.build_auth_url())

    assert str(url).startswith("https://project.supabase.co/auth/v1/authorize?")
    assert url.params["provider"] == "google"
    assert url.params["redirect_to"] == "http://localhost:8000/auth/callback"


@pytest.mark.asyncio
async def test_authenticate_without_token_in_callback(make_synchronizer, store):
    auth = FakeAuthFlow(interactive="http://localhost:8000/auth/callback#error=access_denied")
    sync = make_synchronizer(ListEndpoint(), auth)

    assert await sync.authenticate(interactive=True) is None
    assert store.get(TOKEN_SLOT) is None


@pytest.mark.asyncio
async def test_authenticate_flow_error_yields_none(make_synchronizer):
    class BrokenFlow:
        async def launch(self, auth_url, interactive):
            raise RuntimeError("window closed")

    sync = make_synchronizer(ListEndpoint(), BrokenFlow())

    assert await sync.authenticate(interactive=True) is None


@pytest.mark.asyncio
async def test_cached_list_never_fetches(make_synchronizer, store, clock):
    endpoint = ListEndpoint()
    sync = make_synchronizer(endpoint)
    assert sync.cached_list() is None

    seed(store, clock, age_seconds=10 * DAY)
    assert len(sync.cached_list()) == 3
    assert endpoint.requests == []


@pytest.mark.asyncio
async def test_stats_and_clear(make_synchronizer, store, clock):
    seed(store, clock, age_seconds=60)
    sync = make_synchronizer(ListEndpoint())

    stats = sync.get_stats()
    assert stats["total_entries"] == 3
    assert stats["age_seconds"] == 60
    assert stats["is_fresh"] is True
    assert stats["ttl_seconds"] == DAY
    assert stats["has_token"] is True

    assert sync.clear() is True
    assert sync.cached_list() is None
    assert store.get(TOKEN_SLOT) == "old-token"
    assert sync.clear() is False


def test_extract_access_token():
    assert extract_access_token(callback_url("abc")) == "abc"
    assert extract_access_token("http://localhost/cb?access_token=abc") is None
    assert extract_access_token("http://localhost/cb#access_token=") is None
    assert extract_access_token("http://[bad#access_token=x") is None


@pytest.mark.asyncio
async def test_malformed_callback_url_falls_back_to_stale_cache(make_synchronizer, store, clock):
    seed(store, clock, age_seconds=3 * DAY, token=None)
    endpoint = ListEndpoint()
    sync = make_synchronizer(endpoint, FakeAuthFlow(silent="http://[bad#access_token=x"))

    entries = await sync.get_list()

    assert [e.software_name for e in entries] == ["Khan Academy", "Duolingo", "Kahoot!"]
    assert endpoint.requests == []
    assert store.get(TOKEN_SLOT) is None


@pytest.mark.asyncio
async def test_malformed_callback_after_401_keeps_stale_cache(make_synchronizer, store, clock):
    seed(store, clock, age_seconds=3 * DAY)
    endpoint = ListEndpoint(httpx.Response(401))
    sync = make_synchronizer(endpoint, FakeAuthFlow(interactive="http://[bad#access_token=x"))

    entries = await sync.get_list()

    assert len(entries) == 3
    assert len(endpoint.requests) == 1
