#!/usr/bin/env python3
"""
Demo script for dpa guard.

Classifies a handful of URLs and resolves them against a small in-memory
DPA list, the same way a navigation event does. No network access needed.
"""

import asyncio
import time

import httpx

from dpa_guard.handlers import EventDispatcher, NavigationCompleted, QueryReceived
from dpa_guard.repositories import IconPresenter, InMemoryKeyValueStore, StaticCallbackAuthFlow
from dpa_guard.services import ListSynchronizer, classify_url

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
        "resource_link": "https://chromewebstore.google.com/detail/grammarly/kbfnbcaeplbcioakkpcpgfkobkghlhen",
        "software_name": "Grammarly",
        "current_tl_status": "Rejected",
        "current_dpa_status": "Received",
    },
    {
        "resource_link": "https://kahoot.com",
        "software_name": "Kahoot!",
        "current_tl_status": "Pending",
        "current_dpa_status": "Sent",
    },
]

SAMPLE_URLS = [
    "https://www.khanacademy.org/math",
    "https://play.google.com/store/apps/details?id=com.duolingo&hl=en",
    "https://chromewebstore.google.com/detail/grammarly/kbfnbcaeplbcioakkpcpgfkobkghlhen",
    "https://play.google.com/store",
    "https://create.kahoot.it/",
    "https://kahoot.com/schools",
    "not a url",
]


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def demo_classification() -> None:
    """Show how URLs are turned into matching keys."""
    print_section("URL Classification")

    for url in SAMPLE_URLS:
        info = classify_url(url)
        if info is None:
            print(f"  ✗ {url}: not a valid URL")
            continue
        store = f" [{info.app_store_name}, app id: {info.app_id}]" if info.is_app_store else ""
        print(f"  • {url}\n      key: {info.hostname}{store}")


async def demo_lookups() -> None:
    """Resolve URLs against a pre-seeded list without touching the network."""
    print_section("Lookups Against a Cached List")

    store = InMemoryKeyValueStore()
    # Seeded as freshly fetched so the synchronizer never goes to the network
    async with httpx.AsyncClient() as client:
        synchronizer = ListSynchronizer(
            store=store,
            http_client=client,
            auth_flow=StaticCallbackAuthFlow(None),
        )
        store.set_many({"dpa_list": SAMPLE_LIST, "last_fetch": int(time.time() * 1000)})

        presenter = IconPresenter()
        dispatcher = EventDispatcher(synchronizer=synchronizer, presenter=presenter)

        for tab_id, url in enumerate(SAMPLE_URLS, start=1):
            result = await dispatcher.dispatch(QueryReceived(url=url))
            if not result.ok:
                print(f"  ✗ {url}: {result.error}")
                continue
            name = result.entry.software_name if result.entry else "-"
            print(f"  {result.status.value:>10}  {name:<12} {url}")

            await dispatcher.dispatch(NavigationCompleted(tab_id=tab_id, url=url))
            icon = presenter.get(tab_id)
            if icon:
                print(f"{'':>14}icon: {icon.icon_path} {icon.badge_text}")


def main() -> None:
    """Run all demos."""
    demo_classification()
    asyncio.run(demo_lookups())


if __name__ == "__main__":
    main()
