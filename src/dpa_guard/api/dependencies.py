"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from dpa_guard.config import Settings, settings as default_settings
from dpa_guard.handlers import EventDispatcher, ExtensionStarted, SiteInfoHandler, TimerFired
from dpa_guard.protocols import AuthFlow, KeyValueStore
from dpa_guard.repositories import (
    BrowserAuthFlow,
    IconPresenter,
    InMemoryKeyValueStore,
    RedisKeyValueStore,
    StaticCallbackAuthFlow,
)
from dpa_guard.services import ListSynchronizer, PeriodicTimer
from dpa_guard.utils import configure_logging

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> SiteInfoHandler:
    """Dependency injection for SiteInfoHandler from app.state.

    Raises:
        RuntimeError: If the handler is not initialized
    """
    handler = getattr(request.app.state, "site_info_handler", None)
    if handler is None:
        raise RuntimeError("SiteInfoHandler not initialized. Check lifespan setup.")
    return handler


def build_store(settings: Settings) -> KeyValueStore:
    if settings.store_backend == "memory":
        return InMemoryKeyValueStore()
    return RedisKeyValueStore.create(prefix=settings.store_prefix)


def build_auth_flow(settings: Settings) -> AuthFlow:
    if settings.auth_callback_url:
        return StaticCallbackAuthFlow(settings.auth_callback_url)
    return BrowserAuthFlow(timeout=settings.auth_timeout)


def install_components(
    app: FastAPI,
    synchronizer: ListSynchronizer,
    presenter: IconPresenter | None = None,
) -> EventDispatcher:
    """Build dispatcher and handler around a synchronizer and store them in app.state.

    Args:
        app: The FastAPI application instance
        synchronizer: The list synchronizer (required)
        presenter: Presenter for tab icons. Defaults to a new IconPresenter.

    Returns:
        The dispatcher, for wiring timers and startup events
    """
    presenter = presenter or IconPresenter()
    dispatcher = EventDispatcher(synchronizer=synchronizer, presenter=presenter)
    app.state.synchronizer = synchronizer
    app.state.presenter = presenter
    app.state.dispatcher = dispatcher
    app.state.site_info_handler = SiteInfoHandler(
        dispatcher=dispatcher,
        synchronizer=synchronizer,
        presenter=presenter,
    )
    return dispatcher


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores them in app.state:
    1. Store and auth flow (external collaborators)
    2. ListSynchronizer (business logic)
    3. EventDispatcher and SiteInfoHandler
    4. The periodic refresh timer, plus a startup warm-up of the list

    Args:
        app: The FastAPI application instance

    Yields:
        None
    """
    settings = default_settings
    configure_logging(settings.log_level)

    synchronizer = ListSynchronizer.create(
        store=build_store(settings),
        auth_flow=build_auth_flow(settings),
        settings=settings,
    )
    dispatcher = install_components(app, synchronizer)

    timer = PeriodicTimer(on_fire=lambda name: dispatcher.dispatch(TimerFired(name=name)))
    timer.register(
        settings.refresh_timer_name,
        initial_delay=settings.refresh_initial_delay,
        period=settings.refresh_period,
    )
    app.state.timer = timer
    warm_up = asyncio.create_task(dispatcher.dispatch(ExtensionStarted(reason="startup")))

    logger.info(
        "DPA guard initialized (store healthy: %s, timers: %s)",
        synchronizer.is_healthy(),
        ", ".join(timer.names),
    )

    yield

    warm_up.cancel()
    await asyncio.gather(warm_up, return_exceptions=True)
    await timer.shutdown()
    await synchronizer.close()
    del app.state.timer
    del app.state.site_info_handler
    del app.state.dispatcher
    del app.state.presenter
    del app.state.synchronizer
    logger.info("DPA guard shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[SiteInfoHandler, Depends(get_handler)]
