from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dpa_guard.api.dependencies import HandlerDep, lifespan
from dpa_guard.config import settings
from dpa_guard.dto import (
    HealthCheckResponse,
    IndicatorResponse,
    ListStatsResponse,
    NavigationRequest,
    RefreshResponse,
    SiteInfoRequest,
    SiteInfoResponse,
)


def create_app(app_lifespan=lifespan) -> FastAPI:
    """Build the FastAPI application.

    Args:
        app_lifespan: Lifespan that populates app.state. Tests pass one that
            installs in-memory collaborators.
    """
    app = FastAPI(
        title="DPA Guard API",
        description="Checks URLs against a district's Data Processing Agreement list",
        version="0.1.0",
        lifespan=app_lifespan,
    )

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": "DPA Guard API",
            "version": "0.1.0",
            "description": "Checks URLs against a district's Data Processing Agreement list",
            "endpoints": {
                "site_info": "/site-info",
                "navigation": "/events/navigation",
                "list": "/list",
                "stats": "/stats",
                "health": "/health",
                "docs": "/docs",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: HandlerDep) -> HealthCheckResponse:
        """Health check endpoint."""
        return await handler.health_check()

    @app.post("/site-info", response_model=SiteInfoResponse)
    async def site_info(request: SiteInfoRequest, handler: HandlerDep) -> SiteInfoResponse:
        """
        Look a URL up in the DPA list.

        Returns the URL's classification, the matched entry (if any) and the
        derived status.
        """
        return await handler.get_site_info(request)

    @app.post("/events/navigation", response_model=IndicatorResponse)
    async def navigation(request: NavigationRequest, handler: HandlerDep) -> IndicatorResponse:
        """Report a completed navigation and get the icon for the tab."""
        return await handler.report_navigation(request)

    @app.get("/tabs/{tab_id}/indicator", response_model=IndicatorResponse)
    async def tab_indicator(tab_id: int, handler: HandlerDep) -> IndicatorResponse:
        """Get the icon last shown for a tab."""
        return handler.get_indicator(tab_id)

    @app.delete("/tabs/{tab_id}", response_model=dict[str, Any])
    async def forget_tab(tab_id: int, handler: HandlerDep) -> dict[str, Any]:
        """Drop the icon state of a closed tab."""
        return await handler.forget_tab(tab_id)

    @app.post("/list/refresh", response_model=RefreshResponse)
    async def refresh_list(handler: HandlerDep) -> RefreshResponse:
        """Refresh the cached list if it is older than the TTL."""
        return await handler.refresh_list()

    @app.delete("/list/cache", response_model=dict[str, Any])
    async def clear_list(handler: HandlerDep) -> dict[str, Any]:
        """Drop the cached list; the next lookup refetches it."""
        return await handler.clear_list()

    @app.get("/stats", response_model=ListStatsResponse)
    async def stats(handler: HandlerDep) -> ListStatsResponse:
        """Get cache statistics."""
        return await handler.get_stats()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "dpa_guard.api.app:app",
        host=settings.api_bind_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
