"""Entry point for the FastAPI application."""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI

from profile_acquisition import InstagramScraper, ScraperSettings
from profile_acquisition.logging_config import setup_logging

from .routers import profiles as profiles_router


def create_application(
    settings: Optional[ScraperSettings] = None,
    scraper: Optional[InstagramScraper] = None,
) -> FastAPI:
    """Create and configure the FastAPI application instance.

    The scraper is created once here and shared by every request through
    ``app.state``.  Tests pass their own scraper to avoid network access.
    """
    if scraper is None:
        settings = settings or ScraperSettings.from_env()
        scraper = InstagramScraper(settings)
    setup_logging(scraper.settings.log_level)

    app = FastAPI(title="creatorhub profile service")

    # Enable CORS for the front end.  In production you may restrict origins.
    from fastapi.middleware.cors import CORSMiddleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"]
    )

    app.state.scraper = scraper
    app.include_router(profiles_router.router)

    @app.on_event("shutdown")
    def on_shutdown() -> None:
        app.state.scraper.close()

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check() -> dict[str, str]:
        """Return a simple health status.

        Cloud platforms can use this endpoint to verify the service is
        running.  It does not contact the profile site and returns
        immediately with a static response.
        """
        return {"status": "ok"}

    return app
