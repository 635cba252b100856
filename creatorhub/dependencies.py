"""FastAPI dependencies giving endpoints access to shared pipeline objects."""

from __future__ import annotations

from fastapi import Request

from profile_acquisition import InstagramScraper, ScraperSettings


def get_scraper(request: Request) -> InstagramScraper:
    """Return the scraper created at application startup."""
    return request.app.state.scraper


def get_settings(request: Request) -> ScraperSettings:
    return request.app.state.scraper.settings
