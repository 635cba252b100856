"""Endpoints serving scraped creator profile data.

The handlers are plain ``def`` functions, so FastAPI runs them in its thread
pool; a slow scrape paced by the rate limiter does not block the event loop.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from profile_acquisition import InstagramScraper, ScraperSettings
from profile_acquisition.featured import load_featured_profiles, refresh_featured_profiles

from ..dependencies import get_scraper, get_settings
from ..schemas import CacheStats, FeaturedProfileRead, ProfileRead


router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("/featured", response_model=List[FeaturedProfileRead])
def list_featured_profiles(
    scraper: InstagramScraper = Depends(get_scraper),
    settings: ScraperSettings = Depends(get_settings),
):
    """Return the active featured creators with their latest public stats.

    Creators whose data cannot currently be scraped are still listed with
    ``available`` set to false.
    """
    profiles = refresh_featured_profiles(scraper, load_featured_profiles(settings.featured_profiles_path))
    return [
        FeaturedProfileRead(
            identifier=p.identifier,
            display_name=p.display_name,
            display_order=p.display_order,
            avatar_url=p.avatar_url,
            follower_count=p.follower_count,
            last_updated=p.last_updated,
            available=p.is_scraped,
        )
        for p in profiles
    ]


@router.get("/cache/stats", response_model=CacheStats)
def cache_stats(scraper: InstagramScraper = Depends(get_scraper)):
    """Return profile cache counters."""
    return CacheStats(**scraper.cache.get_stats())


@router.get("/{identifier}", response_model=ProfileRead)
def get_profile(identifier: str, scraper: InstagramScraper = Depends(get_scraper)):
    """Return public profile data for a creator handle."""
    profile = scraper.get_profile(identifier)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile data temporarily unavailable",
        )
    return ProfileRead.model_validate(profile)


@router.delete("/{identifier}/cache", status_code=status.HTTP_204_NO_CONTENT)
def invalidate_profile(identifier: str, scraper: InstagramScraper = Depends(get_scraper)):
    """Forget cached data for a creator so the next request refetches it."""
    scraper.invalidate(identifier)
    return None
