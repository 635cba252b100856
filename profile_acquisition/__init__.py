"""Profile acquisition pipeline for the creatorhub platform.

This package fetches public creator profile pages from a third-party site,
extracts the avatar and follower count with a chain of fallback strategies,
paces outbound requests with a shared rate limiter and keeps results in an
in-memory cache with per-entry expiry.  Consumers construct one
:class:`InstagramScraper` at startup and call ``get_profile(identifier)``,
which returns a :class:`ScrapedProfile` or ``None`` when data is currently
unavailable.
"""

from .cache import CacheEntry, TTLCache, profile_key
from .config import ScraperSettings
from .exceptions import ConfigurationError, ExtractionFailure, NetworkFailure, ProfileAcquisitionError
from .models import ProfileFields, ScrapedProfile
from .platforms import InstagramScraper
from .utils import RateLimiter

__all__ = [
    "CacheEntry",
    "ConfigurationError",
    "ExtractionFailure",
    "InstagramScraper",
    "NetworkFailure",
    "ProfileAcquisitionError",
    "ProfileFields",
    "RateLimiter",
    "ScrapedProfile",
    "ScraperSettings",
    "TTLCache",
    "profile_key",
]
