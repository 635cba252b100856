"""Runtime settings for the acquisition pipeline.

Settings are read from environment variables with sensible defaults, the same
way the rest of the platform reads its connection strings.  Durations are
expressed in seconds.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, TypeVar

from .exceptions import ConfigurationError

T = TypeVar("T", int, float)

DEFAULT_BASE_URL = "https://www.instagram.com"
DEFAULT_MIN_DELAY = 5.0
DEFAULT_CACHE_TTL = 2 * 60 * 60.0
DEFAULT_TIMEOUT = 10.0
DEFAULT_MAX_REDIRECTS = 5
DEFAULT_FEATURED_PROFILES_PATH = os.path.join("docs", "featured-profiles.json")


@dataclass(frozen=True)
class ScraperSettings:
    """Tunable parameters for :class:`~profile_acquisition.platforms.InstagramScraper`."""

    base_url: str = DEFAULT_BASE_URL
    min_delay: float = DEFAULT_MIN_DELAY
    cache_ttl: float = DEFAULT_CACHE_TTL
    timeout: float = DEFAULT_TIMEOUT
    max_redirects: int = DEFAULT_MAX_REDIRECTS
    log_level: str = "INFO"
    featured_profiles_path: str = DEFAULT_FEATURED_PROFILES_PATH

    def __post_init__(self) -> None:
        for name in ("min_delay", "cache_ttl", "timeout"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ConfigurationError(name, value, "must be a finite number")
            if value < 0:
                raise ConfigurationError(name, value, "must not be negative")
        if self.max_redirects < 0:
            raise ConfigurationError("max_redirects", self.max_redirects, "must not be negative")
        if not self.base_url:
            raise ConfigurationError("base_url", self.base_url, "must not be empty")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ScraperSettings":
        """Build settings from ``SCRAPER_*`` environment variables.

        Unset variables fall back to the defaults above.  A value that cannot
        be parsed raises :class:`ConfigurationError` rather than silently
        reverting to a default.
        """
        env = os.environ if environ is None else environ
        return cls(
            base_url=env.get("SCRAPER_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            min_delay=_read(env, "SCRAPER_MIN_DELAY", float, DEFAULT_MIN_DELAY),
            cache_ttl=_read(env, "SCRAPER_CACHE_TTL", float, DEFAULT_CACHE_TTL),
            timeout=_read(env, "SCRAPER_TIMEOUT", float, DEFAULT_TIMEOUT),
            max_redirects=_read(env, "SCRAPER_MAX_REDIRECTS", int, DEFAULT_MAX_REDIRECTS),
            log_level=env.get("SCRAPER_LOG_LEVEL", "INFO").upper(),
            featured_profiles_path=env.get("FEATURED_PROFILES_PATH", DEFAULT_FEATURED_PROFILES_PATH),
        )


def _read(env: Mapping[str, str], name: str, cast: Callable[[str], T], default: T) -> T:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        raise ConfigurationError(name, raw, f"expected {cast.__name__}") from None
