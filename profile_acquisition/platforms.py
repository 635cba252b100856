"""Profile scraper for Instagram public profile pages.

:class:`InstagramScraper` is the single entry point consumers use to obtain
profile data.  A lookup runs to completion in the calling thread:

1. return the cached profile if one is still fresh;
2. wait on the shared rate limiter;
3. fetch the profile page once (no retries);
4. run the extraction strategies over the page;
5. cache and return the new :class:`ScrapedProfile`.

Any failure along the way is logged and reported to the caller as ``None``.
Profiles that cannot currently be scraped are an expected outcome, not an
error the caller has to handle.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

import requests

from .cache import TTLCache
from .config import ScraperSettings
from .exceptions import ExtractionFailure, NetworkFailure
from .extractors import extract_profile_fields, parse_document
from .models import ScrapedProfile
from .utils import RateLimiter, build_headers, create_session, make_request

logger = logging.getLogger(__name__)


def normalise_identifier(identifier: str) -> str:
    """Return the canonical form of a profile handle (``"@Alice "`` -> ``"alice"``)."""
    return identifier.strip().lstrip("@").strip("/").lower()


class InstagramScraper:
    """Cached, rate-limited scraper for Instagram public profiles.

    The cache, rate limiter and HTTP session may be supplied by the caller so
    that several consumers share them; otherwise they are built from
    ``settings``.  Construct one instance at startup and pass it to whatever
    needs profile data.
    """

    def __init__(
        self,
        settings: Optional[ScraperSettings] = None,
        *,
        cache: Optional[TTLCache] = None,
        rate_limiter: Optional[RateLimiter] = None,
        session: Optional[requests.Session] = None,
        proxies: Optional[Iterable[str]] = None,
    ) -> None:
        self.settings = settings or ScraperSettings()
        self.cache = cache if cache is not None else TTLCache(default_ttl=self.settings.cache_ttl)
        self.rate_limiter = rate_limiter if rate_limiter is not None else RateLimiter(self.settings.min_delay)
        self._owns_session = session is None
        self.session = session if session is not None else create_session(self.settings.max_redirects)
        self.proxies = list(proxies) if proxies else None
        logger.info("Instagram scraper initialised for %s", self.settings.base_url)

    def __enter__(self) -> "InstagramScraper":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def profile_url(self, identifier: str) -> str:
        return f"{self.settings.base_url.rstrip('/')}/{identifier}/"

    def get_profile(self, identifier: str) -> Optional[ScrapedProfile]:
        """Return profile data for ``identifier`` or ``None`` if unavailable."""
        username = normalise_identifier(identifier)
        if not username:
            logger.warning("Ignoring empty profile identifier %r", identifier)
            return None

        cached = self.cache.get_profile(username)
        if cached is not None:
            logger.debug("Cache hit for profile: %s", username)
            return cached

        self.rate_limiter.wait()

        logger.info("Scraping profile: %s", username)
        try:
            profile = self.scrape_profile(username)
        except NetworkFailure as exc:
            logger.error(
                "Network error scraping %s: %s (status=%s, headers=%s)",
                username,
                exc.reason,
                exc.status_code,
                exc.headers or None,
            )
            return None
        except ExtractionFailure as exc:
            logger.warning("Failed to scrape profile %s: %s", username, exc.reason)
            return None

        self.cache.set_profile(username, profile, self.settings.cache_ttl)
        logger.debug("Cached profile: %s", username)
        return profile

    def get_profiles(self, identifiers: Iterable[str]) -> Dict[str, Optional[ScrapedProfile]]:
        """Look up several profiles one after another, preserving input order."""
        results: Dict[str, Optional[ScrapedProfile]] = {}
        for identifier in identifiers:
            results[identifier] = self.get_profile(identifier)
        return results

    def invalidate(self, identifier: str) -> None:
        """Drop any cached data for ``identifier`` so the next lookup refetches it."""
        self.cache.delete_profile(normalise_identifier(identifier))

    def fetch_profile_page(self, identifier: str) -> str:
        """Fetch the raw HTML of a profile page.

        Raises :class:`NetworkFailure` on transport errors and non-2xx
        responses.
        """
        url = self.profile_url(identifier)
        try:
            resp = make_request(
                url,
                session=self.session,
                headers=build_headers(),
                proxies=self.proxies,
                timeout=self.settings.timeout,
            )
        except requests.Timeout as exc:
            raise NetworkFailure(identifier, f"timed out after {self.settings.timeout}s", url=url) from exc
        except requests.TooManyRedirects as exc:
            raise NetworkFailure(
                identifier, f"exceeded {self.settings.max_redirects} redirects", url=url
            ) from exc
        except requests.RequestException as exc:
            raise NetworkFailure(identifier, str(exc) or type(exc).__name__, url=url) from exc

        if not 200 <= resp.status_code < 300:
            raise NetworkFailure(
                identifier,
                f"unexpected status {resp.status_code} {resp.reason or ''}".strip(),
                status_code=resp.status_code,
                url=url,
                headers=resp.headers,
            )
        return resp.text

    def scrape_profile(self, identifier: str) -> ScrapedProfile:
        """Fetch and parse a profile without touching the cache or rate limiter."""
        html = self.fetch_profile_page(identifier)
        fields = extract_profile_fields(parse_document(html), identifier)
        if fields is None:
            raise ExtractionFailure(identifier, "neither meta tags nor page markup yielded profile data")
        return ScrapedProfile.from_fields(identifier, fields)
