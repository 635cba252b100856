import os
import sys
import threading
from typing import Any, Dict, List, Optional

import pytest
import requests

# Ensure project root is on path for module imports
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from profile_acquisition import InstagramScraper, RateLimiter, ScraperSettings, TTLCache  # noqa: E402


META_HTML = """
<html><head>
  <title>Alice (@alice) - Instagram photos and videos</title>
  <meta property="og:image" content="https://cdn.example.com/alice.jpg">
  <meta property="og:description"
        content="12,345 Followers, 210 Following, 87 Posts - See Instagram photos and videos from Alice (@alice)">
</head><body></body></html>
"""

MARKUP_HTML = """
<html><head><title>Instagram</title></head><body>
  <header>
    <img alt="alice's profile picture" src="https://cdn.example.com/alice-small.jpg">
    <ul>
      <li><span>87</span> posts</li>
      <li><span>2,048</span> followers</li>
      <li><span>210</span> following</li>
    </ul>
  </header>
</body></html>
"""

EMPTY_HTML = """
<html><head><title>Instagram</title></head>
<body><p>Sorry, this page isn't available.</p></body></html>
"""


class FakeClock:
    """Monotonic clock that only moves when told to (or when slept on)."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: List[float] = []
        self._lock = threading.Lock()

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        with self._lock:
            self.now += seconds

    def sleep(self, seconds: float) -> None:
        with self._lock:
            self.sleeps.append(seconds)
            self.now += seconds


def make_response(html: str, status_code: int = 200, url: str = "https://www.instagram.com/alice/") -> requests.Response:
    r = requests.Response()
    r.status_code = status_code
    r._content = html.encode("utf-8")
    r.headers["Content-Type"] = "text/html; charset=utf-8"
    r.encoding = "utf-8"
    r.reason = "OK" if status_code == 200 else "Error"
    r.url = url
    return r


class FakeSession:
    """Stand-in for ``requests.Session`` that serves canned pages.

    ``pages`` maps a URL to either HTML or an exception instance to raise.
    Each call is recorded along with the clock reading at the time it was
    made.
    """

    def __init__(self, pages: Optional[Dict[str, Any]] = None, clock: Optional[FakeClock] = None, status_code: int = 200) -> None:
        self.pages = pages or {}
        self.clock = clock
        self.status_code = status_code
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def get(self, url: str, **kwargs: Any) -> requests.Response:
        self.calls.append({"url": url, "at": self.clock() if self.clock else None, **kwargs})
        page = self.pages.get(url, EMPTY_HTML)
        if isinstance(page, Exception):
            raise page
        return make_response(page, status_code=self.status_code, url=url)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> ScraperSettings:
    return ScraperSettings(min_delay=5.0, cache_ttl=7200.0)


@pytest.fixture
def make_scraper(clock, settings):
    """Factory building a scraper wired to fake time and a fake transport."""

    def factory(pages: Optional[Dict[str, Any]] = None, status_code: int = 200) -> InstagramScraper:
        session = FakeSession(pages, clock=clock, status_code=status_code)
        return InstagramScraper(
            settings,
            cache=TTLCache(default_ttl=settings.cache_ttl, clock=clock),
            rate_limiter=RateLimiter(settings.min_delay, clock=clock, sleep=clock.sleep),
            session=session,  # type: ignore[arg-type]
        )

    return factory
