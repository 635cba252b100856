"""Helpers for polite outbound HTTP: browser headers, pacing and requests.

The pipeline talks to a third-party site that blocks obvious bots, so every
request carries a realistic browser header set and is paced by a
:class:`RateLimiter` shared by every caller of the same scraper.
"""

from __future__ import annotations

import logging
import random
import threading
import time
from typing import Callable, Dict, Iterable, Optional

import requests

logger = logging.getLogger(__name__)

# Common desktop user agents.  Extend this list as needed to mimic diverse
# clients.
USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
    " (KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15"
    " (KHTML, like Gecko) Version/17.2 Safari/605.1.15",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:122.0) Gecko/20100101 Firefox/122.0",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36"
    " (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
]

BROWSER_HEADERS: Dict[str, str] = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,image/apng,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Accept-Encoding": "gzip, deflate",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Sec-Fetch-User": "?1",
    "Upgrade-Insecure-Requests": "1",
}


def get_random_user_agent() -> str:
    """Return a random user agent string from the list of known agents."""
    return random.choice(USER_AGENTS)


def build_headers(user_agent: Optional[str] = None) -> Dict[str, str]:
    """Return the browser-like header set sent with every profile request."""
    headers = {"User-Agent": user_agent or get_random_user_agent()}
    headers.update(BROWSER_HEADERS)
    return headers


class RateLimiter:
    """Enforce a minimum spacing between outbound requests.

    One limiter is a single gate for every caller that shares it.  The
    elapsed-time check, the pacing sleep and the timestamp update all happen
    under one lock, so concurrent callers pass through strictly one at a time
    and each sees the timestamp left by the previous one.
    """

    def __init__(
        self,
        min_delay: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.min_delay = min_delay
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._last_request_at: Optional[float] = None

    @property
    def last_request_at(self) -> Optional[float]:
        return self._last_request_at

    def wait(self) -> float:
        """Block until the next request may be sent.

        Returns the number of seconds spent waiting.
        """
        with self._lock:
            waited = 0.0
            if self._last_request_at is not None:
                elapsed = self._clock() - self._last_request_at
                if elapsed < self.min_delay:
                    waited = self.min_delay - elapsed
                    logger.debug("Rate limiting: waiting %.2fs", waited)
                    self._sleep(waited)
            self._last_request_at = self._clock()
            return waited

    def reset(self) -> None:
        with self._lock:
            self._last_request_at = None


def create_session(max_redirects: int = 5) -> requests.Session:
    """Return a session that follows at most ``max_redirects`` redirects."""
    session = requests.Session()
    session.max_redirects = max_redirects
    return session


def make_request(
    url: str,
    *,
    session: Optional[requests.Session] = None,
    headers: Optional[Dict[str, str]] = None,
    proxies: Optional[Iterable[str]] = None,
    timeout: float = 10,
) -> requests.Response:
    """Perform an HTTP GET request with browser headers and optional proxies.

    Parameters
    ----------
    url: str
        The target URL to fetch.
    session: Optional[requests.Session]
        Session to send the request through.  Its ``max_redirects`` bounds
        redirect following.  A short-lived session is used when omitted.
    headers: Optional[Dict[str, str]]
        Request headers; defaults to :func:`build_headers`.
    proxies: Optional[Iterable[str]]
        An optional iterable of proxy server URLs.  If provided, a
        proxy will be chosen at random for the request.
    timeout: float
        Timeout in seconds for connecting and for each read.

    Returns
    -------
    requests.Response
        The HTTP response object.  The status code is not checked here.

    Raises
    ------
    requests.RequestException
        On connection errors, timeouts and redirect loops.
    """
    if headers is None:
        headers = build_headers()
    proxy_dict = None
    if proxies:
        proxy = random.choice(list(proxies))
        proxy_dict = {"http": proxy, "https": proxy}
    if session is None:
        with create_session() as short_lived:
            return short_lived.get(url, headers=headers, proxies=proxy_dict, timeout=timeout)
    return session.get(url, headers=headers, proxies=proxy_dict, timeout=timeout)
