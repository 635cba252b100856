"""Field extraction from public profile pages.

Profile pages are unstructured and change without notice, so extraction is a
chain of independent strategies ordered by reliability.  Each strategy takes
a parsed document and the target identifier and returns either a complete
:class:`~profile_acquisition.models.ProfileFields` or ``None``.  The first
strategy to return a complete result wins; partial results are never merged
across strategies.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Optional, Sequence

from bs4 import BeautifulSoup
from bs4.element import Tag

from .models import ProfileFields

logger = logging.getLogger(__name__)

Strategy = Callable[[BeautifulSoup, str], Optional[ProfileFields]]

# "12,345 Followers" -> 12345.  The count must not be the tail of a decimal
# ("1.4 followers") or of a larger token.
FOLLOWERS_RE = re.compile(r"(?<![\d.,])(\d{1,3}(?:,\d{3})+|\d+)\s*followers\b", re.IGNORECASE)
NUMBER_RE = re.compile(r"\d{1,3}(?:,\d{3})+|\d+")
# Label-first layouts: "Followers: 1,234".
LABELLED_FOLLOWERS_RE = re.compile(r"\bfollowers\W{0,3}(\d{1,3}(?:,\d{3})+|\d+)(?![\d.,]\d)", re.IGNORECASE)


def parse_document(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def parse_follower_count(text: Optional[str]) -> Optional[int]:
    """Return the first integer immediately preceding the word "followers".

    Thousands separators are accepted.  Returns ``None`` when no such number
    is present.
    """
    if not text:
        return None
    match = FOLLOWERS_RE.search(text)
    if not match:
        return None
    return int(match.group(1).replace(",", ""))


def _meta_content(soup: BeautifulSoup, key: str) -> Optional[str]:
    tag = soup.find("meta", attrs={"property": key}) or soup.find("meta", attrs={"name": key})
    if isinstance(tag, Tag):
        content = tag.get("content")
        if isinstance(content, str) and content.strip():
            return content.strip()
    return None


def extract_from_meta(soup: BeautifulSoup, identifier: str) -> Optional[ProfileFields]:
    """Tier 1: Open Graph meta tags.

    The avatar comes from ``og:image`` and the follower count from the
    ``og:description`` summary (or the plain ``description`` meta tag), e.g.
    ``"1,234 Followers, 56 Following, 78 Posts - ..."``.
    """
    avatar_url = _meta_content(soup, "og:image")
    description = _meta_content(soup, "og:description") or _meta_content(soup, "description")
    if not avatar_url or not description:
        logger.debug("Meta tags missing for %s", identifier)
        return None

    follower_count = parse_follower_count(description)
    if not follower_count:
        logger.debug("Could not extract follower count from meta description for %s", identifier)
        return None

    return ProfileFields(avatar_url=avatar_url, follower_count=follower_count, tier="meta")


def _find_avatar(soup: BeautifulSoup, identifier: str) -> Optional[str]:
    images = [img for img in soup.find_all("img") if isinstance(img, Tag) and img.get("src")]
    for img in images:
        if "profile picture" in str(img.get("alt", "")).lower():
            return str(img["src"])
    needle = identifier.lower()
    if needle:
        for img in images:
            if needle in str(img.get("alt", "")).lower():
                return str(img["src"])
    return None


def _find_follower_count(soup: BeautifulSoup) -> Optional[int]:
    # Dedicated followers link first; its text may hold only the number.
    for link in soup.select('a[href*="/followers/"]'):
        text = link.get_text(" ", strip=True)
        count = parse_follower_count(text)
        if count is None:
            number = NUMBER_RE.search(text)
            count = int(number.group(0).replace(",", "")) if number else None
        if count:
            return count

    # Otherwise any list/text element whose text puts a number next to "followers".
    for node in soup.find_all(string=re.compile("followers", re.IGNORECASE)):
        element = node.parent
        for _ in range(2):
            if element is None:
                break
            text = element.get_text(" ", strip=True)
            count = parse_follower_count(text)
            if count is None:
                labelled = LABELLED_FOLLOWERS_RE.search(text)
                count = int(labelled.group(1).replace(",", "")) if labelled else None
            if count:
                return count
            element = element.parent
    return None


def extract_from_markup(soup: BeautifulSoup, identifier: str) -> Optional[ProfileFields]:
    """Tier 2: structural search of the page body.

    Less reliable than the meta tags: looks for an ``<img>`` whose alt text
    mentions "profile picture" or the identifier, and for a number adjacent
    to the word "followers" in the surrounding markup.
    """
    avatar_url = _find_avatar(soup, identifier)
    follower_count = _find_follower_count(soup)
    if not avatar_url or not follower_count:
        logger.debug("Could not extract profile data from markup for %s", identifier)
        return None
    return ProfileFields(avatar_url=avatar_url, follower_count=follower_count, tier="markup")


STRATEGIES: Sequence[Strategy] = (extract_from_meta, extract_from_markup)


def extract_profile_fields(
    soup: BeautifulSoup,
    identifier: str,
    strategies: Optional[Sequence[Strategy]] = None,
) -> Optional[ProfileFields]:
    """Run the strategy chain in order and return the first complete result."""
    for strategy in STRATEGIES if strategies is None else strategies:
        fields = strategy(soup, identifier)
        if fields is not None:
            logger.debug("Extracted %s using %s strategy", identifier, fields.tier)
            return fields
    return None
