"""Featured creator profiles promoted on the platform home page.

The list of featured creators is maintained in a JSON file::

    {
      "featuredProfiles": [
        {"identifier": "miishi.khanna.official", "displayName": "Miishi Khanna",
         "isActive": true, "displayOrder": 1}
      ]
    }

Avatars and follower counts are not stored in the file; they are filled in
from the scraper when the list is served.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError

from .platforms import InstagramScraper

logger = logging.getLogger(__name__)


class FeaturedProfile(BaseModel):
    identifier: str
    display_name: str = Field(alias="displayName")
    is_active: bool = Field(default=True, alias="isActive")
    display_order: int = Field(default=0, alias="displayOrder")
    avatar_url: Optional[str] = None
    follower_count: Optional[int] = Field(default=None, ge=0)
    last_updated: Optional[datetime] = None

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }

    @property
    def is_scraped(self) -> bool:
        return self.avatar_url is not None and self.follower_count is not None


def load_featured_profiles(path: str) -> List[FeaturedProfile]:
    """Return the active featured profiles from ``path`` in display order.

    A missing or malformed file is logged and yields an empty list so the
    home page can still render.
    """
    try:
        with open(path, "r", encoding="utf-8") as fh:
            config = json.load(fh)
    except FileNotFoundError:
        logger.warning("Featured profiles config not found at %s", path)
        return []
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Error reading featured profiles config %s: %s", path, exc)
        return []

    entries = config.get("featuredProfiles", []) if isinstance(config, dict) else None
    if not isinstance(entries, list):
        logger.error("Featured profiles config %s has no featuredProfiles list", path)
        return []

    profiles: List[FeaturedProfile] = []
    for entry in entries:
        try:
            profiles.append(FeaturedProfile.model_validate(entry))
        except ValidationError as exc:
            logger.error("Skipping invalid featured profile entry %r: %s", entry, exc)
    active = [p for p in profiles if p.is_active]
    return sorted(active, key=lambda p: p.display_order)


def refresh_featured_profiles(
    scraper: InstagramScraper, profiles: List[FeaturedProfile]
) -> List[FeaturedProfile]:
    """Return copies of ``profiles`` with scraped avatar and follower data.

    Profiles the scraper cannot currently provide are returned unchanged,
    so callers can show a placeholder for them.
    """
    refreshed: List[FeaturedProfile] = []
    for profile in profiles:
        scraped = scraper.get_profile(profile.identifier)
        if scraped is None:
            refreshed.append(profile)
            continue
        refreshed.append(
            profile.model_copy(
                update={
                    "avatar_url": scraped.avatar_url,
                    "follower_count": scraped.follower_count,
                    "last_updated": scraped.fetched_at,
                }
            )
        )
    return refreshed
