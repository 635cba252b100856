"""Pydantic schemas for the creatorhub API.

These models define the response bodies returned by the profile endpoints.
They are separate from the pipeline's value types to decouple the external
API surface from the internal representation.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ProfileRead(BaseModel):
    identifier: str
    avatar_url: str
    follower_count: int
    fetched_at: datetime

    model_config = {
        "from_attributes": True
    }


class FeaturedProfileRead(BaseModel):
    identifier: str
    display_name: str
    display_order: int
    avatar_url: Optional[str] = None
    follower_count: Optional[int] = None
    last_updated: Optional[datetime] = None
    # False when the scraper could not provide data and the UI should show a placeholder.
    available: bool

    model_config = {
        "from_attributes": True
    }


class CacheStats(BaseModel):
    size: int
    hits: int
    misses: int
    evictions: int
