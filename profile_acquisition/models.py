"""Value types produced by the acquisition pipeline."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class ProfileFields(BaseModel):
    """A complete set of fields pulled out of a profile page.

    ``tier`` records which extraction strategy produced the values.
    """

    avatar_url: str = Field(min_length=1)
    follower_count: int = Field(ge=0)
    tier: str

    model_config = {
        "frozen": True
    }


class ScrapedProfile(BaseModel):
    """Public profile data for a single identifier.

    Instances are immutable; refreshing a profile produces a new value.
    """

    identifier: str
    avatar_url: str
    follower_count: int = Field(ge=0)
    fetched_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = {
        "frozen": True
    }

    @classmethod
    def from_fields(cls, identifier: str, fields: ProfileFields) -> "ScrapedProfile":
        return cls(
            identifier=identifier,
            avatar_url=fields.avatar_url,
            follower_count=fields.follower_count,
            fetched_at=datetime.now(timezone.utc),
        )
