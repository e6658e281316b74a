"""Profile data models."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Profile(BaseModel):
    """Normalized channel profile as produced by a single source."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    slug: str
    display_name: str = Field(min_length=1)
    followers: int | None = None
    profile_pic: str | None = None
    source: str
    error: str | None = None

    @classmethod
    def degraded(cls, slug: str, source: str, error: str) -> "Profile":
        """Placeholder profile for a source that could not be reached."""
        return cls(
            slug=slug,
            display_name=slug,
            followers=None,
            profile_pic=None,
            source=source,
            error=error,
        )


class MergedProfile(BaseModel):
    """Final record combining primary and secondary source data."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    slug: str
    display_name: str = Field(min_length=1)
    followers: int | None = None
    profile_pic: str | None = None
    sources: dict[str, str | None]
    followers_available: bool
