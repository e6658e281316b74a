"""Outcome wrappers for source calls and batch items."""

from dataclasses import dataclass

from pydantic import BaseModel

from kickprofile.models.profile import MergedProfile, Profile


@dataclass
class SourceOutcome:
    """Result of calling one source adapter."""

    profile: Profile | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.profile is not None


class BatchItem(BaseModel):
    """Per-slug entry of a batch resolution."""

    ok: bool
    slug: str
    data: MergedProfile | None = None
    error: str | None = None
