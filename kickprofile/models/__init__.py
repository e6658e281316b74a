"""Pydantic models for kickprofile."""

from kickprofile.models.profile import Profile, MergedProfile
from kickprofile.models.result import SourceOutcome, BatchItem

__all__ = [
    "Profile",
    "MergedProfile",
    "SourceOutcome",
    "BatchItem",
]
