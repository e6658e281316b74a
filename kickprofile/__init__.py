"""kickprofile - Kick channel profile resolver."""

from kickprofile.models.profile import Profile, MergedProfile
from kickprofile.models.result import BatchItem, SourceOutcome
from kickprofile.config import ResolverConfig
from kickprofile.core.slug import normalize_slug
from kickprofile.core.resolver import Resolver, merge_profiles
from kickprofile.core.exporter import to_dict, to_json

__version__ = "0.1.0"

__all__ = [
    # Main interface
    "Resolver",
    "ResolverConfig",
    "normalize_slug",
    "merge_profiles",
    # Models
    "Profile",
    "MergedProfile",
    "BatchItem",
    "SourceOutcome",
    # Export utilities
    "to_dict",
    "to_json",
    "__version__",
]
