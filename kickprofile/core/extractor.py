"""Map loosely structured source payloads onto the Profile shape."""

from collections.abc import Mapping, Sequence
from typing import Any

from kickprofile.models.profile import Profile

Path = tuple[str, ...]

# Where the user object may live, tried in order; first mapping wins.
USER_LOCATIONS: tuple[Path, ...] = (
    ("user",),
    ("channel", "user"),
    ("data", "user"),
    ("data",),
)

# Candidate paths are rooted at "payload" (the document) or "user"
# (the object found via USER_LOCATIONS).
DISPLAY_NAME_PATHS: tuple[Path, ...] = (
    ("payload", "display_name"),
    ("payload", "displayName"),
    ("payload", "username"),
    ("user", "display_name"),
    ("user", "displayName"),
    ("user", "username"),
)

FOLLOWERS_PATHS: tuple[Path, ...] = (
    ("payload", "followers_count"),
    ("payload", "followersCount"),
    ("payload", "followers"),
    ("user", "followers_count"),
    ("user", "followersCount"),
    ("user", "followers"),
)

PROFILE_PIC_PATHS: tuple[Path, ...] = (
    ("payload", "profile_image", "url"),
    ("payload", "profile_pic"),
    ("payload", "profilePic"),
    ("user", "profile_image", "url"),
    ("user", "profile_picture", "url"),
    ("user", "profile_pic"),
    ("user", "profilePic"),
    ("user", "profile_image"),
)


def is_present(value: Any) -> bool:
    """None and "" are missing; 0 and False are values."""
    return value is not None and not (isinstance(value, str) and value == "")


def get_path(tree: Any, path: Sequence[str]) -> Any:
    """Walk nested mappings, returning None as soon as a step is missing."""
    node = tree
    for key in path:
        if not isinstance(node, Mapping):
            return None
        node = node.get(key)
    return node


def first_present(tree: Any, paths: Sequence[Sequence[str]]) -> Any:
    """
    Return the first present value among paths, in order.

    Args:
        tree: Untyped JSON-like value
        paths: Ordered key paths to try

    Returns:
        First value that is neither None nor "", else None
    """
    for path in paths:
        value = get_path(tree, path)
        if is_present(value):
            return value
    return None


def pick_first(*values: Any) -> Any:
    """first_present over already-resolved values."""
    for value in values:
        if is_present(value):
            return value
    return None


def find_user(payload: Any) -> Mapping | None:
    """Locate the nested user object, if any."""
    for path in USER_LOCATIONS:
        candidate = get_path(payload, path)
        if isinstance(candidate, Mapping):
            return candidate
    return None


def _as_count(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _as_name(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value:
        return str(value)
    return None


def _as_url(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def extract_profile(payload: Any, slug: str, source: str) -> Profile:
    """
    Build a Profile from an arbitrary source payload.

    Args:
        payload: Decoded JSON document from a source
        slug: Normalized slug, used as display name fallback
        source: Tag recorded on the resulting profile

    Returns:
        Profile with display name, follower count and avatar
    """
    scope = {"payload": payload, "user": find_user(payload)}

    display_name = _as_name(first_present(scope, DISPLAY_NAME_PATHS))
    followers = _as_count(first_present(scope, FOLLOWERS_PATHS))
    profile_pic = _as_url(first_present(scope, PROFILE_PIC_PATHS))

    return Profile(
        slug=slug,
        display_name=display_name or slug,
        followers=followers,
        profile_pic=profile_pic,
        source=source,
    )
