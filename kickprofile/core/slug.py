"""Channel slug normalization."""

import re
from collections.abc import Iterable

DEFAULT_DOMAINS = ("kick.com",)

_SCHEME_RE = re.compile(r"^(?:https?://)?(?:www\.)?", re.IGNORECASE)
_SUFFIX_RE = re.compile(r"[?#/]")
_INVALID_RE = re.compile(r"[^a-z0-9_]")


def normalize_slug(value: object, domains: Iterable[str] = DEFAULT_DOMAINS) -> str:
    """
    Canonicalize a URL, handle or raw text into a channel slug.

    Examples:
        "https://kick.com/Foo_Bar?ref=x" -> "foo_bar"
        "  Hyghman " -> "hyghman"
        "bad slug!" -> "badslug"

    Returns an empty string when nothing usable remains; callers treat
    that as a missing slug.
    """
    if value is None:
        return ""

    s = str(value).strip()
    if not s:
        return ""

    s = _SCHEME_RE.sub("", s, count=1)
    for domain in domains:
        prefix = f"{domain}/"
        if s.lower().startswith(prefix.lower()):
            s = s[len(prefix):]
            break

    s = _SUFFIX_RE.split(s, maxsplit=1)[0]
    return _INVALID_RE.sub("", s.lower())
