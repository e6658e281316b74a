"""Custom exception hierarchy for kickprofile."""


class KickProfileError(Exception):
    """Base exception for all kickprofile errors."""


class FetchError(KickProfileError):
    """Failed to fetch a JSON document."""


class NetworkError(FetchError):
    """Connection-level failure (DNS, refused, reset)."""


class FetchTimeoutError(FetchError):
    """Request exceeded its timeout."""


class HttpStatusError(FetchError):
    """Final response had a non-2xx status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class ParseError(FetchError):
    """Response body was not valid JSON."""


class PrimarySourceExhausted(KickProfileError):
    """Every primary endpoint variant failed."""

    def __init__(self, message: str, errors: list[Exception] | None = None):
        super().__init__(message)
        self.errors = errors or []


class InvalidSlugError(KickProfileError, ValueError):
    """Input normalized to an empty slug."""


class ConfigError(KickProfileError):
    """Invalid configuration."""
