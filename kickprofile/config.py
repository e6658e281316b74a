"""Configuration management using Pydantic Settings."""

from enum import Enum

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class LogFormat(str, Enum):
    """Log output format."""
    JSON = "json"
    CONSOLE = "console"


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120 Safari/537.36"
)

DEFAULT_CHANNELS = [
    "hyghman",
    "w2ge",
    "roxanne_roxx",
    "ket_14",
    "godeanu",
    "poseidonn99",
    "anduu14",
    "stezyvr",
    "tedereu",
    "cartusu",
    "nicusor7gaming",
    "markoglasslive",
    "potrix",
    "zasami",
    "therealred",
    "bvcovia",
    "kopee",
    "kasimksm23",
]


class ResolverConfig(BaseSettings):
    """Configuration for the kickprofile resolver and web server."""

    # Server
    host: str = "0.0.0.0"
    port: int = Field(
        default=3000,
        validation_alias=AliasChoices("port", "kickprofile_port"),
    )
    public_dir: str = "public"

    # Outbound HTTP
    request_timeout_ms: int = 12000
    max_redirects: int = 3
    user_agent: str = DEFAULT_USER_AGENT

    # Primary source (Kick), most specific endpoint first
    kick_endpoints: list[str] = [
        "https://kick.com/api/v2/channels/{slug}",
        "https://kick.com/api/v1/channels/{slug}",
    ]
    platform_domains: list[str] = ["kick.com"]

    # Secondary source (Piloterr), disabled without a key
    piloterr_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("piloterr_api_key", "kickprofile_piloterr_api_key"),
    )
    piloterr_endpoint: str = "https://piloterr.com/api/v2/kick/user/info?query={slug}"

    # Cache settings
    cache_ttl_seconds: int = 60
    degraded_cache_ttl_seconds: int | None = None

    # Channels exposed by /api/players
    channels: list[str] = DEFAULT_CHANNELS

    # Logging
    log_level: str = "INFO"
    log_format: LogFormat = LogFormat.CONSOLE

    model_config = {
        "env_prefix": "KICKPROFILE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @property
    def has_piloterr_key(self) -> bool:
        """True when the secondary source is configured."""
        return bool(self.piloterr_api_key)
