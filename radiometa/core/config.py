import logging
import sys
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# Look for .env in project root (parent of radiometa/)
_env_file = Path(__file__).resolve().parent.parent.parent / ".env"

# Several upstream status endpoints reject default/bot user agents
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=_env_file, extra="ignore")

    # Environment
    env: Literal["development", "production"] = "development"

    # Server
    port: int = 8000  # PaaS platforms set PORT env var

    # Upstream radio-server status endpoints
    upstream_timeout_seconds: float = 5.0
    upstream_user_agent: str = DEFAULT_USER_AGENT

    # Extra stations (JSON file), merged over the built-in table
    stations_file: str = ""

    # iTunes Search API (album artwork enrichment)
    artwork_lookup_enabled: bool = True
    artwork_search_url: str = "https://itunes.apple.com/search"
    artwork_timeout_seconds: float = 5.0

    # Trusted proxy IPs for X-Forwarded-For (comma-separated)
    trusted_proxies: str = "127.0.0.1,::1"

    # Rate limiting (disabled by default in dev, enable in prod)
    rate_limit_enabled: bool | None = None  # None = auto (disabled in dev, enabled in prod)
    stream_metadata_rate_limit_per_minute: int = 120

    @property
    def is_rate_limit_enabled(self) -> bool:
        """Check if rate limiting is enabled (auto-detect based on env if not set)."""
        if self.rate_limit_enabled is not None:
            return self.rate_limit_enabled
        return self.is_production

    @property
    def is_production(self) -> bool:
        return self.env == "production"


def validate_settings(settings: Settings) -> None:
    """Validate settings and log helpful messages; exit on fatal errors."""
    errors = []

    if settings.upstream_timeout_seconds <= 0:
        errors.append("UPSTREAM_TIMEOUT_SECONDS must be greater than zero")
    if settings.artwork_timeout_seconds <= 0:
        errors.append("ARTWORK_TIMEOUT_SECONDS must be greater than zero")

    if settings.stations_file and not Path(settings.stations_file).is_file():
        errors.append(f"STATIONS_FILE not found: {settings.stations_file}")

    if not settings.artwork_lookup_enabled:
        logging.warning("ARTWORK_LOOKUP_ENABLED is false - now-playing records will lack artwork")

    if errors:
        for error in errors:
            logging.error("Configuration error: %s", error)
        sys.exit(1)


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    validate_settings(settings)
    return settings
