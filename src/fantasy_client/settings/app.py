"""Application settings powered by Pydantic BaseSettings."""

from datetime import timedelta

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fantasy_client.fetch.constants import (
    DEFAULT_CACHE_CAPACITY,
    DEFAULT_CACHE_TTL_SECONDS,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_TIMEOUT_SECONDS,
    YAHOO_BASE_URL,
)
from fantasy_client.fetch.models import AccessToken


class AppSettings(BaseSettings):
    """Centralized environment configuration.

    Credentials are obtained out of band (the OAuth handshake is not part of
    this package) and supplied through ``FANTASY_*`` variables or ``.env``.
    """

    model_config = SettingsConfigDict(
        env_prefix="FANTASY_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    consumer_key: str | None = Field(default=None)
    consumer_secret: str | None = Field(default=None)
    access_token: str | None = Field(default=None)
    access_token_secret: str | None = Field(default=None)

    base_url: str = Field(default=YAHOO_BASE_URL, min_length=8)
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0, le=300)
    max_attempts: int = Field(default=DEFAULT_MAX_ATTEMPTS, ge=1, le=20)
    cache_capacity: int = Field(
        default=DEFAULT_CACHE_CAPACITY,
        ge=0,
        description="LRU entry capacity; 0 disables caching.",
    )
    cache_ttl_seconds: int = Field(default=DEFAULT_CACHE_TTL_SECONDS, ge=1)

    @property
    def cache_ttl(self) -> timedelta:
        """Cache freshness window as a timedelta."""
        return timedelta(seconds=self.cache_ttl_seconds)

    def require_token(self) -> AccessToken:
        """Build the access token, failing if any credential is missing.

        Raises:
            ValueError: If a consumer or token credential is unset.
        """
        missing = [
            name
            for name in (
                "consumer_key",
                "consumer_secret",
                "access_token",
                "access_token_secret",
            )
            if not getattr(self, name)
        ]
        if missing:
            names = ", ".join(f"FANTASY_{name.upper()}" for name in missing)
            msg = f"Missing credentials: {names}"
            raise ValueError(msg)
        return AccessToken(
            token=self.access_token or "",
            secret=self.access_token_secret or "",
        )


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
