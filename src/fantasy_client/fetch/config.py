"""Configuration models for the signed fetch layer."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fantasy_client.fetch.constants import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
    SIGNABLE_URL_PREFIXES,
    YAHOO_BASE_URL,
)


class FetchConfig(BaseModel):
    """Configuration for signed requests against the fantasy API.

    ``max_attempts`` bounds the total number of attempts for one request,
    the first included. There is no delay between attempts.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_url: Annotated[str, Field(min_length=8)] = YAHOO_BASE_URL
    user_agent: Annotated[str, Field(min_length=1, max_length=500)] = (
        DEFAULT_USER_AGENT
    )
    timeout_seconds: Annotated[float, Field(gt=0, le=300.0)] = DEFAULT_TIMEOUT_SECONDS
    max_attempts: Annotated[int, Field(ge=1, le=20)] = DEFAULT_MAX_ATTEMPTS

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require a URL requests can be signed for and strip trailing slashes.

        Plain http is only accepted for a loopback host with an explicit port.
        """
        if not v.lower().startswith(SIGNABLE_URL_PREFIXES):
            msg = f"base_url must be https (or http to a loopback port): {v}"
            raise ValueError(msg)
        return v.rstrip("/")
