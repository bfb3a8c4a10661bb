"""Data models for the signed fetch layer."""

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from fantasy_client.errors import AccessDeniedError
from fantasy_client.fetch.constants import (
    ACCESS_DENIED_MARKER,
    RETRYABLE_CREDENTIAL_MARKER,
)


class AccessToken(BaseModel):
    """Pre-obtained OAuth access token used to sign requests.

    Issued externally and immutable for the lifetime of the process.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    token: Annotated[str, Field(description="OAuth token identifier")]
    secret: Annotated[str, Field(repr=False, description="OAuth token secret")]


class FetchErrorClass(str, Enum):
    """Classification of signing/transport failures.

    - RETRYABLE_CREDENTIAL: Credential transiently rejected, retried
    - ACCESS_DENIED: User lacks permission for the resource, never retried
    - OTHER: Any other failure, surfaced after one attempt
    """

    RETRYABLE_CREDENTIAL = "RETRYABLE_CREDENTIAL"
    ACCESS_DENIED = "ACCESS_DENIED"
    OTHER = "OTHER"

    @property
    def is_retryable(self) -> bool:
        """Whether a failure of this class may be attempted again."""
        return self is FetchErrorClass.RETRYABLE_CREDENTIAL


def classify_error(error: BaseException) -> FetchErrorClass:
    """Tag a failure raised by the signing capability.

    Args:
        error: Exception raised while signing or sending a request.

    Returns:
        The error class the retry loop acts on.
    """
    if isinstance(error, AccessDeniedError):
        return FetchErrorClass.ACCESS_DENIED

    message = str(error)
    if RETRYABLE_CREDENTIAL_MARKER in message:
        return FetchErrorClass.RETRYABLE_CREDENTIAL
    if ACCESS_DENIED_MARKER in message:
        return FetchErrorClass.ACCESS_DENIED
    return FetchErrorClass.OTHER
