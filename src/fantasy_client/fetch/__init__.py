"""Signed HTTP fetch layer.

This module provides OAuth-signed GET requests with:
- Bounded retry on transient credential rejection
- Access-denied classification into a distinguished error
- Redaction of credentials in log output
"""

from fantasy_client.fetch.config import FetchConfig
from fantasy_client.fetch.constants import (
    ACCESS_DENIED_MARKER,
    DEFAULT_MAX_ATTEMPTS,
    RETRYABLE_CREDENTIAL_MARKER,
    YAHOO_BASE_URL,
)
from fantasy_client.fetch.consumer import Consumer, OAuthConsumer, get_consumer
from fantasy_client.fetch.models import AccessToken, FetchErrorClass, classify_error
from fantasy_client.fetch.redact import redact_headers, redact_oauth_params
from fantasy_client.fetch.transport import HttpTransport, SignedTransport


__all__ = [
    # Transport
    "HttpTransport",
    "SignedTransport",
    # Consumer
    "Consumer",
    "OAuthConsumer",
    "get_consumer",
    # Config
    "FetchConfig",
    # Models
    "AccessToken",
    "FetchErrorClass",
    "classify_error",
    # Constants
    "ACCESS_DENIED_MARKER",
    "DEFAULT_MAX_ATTEMPTS",
    "RETRYABLE_CREDENTIAL_MARKER",
    "YAHOO_BASE_URL",
    # Redaction
    "redact_headers",
    "redact_oauth_params",
]
