"""Client for the Yahoo fantasy sports API.

Signed requests, time-bucketed response caching and typed decoding of the
XML content tree.
"""

from fantasy_client.cache import CachedContentProvider, LRUStore, TimeBucketedCache
from fantasy_client.client import YEAR_KEYS, FantasyClient
from fantasy_client.content import ContentSource, FantasyContent, XmlContentProvider
from fantasy_client.errors import (
    AccessDeniedError,
    ConsumerRequestError,
    ContentDecodeError,
    ContentNotFoundError,
    ContentReadError,
    FantasyClientError,
    UnsupportedYearError,
)
from fantasy_client.factory import client_from_settings, new_cached_client, new_client
from fantasy_client.fetch import AccessToken, FetchConfig, SignedTransport, get_consumer


__version__ = "0.1.0"

__all__ = [
    "YEAR_KEYS",
    "AccessDeniedError",
    "AccessToken",
    "CachedContentProvider",
    "ConsumerRequestError",
    "ContentDecodeError",
    "ContentNotFoundError",
    "ContentReadError",
    "ContentSource",
    "FantasyClient",
    "FantasyClientError",
    "FantasyContent",
    "FetchConfig",
    "LRUStore",
    "SignedTransport",
    "TimeBucketedCache",
    "UnsupportedYearError",
    "XmlContentProvider",
    "__version__",
    "client_from_settings",
    "get_consumer",
    "new_cached_client",
    "new_client",
]
