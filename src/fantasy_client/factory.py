"""Assembly of the content retrieval pipeline.

consumer -> signed transport -> XML decoder -> (cache-aside) -> client
"""

from datetime import timedelta

from fantasy_client.cache.bucketed import TimeBucketedCache, new_content_store
from fantasy_client.cache.provider import CachedContentProvider
from fantasy_client.client import FantasyClient
from fantasy_client.content.protocols import ContentSource
from fantasy_client.content.provider import XmlContentProvider
from fantasy_client.fetch.config import FetchConfig
from fantasy_client.fetch.consumer import get_consumer
from fantasy_client.fetch.models import AccessToken
from fantasy_client.fetch.transport import SignedTransport
from fantasy_client.settings.app import AppSettings


def _decoder(
    consumer_key: str,
    consumer_secret: str,
    token: AccessToken,
    config: FetchConfig,
) -> XmlContentProvider:
    consumer = get_consumer(consumer_key, consumer_secret, config=config)
    transport = SignedTransport(consumer, token, config=config)
    return XmlContentProvider(transport)


def new_client(
    consumer_key: str,
    consumer_secret: str,
    token: AccessToken,
    config: FetchConfig | None = None,
) -> FantasyClient:
    """Build an uncached client.

    Args:
        consumer_key: OAuth consumer key.
        consumer_secret: OAuth consumer secret.
        token: Pre-obtained access token.
        config: Optional fetch configuration.

    Returns:
        Client issuing one signed request per content fetch.
    """
    config = config or FetchConfig()
    provider = _decoder(consumer_key, consumer_secret, token, config)
    return FantasyClient(provider, base_url=config.base_url)


def new_cached_client(
    consumer_key: str,
    consumer_secret: str,
    token: AccessToken,
    cache_capacity: int,
    cache_ttl: timedelta,
    config: FetchConfig | None = None,
) -> FantasyClient:
    """Build a client that caches responses per time bucket.

    Args:
        consumer_key: OAuth consumer key; also scopes the cache keys.
        consumer_secret: OAuth consumer secret.
        token: Pre-obtained access token.
        cache_capacity: Maximum number of cached responses.
        cache_ttl: Width of a freshness bucket.
        config: Optional fetch configuration.

    Returns:
        Client serving repeated requests within a bucket from memory.
    """
    config = config or FetchConfig()
    cache = TimeBucketedCache(
        client_id=consumer_key,
        duration=cache_ttl,
        store=new_content_store(cache_capacity),
    )
    provider: ContentSource = CachedContentProvider(
        delegate=_decoder(consumer_key, consumer_secret, token, config),
        cache=cache,
    )
    return FantasyClient(provider, base_url=config.base_url)


def client_from_settings(settings: AppSettings) -> FantasyClient:
    """Build a client from environment settings.

    A cache capacity of zero yields an uncached client.

    Args:
        settings: Loaded application settings.

    Returns:
        Configured client.

    Raises:
        ValueError: If credentials are missing.
    """
    token = settings.require_token()
    config = FetchConfig(
        base_url=settings.base_url,
        timeout_seconds=settings.timeout_seconds,
        max_attempts=settings.max_attempts,
    )
    consumer_key = settings.consumer_key or ""
    consumer_secret = settings.consumer_secret or ""

    if settings.cache_capacity == 0:
        return new_client(consumer_key, consumer_secret, token, config=config)
    return new_cached_client(
        consumer_key,
        consumer_secret,
        token,
        cache_capacity=settings.cache_capacity,
        cache_ttl=settings.cache_ttl,
        config=config,
    )
