"""Cache of decoded content keyed by client, resource and time bucket."""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Protocol

import structlog

from fantasy_client.cache.lru import LRUStore, SizedValue
from fantasy_client.content.models import FantasyContent
from fantasy_client.observability.metrics import ClientMetrics


logger = structlog.get_logger()

KEY_DELIMITER = ":"


class ContentCache(Protocol):
    """Protocol for caches consulted by the cache-aside provider."""

    def get(self, url: str, as_of: datetime) -> FantasyContent | None:
        """Return content cached for ``url`` in the bucket of ``as_of``."""
        ...

    def set(self, url: str, as_of: datetime, content: FantasyContent) -> None:
        """Store content for ``url`` in the bucket of ``as_of``."""
        ...


@dataclass(frozen=True)
class CachedContent:
    """Store value wrapping a decoded content tree.

    Every entry weighs one unit regardless of the tree's actual size.
    """

    content: FantasyContent

    def size(self) -> int:
        """Units this value occupies in the store."""
        return 1


class TimeBucketedCache:
    """Caches content per fixed-width time bucket.

    Two lookups whose timestamps fall in the same ``duration``-wide bucket
    share an entry; lookups in different buckets never do. Entries from past
    buckets are never expired explicitly, they become unreachable and are
    reclaimed by LRU pressure on the underlying store.
    """

    def __init__(
        self,
        client_id: str,
        duration: timedelta,
        store: LRUStore[Any],
    ) -> None:
        """Initialize the cache.

        Args:
            client_id: Identity of the client sharing this cache.
            duration: Bucket width; at least one second.
            store: Backing LRU store.
        """
        bucket_seconds = int(duration.total_seconds())
        if bucket_seconds < 1:
            msg = f"duration must be at least one second, got {duration}"
            raise ValueError(msg)
        self._client_id = client_id
        self._duration = duration
        self._bucket_seconds = bucket_seconds
        self._store = store
        self._metrics = ClientMetrics.get_instance()
        self._log = logger.bind(component="cache", client_id=client_id)

    @property
    def client_id(self) -> str:
        """Identity of the client sharing this cache."""
        return self._client_id

    @property
    def duration(self) -> timedelta:
        """Bucket width."""
        return self._duration

    @property
    def store(self) -> LRUStore[Any]:
        """Backing LRU store."""
        return self._store

    def key_for(self, url: str, as_of: datetime) -> str:
        """Derive the store key for a resource at a point in time.

        Args:
            url: Resource identifier.
            as_of: Timestamp selecting the bucket.

        Returns:
            ``<client_id>:<url>:<bucket>`` where bucket is the Unix time
            divided by the bucket width, rounded down.
        """
        bucket = math.floor(as_of.timestamp()) // self._bucket_seconds
        return KEY_DELIMITER.join((self._client_id, url, str(bucket)))

    def get(self, url: str, as_of: datetime) -> FantasyContent | None:
        """Look up content for a resource.

        Args:
            url: Resource identifier.
            as_of: Timestamp selecting the bucket.

        Returns:
            Cached content, or None on a miss. A value of any other type
            stored under the key is reported as a miss.
        """
        key = self.key_for(url, as_of)
        value: SizedValue | None = self._store.get(key)

        if value is None:
            self._metrics.record_cache_miss()
            self._log.debug("cache_miss", key=key)
            return None

        if not isinstance(value, CachedContent):
            # Something else shares this key space; never hand it out.
            self._metrics.record_cache_miss()
            self._log.warning(
                "cache_type_mismatch",
                key=key,
                value_type=type(value).__name__,
            )
            return None

        self._metrics.record_cache_hit()
        self._log.debug("cache_hit", key=key)
        return value.content

    def set(self, url: str, as_of: datetime, content: FantasyContent) -> None:
        """Store content for a resource, overwriting any previous entry.

        Args:
            url: Resource identifier.
            as_of: Timestamp selecting the bucket.
            content: Decoded content to cache.
        """
        key = self.key_for(url, as_of)
        self._store.set(key, CachedContent(content=content))
        self._log.debug("cache_set", key=key)


def new_content_store(capacity: int) -> LRUStore[Any]:
    """Build an LRU store whose evictions are logged and counted.

    Args:
        capacity: Maximum number of cached responses.

    Returns:
        Empty store.
    """
    metrics = ClientMetrics.get_instance()
    log = logger.bind(component="cache")

    def on_evict(key: str) -> None:
        metrics.record_cache_eviction()
        log.debug("cache_evict", key=key)

    return LRUStore(capacity, on_evict=on_evict)
