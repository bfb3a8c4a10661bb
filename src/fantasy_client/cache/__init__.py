"""In-memory caching of decoded content."""

from fantasy_client.cache.bucketed import (
    KEY_DELIMITER,
    CachedContent,
    ContentCache,
    TimeBucketedCache,
    new_content_store,
)
from fantasy_client.cache.lru import LRUStore, SizedValue
from fantasy_client.cache.provider import CachedContentProvider


__all__ = [
    "KEY_DELIMITER",
    "CachedContent",
    "CachedContentProvider",
    "ContentCache",
    "LRUStore",
    "SizedValue",
    "TimeBucketedCache",
    "new_content_store",
]
