"""Cache-aside content source."""

from collections.abc import Callable
from datetime import UTC, datetime

from fantasy_client.cache.bucketed import ContentCache
from fantasy_client.content.models import FantasyContent
from fantasy_client.content.protocols import ContentSource


def _utc_now() -> datetime:
    return datetime.now(UTC)


class CachedContentProvider:
    """Serves content from a cache, falling back to a delegate source.

    The clock is read once per call and the same instant is used for the
    lookup and the write. Only successful delegate results are cached; a
    failing delegate leaves the cache untouched and its error propagates.
    """

    def __init__(
        self,
        delegate: ContentSource,
        cache: ContentCache,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize the provider.

        Args:
            delegate: Source consulted on a cache miss.
            cache: Cache consulted first.
            clock: Current-time source, injectable for tests.
        """
        self._delegate = delegate
        self._cache = cache
        self._clock = clock

    @property
    def delegate(self) -> ContentSource:
        """Source consulted on a cache miss."""
        return self._delegate

    @property
    def cache(self) -> ContentCache:
        """Cache consulted first."""
        return self._cache

    def get(self, url: str) -> FantasyContent:
        """Fetch content through the cache.

        Args:
            url: Resource URL.

        Returns:
            Cached or freshly fetched content.
        """
        now = self._clock()
        cached = self._cache.get(url, now)
        if cached is not None:
            return cached

        content = self._delegate.get(url)
        self._cache.set(url, now, content)
        return content

    def close(self) -> None:
        """Close the delegate source; cached entries are kept."""
        self._delegate.close()
