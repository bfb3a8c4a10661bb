"""Unit tests for the cache-aside content provider."""

from datetime import timedelta

import pytest

from fantasy_client.cache.bucketed import TimeBucketedCache
from fantasy_client.cache.lru import LRUStore
from fantasy_client.cache.provider import CachedContentProvider
from fantasy_client.content.models import League
from fantasy_client.content.protocols import ContentSource
from tests.helpers.content import league_list
from tests.helpers.mocks import MockCache, MockContentProvider
from tests.helpers.time import FIXED_NOW


URL = "http://example.com/fantasy"


class TestCachedContentProvider:
    """Tests for hit, miss and failure paths."""

    def test_satisfies_content_source(self) -> None:
        """Test the provider can stand in for any content source."""
        provider = CachedContentProvider(MockContentProvider(), MockCache())

        assert isinstance(provider, ContentSource)

    def test_get_from_cache(self) -> None:
        """Test a hit never reaches the delegate."""
        cached = league_list(League(league_key="cached"))
        delegate = MockContentProvider(content=league_list())
        cache = MockCache()
        cache.data[URL] = cached
        provider = CachedContentProvider(delegate, cache, clock=lambda: FIXED_NOW)

        content = provider.get(URL)

        assert content is cached
        assert delegate.count == 0
        assert cache.last_get_url == URL
        assert cache.last_get_time == FIXED_NOW
        assert cache.last_set_url is None

    def test_get_without_cache(self) -> None:
        """Test a miss fetches from the delegate and stores the result."""
        fetched = league_list(League(league_key="fetched"))
        delegate = MockContentProvider(content=fetched)
        cache = MockCache()
        provider = CachedContentProvider(delegate, cache, clock=lambda: FIXED_NOW)

        content = provider.get(URL)

        assert content is fetched
        assert delegate.count == 1
        assert delegate.last_url == URL
        assert cache.last_set_url == URL
        assert cache.last_set_time == FIXED_NOW
        assert cache.last_set_content is fetched

    def test_clock_read_once(self) -> None:
        """Test lookup and write use the same instant."""
        ticks = iter([FIXED_NOW, FIXED_NOW + timedelta(hours=5)])
        cache = MockCache()
        provider = CachedContentProvider(
            MockContentProvider(content=league_list()), cache, clock=lambda: next(ticks)
        )

        provider.get(URL)

        assert cache.last_get_time == FIXED_NOW
        assert cache.last_set_time == FIXED_NOW

    def test_get_with_error(self) -> None:
        """Test a delegate failure propagates and nothing is cached."""
        error = RuntimeError("error")
        delegate = MockContentProvider(error=error)
        cache = MockCache()
        provider = CachedContentProvider(delegate, cache, clock=lambda: FIXED_NOW)

        with pytest.raises(RuntimeError) as exc_info:
            provider.get(URL)

        assert exc_info.value is error
        assert delegate.count == 1
        assert cache.last_set_url is None
        assert cache.last_set_content is None


class TestCachedContentProviderWithBucketedCache:
    """Tests against the real time-bucketed cache."""

    def test_repeat_within_bucket_is_served_from_cache(self) -> None:
        """Test only the first request of a bucket reaches the delegate."""
        now = FIXED_NOW
        delegate = MockContentProvider(content=league_list())
        cache = TimeBucketedCache("client", timedelta(hours=1), LRUStore(10))
        provider = CachedContentProvider(delegate, cache, clock=lambda: now)

        first = provider.get(URL)
        second = provider.get(URL)

        assert first is second
        assert delegate.count == 1

    def test_next_bucket_refetches(self) -> None:
        """Test crossing a bucket boundary forces a fresh fetch."""
        times = [FIXED_NOW, FIXED_NOW + timedelta(hours=1)]
        delegate = MockContentProvider(content=league_list())
        cache = TimeBucketedCache("client", timedelta(hours=1), LRUStore(10))
        provider = CachedContentProvider(delegate, cache, clock=lambda: times.pop(0))

        provider.get(URL)
        provider.get(URL)

        assert delegate.count == 2

    def test_distinct_urls_cached_separately(self) -> None:
        """Test each resource gets its own entry."""
        delegate = MockContentProvider(content=league_list())
        cache = TimeBucketedCache("client", timedelta(hours=1), LRUStore(10))
        provider = CachedContentProvider(delegate, cache, clock=lambda: FIXED_NOW)

        provider.get(URL)
        provider.get(URL + "/other")
        provider.get(URL)

        assert delegate.count == 2
        assert len(cache.store) == 2


class TestCachedContentProviderClose:
    """Tests for releasing the delegate."""

    def test_close_closes_delegate(self) -> None:
        """Test closing the provider closes the wrapped source."""
        delegate = MockContentProvider()

        CachedContentProvider(delegate, MockCache()).close()

        assert delegate.closed is True
