"""Unit tests for pipeline metrics."""

import threading

from fantasy_client.observability.metrics import ClientMetrics


class TestClientMetrics:
    """Tests for ClientMetrics."""

    def test_singleton(self) -> None:
        """Test the same instance is shared until reset."""
        first = ClientMetrics.get_instance()

        assert ClientMetrics.get_instance() is first

        ClientMetrics.reset()

        assert ClientMetrics.get_instance() is not first

    def test_recorders(self) -> None:
        """Test each recorder bumps its counter."""
        metrics = ClientMetrics.get_instance()

        metrics.record_request()
        metrics.record_request()
        metrics.record_retry()
        metrics.record_access_denied()
        metrics.record_cache_hit()
        metrics.record_cache_miss()
        metrics.record_cache_eviction()
        metrics.record_decode_failure()

        assert metrics.to_dict() == {
            "requests_total": 2,
            "retries_total": 1,
            "access_denied_total": 1,
            "cache_hits_total": 1,
            "cache_misses_total": 1,
            "cache_evictions_total": 1,
            "decode_failures_total": 1,
        }

    def test_cache_hit_ratio(self) -> None:
        """Test the ratio of hits to lookups."""
        metrics = ClientMetrics.get_instance()

        assert metrics.cache_hit_ratio == 0.0

        metrics.record_cache_hit()
        metrics.record_cache_hit()
        metrics.record_cache_hit()
        metrics.record_cache_miss()

        assert metrics.cache_hit_ratio == 0.75

    def test_concurrent_increments(self) -> None:
        """Test no update is lost under contention."""
        metrics = ClientMetrics.get_instance()

        def work() -> None:
            for _ in range(1000):
                metrics.record_request()

        threads = [threading.Thread(target=work) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert metrics.requests_total == 8000
