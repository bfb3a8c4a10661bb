"""Metrics collection for the content retrieval pipeline."""

from dataclasses import dataclass, field
from threading import Lock
from typing import ClassVar


_instance_lock = Lock()


@dataclass
class ClientMetrics:
    """Counters for transport, cache and decoder activity.

    Singleton shared by every pipeline layer in the process. All mutation
    goes through a lock so concurrent fetches never lose an update.
    """

    requests_total: int = 0
    retries_total: int = 0
    access_denied_total: int = 0
    cache_hits_total: int = 0
    cache_misses_total: int = 0
    cache_evictions_total: int = 0
    decode_failures_total: int = 0

    _lock: Lock = field(default_factory=Lock, repr=False, compare=False)

    _instance: ClassVar["ClientMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "ClientMetrics":
        """Get singleton metrics instance."""
        with _instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        with _instance_lock:
            cls._instance = None

    def _increment(self, name: str) -> None:
        with self._lock:
            setattr(self, name, getattr(self, name) + 1)

    def record_request(self) -> None:
        """Record one signed network attempt."""
        self._increment("requests_total")

    def record_retry(self) -> None:
        """Record a retry after a transient credential rejection."""
        self._increment("retries_total")

    def record_access_denied(self) -> None:
        """Record a permission failure."""
        self._increment("access_denied_total")

    def record_cache_hit(self) -> None:
        """Record a cache hit."""
        self._increment("cache_hits_total")

    def record_cache_miss(self) -> None:
        """Record a cache miss (absent key or mismatched value type)."""
        self._increment("cache_misses_total")

    def record_cache_eviction(self) -> None:
        """Record an LRU eviction."""
        self._increment("cache_evictions_total")

    def record_decode_failure(self) -> None:
        """Record a payload that could not be decoded."""
        self._increment("decode_failures_total")

    def to_dict(self) -> dict[str, int]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        with self._lock:
            return {
                "requests_total": self.requests_total,
                "retries_total": self.retries_total,
                "access_denied_total": self.access_denied_total,
                "cache_hits_total": self.cache_hits_total,
                "cache_misses_total": self.cache_misses_total,
                "cache_evictions_total": self.cache_evictions_total,
                "decode_failures_total": self.decode_failures_total,
            }

    @property
    def cache_hit_ratio(self) -> float:
        """Fraction of cache lookups served from the cache."""
        with self._lock:
            lookups = self.cache_hits_total + self.cache_misses_total
            if lookups == 0:
                return 0.0
            return self.cache_hits_total / lookups
