"""Thread-safe, size-aware least-recently-used store."""

from collections import OrderedDict
from collections.abc import Callable
from threading import Lock
from typing import Generic, Protocol, TypeVar


class SizedValue(Protocol):
    """Value that reports its weight for capacity accounting."""

    def size(self) -> int:
        """Units this value occupies in the store."""
        ...


V = TypeVar("V", bound=SizedValue)


class LRUStore(Generic[V]):
    """Fixed-capacity store evicting the least recently used entries.

    Capacity is expressed in the units values report through ``size()``.
    Both ``get`` and ``set`` mark an entry as most recently used. All
    operations hold a single lock, so concurrent callers never observe a
    partially updated store.
    """

    def __init__(
        self,
        capacity: int,
        on_evict: Callable[[str], None] | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            capacity: Maximum total size of stored values.
            on_evict: Optional callback invoked with each evicted key.
        """
        if capacity < 0:
            msg = f"capacity must be non-negative, got {capacity}"
            raise ValueError(msg)
        self._capacity = capacity
        self._on_evict = on_evict
        self._entries: OrderedDict[str, V] = OrderedDict()
        self._size = 0
        self._evictions = 0
        self._lock = Lock()

    @property
    def capacity(self) -> int:
        """Maximum total size of stored values."""
        return self._capacity

    @property
    def size(self) -> int:
        """Total size of stored values."""
        with self._lock:
            return self._size

    @property
    def evictions(self) -> int:
        """Number of entries evicted since creation."""
        with self._lock:
            return self._evictions

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def get(self, key: str) -> V | None:
        """Look up a value and mark it as recently used.

        Args:
            key: Entry key.

        Returns:
            Stored value, or None if absent.
        """
        with self._lock:
            value = self._entries.get(key)
            if value is not None:
                self._entries.move_to_end(key)
            return value

    def set(self, key: str, value: V) -> None:
        """Store a value, replacing any previous value for the key.

        Args:
            key: Entry key.
            value: Value to store.
        """
        evicted: list[str] = []
        with self._lock:
            previous = self._entries.pop(key, None)
            if previous is not None:
                self._size -= previous.size()
            self._entries[key] = value
            self._size += value.size()

            while self._size > self._capacity and self._entries:
                old_key, old_value = self._entries.popitem(last=False)
                self._size -= old_value.size()
                self._evictions += 1
                evicted.append(old_key)

        if self._on_evict is not None:
            for old_key in evicted:
                self._on_evict(old_key)

    def delete(self, key: str) -> bool:
        """Remove an entry.

        Args:
            key: Entry key.

        Returns:
            True if an entry was removed.
        """
        with self._lock:
            value = self._entries.pop(key, None)
            if value is None:
                return False
            self._size -= value.size()
            return True

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._entries.clear()
            self._size = 0

    def keys(self) -> list[str]:
        """Snapshot of keys, least recently used first."""
        with self._lock:
            return list(self._entries)
