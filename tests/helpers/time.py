"""Shared, deterministic timestamps for tests."""

from datetime import UTC, datetime


# Fixed timestamp; with a one hour bucket it falls in bucket 391189.
FIXED_NOW = datetime.fromtimestamp(1408281677, tz=UTC)
