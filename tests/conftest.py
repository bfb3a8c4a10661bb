"""Shared pytest fixtures."""

from collections.abc import Iterator

import pytest

from fantasy_client.observability.metrics import ClientMetrics


@pytest.fixture(autouse=True)
def reset_metrics() -> Iterator[None]:
    """Give every test a fresh metrics singleton."""
    ClientMetrics.reset()
    yield
    ClientMetrics.reset()
