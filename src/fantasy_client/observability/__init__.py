"""Observability module for logging and metrics."""

from fantasy_client.observability.logging import (
    bind_request_context,
    clear_request_context,
    configure_logging,
)
from fantasy_client.observability.metrics import ClientMetrics


__all__ = [
    "ClientMetrics",
    "bind_request_context",
    "clear_request_context",
    "configure_logging",
]
