"""Protocol interface for content sources."""

from typing import Protocol, runtime_checkable

from fantasy_client.content.models import FantasyContent


@runtime_checkable
class ContentSource(Protocol):
    """Anything that resolves a resource URL to a decoded content tree.

    The XML decoder and the cache-aside provider both implement this, so
    they compose by wrapping one another.
    """

    def get(self, url: str) -> FantasyContent:
        """Fetch and decode the content for a resource.

        Args:
            url: Resource URL.

        Returns:
            Decoded content tree.
        """
        ...

    def close(self) -> None:
        """Release resources held by the source and whatever it wraps."""
        ...
