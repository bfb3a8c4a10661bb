"""Content source that fetches over a transport and decodes XML."""

import httpx
import structlog

from fantasy_client.content.decoder import decode_fantasy_content
from fantasy_client.content.models import FantasyContent
from fantasy_client.errors import ContentDecodeError, ContentReadError
from fantasy_client.fetch.redact import redact_oauth_params
from fantasy_client.fetch.transport import HttpTransport
from fantasy_client.observability.metrics import ClientMetrics


logger = structlog.get_logger()


class XmlContentProvider:
    """Resolves resource URLs through an HTTP transport.

    Transport errors propagate untouched. Failing to drain the body raises
    ``ContentReadError``; an invalid payload raises ``ContentDecodeError``.
    The response is closed on every path once the transport returned it.
    """

    def __init__(self, transport: HttpTransport) -> None:
        """Initialize the provider.

        Args:
            transport: Transport used to issue requests.
        """
        self._transport = transport
        self._metrics = ClientMetrics.get_instance()
        self._log = logger.bind(component="decoder")

    @property
    def transport(self) -> HttpTransport:
        """Transport requests are issued through."""
        return self._transport

    def get(self, url: str) -> FantasyContent:
        """Fetch and decode a resource.

        Args:
            url: Resource URL.

        Returns:
            Decoded content tree.

        Raises:
            ContentReadError: If the response body cannot be read.
            ContentDecodeError: If the body is not a valid content document.
        """
        log = self._log.bind(url=redact_oauth_params(url))
        response = self._transport.get(url)
        body = self._read_body(url, response)

        try:
            content = decode_fantasy_content(body)
        except ContentDecodeError as e:
            self._metrics.record_decode_failure()
            log.warning("content_decode_failed", error=e.message, bytes=len(body))
            raise ContentDecodeError(e.message, url=url) from e

        log.debug("content_decoded", bytes=len(body))
        return content

    def close(self) -> None:
        """Close the transport."""
        self._transport.close()

    def _read_body(self, url: str, response: httpx.Response) -> bytes:
        try:
            return response.read()
        except Exception as e:
            msg = f"Failed to read response body: {e}"
            raise ContentReadError(msg, url=url) from e
        finally:
            response.close()
