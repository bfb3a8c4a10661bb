"""OAuth 1.0a request signing over httpx.

The signing capability the transport is built on: given a URL, extra
parameters and an access token, sign the request and send it.
"""

from collections.abc import Mapping
from types import TracebackType
from typing import Protocol, runtime_checkable

import httpx
import structlog
from authlib.integrations.httpx_client import OAuth1Auth

from fantasy_client.errors import ConsumerRequestError
from fantasy_client.fetch.config import FetchConfig
from fantasy_client.fetch.constants import HTTP_STATUS_OK_MAX, HTTP_STATUS_OK_MIN
from fantasy_client.fetch.models import AccessToken
from fantasy_client.fetch.redact import redact_headers, redact_oauth_params


logger = structlog.get_logger()


@runtime_checkable
class Consumer(Protocol):
    """Protocol for the sign-and-send capability."""

    def get(
        self,
        url: str,
        params: Mapping[str, str],
        token: AccessToken,
    ) -> httpx.Response:
        """Sign and send a GET request.

        Args:
            url: Resource URL.
            params: Additional query parameters to sign and send.
            token: Access token used to sign the request.

        Returns:
            Response whose body has not been read yet.

        Raises:
            Exception: Any signing, network or upstream failure. The message
                text is what error classification inspects.
        """
        ...

    def close(self) -> None:
        """Release network resources held by the consumer."""
        ...


class OAuthConsumer:
    """HMAC-SHA1 OAuth 1.0a consumer backed by a shared ``httpx.Client``."""

    def __init__(
        self,
        consumer_key: str,
        consumer_secret: str,
        config: FetchConfig | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the consumer.

        Args:
            consumer_key: OAuth consumer key (client identifier).
            consumer_secret: OAuth consumer secret.
            config: Fetch configuration for timeouts and user agent.
            http_client: Optional pre-built client, mainly for tests.
        """
        self._consumer_key = consumer_key
        self._consumer_secret = consumer_secret
        self._config = config or FetchConfig()
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            timeout=self._config.timeout_seconds,
            follow_redirects=True,
            headers={"User-Agent": self._config.user_agent},
        )
        self._log = logger.bind(component="consumer")

    @property
    def consumer_key(self) -> str:
        """OAuth consumer key this consumer signs with."""
        return self._consumer_key

    def get(
        self,
        url: str,
        params: Mapping[str, str],
        token: AccessToken,
    ) -> httpx.Response:
        """Sign and send a GET request, streaming the body.

        Args:
            url: Resource URL.
            params: Additional query parameters.
            token: Access token used to sign the request.

        Returns:
            Streamed 2xx response; the caller must read and close it.

        Raises:
            ConsumerRequestError: If the upstream replies with a non-2xx status.
            httpx.HTTPError: On network failures.
        """
        auth = OAuth1Auth(
            client_id=self._consumer_key,
            client_secret=self._consumer_secret,
            token=token.token,
            token_secret=token.secret,
        )
        request = self._client.build_request("GET", url, params=dict(params))
        response = self._client.send(request, auth=auth, stream=True)

        if HTTP_STATUS_OK_MIN <= response.status_code < HTTP_STATUS_OK_MAX:
            return response

        try:
            body = response.read().decode("utf-8", errors="replace")
        finally:
            response.close()

        self._log.debug(
            "upstream_error_status",
            url=redact_oauth_params(str(request.url)),
            status_code=response.status_code,
            headers=redact_headers(dict(response.headers)),
        )
        raise ConsumerRequestError(url, response.status_code, body)

    def close(self) -> None:
        """Close the underlying client if this consumer created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "OAuthConsumer":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def get_consumer(
    client_id: str,
    client_secret: str,
    config: FetchConfig | None = None,
) -> OAuthConsumer:
    """Build the default consumer for the given application credentials.

    Args:
        client_id: OAuth consumer key.
        client_secret: OAuth consumer secret.
        config: Optional fetch configuration.

    Returns:
        Consumer ready to sign requests.
    """
    return OAuthConsumer(client_id, client_secret, config=config)
