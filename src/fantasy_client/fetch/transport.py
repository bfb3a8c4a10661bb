"""Signed HTTP transport with bounded retry and error classification."""

from threading import Lock
from typing import Protocol, runtime_checkable

import httpx
import structlog

from fantasy_client.errors import AccessDeniedError
from fantasy_client.fetch.config import FetchConfig
from fantasy_client.fetch.consumer import Consumer
from fantasy_client.fetch.models import AccessToken, FetchErrorClass, classify_error
from fantasy_client.fetch.redact import redact_oauth_params
from fantasy_client.observability.metrics import ClientMetrics


logger = structlog.get_logger()


@runtime_checkable
class HttpTransport(Protocol):
    """Protocol for anything that can GET a resource URL."""

    def get(self, url: str) -> httpx.Response:
        """Fetch a URL.

        Args:
            url: Resource URL.

        Returns:
            Response whose body the caller reads and closes.
        """
        ...

    def close(self) -> None:
        """Release network resources held by the transport."""
        ...


class SignedTransport:
    """Signs every request with a held access token.

    Failures raised by the consumer are tagged once with ``classify_error``:

    - RETRYABLE_CREDENTIAL: the same request is attempted again, up to
      ``config.max_attempts`` attempts in total, then the last error is raised.
    - ACCESS_DENIED: ``AccessDeniedError`` is raised, no retry.
    - OTHER: the original exception is re-raised after one attempt.
    """

    def __init__(
        self,
        consumer: Consumer,
        token: AccessToken,
        config: FetchConfig | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            consumer: Sign-and-send capability.
            token: Access token used to sign requests.
            config: Fetch configuration (attempt bound).
        """
        self._consumer = consumer
        self._token = token
        self._config = config or FetchConfig()
        self._request_count = 0
        self._count_lock = Lock()
        self._metrics = ClientMetrics.get_instance()
        self._log = logger.bind(component="transport")

    @property
    def request_count(self) -> int:
        """Number of network attempts made, retries included."""
        with self._count_lock:
            return self._request_count

    @property
    def max_attempts(self) -> int:
        """Upper bound on attempts for a single request."""
        return self._config.max_attempts

    def get(self, url: str) -> httpx.Response:
        """Sign and send a GET request.

        Args:
            url: Resource URL.

        Returns:
            Successful response with an unread body.

        Raises:
            AccessDeniedError: If the user may not view the resource.
            Exception: The consumer's last error for any other failure.
        """
        log = self._log.bind(url=redact_oauth_params(url))
        attempt = 0

        while True:
            attempt += 1
            self._count_attempt()
            log.debug("fetch_attempt", attempt=attempt)

            try:
                return self._consumer.get(url, {}, self._token)
            except Exception as exc:
                error_class = classify_error(exc)

                if error_class is FetchErrorClass.ACCESS_DENIED:
                    self._metrics.record_access_denied()
                    log.warning("access_denied", attempt=attempt)
                    raise AccessDeniedError(url=url) from exc

                if error_class.is_retryable and attempt < self._config.max_attempts:
                    self._metrics.record_retry()
                    log.info(
                        "fetch_retry",
                        attempt=attempt,
                        max_attempts=self._config.max_attempts,
                        error_class=error_class.value,
                    )
                    continue

                log.warning(
                    "fetch_failed",
                    attempt=attempt,
                    error_class=error_class.value,
                    error=str(exc),
                )
                raise

    def close(self) -> None:
        """Close the underlying consumer."""
        self._consumer.close()

    def _count_attempt(self) -> None:
        with self._count_lock:
            self._request_count += 1
        self._metrics.record_request()
