"""Domain-specific error types for the fantasy sports client."""


class FantasyClientError(Exception):
    """Base class for every error raised by this package.

    Attributes:
        url: Resource URL involved in the failure, when known.
    """

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.url = url


class AccessDeniedError(FantasyClientError):
    """The authenticated user lacks permission for the requested resource.

    Raised instead of the underlying signing/transport error, never retried.
    """

    DEFAULT_MESSAGE = (
        "user does not have permission to access the requested resource"
    )

    def __init__(self, url: str | None = None) -> None:
        super().__init__(self.DEFAULT_MESSAGE, url=url)


class ConsumerRequestError(FantasyClientError):
    """Upstream answered a signed request with a non-success status.

    The message embeds the response body so that error classification can
    match on the upstream error text.

    Attributes:
        status_code: HTTP status code of the upstream response.
        body: Decoded response body text.
    """

    def __init__(self, url: str, status_code: int, body: str) -> None:
        message = (
            "HTTP response is not 200/OK as expected. Actual response:\n"
            f"\tResponse Status: {status_code}\n"
            f"\tResponse Body: {body}"
        )
        super().__init__(message, url=url)
        self.status_code = status_code
        self.body = body


class ContentReadError(FantasyClientError):
    """Failure while draining a response body."""


class ContentDecodeError(FantasyClientError):
    """Response payload is malformed or does not match the content schema."""


class ContentNotFoundError(FantasyClientError):
    """Required nesting is absent from an otherwise valid response."""


class UnsupportedYearError(FantasyClientError, ValueError):
    """Requested season has no known game key."""

    def __init__(self, year: str) -> None:
        super().__init__(f"data not available for year={year}")
        self.year = year
