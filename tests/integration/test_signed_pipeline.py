"""Integration tests for the signed request pipeline against a local server."""

import threading
from collections.abc import Generator
from datetime import timedelta
from http.server import BaseHTTPRequestHandler, HTTPServer

import pytest

from fantasy_client.errors import AccessDeniedError, ConsumerRequestError
from fantasy_client.factory import new_cached_client, new_client
from fantasy_client.fetch.config import FetchConfig
from fantasy_client.fetch.consumer import OAuthConsumer
from fantasy_client.fetch.models import AccessToken
from fantasy_client.observability.metrics import ClientMetrics
from tests.helpers.content import EXPECTED_TEAM, TEAM_XML


TOKEN = AccessToken(token="access-token", secret="access-secret")

CONSUMER_KEY_UNKNOWN = (
    b"oauth_problem=consumer_key_unknown&oauth_problem_advice=retry"
)
ACCESS_DENIED = (
    b"<error><description>You are not allowed to view this page"
    b"</description></error>"
)


def get_server_url(server: HTTPServer) -> str:
    """Get the base URL of a test server.

    Args:
        server: The HTTP server instance.

    Returns:
        Server root URL.
    """
    host, port = server.server_address[0], server.server_address[1]
    if isinstance(host, bytes):
        host = host.decode("utf-8")
    return f"http://{host}:{port}"


class FantasyHandler(BaseHTTPRequestHandler):
    """Serves fantasy resources, failing the first requests of ``/flaky``."""

    request_count: int = 0
    flaky_failures: int = 0
    authorization_headers: list[str] = []
    paths: list[str] = []

    def log_message(self, format: str, *args: object) -> None:  # noqa: A002
        """Suppress log messages during tests."""

    def do_GET(self) -> None:  # noqa: N802
        """Route GET requests by path."""
        FantasyHandler.request_count += 1
        FantasyHandler.authorization_headers.append(
            self.headers.get("Authorization", "")
        )
        FantasyHandler.paths.append(self.path)

        if self.path.startswith("/denied"):
            self._reply(401, ACCESS_DENIED)
            return

        if self.path.startswith("/flaky"):
            flaky_requests = sum(
                1 for p in FantasyHandler.paths if p.startswith("/flaky")
            )
            if flaky_requests <= FantasyHandler.flaky_failures:
                self._reply(401, CONSUMER_KEY_UNKNOWN)
                return

        if self.path.startswith("/broken"):
            self._reply(500, b"Internal Server Error")
            return

        self._reply(200, TEAM_XML.encode("utf-8"), "application/xml")

    def _reply(
        self, status: int, body: bytes, content_type: str = "text/plain"
    ) -> None:
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)


@pytest.fixture
def fantasy_server() -> Generator[HTTPServer]:
    """Start a local fantasy API server."""
    FantasyHandler.request_count = 0
    FantasyHandler.flaky_failures = 0
    FantasyHandler.authorization_headers = []
    FantasyHandler.paths = []
    server = HTTPServer(("127.0.0.1", 0), FantasyHandler)
    thread = threading.Thread(target=server.serve_forever)
    thread.daemon = True
    thread.start()
    yield server
    server.shutdown()
    server.server_close()


@pytest.fixture
def config(fantasy_server: HTTPServer) -> FetchConfig:
    """Fetch configuration pointing at the local server."""
    return FetchConfig(base_url=get_server_url(fantasy_server), timeout_seconds=5.0)


class TestSignedRequests:
    """Requests reach the server signed and decode end to end."""

    def test_get_team(self, config: FetchConfig) -> None:
        """Test a team is fetched, signed and decoded."""
        client = new_client("consumer-key", "consumer-secret", TOKEN, config=config)

        team = client.get_team("223.l.431.t.1")

        assert team == EXPECTED_TEAM
        assert FantasyHandler.paths == ["/team/223.l.431.t.1"]
        authorization = FantasyHandler.authorization_headers[0]
        assert authorization.startswith("OAuth ")
        assert 'oauth_consumer_key="consumer-key"' in authorization
        assert 'oauth_token="access-token"' in authorization
        assert "oauth_signature=" in authorization
        assert "consumer-secret" not in authorization
        assert "access-secret" not in authorization

    def test_consumer_sends_extra_params(self, config: FetchConfig) -> None:
        """Test additional parameters are sent on the query string."""
        consumer = OAuthConsumer("consumer-key", "consumer-secret", config=config)
        with consumer:
            response = consumer.get(
                f"{config.base_url}/team/1", {"format": "xml"}, TOKEN
            )
            response.read()
            response.close()

        assert FantasyHandler.paths == ["/team/1?format=xml"]


class TestRetryAgainstServer:
    """Retry and classification over real HTTP."""

    def test_transient_rejection_is_retried(self, config: FetchConfig) -> None:
        """Test consumer_key_unknown replies are retried until success."""
        FantasyHandler.flaky_failures = 4
        client = new_client("consumer-key", "consumer-secret", TOKEN, config=config)

        content = client.get_fantasy_content(f"{config.base_url}/flaky")

        assert content.team == EXPECTED_TEAM
        assert FantasyHandler.request_count == 5
        assert client.request_count == 1
        assert ClientMetrics.get_instance().retries_total == 4

    def test_retry_bound_exhausted(self, config: FetchConfig) -> None:
        """Test the last rejection surfaces once attempts run out."""
        FantasyHandler.flaky_failures = 5
        client = new_client("consumer-key", "consumer-secret", TOKEN, config=config)

        with pytest.raises(ConsumerRequestError) as exc_info:
            client.get_fantasy_content(f"{config.base_url}/flaky")

        assert exc_info.value.status_code == 401
        assert "consumer_key_unknown" in exc_info.value.body
        assert FantasyHandler.request_count == 5

    def test_access_denied(self, config: FetchConfig) -> None:
        """Test the permission page maps to AccessDeniedError after one attempt."""
        client = new_client("consumer-key", "consumer-secret", TOKEN, config=config)

        with pytest.raises(AccessDeniedError):
            client.get_fantasy_content(f"{config.base_url}/denied")

        assert FantasyHandler.request_count == 1

    def test_other_status_not_retried(self, config: FetchConfig) -> None:
        """Test unrelated upstream failures are raised after one attempt."""
        client = new_client("consumer-key", "consumer-secret", TOKEN, config=config)

        with pytest.raises(ConsumerRequestError) as exc_info:
            client.get_fantasy_content(f"{config.base_url}/broken")

        assert exc_info.value.status_code == 500
        assert FantasyHandler.request_count == 1


class TestCachedPipeline:
    """Cache-aside behaviour over real HTTP."""

    def test_repeat_request_served_from_cache(self, config: FetchConfig) -> None:
        """Test only the first of two identical requests reaches the server."""
        client = new_cached_client(
            "consumer-key",
            "consumer-secret",
            TOKEN,
            cache_capacity=10,
            cache_ttl=timedelta(hours=1),
            config=config,
        )

        first = client.get_team("223.l.431.t.1")
        second = client.get_team("223.l.431.t.1")

        assert first == second == EXPECTED_TEAM
        assert FantasyHandler.request_count == 1
        assert client.request_count == 2

    def test_failures_not_cached(self, config: FetchConfig) -> None:
        """Test a failed fetch is retried on the next call."""
        client = new_cached_client(
            "consumer-key",
            "consumer-secret",
            TOKEN,
            cache_capacity=10,
            cache_ttl=timedelta(hours=1),
            config=config,
        )

        for _ in range(2):
            with pytest.raises(AccessDeniedError):
                client.get_fantasy_content(f"{config.base_url}/denied")

        assert FantasyHandler.request_count == 2
