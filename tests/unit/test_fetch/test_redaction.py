"""Unit tests for credential redaction in log output."""

from fantasy_client.fetch.redact import (
    REDACTED_VALUE,
    redact_headers,
    redact_oauth_params,
)


class TestRedactHeaders:
    """Tests for header redaction."""

    def test_redacts_oauth_authorization(self) -> None:
        """Test that the OAuth Authorization header is redacted."""
        headers = {
            "Authorization": 'OAuth oauth_consumer_key="key", oauth_signature="sig"',
            "User-Agent": "fantasy-client/0.1",
        }

        result = redact_headers(headers)

        assert result["Authorization"] == REDACTED_VALUE
        assert result["User-Agent"] == "fantasy-client/0.1"

    def test_redacts_case_insensitive(self) -> None:
        """Test that header names are matched regardless of case."""
        for name in ("authorization", "AUTHORIZATION", "Cookie", "set-cookie"):
            assert redact_headers({name: "value"})[name] == REDACTED_VALUE

    def test_does_not_mutate_input(self) -> None:
        """Test the original headers are left intact."""
        headers = {"Authorization": "OAuth secret"}

        redact_headers(headers)

        assert headers["Authorization"] == "OAuth secret"


class TestRedactOAuthParams:
    """Tests for URL parameter redaction."""

    def test_redacts_token_and_signature(self) -> None:
        """Test that oauth token and signature values are removed."""
        url = (
            "https://fantasysports.yahooapis.com/fantasy/v2/team/1"
            "?oauth_token=abc&oauth_signature=xyz&format=xml"
        )

        result = redact_oauth_params(url)

        assert "abc" not in result
        assert "xyz" not in result
        assert f"oauth_token={REDACTED_VALUE}" in result
        assert "format=xml" in result

    def test_leaves_plain_urls_unchanged(self) -> None:
        """Test URLs without credentials are returned as is."""
        url = "https://fantasysports.yahooapis.com/fantasy/v2/league/223.l.431;week=2"

        assert redact_oauth_params(url) == url

    def test_keeps_non_secret_oauth_params(self) -> None:
        """Test that signature method and version stay visible."""
        url = "http://example.com/?oauth_signature_method=HMAC-SHA1&oauth_version=1.0"

        assert redact_oauth_params(url) == url
