"""Redaction utilities for logging signed requests."""

import re


# Headers that must never appear in logs
SENSITIVE_HEADERS = frozenset(
    {
        "authorization",
        "cookie",
        "proxy-authorization",
        "set-cookie",
    }
)

REDACTED_VALUE = "[REDACTED]"

_OAUTH_PARAM_PATTERN = re.compile(
    r"(?P<key>oauth_(?:token|signature|consumer_key|nonce|session_handle))=[^&;]*"
)


def redact_headers(headers: dict[str, str]) -> dict[str, str]:
    """Redact sensitive headers for logging.

    Args:
        headers: Original headers dictionary.

    Returns:
        New dictionary with sensitive values redacted.
    """
    return {
        key: REDACTED_VALUE if key.lower() in SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }


def redact_oauth_params(url: str) -> str:
    """Redact OAuth credentials carried as URL parameters.

    Args:
        url: URL that may contain ``oauth_*`` parameters.

    Returns:
        URL with credential values replaced.
    """
    return _OAUTH_PARAM_PATTERN.sub(rf"\g<key>={REDACTED_VALUE}", url)
