"""Constants for the signed fetch layer.

Centralizes upstream endpoints, error markers and defaults.
"""

YAHOO_BASE_URL = "https://fantasysports.yahooapis.com/fantasy/v2"

# Substring of a signing error raised when the credential is transiently
# rejected; the request is retried.
RETRYABLE_CREDENTIAL_MARKER = "consumer_key_unknown"

# Substring of a signing error raised when the user may not view the resource.
ACCESS_DENIED_MARKER = "You are not allowed to view this page"

# Total attempts per request, including the first one
DEFAULT_MAX_ATTEMPTS = 5

DEFAULT_TIMEOUT_SECONDS = 30.0

DEFAULT_USER_AGENT = "fantasy-client/0.1"

DEFAULT_CACHE_CAPACITY = 100

DEFAULT_CACHE_TTL_SECONDS = 60 * 60

HTTP_STATUS_OK_MIN = 200
HTTP_STATUS_OK_MAX = 300

# OAuth 1 signing refuses plain http except against a loopback port
SIGNABLE_URL_PREFIXES = ("https://", "http://localhost:", "http://127.0.0.1:")
