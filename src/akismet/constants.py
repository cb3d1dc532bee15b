"""Wire-level constants for the Akismet REST API."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("akismet-client")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# ==============================================================================
# Endpoints
# ==============================================================================

API_HOST = "rest.akismet.com"
API_VERSION = "1.1"
# First slot is the "{key}." subdomain prefix, empty for verify-key.
API_ENDPOINT = "https://{prefix}" + API_HOST + "/" + API_VERSION + "/{method}"

VERIFY_KEY = "verify-key"
COMMENT_CHECK = "comment-check"
SUBMIT_SPAM = "submit-spam"
SUBMIT_HAM = "submit-ham"

# ==============================================================================
# Response headers
# ==============================================================================

HEADER_PRO_TIP = "x-akismet-pro-tip"
HEADER_ERROR = "x-akismet-error"
HEADER_DEBUG_HELP = "x-akismet-debug-help"

PRO_TIP_DISCARD = "discard"

# ==============================================================================
# Request defaults
# ==============================================================================

LIBRARY_NAME = "akismet-client"
USER_AGENT = f"{LIBRARY_NAME}/{__version__}"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=utf-8"
DEFAULT_TIMEOUT_S = 10.0

# Leading characters of the API key left readable in logs.
REDACT_VISIBLE_CHARS = 8
