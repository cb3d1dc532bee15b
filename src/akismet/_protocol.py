"""Request building and response mapping shared by the sync and async clients.

Nothing here performs I/O; the clients own the transport.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import unquote_plus

import httpx

from akismet.constants import (
    API_ENDPOINT,
    API_HOST,
    HEADER_DEBUG_HELP,
    HEADER_ERROR,
    HEADER_PRO_TIP,
    PRO_TIP_DISCARD,
    REDACT_VISIBLE_CHARS,
    VERIFY_KEY,
)
from akismet.result import AkismetResult, is_success_body


def build_api_url(api_key: str, method: str) -> httpx.URL | None:
    """Return the endpoint URL for *method*, or None if the key cannot form one.

    verify-key is served from the bare API host; every other method lives on
    the ``{api_key}.`` subdomain.
    """
    if method == VERIFY_KEY:
        return httpx.URL(API_ENDPOINT.format(prefix="", method=method))

    expected_host = f"{api_key}.{API_HOST}".lower()
    try:
        url = httpx.URL(API_ENDPOINT.format(prefix=f"{api_key}.", method=method))
    except httpx.InvalidURL:
        return None
    # Keys containing URL delimiters would silently retarget the request.
    if url.host != expected_host:
        return None
    return url


def build_verify_form(api_key: str, blog: str) -> dict[str, str]:
    """Form fields for verify-key."""
    return {"key": api_key, "blog": blog}


def result_from_response(method: str, response: httpx.Response) -> AkismetResult:
    """Map an HTTP response onto the boolean decision and its diagnostics."""
    pro_tip = response.headers.get(HEADER_PRO_TIP, "")
    trimmed = response.text.strip()
    ok = is_success_body(trimmed)
    return AkismetResult(
        method=method,
        ok=ok,
        outcome="accepted" if ok else "rejected",
        http_status_code=response.status_code,
        response=trimmed,
        pro_tip=pro_tip,
        is_discard=pro_tip.lower() == PRO_TIP_DISCARD,
        error=response.headers.get(HEADER_ERROR, ""),
        debug_help=response.headers.get(HEADER_DEBUG_HELP, ""),
    )


def mask_api_key(api_key: str) -> str:
    """Keep the leading characters of the key and mask the rest with ``x``.

    At most half of a short key stays readable.
    """
    visible = api_key[: min(REDACT_VISIBLE_CHARS, len(api_key) // 2)]
    return visible + "x" * (len(api_key) - len(visible))


class Redactor:
    """Replace every occurrence of the API key in log text with its mask."""

    __slots__ = ("_mask", "_pattern")

    def __init__(self, api_key: str) -> None:
        self._pattern = re.compile(re.escape(api_key), re.IGNORECASE)
        self._mask = mask_api_key(api_key)

    def __call__(self, text: str) -> str:
        return self._pattern.sub(self._mask, text)


class RedactingFilter(logging.Filter):
    """Mask registered API keys in records emitted by any logger it is added to.

    Covers loggers the clients do not format themselves, such as httpx's
    ``HTTP Request: POST https://{key}.rest.akismet.com/...`` line. Tracebacks
    are rendered and redacted into ``exc_text`` so handlers print the masked
    text instead of re-rendering the exception.
    """

    def __init__(self) -> None:
        super().__init__()
        self._redactors: dict[str, Redactor] = {}
        self._formatter = logging.Formatter()

    def register(self, api_key: str) -> None:
        if api_key:
            self._redactors.setdefault(api_key.lower(), Redactor(api_key))

    def redact(self, text: str) -> str:
        for redactor in self._redactors.values():
            text = redactor(text)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        if not self._redactors:
            return True
        message = record.getMessage()
        redacted = self.redact(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        if record.exc_info and not record.exc_text:
            record.exc_text = self.redact(
                self._formatter.formatException(record.exc_info)
            )
        return True


def _format_headers(headers: httpx.Headers) -> str:
    return "\n".join(f"{name}: {value}" for name, value in headers.items())


def format_request(request: httpx.Request) -> str:
    """Render an outgoing request as a multi-line log message."""
    body = unquote_plus(request.content.decode("utf-8", errors="replace"))
    return (
        f"--> {request.method} {request.url}\n"
        f"{_format_headers(request.headers)}\n\n{body}\n--> END {request.method}"
    )


def format_response(response: httpx.Response) -> str:
    """Render a (fully read) response as a multi-line log message."""
    return (
        f"<-- {response.status_code} {response.reason_phrase} {response.url}\n"
        f"{_format_headers(response.headers)}\n\n{response.text}\n<-- END HTTP"
    )
