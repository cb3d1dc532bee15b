"""Akismet REST clients.

``Akismet`` issues blocking requests; ``AsyncAkismet`` exposes the same
operations as coroutines. Both route every method through a single
``execute_method`` path that builds the endpoint URL, posts the form and maps
the reply onto an :class:`~akismet.result.AkismetResult`.

Each instance keeps the result of its most recent call in ``last_result`` and
mirrors it through the ``http_status_code``/``pro_tip``/... properties. When
one instance is shared between threads or tasks, use the result returned by
``execute_method`` instead; "last" is whichever call finished most recently.
"""

from __future__ import annotations

from dataclasses import replace
import logging
from typing import TYPE_CHECKING, Any

import httpx

from akismet._protocol import (
    RedactingFilter,
    Redactor,
    build_api_url,
    build_verify_form,
    format_request,
    format_response,
    result_from_response,
)
from akismet.comment import date_to_gmt
from akismet.config import Config, require_blog
from akismet.constants import (
    COMMENT_CHECK,
    FORM_CONTENT_TYPE,
    SUBMIT_HAM,
    SUBMIT_SPAM,
    USER_AGENT,
    VERIFY_KEY,
)
from akismet.errors import TransportError
from akismet.result import AkismetResult

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

    from akismet.comment import Comment

log = logging.getLogger(__name__)

# httpx logs request URLs, which carry the key in the host name.
_REDACTED_LOGGERS = (
    __name__,
    "httpx",
    "httpcore.connection",
    "httpcore.http11",
    "httpcore.http2",
    "httpcore.proxy",
    "httpcore.socks",
)
_key_filter = RedactingFilter()
for _name in _REDACTED_LOGGERS:
    logging.getLogger(_name).addFilter(_key_filter)


class _BaseAkismet:
    """State and helpers shared by the sync and async clients."""

    date_to_gmt = staticmethod(date_to_gmt)

    def __init__(
        self,
        api_key: str | None = None,
        blog: str | None = None,
        *,
        config: Config | None = None,
    ) -> None:
        if config is None:
            config = Config(api_key=api_key, blog=blog)
        else:
            overrides: dict[str, Any] = {}
            if api_key is not None:
                overrides["api_key"] = api_key
            if blog is not None:
                overrides["blog"] = blog
            if overrides:
                config = replace(config, **overrides)

        self.config = config
        self._api_key: str = config.api_key or ""
        self._blog: str = config.blog or ""
        self._is_verified_key = False
        self.last_result: AkismetResult | None = None
        self._redact = Redactor(self._api_key)
        _key_filter.register(self._api_key)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(blog={self._blog!r})"

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def blog(self) -> str:
        """The site URL registered with Akismet."""
        return self._blog

    @blog.setter
    def blog(self, value: str) -> None:
        self._blog = require_blog(value)

    @property
    def is_verified_key(self) -> bool:
        """Whether the last ``verify_key()`` call accepted the key."""
        return self._is_verified_key

    # --- Diagnostics of the last call ---
    # A rejected result is falsy, so compare against None explicitly.

    @property
    def http_status_code(self) -> int:
        result = self.last_result
        return 0 if result is None else result.http_status_code

    @property
    def response(self) -> str:
        """Trimmed body of the last response, e.g. ``true`` or ``invalid``."""
        if self.last_result is None or self.last_result.response is None:
            return ""
        return self.last_result.response

    @property
    def pro_tip(self) -> str:
        result = self.last_result
        return "" if result is None else result.pro_tip

    @property
    def is_discard(self) -> bool:
        """True when Akismet flagged the last comment as blatant spam.

        Such comments can be dropped without being kept in a spam queue.
        """
        result = self.last_result
        return False if result is None else result.is_discard

    @property
    def error(self) -> str:
        result = self.last_result
        return "" if result is None else result.error

    @property
    def debug_help(self) -> str:
        result = self.last_result
        return "" if result is None else result.debug_help

    # --- Request plumbing ---

    def _default_headers(self) -> dict[str, str]:
        return {"User-Agent": USER_AGENT, "Content-Type": FORM_CONTENT_TYPE}

    def _comment_form(self, comment: Comment) -> dict[str, str]:
        return comment.to_form(self._blog)

    def _verify_form(self) -> dict[str, str]:
        return build_verify_form(self._api_key, self._blog)

    def _resolve_url(self, method: str) -> httpx.URL | None:
        url = build_api_url(self._api_key, method)
        if url is None:
            log.error(
                "Invalid API end point URL for %s. The API key is likely invalid.",
                method,
            )
        return url

    def _record(self, result: AkismetResult) -> AkismetResult:
        self.last_result = result
        return result

    def _transport_failure(self, method: str, exc: httpx.RequestError) -> AkismetResult:
        detail = self._redact(f"{type(exc).__name__}: {exc}")
        log.error(
            "An IO error occurred while communicating with the Akismet service (%s): %s",
            method,
            detail,
            exc_info=exc,
        )
        result = self._record(
            AkismetResult.no_response(method, "transport_error", transport_error=detail)
        )
        if self.config.raise_on_transport_error:
            raise TransportError(
                f"Akismet {method} failed: {detail}",
                hint="Check network connectivity to rest.akismet.com.",
                method=method,
            ) from exc
        return result

    def _log_request(self, request: httpx.Request) -> None:
        if log.isEnabledFor(logging.DEBUG):
            log.debug("%s", self._redact(format_request(request)))

    def _log_read_response(self, response: httpx.Response) -> None:
        log.debug("%s", self._redact(format_response(response)))


class Akismet(_BaseAkismet):
    """Blocking client for the Akismet anti-spam service.

    Example:
        with Akismet("123YourAPIKey", "https://example.com") as akismet:
            if akismet.verify_key() and akismet.check_comment(comment):
                print("spam")
    """

    def __init__(
        self,
        api_key: str | None = None,
        blog: str | None = None,
        *,
        config: Config | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(api_key, blog, config=config)
        self._client = httpx.Client(
            headers=self._default_headers(),
            timeout=self.config.timeout_s,
            transport=transport,
            event_hooks={
                "request": [self._log_request],
                "response": [self._log_response],
            },
        )

    def __enter__(self) -> Akismet:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Release pooled connections."""
        self._client.close()

    def verify_key(self) -> bool:
        """Check that the API key and blog URL are registered with Akismet."""
        result = self.execute_method(VERIFY_KEY, self._verify_form())
        self._is_verified_key = result.ok
        return result.ok

    def check_comment(self, comment: Comment) -> bool:
        """Return True when Akismet classifies *comment* as spam."""
        return self.execute_method(COMMENT_CHECK, self._comment_form(comment)).ok

    def submit_spam(self, comment: Comment) -> bool:
        """Report spam that comment-check missed."""
        return self.execute_method(SUBMIT_SPAM, self._comment_form(comment)).ok

    def submit_ham(self, comment: Comment) -> bool:
        """Report a legitimate comment that was flagged as spam."""
        return self.execute_method(SUBMIT_HAM, self._comment_form(comment)).ok

    def execute_method(self, method: str, form: Mapping[str, str]) -> AkismetResult:
        """POST *form* to the Akismet REST *method* and interpret the reply.

        Network failures yield a failed result (or TransportError when
        configured); nothing is retried.
        """
        url = self._resolve_url(method)
        if url is None:
            return self._record(AkismetResult.no_response(method, "invalid_endpoint"))
        try:
            response = self._client.post(url, data=dict(form))
        except httpx.RequestError as exc:
            return self._transport_failure(method, exc)
        return self._record(result_from_response(method, response))

    def _log_response(self, response: httpx.Response) -> None:
        if log.isEnabledFor(logging.DEBUG):
            response.read()
            self._log_read_response(response)


class AsyncAkismet(_BaseAkismet):
    """Asyncio client for the Akismet anti-spam service.

    Example:
        async with AsyncAkismet("123YourAPIKey", "https://example.com") as akismet:
            is_spam = await akismet.check_comment(comment)
    """

    def __init__(
        self,
        api_key: str | None = None,
        blog: str | None = None,
        *,
        config: Config | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(api_key, blog, config=config)
        self._client = httpx.AsyncClient(
            headers=self._default_headers(),
            timeout=self.config.timeout_s,
            transport=transport,
            event_hooks={
                "request": [self._alog_request],
                "response": [self._alog_response],
            },
        )

    async def __aenter__(self) -> AsyncAkismet:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release pooled connections."""
        await self._client.aclose()

    async def verify_key(self) -> bool:
        """Check that the API key and blog URL are registered with Akismet."""
        result = await self.execute_method(VERIFY_KEY, self._verify_form())
        self._is_verified_key = result.ok
        return result.ok

    async def check_comment(self, comment: Comment) -> bool:
        """Return True when Akismet classifies *comment* as spam."""
        result = await self.execute_method(COMMENT_CHECK, self._comment_form(comment))
        return result.ok

    async def submit_spam(self, comment: Comment) -> bool:
        """Report spam that comment-check missed."""
        result = await self.execute_method(SUBMIT_SPAM, self._comment_form(comment))
        return result.ok

    async def submit_ham(self, comment: Comment) -> bool:
        """Report a legitimate comment that was flagged as spam."""
        result = await self.execute_method(SUBMIT_HAM, self._comment_form(comment))
        return result.ok

    async def execute_method(
        self, method: str, form: Mapping[str, str]
    ) -> AkismetResult:
        """POST *form* to the Akismet REST *method* and interpret the reply."""
        url = self._resolve_url(method)
        if url is None:
            return self._record(AkismetResult.no_response(method, "invalid_endpoint"))
        try:
            response = await self._client.post(url, data=dict(form))
        except httpx.RequestError as exc:
            return self._transport_failure(method, exc)
        return self._record(result_from_response(method, response))

    async def _alog_request(self, request: httpx.Request) -> None:
        self._log_request(request)

    async def _alog_response(self, response: httpx.Response) -> None:
        if log.isEnabledFor(logging.DEBUG):
            await response.aread()
            self._log_read_response(response)
