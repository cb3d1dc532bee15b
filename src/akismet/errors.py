"""Exception hierarchy for the Akismet client."""

from __future__ import annotations


class AkismetError(Exception):
    """Base exception for all Akismet client errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(AkismetError):
    """API key, blog URL or another client setting is missing or invalid."""


class ValidationError(AkismetError):
    """A comment cannot be serialized into a request body."""


class TransportError(AkismetError):
    """The Akismet service could not be reached.

    Only raised when ``Config.raise_on_transport_error`` is set; by default
    transport failures are logged and reported as a ``False`` result.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        method: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.method = method
