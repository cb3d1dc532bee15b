"""Configuration: frozen Config with environment-resolved credentials."""

from __future__ import annotations

from dataclasses import dataclass
import os

from dotenv import load_dotenv

from akismet.constants import DEFAULT_TIMEOUT_S
from akismet.errors import ConfigurationError

load_dotenv()

API_KEY_ENV_VAR = "AKISMET_API_KEY"
BLOG_ENV_VAR = "AKISMET_BLOG"


def require_blog(value: str) -> str:
    """Return *value* unchanged, or raise if it is blank."""
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(
            "A blog URL must be specified",
            hint=f"Pass blog='https://example.com' or set {BLOG_ENV_VAR}.",
        )
    return value


@dataclass(frozen=True)
class Config:
    """Immutable configuration for an Akismet client.

    The API key and blog URL are auto-resolved from ``AKISMET_API_KEY`` and
    ``AKISMET_BLOG`` when not passed explicitly.

    Example:
        config = Config(api_key="123YourAPIKey", blog="https://example.com")
    """

    #: Auto-resolved from ``AKISMET_API_KEY`` when *None*.
    api_key: str | None = None
    #: Auto-resolved from ``AKISMET_BLOG`` when *None*; may stay unset.
    blog: str | None = None
    timeout_s: float = DEFAULT_TIMEOUT_S
    #: Raise TransportError instead of returning False on network failures.
    raise_on_transport_error: bool = False

    def __post_init__(self) -> None:
        """Auto-resolve credentials and validate configuration."""
        if self.api_key is None:
            object.__setattr__(self, "api_key", os.environ.get(API_KEY_ENV_VAR))
        if self.blog is None:
            env_blog = os.environ.get(BLOG_ENV_VAR)
            if env_blog:
                object.__setattr__(self, "blog", env_blog)

        if not self.api_key or not self.api_key.strip():
            raise ConfigurationError(
                "An Akismet API key must be specified",
                hint=f"Set {API_KEY_ENV_VAR} environment variable or pass api_key=...",
            )
        if self.blog is not None:
            require_blog(self.blog)
        if self.timeout_s <= 0:
            raise ConfigurationError(
                f"timeout_s must be > 0, got {self.timeout_s}",
                hint="This bounds every request to the Akismet service.",
            )

    def __str__(self) -> str:
        """Return a redacted, developer-friendly representation."""
        return (
            f"Config(api_key={'[REDACTED]' if self.api_key else None}, "
            f"blog={self.blog!r}, timeout_s={self.timeout_s}, "
            f"raise_on_transport_error={self.raise_on_transport_error})"
        )

    __repr__ = __str__
