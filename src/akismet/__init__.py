"""akismet: a small client for the Akismet anti-spam service.

Public API:
    - Akismet: Blocking client (verify_key, check_comment, submit_spam, submit_ham)
    - AsyncAkismet: The same operations as coroutines
    - Comment: The content being classified or reported
    - AkismetResult: Decision and diagnostics of a single call
    - Config: Configuration dataclass
"""

from __future__ import annotations

import logging

from akismet.client import Akismet, AsyncAkismet
from akismet.comment import (
    Comment,
    CommentType,
    RecheckReason,
    UserRole,
    date_to_gmt,
)
from akismet.config import Config
from akismet.constants import __version__
from akismet.errors import (
    AkismetError,
    ConfigurationError,
    TransportError,
    ValidationError,
)
from akismet.result import AkismetResult, Outcome

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("akismet").addHandler(logging.NullHandler())

__all__ = [
    "Akismet",
    "AkismetError",
    "AkismetResult",
    "AsyncAkismet",
    "Comment",
    "CommentType",
    "Config",
    "ConfigurationError",
    "Outcome",
    "RecheckReason",
    "TransportError",
    "UserRole",
    "ValidationError",
    "__version__",
    "date_to_gmt",
]
