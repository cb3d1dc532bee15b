"""Per-call result of an Akismet REST method."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

#: ``accepted``/``rejected`` come from the service; the other two mean no
#: verdict was received.
Outcome = Literal["accepted", "rejected", "transport_error", "invalid_endpoint"]


def is_success_body(body: str | None) -> bool:
    """Return True when a trimmed response body is one of the success tokens.

    ``valid`` (verify-key), ``true`` (comment-check) and ``Thanks...``
    (submit-spam/ham) are accepted interchangeably for every method.
    """
    if not body:
        return False
    lowered = body.lower()
    return lowered in ("true", "valid") or lowered.startswith("thanks")


@dataclass(frozen=True)
class AkismetResult:
    """Decision and diagnostics from a single Akismet call.

    ``bool(result)`` is the historical boolean answer, so a result can be used
    wherever the plain ``True``/``False`` was.
    """

    method: str
    ok: bool
    outcome: Outcome
    #: 0 when no HTTP response was received.
    http_status_code: int = 0
    #: Trimmed body text; None when no response was received.
    response: str | None = None
    pro_tip: str = ""
    is_discard: bool = False
    error: str = ""
    debug_help: str = ""
    #: Description of the network failure for ``transport_error`` outcomes.
    transport_error: str | None = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def no_response(
        cls, method: str, outcome: Outcome, *, transport_error: str | None = None
    ) -> AkismetResult:
        """Build a failed result for a call that never got an HTTP response."""
        return cls(
            method=method,
            ok=False,
            outcome=outcome,
            transport_error=transport_error,
        )
