"""Exception hierarchy for nextpipe.

Value-level failures travel as ``Failure`` results. The exceptions here are
reserved for misuse of the library itself: a callback that returned
something other than a result, or configuration that failed validation.
"""

from __future__ import annotations

from typing import Any


class NextPipeError(Exception):
    """Base exception for all nextpipe errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def __str__(self) -> str:
        """Return the message with the hint appended when present."""
        msg = super().__str__()
        return f"{msg}. {self.hint}" if self.hint else msg


class InvalidResultError(NextPipeError):
    """A combinator received or produced a value that is not a Result."""

    def __init__(
        self,
        message: str,
        *,
        combinator: str,
        value: Any,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.combinator = combinator
        self.value = value


class ConfigurationError(NextPipeError):
    """Configuration validation or resolution failed."""


# --- Actionable Hints ---

HINTS = {
    "wrap_result": "Return Success(value) or Failure(error) from the step",
    "bare_on_error": "Pass a Success or Failure; wrap bare values with ok(value) first",
    "invalid_env": "Use 1/true/yes/on or 0/false/no/off for NEXTPIPE_* flags",
}
