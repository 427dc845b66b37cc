"""Error taxonomy for the intake workflow.

Prompt and fetch errors propagate up to the CLI, which turns them into a
non-zero exit. `DriverError` and `MailError` are only ever logged and
reported through a `StepOutcome`.
"""

from __future__ import annotations

from enum import Enum


class IntakeError(Exception):
    """Base class for every error raised by the workflow."""


class ValidationReason(str, Enum):
    EMPTY = "empty"
    TOO_LONG = "too_long"
    INVALID_CHARACTERS = "invalid_characters"


_REASON_MESSAGES: dict[ValidationReason, str] = {
    ValidationReason.EMPTY: "Name cannot be empty",
    ValidationReason.TOO_LONG: "Name too long",
    ValidationReason.INVALID_CHARACTERS: "Name contains invalid characters",
}


class ValidationError(IntakeError):
    """A user-supplied name broke one of the input rules."""

    def __init__(self, reason: ValidationReason, message: str | None = None) -> None:
        self.reason = reason
        super().__init__(message or _REASON_MESSAGES[reason])


class ConfigError(IntakeError):
    """Configuration is unusable (e.g. malformed or non-https API_URL)."""


class TransportError(IntakeError):
    """Network failure: connection refused, TLS failure, timeout."""


class ParseError(IntakeError):
    """The API body is not valid JSON."""


class ShapeError(IntakeError):
    """The API body is JSON, but not a bounded string or `{"value": str}`."""


class DriverError(IntakeError):
    """Database driver failure."""


class MailError(IntakeError):
    """SMTP failure."""
