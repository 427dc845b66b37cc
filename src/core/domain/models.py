"""Domain models (Pydantic v2).

These models describe *what* moves through the intake workflow, not *how* it
is read, fetched, stored or sent. Each value is built once, used once, and
discarded.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


MAX_NAME_LENGTH = 100
MAX_VALUE_LENGTH = 2000

TABLE_NAME = "mytable"
SECOND_COLUMN_VALUE = "Another Value"


class DatabaseConfig(BaseModel):
    """Connection parameters for the persistence writer."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(..., min_length=1)
    user: str = Field(..., min_length=1)
    password: str = Field(default="", repr=False)
    database: str = Field(..., min_length=1)


class SmtpConfig(BaseModel):
    """Transport options for the notifier."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(..., min_length=1)
    port: int = Field(default=587, ge=1, le=65535)
    user: str | None = Field(default=None)
    password: str | None = Field(default=None, repr=False)
    from_email: str = Field(default="no-reply@example.com")

    @property
    def use_tls(self) -> bool:
        """Implicit TLS on the SMTP-over-TLS submission port."""

        return self.port == 465

    @property
    def has_credentials(self) -> bool:
        return bool(self.user and self.password)


class DatabaseRow(BaseModel):
    """The single row written per run."""

    model_config = ConfigDict(frozen=True)

    column1: str = Field(
        ...,
        min_length=1,
        max_length=MAX_VALUE_LENGTH,
        description="Value fetched from the remote API.",
    )
    column2: str = Field(
        default=SECOND_COLUMN_VALUE,
        description="Fixed literal.",
    )

    def as_params(self) -> tuple[str, str]:
        return (self.column1, self.column2)


class EmailMessage(BaseModel):
    """Plain-text notification sent to the administrator."""

    model_config = ConfigDict(frozen=True)

    recipient: str = Field(..., description="Destination address (validated by the notifier).")
    subject: str = Field(..., min_length=1, max_length=998)
    body: str = Field(default="", description="Plain-text body (the collected name).")


class StepOutcome(BaseModel):
    """Result of a best-effort side effect (persistence or notification).

    The components producing it log their own failures and never raise; the
    outcome lets callers inspect what happened anyway.
    """

    step: str = Field(..., min_length=1)
    ok: bool = Field(default=False)
    detail: str | None = Field(
        default=None,
        description="Success detail (e.g. message id).",
    )
    error: str | None = Field(
        default=None,
        description="Error message when `ok` is false.",
    )

    @classmethod
    def success(cls, step: str, detail: str | None = None) -> "StepOutcome":
        return cls(step=step, ok=True, detail=detail)

    @classmethod
    def failure(cls, step: str, error: object) -> "StepOutcome":
        return cls(step=step, ok=False, error=str(error))
