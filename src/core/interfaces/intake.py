"""Contracts for the four workflow collaborators.

Protocols keep the orchestrator structural: tests hand it plain fakes, the CLI
hands it the real adapters.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import StepOutcome


@runtime_checkable
class NameReader(Protocol):
    async def read_name(self) -> str:
        """Return a validated user name or raise `ValidationError`."""

        ...


@runtime_checkable
class DataFetcher(Protocol):
    async def fetch(self) -> str:
        """Return the validated remote value or raise an `IntakeError`."""

        ...


@runtime_checkable
class RowWriter(Protocol):
    """Best-effort persistence: failures are reported, never raised."""

    async def save(self, value: str) -> StepOutcome:
        ...


@runtime_checkable
class Notifier(Protocol):
    """Best-effort notification: failures are reported, never raised."""

    async def send(self, to: str, subject: str, body: str) -> StepOutcome:
        ...
