"""Intake workflow orchestration.

Sequence: prompt for a name, fetch the remote value, persist it, notify the
administrator. The steps are awaited strictly one after another.

Failure policy:
- PROMPTING and FETCHING errors propagate to the caller unchanged; nothing is
  persisted or sent.
- PERSISTING and NOTIFYING are best-effort. Their components log failures and
  return a `StepOutcome`; the sequence always reaches DONE.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from core.domain.models import StepOutcome
from core.interfaces.intake import DataFetcher, NameReader, Notifier, RowWriter


logger = logging.getLogger(__name__)

ADMIN_EMAIL = "admin@example.com"
NOTIFICATION_SUBJECT = "User Input"


class Stage(str, Enum):
    PROMPTING = "prompting"
    FETCHING = "fetching"
    PERSISTING = "persisting"
    NOTIFYING = "notifying"
    DONE = "done"


@dataclass
class IntakeCollaborators:
    """The four I/O components the workflow sequences."""

    reader: NameReader
    fetcher: DataFetcher
    writer: RowWriter
    notifier: Notifier


@dataclass
class WorkflowHooks:
    """Optional callbacks for UI layers."""

    stage_changed: Callable[[Stage], None] | None = None


@dataclass
class IntakeResult:
    """Output of a completed run."""

    name: str
    value: str
    persisted: StepOutcome
    notified: StepOutcome
    stage: Stage = Stage.DONE

    @property
    def fully_succeeded(self) -> bool:
        return self.persisted.ok and self.notified.ok


async def run_intake(
    collaborators: IntakeCollaborators,
    *,
    recipient: str = ADMIN_EMAIL,
    subject: str = NOTIFICATION_SUBJECT,
    hooks: WorkflowHooks | None = None,
) -> IntakeResult:
    hooks = hooks or WorkflowHooks()

    def enter(stage: Stage) -> None:
        logger.debug("Stage -> %s", stage.value)
        if hooks.stage_changed is not None:
            hooks.stage_changed(stage)

    enter(Stage.PROMPTING)
    name = await collaborators.reader.read_name()

    enter(Stage.FETCHING)
    value = await collaborators.fetcher.fetch()

    enter(Stage.PERSISTING)
    persisted = await collaborators.writer.save(value)

    enter(Stage.NOTIFYING)
    notified = await collaborators.notifier.send(recipient, subject, name)

    enter(Stage.DONE)
    return IntakeResult(name=name, value=value, persisted=persisted, notified=notified)
