"""SMTP notifier (aiosmtplib).

Responsibility:
- Check the recipient against a minimal address pattern.
- Build transport options from `SmtpConfig` (implicit TLS on 465, optional login).
- Send one plain-text message and log its Message-ID, or log the failure.

Nothing here raises on delivery problems; callers read the `StepOutcome`.
"""

from __future__ import annotations

import logging
from email.message import EmailMessage as MimeMessage
from email.utils import make_msgid
from typing import Any, Awaitable, Callable

import aiosmtplib

from core.domain.models import EmailMessage, SmtpConfig, StepOutcome
from core.domain.validation import is_valid_recipient
from core.errors import MailError


logger = logging.getLogger(__name__)

STEP_NAME = "notify"

SendFunc = Callable[..., Awaitable[Any]]


def build_transport_options(config: SmtpConfig) -> dict[str, Any]:
    """Keyword arguments for `aiosmtplib.send`."""

    options: dict[str, Any] = {
        "hostname": config.host,
        "port": config.port,
        "use_tls": config.use_tls,
    }
    if config.has_credentials:
        options["username"] = config.user
        options["password"] = config.password
    return options


def build_mime_message(message: EmailMessage, *, sender: str) -> MimeMessage:
    mime = MimeMessage()
    mime["From"] = sender
    mime["To"] = message.recipient
    mime["Subject"] = message.subject
    domain = sender.rpartition("@")[2] if "@" in sender else None
    mime["Message-ID"] = make_msgid(domain=domain)
    mime.set_content(message.body)
    return mime


class EmailNotifier:
    """Sends the administrator notification."""

    def __init__(self, config: SmtpConfig, *, send: SendFunc = aiosmtplib.send) -> None:
        self._config = config
        self._send = send

    async def send(self, to: str, subject: str, body: str) -> StepOutcome:
        if not is_valid_recipient(to):
            logger.error("Invalid recipient email address")
            return StepOutcome.failure(STEP_NAME, "Invalid recipient email address")

        message = EmailMessage(recipient=to, subject=subject, body=body)
        try:
            mime = build_mime_message(message, sender=self._config.from_email)
        except ValueError as exc:
            # e.g. a FROM_EMAIL carrying CR/LF.
            error = MailError(f"Invalid message headers: {exc}")
            logger.error("%s", error)
            return StepOutcome.failure(STEP_NAME, error)
        message_id = mime["Message-ID"]

        try:
            await self._send(mime, **build_transport_options(self._config))
        except (aiosmtplib.SMTPException, OSError) as exc:
            error = MailError(f"Error sending email: {exc}")
            logger.error("%s", error)
            return StepOutcome.failure(STEP_NAME, error)

        logger.info("Email sent: %s", message_id or "[info unavailable]")
        return StepOutcome.success(STEP_NAME, detail=message_id)
