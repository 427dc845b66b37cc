from __future__ import annotations

from email.message import EmailMessage as MimeMessage

import pytest

from core.config import AppSettings
from core.domain.models import StepOutcome


@pytest.fixture
def settings() -> AppSettings:
    """Settings isolated from the host environment and any .env file."""

    return AppSettings(
        _env_file=None,
        api_url="https://api.example.test/get-data",
        db_host="db.example.test",
        db_user="intake",
        db_password="s3cret",
        db_database="intake",
        smtp_host="smtp.example.test",
        smtp_port=587,
        from_email="no-reply@example.test",
    )


class FakeReader:
    def __init__(self, name: str = "Ann Lee", error: Exception | None = None) -> None:
        self.name = name
        self.error = error
        self.calls = 0

    async def read_name(self) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.name


class FakeFetcher:
    def __init__(self, value: str = "42", error: Exception | None = None) -> None:
        self.value = value
        self.error = error
        self.calls = 0

    async def fetch(self) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.value


class FakeWriter:
    def __init__(self, ok: bool = True) -> None:
        self.ok = ok
        self.saved: list[str] = []

    async def save(self, value: str) -> StepOutcome:
        self.saved.append(value)
        if self.ok:
            return StepOutcome.success("persist")
        return StepOutcome.failure("persist", "Error executing query: boom")


class FakeNotifier:
    def __init__(self, ok: bool = True) -> None:
        self.ok = ok
        self.sent: list[tuple[str, str, str]] = []

    async def send(self, to: str, subject: str, body: str) -> StepOutcome:
        self.sent.append((to, subject, body))
        if self.ok:
            return StepOutcome.success("notify", detail="<id@example.test>")
        return StepOutcome.failure("notify", "Error sending email: refused")


class FakeCursor:
    def __init__(self, connection: "FakeConnection") -> None:
        self._connection = connection

    def __enter__(self) -> "FakeCursor":
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None

    def execute(self, query: str, params: tuple[str, str]) -> int:
        if self._connection.execute_error is not None:
            raise self._connection.execute_error
        self._connection.executed.append((query, params))
        return 1


class FakeConnection:
    def __init__(self, execute_error: Exception | None = None) -> None:
        self.execute_error = execute_error
        self.executed: list[tuple[str, tuple[str, str]]] = []
        self.committed = False
        self.closed = False

    def cursor(self) -> FakeCursor:
        return FakeCursor(self)

    def commit(self) -> None:
        self.committed = True

    def close(self) -> None:
        self.closed = True


class FakeConnect:
    def __init__(self, connection: FakeConnection | None = None, error: Exception | None = None) -> None:
        self.connection = connection or FakeConnection()
        self.error = error
        self.kwargs: list[dict[str, object]] = []

    def __call__(self, **kwargs: object) -> FakeConnection:
        self.kwargs.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.connection


class FakeSend:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[tuple[MimeMessage, dict[str, object]]] = []

    async def __call__(self, message: MimeMessage, **kwargs: object) -> tuple[dict, str]:
        self.calls.append((message, kwargs))
        if self.error is not None:
            raise self.error
        return {}, "OK"
