from __future__ import annotations

import io

import httpx
import pytest
from rich.console import Console
from typer.testing import CliRunner

from adapters.db_writer import INSERT_QUERY, PersistenceWriter
from adapters.mailer import EmailNotifier
from adapters.remote_fetcher import RemoteFetcher
from adapters.terminal_prompt import TerminalPrompt
from cli import doctor as cli_doctor
from cli import main as cli_main
from core.config import AppSettings, load_settings
from core.services.intake_workflow import IntakeCollaborators
from tests.conftest import FakeConnect, FakeFetcher, FakeNotifier, FakeReader, FakeSend, FakeWriter

runner = CliRunner()


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_main, "configure_logging", lambda *args, **kwargs: None)


@pytest.fixture
def use_settings(monkeypatch: pytest.MonkeyPatch, settings: AppSettings) -> AppSettings:
    monkeypatch.setattr(cli_main, "load_settings", lambda: settings)
    return settings


class RealStack:
    """Production adapters with only the network, database and SMTP edges faked."""

    def __init__(self, settings: AppSettings, handler) -> None:
        self.connect = FakeConnect()
        self.send = FakeSend()
        self.collaborators = IntakeCollaborators(
            reader=TerminalPrompt(Console(file=io.StringIO())),
            fetcher=RemoteFetcher(settings, transport=httpx.MockTransport(handler)),
            writer=PersistenceWriter(settings.database_config(), connect=self.connect),
            notifier=EmailNotifier(settings.smtp_config(), send=self.send),
        )


def _install(monkeypatch: pytest.MonkeyPatch, collaborators: IntakeCollaborators) -> None:
    monkeypatch.setattr(cli_main, "build_collaborators", lambda settings, console: collaborators)


def _serve_value(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"value": "42"})


def _refuse(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


def test_full_run_exits_zero(monkeypatch: pytest.MonkeyPatch, use_settings: AppSettings) -> None:
    monkeypatch.setattr("builtins.input", lambda *args: "Ann Lee")
    stack = RealStack(use_settings, _serve_value)
    _install(monkeypatch, stack.collaborators)

    result = runner.invoke(cli_main.app, ["--no-banner"])

    assert result.exit_code == 0, result.output
    assert stack.connect.connection.executed == [(INSERT_QUERY, ("42", "Another Value"))]
    assert stack.connect.connection.closed
    assert len(stack.send.calls) == 1
    message, _ = stack.send.calls[0]
    assert message["To"] == "admin@example.com"
    assert message["Subject"] == "User Input"
    assert message.get_content().strip() == "Ann Lee"


def test_transport_error_exits_one_without_side_effects(
    monkeypatch: pytest.MonkeyPatch, use_settings: AppSettings
) -> None:
    monkeypatch.setattr("builtins.input", lambda *args: "Ann Lee")
    stack = RealStack(use_settings, _refuse)
    _install(monkeypatch, stack.collaborators)

    result = runner.invoke(cli_main.app, ["--no-banner"])

    assert result.exit_code == 1
    assert "Error: Request to API failed" in result.output
    assert stack.connect.kwargs == []
    assert stack.send.calls == []


def test_best_effort_failures_keep_exit_zero(monkeypatch: pytest.MonkeyPatch, use_settings: AppSettings) -> None:
    _install(
        monkeypatch,
        IntakeCollaborators(
            reader=FakeReader(),
            fetcher=FakeFetcher(),
            writer=FakeWriter(ok=False),
            notifier=FakeNotifier(ok=False),
        ),
    )

    result = runner.invoke(cli_main.app, ["--no-banner"])

    assert result.exit_code == 0, result.output


def test_insecure_api_url_exits_one(monkeypatch: pytest.MonkeyPatch, settings: AppSettings) -> None:
    insecure = settings.model_copy(update={"api_url": "http://api.example.test/get-data"})
    monkeypatch.setattr(cli_main, "load_settings", lambda: insecure)
    monkeypatch.setattr("builtins.input", lambda *args: "Ann Lee")
    stack = RealStack(insecure, _serve_value)
    _install(monkeypatch, stack.collaborators)

    result = runner.invoke(cli_main.app, ["--no-banner"])

    assert result.exit_code == 1
    assert "Insecure protocol" in result.output
    assert stack.connect.kwargs == []


def test_invalid_setting_prints_one_error_line(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SMTP_PORT", "abc")
    monkeypatch.setattr(cli_main, "load_settings", lambda: load_settings(_env_file=None))

    result = runner.invoke(cli_main.app, ["--no-banner"])

    assert result.exit_code == 1
    assert "Error: Invalid configuration: SMTP_PORT" in result.output
    assert "Traceback" not in result.output
    assert isinstance(result.exception, SystemExit)


def test_doctor_reports_invalid_setting(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SMTP_PORT", "abc")
    isolated = lambda: load_settings(_env_file=None)  # noqa: E731
    monkeypatch.setattr(cli_main, "load_settings", isolated)
    monkeypatch.setattr(cli_doctor, "load_settings", isolated)

    result = runner.invoke(cli_main.app, ["doctor", "run", "--offline"])

    assert result.exit_code == 1
    assert "SMTP_PORT" in result.output
    assert isinstance(result.exception, SystemExit)
