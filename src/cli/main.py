"""intake-notify CLI (typer).

Running the program without a subcommand executes the intake workflow:
prompt → fetch → persist → notify. Exit status is 1 when prompting or fetching
fails, 0 otherwise.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import typer
from rich.console import Console

from adapters.db_writer import PersistenceWriter
from adapters.mailer import EmailNotifier
from adapters.remote_fetcher import RemoteFetcher
from adapters.terminal_prompt import TerminalPrompt
from cli.doctor import app as doctor_app
from cli.ui_components import build_summary_table, print_banner
from core.config import AppSettings, load_settings
from core.errors import ConfigError, IntakeError
from core.logging_setup import configure_logging
from core.services.intake_workflow import (
    IntakeCollaborators,
    Stage,
    WorkflowHooks,
    run_intake,
)

app = typer.Typer(
    help="Collect a name, fetch remote data, store it and notify the administrator.",
    add_completion=False,
)
app.add_typer(doctor_app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def build_collaborators(settings: AppSettings, console: Console) -> IntakeCollaborators:
    return IntakeCollaborators(
        reader=TerminalPrompt(console),
        fetcher=RemoteFetcher(settings),
        writer=PersistenceWriter(settings.database_config()),
        notifier=EmailNotifier(settings.smtp_config()),
    )


def _print_stage(stage: Stage) -> None:
    if stage in (Stage.FETCHING, Stage.PERSISTING, Stage.NOTIFYING):
        _console.print(f"[dim]» {stage.value}…[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL.",
    ),
    no_banner: bool = typer.Option(False, "--no-banner", help="Do not print the banner."),
) -> None:
    settings: AppSettings | None = None
    try:
        settings = load_settings()
    except ConfigError as exc:
        # `doctor` reports configuration problems itself.
        if ctx.invoked_subcommand is None:
            _err_console.print(f"Error: {exc}", markup=False, highlight=False)
            raise typer.Exit(code=1) from exc

    try:
        configure_logging(log_level or (settings.log_level if settings else "INFO"))
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc

    if ctx.invoked_subcommand is not None:
        return

    if not no_banner:
        print_banner(_console)

    collaborators = build_collaborators(settings, _console)
    try:
        result = asyncio.run(
            run_intake(collaborators, hooks=WorkflowHooks(stage_changed=_print_stage))
        )
    except IntakeError as exc:
        _err_console.print(f"Error: {exc}", markup=False, highlight=False)
        raise typer.Exit(code=1) from exc

    _console.print(build_summary_table(result))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
