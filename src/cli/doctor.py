"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from adapters.remote_fetcher import resolve_api_url
from core.config import AppSettings, load_settings, write_user_env_vars
from core.domain.validation import is_valid_recipient
from core.errors import ConfigError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or exc.__class__.__name__


def _new_table() -> Table:
    table = Table(title="intake-notify Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table


def build_doctor_table(settings: AppSettings, *, check_network: bool = True) -> Table:
    table = _new_table()

    # API
    api_ok = False
    try:
        url = resolve_api_url(settings.api_url)
        api_ok = True
        table.add_row("API_URL", "OK", url)
    except ConfigError as exc:
        table.add_row("API_URL", "FAIL", str(exc))

    if check_network and api_ok:
        ok_http, detail_http = asyncio.run(_check_http(settings.api_url, settings))
        table.add_row("API connectivity", "OK" if ok_http else "FAIL", detail_http)

    # Database
    db = settings.database_config()
    table.add_row("Database", "OK", f"{db.user}@{db.host}/{db.database}")
    placeholders = settings.placeholder_fields()
    if placeholders:
        names = ", ".join(name.upper() for name in placeholders)
        table.add_row("DB credentials", "WARN", f"Built-in placeholder in use: {names}")
    else:
        table.add_row("DB credentials", "OK", "Provided by environment")

    # SMTP
    smtp = settings.smtp_config()
    mode = "implicit TLS" if smtp.use_tls else "STARTTLS when offered"
    table.add_row("SMTP transport", "OK", f"{smtp.host}:{smtp.port} ({mode})")
    if smtp.has_credentials:
        table.add_row("SMTP auth", "OK", f"login as {smtp.user}")
    else:
        table.add_row("SMTP auth", "OPTIONAL", "SMTP_USER/SMTP_PASS not both set -> no login")
    if is_valid_recipient(smtp.from_email):
        table.add_row("FROM_EMAIL", "OK", smtp.from_email)
    else:
        table.add_row("FROM_EMAIL", "FAIL", f"Not an email address: {smtp.from_email}")

    return table


@app.command()
def run(
    offline: bool = typer.Option(False, "--offline", help="Skip the API connectivity check."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    try:
        settings = load_settings()
    except ConfigError as exc:
        table = _new_table()
        table.add_row("Configuration", "FAIL", str(exc))
        _console.print(table)
        raise typer.Exit(code=1) from exc

    _console.print(build_doctor_table(settings, check_network=not offline))

    if settings.placeholder_fields():
        _console.print(
            "\n[yellow]Note:[/yellow] set DB_HOST/DB_USER/DB_PASSWORD (or run `doctor setup`) "
            "before pointing this at a real database."
        )


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    try:
        current = load_settings()
    except ConfigError as exc:
        _console.print(f"[yellow]Ignoring invalid configuration:[/yellow] {exc}")
        current = AppSettings.model_construct()

    api_url = typer.prompt("API URL", default=current.api_url, show_default=True).strip()
    try:
        resolve_api_url(api_url)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc), param_hint="API URL") from exc

    db_host = typer.prompt("Database host", default=current.db_host, show_default=True).strip()
    db_user = typer.prompt("Database user", default=current.db_user, show_default=True).strip()
    db_password = typer.prompt("Database password", hide_input=True, confirmation_prompt=False)
    db_database = typer.prompt("Database name", default=current.db_database, show_default=True).strip()

    smtp_host = typer.prompt("SMTP host", default=current.smtp_host, show_default=True).strip()
    smtp_port = typer.prompt("SMTP port", default=current.smtp_port, type=int, show_default=True)
    smtp_user = typer.prompt("SMTP user (blank for none)", default="", show_default=False).strip()
    smtp_pass = ""
    if smtp_user:
        smtp_pass = typer.prompt("SMTP password", hide_input=True, confirmation_prompt=False)
    from_email = typer.prompt("From address", default=current.from_email, show_default=True).strip()

    if not is_valid_recipient(from_email):
        raise typer.BadParameter("From address must be an email address", param_hint="From address")
    if not (1 <= smtp_port <= 65535):
        raise typer.BadParameter("SMTP port must be between 1 and 65535", param_hint="SMTP port")

    env_path = write_user_env_vars(
        {
            "API_URL": api_url,
            "DB_HOST": db_host,
            "DB_USER": db_user,
            "DB_PASSWORD": db_password,
            "DB_DATABASE": db_database,
            "SMTP_HOST": smtp_host,
            "SMTP_PORT": str(smtp_port),
            "SMTP_USER": smtp_user or None,
            "SMTP_PASS": smtp_pass or None,
            "FROM_EMAIL": from_email,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
