"""Core configuration.

Responsibility:
- Centralize environment variables (pydantic-settings) away from the CLI.
- Hand adapters explicit config structs (`DatabaseConfig`, `SmtpConfig`)
  instead of letting them read the process environment themselves.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, ValidationError as SettingsValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import DatabaseConfig, SmtpConfig
from core.errors import ConfigError


DEFAULT_API_URL = "https://insecure-api.com/get-data"

# Literal fallbacks kept for compatibility with existing deployments.
# `doctor run` reports when any of these is still in effect.
PLACEHOLDER_DB_CREDENTIALS: dict[str, str] = {
    "db_host": "mydatabase.com",
    "db_user": "admin",
    "db_password": "secret123",
}


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "intake-notify"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "intake-notify"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "intake-notify"
    return Path.home() / ".config" / "intake-notify"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Write or update variables in the user's global .env.

    Keys whose value is `None` are left untouched; existing keys not present in
    `values` are preserved.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# intake-notify user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application configuration.

    Variable names carry no prefix (`DB_HOST`, `SMTP_PORT`, `API_URL`, ...).
    Every value is optional and falls back to the default declared here.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        # An empty variable means "use the default", not an empty value.
        env_ignore_empty=True,
        # Project .env first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    db_host: str = Field(default=PLACEHOLDER_DB_CREDENTIALS["db_host"], min_length=1)
    db_user: str = Field(default=PLACEHOLDER_DB_CREDENTIALS["db_user"], min_length=1)
    db_password: str = Field(default=PLACEHOLDER_DB_CREDENTIALS["db_password"])
    db_database: str = Field(default="mydb", min_length=1)

    smtp_host: str = Field(default="localhost", min_length=1)
    smtp_port: int = Field(
        default=587,
        ge=1,
        le=65535,
        description="465 switches the transport to implicit TLS.",
    )
    smtp_user: str | None = Field(default=None)
    smtp_pass: str | None = Field(default=None)
    from_email: str = Field(default="no-reply@example.com", min_length=3)

    api_url: str = Field(
        default=DEFAULT_API_URL,
        description="Remote JSON endpoint. Must use https.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Per-request timeout (seconds).",
    )
    user_agent: str = Field(
        default="intake-notify/0.1",
        min_length=1,
    )

    log_level: str = Field(default="INFO", min_length=1)

    def database_config(self) -> DatabaseConfig:
        return DatabaseConfig(
            host=self.db_host,
            user=self.db_user,
            password=self.db_password,
            database=self.db_database,
        )

    def smtp_config(self) -> SmtpConfig:
        return SmtpConfig(
            host=self.smtp_host,
            port=self.smtp_port,
            user=self.smtp_user or None,
            password=self.smtp_pass or None,
            from_email=self.from_email,
        )

    def placeholder_fields(self) -> list[str]:
        """Names of DB settings still equal to their literal fallback."""

        return [
            name
            for name, placeholder in PLACEHOLDER_DB_CREDENTIALS.items()
            if getattr(self, name) == placeholder
        ]


def describe_settings_error(exc: SettingsValidationError) -> str:
    """One line per invalid variable, e.g. `SMTP_PORT: Input should be a valid integer`."""

    problems = []
    for error in exc.errors():
        name = ".".join(str(part) for part in error.get("loc", ())).upper() or "settings"
        problems.append(f"{name}: {error.get('msg', 'invalid value')}")
    return "Invalid configuration: " + "; ".join(problems)


def load_settings(**overrides: object) -> AppSettings:
    """Build `AppSettings`, turning validation failures into `ConfigError`."""

    try:
        return AppSettings(**overrides)
    except SettingsValidationError as exc:
        raise ConfigError(describe_settings_error(exc)) from exc
