"""Logging configuration.

Modules log through `logging.getLogger(__name__)`; only the CLI calls
`configure_logging`, so library use and tests keep the host's handlers.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


_LOG_FORMAT = "%(message)s"


def resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(level: str | int = "INFO", *, console: Console | None = None) -> None:
    """Route root logging through Rich onto stderr."""

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
        markup=False,
    )
    logging.basicConfig(
        level=resolve_level(level),
        format=_LOG_FORMAT,
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
