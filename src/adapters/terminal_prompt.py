"""Interactive name prompt (Rich console)."""

from __future__ import annotations

import asyncio

from rich.console import Console

from core.domain.validation import validate_name_input


PROMPT_TEXT = "Enter your name: "


class TerminalPrompt:
    """Reads one line from the terminal and validates it as a name.

    The blocking read runs in a worker thread so the event loop stays free;
    there is no timeout. EOF counts as an empty answer.
    """

    def __init__(self, console: Console | None = None, *, prompt: str = PROMPT_TEXT) -> None:
        self._console = console or Console()
        self._prompt = prompt

    def _read_line(self) -> str:
        try:
            return self._console.input(self._prompt)
        except EOFError:
            return ""

    async def read_name(self) -> str:
        answer = await asyncio.to_thread(self._read_line)
        return validate_name_input(answer)
