"""Rich UI components for the CLI.

Kept apart from the commands so `main` and `doctor` can share them without
importing each other.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import StepOutcome
from core.services.intake_workflow import IntakeResult


def print_banner(console: Console) -> None:
    """Print the welcome banner (skipped with `--no-banner`)."""

    title = Text("intake-notify", style="bold cyan")
    subtitle = Text("name • fetch • store • notify", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _outcome_cells(outcome: StepOutcome) -> tuple[str, str]:
    if outcome.ok:
        return "[green]OK[/green]", outcome.detail or ""
    return "[red]FAILED[/red]", outcome.error or ""


def build_summary_table(result: IntakeResult) -> Table:
    table = Table(title="Run summary")
    table.add_column("Step", style="cyan", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Name", "[green]OK[/green]", Text(result.name))
    table.add_row("Fetch", "[green]OK[/green]", Text(f"{len(result.value)} chars"))

    status, detail = _outcome_cells(result.persisted)
    table.add_row("Database", status, Text(detail))
    status, detail = _outcome_cells(result.notified)
    table.add_row("Email", status, Text(detail))
    return table
