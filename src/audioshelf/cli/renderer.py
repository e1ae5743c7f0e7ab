"""Renderer for CLI output.

This module renders rename plans, duplicate groups and batch outcomes as Rich
tables and summaries.
- Status colors/styles are shared by every table so a plan reads the same
  before and after execution.
- Paths that fail cross-platform validation are flagged in the Issues column.
"""

from typing import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from audioshelf.core.sanitizer import validate_path
from audioshelf.models.batch import BatchOutcome
from audioshelf.models.core import PlanStatus
from audioshelf.models.plan import DuplicateGroup, RenamePlan

STATUS_STYLES = {
    PlanStatus.PENDING: "yellow bold",
    PlanStatus.RENAMED: "green bold",
    PlanStatus.SKIPPED: "cyan",
    PlanStatus.FAILED: "red",
    PlanStatus.MANUAL: "bright_red bold",
}


def render_plan(
    plans: Sequence[RenamePlan],
    console: Console | None = None,
    title: str = "Rename Plan",
) -> None:
    """Render rename plans as a table followed by a one-line summary."""
    console = console or Console()

    table = Table(title=title)
    table.add_column("Status", style="bold")
    table.add_column("Original", style="cyan")
    table.add_column("New Name", style="green")
    table.add_column("New Path")
    table.add_column("Issues", style="yellow")

    for plan in plans:
        validation = validate_path(plan.new_path)
        new_name = escape(plan.new_name)
        if plan.is_alternative:
            new_name += " (renumbered)"
        table.add_row(
            plan.status.value,
            escape(plan.original_name),
            new_name,
            escape(plan.new_path),
            escape("; ".join(validation.errors)),
            style=STATUS_STYLES.get(plan.status, "white"),
        )

    console.print(table)
    console.print(f"Total: {len(plans)}")


def render_duplicates(
    groups: Sequence[DuplicateGroup], console: Console | None = None
) -> None:
    """Render duplicate groups, one table per group."""
    console = console or Console()
    if not groups:
        return

    console.print(
        f"[bold red]Found {len(groups)} potential duplicate"
        f"{'s' if len(groups) != 1 else ''}[/bold red]"
    )
    console.print(
        "Duplicates must be resolved before proceeding with the rename operation."
    )
    for group in groups:
        table = Table(
            title=f"Duplicate Key: {escape(group.key)} ({group.method.value})"
        )
        table.add_column("#", justify="right")
        table.add_column("Original", style="cyan")
        table.add_column("New Name", style="green")
        table.add_column("Size", justify="right")
        for index, plan in enumerate(group.plans, start=1):
            table.add_row(
                str(index),
                escape(plan.original_name),
                escape(plan.new_name),
                f"{plan.file.size / 1024:.1f} KB",
            )
        console.print(table)


def render_outcome(outcome: BatchOutcome, console: Console | None = None) -> None:
    """Render the counters, summary and failures of a finished batch."""
    console = console or Console()
    console.print(
        f"Total: {outcome.total} | Processed: {outcome.processed} | "
        f"Success: {outcome.success} | Error: {outcome.error}"
    )
    style = "green bold" if outcome.error == 0 else "red bold"
    console.print(outcome.summary(), style=style)
    for failure in outcome.failures:
        console.print(
            f"  {escape(failure.original_name)} -> {escape(failure.new_name)}: "
            f"{escape(failure.error)}",
            style="red",
        )
