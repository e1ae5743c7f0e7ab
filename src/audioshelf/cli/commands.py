"""CLI commands for audioshelf.

This module implements the user-facing commands:
- ``plan``: scan a directory, build rename plans and report duplicates.
- ``rename``: the same, then resolve duplicates and execute the renames.
- ``patterns``: list the naming pattern presets.
- ``version``: print the installed version.

Design:
- Typer provides the declarative CLI structure; Annotated aliases keep the
  shared options in one place.
- All output is routed through a Rich console from ConsoleManager, so the
  ``--no-rich`` flag applies everywhere.
- Settings are resolved once (CLI > env > config file > default) and passed to
  the engine explicitly.
"""

import asyncio
import json
import logging
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from audioshelf.cli.console import ConsoleManager, create_rename_progress
from audioshelf.cli.renderer import render_duplicates, render_outcome, render_plan
from audioshelf.core.apply import BatchExecutor
from audioshelf.core.duplicates import find_duplicates, group_duplicates
from audioshelf.core.planner import create_rename_plan
from audioshelf.core.resolver import needs_manual_resolution, resolve
from audioshelf.core.scanner import ScanOptions, scan_directory
from audioshelf.fs.operations import FilesystemRenamer
from audioshelf.metadata.filename import metadata_for_files
from audioshelf.metadata.sidecar import load_metadata_file
from audioshelf.models.batch import BatchOutcome, BatchState
from audioshelf.models.core import DuplicateMethod, NamingOptions, ResolutionStrategy
from audioshelf.models.plan import DuplicateGroup, RenamePlan
from audioshelf.rules.template import PATTERN_PRESETS, resolve_pattern
from audioshelf.utils.config import (
    load_naming_options,
    resolve_pattern_setting,
    resolve_resolution,
)
from audioshelf.utils.debug import debug_enabled, setup_logger
from audioshelf.utils.hash import async_sha256sum

app = typer.Typer(
    name="audioshelf",
    help="Plan and execute bulk renames for audiobook collections.",
    add_completion=False,
)

logger = logging.getLogger(__name__)


# Reason: ExitCode enum provides clear, maintainable exit codes for all CLI
# commands.
class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = 1
    MANUAL_NEEDED = 2


ROOT_PATH = Annotated[
    Path,
    typer.Argument(
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
        resolve_path=True,
        help="Directory containing the audiobook files",
    ),
]

PATTERN = Annotated[
    Optional[str],
    typer.Option(
        "--pattern",
        "-p",
        help="Naming pattern (e.g. '{title} - {author}') or preset name "
        f"({', '.join(PATTERN_PRESETS)})",
    ),
]

METADATA_FILE = Annotated[
    Optional[Path],
    typer.Option(
        "--metadata",
        "-m",
        exists=True,
        file_okay=True,
        dir_okay=False,
        help="JSON file mapping file names to metadata. "
        "Without it, metadata is parsed from the file names.",
    ),
]

INCLUDE_SERIES = Annotated[
    Optional[bool],
    typer.Option(
        "--include-series/--no-include-series",
        help="Expand {series} and {number} tokens",
    ),
]

CREATE_DIRECTORIES = Annotated[
    Optional[bool],
    typer.Option(
        "--create-directories/--no-create-directories",
        help="Move files into series or pattern subdirectories",
    ),
]

DUPLICATE_METHOD = Annotated[
    Optional[DuplicateMethod],
    typer.Option(
        "--duplicate-method",
        "-d",
        case_sensitive=False,
        help="How colliding renames are detected",
    ),
]

RESOLUTION = Annotated[
    Optional[ResolutionStrategy],
    typer.Option(
        "--resolve",
        "-r",
        case_sensitive=False,
        help="How duplicate groups are resolved before renaming",
    ),
]

RECURSIVE = Annotated[
    bool,
    typer.Option("--recursive/--no-recursive", help="Scan subdirectories"),
]

JSON_OUTPUT = Annotated[
    bool,
    typer.Option("--json", help="Output results in JSON format"),
]

DRY_RUN = Annotated[
    bool,
    typer.Option("--dry-run", help="Report the renames without moving files"),
]


@dataclass
class PlanCommandOptions:
    """Options shared by the plan and rename commands."""

    root: Path
    pattern: Optional[str] = None
    metadata_file: Optional[Path] = None
    include_series: Optional[bool] = None
    create_directories: Optional[bool] = None
    duplicate_method: Optional[DuplicateMethod] = None
    recursive: bool = True


@dataclass
class PreparedPlan:
    """Rename plans and duplicate groups for one directory."""

    pattern: str
    options: NamingOptions
    plans: list[RenamePlan]
    groups: list[DuplicateGroup]


def prepare_plan(opts: PlanCommandOptions) -> PreparedPlan:
    """Scan, load metadata, plan and detect duplicates.

    Raises:
        OSError: If the directory or metadata file cannot be read.
        ValueError: For invalid settings or malformed metadata.
    """
    scan_result = scan_directory(
        opts.root, options=ScanOptions(recursive=opts.recursive)
    )
    for message in scan_result.errors:
        logger.warning(message)

    if opts.metadata_file is not None:
        metadata = load_metadata_file(opts.metadata_file, scan_result.files)
    else:
        metadata = metadata_for_files(scan_result.files)

    naming = load_naming_options(
        include_series=opts.include_series,
        create_directories=opts.create_directories,
        duplicate_method=opts.duplicate_method.value if opts.duplicate_method else None,
    )
    pattern = resolve_pattern(resolve_pattern_setting(opts.pattern))
    plans = create_rename_plan(scan_result.files, metadata, pattern, naming)
    if naming.duplicate_method is DuplicateMethod.CONTENT:
        groups = asyncio.run(
            find_duplicates(plans, naming.duplicate_method, hash_provider=async_sha256sum)
        )
    else:
        groups = group_duplicates(plans, naming.duplicate_method)
    return PreparedPlan(pattern=pattern, options=naming, plans=plans, groups=groups)


def _write_json(payload: dict[str, Any]) -> None:
    sys.stdout.write(json.dumps(payload, indent=2) + "\n")


def _prepare_or_exit(opts: PlanCommandOptions, console: Console) -> PreparedPlan:
    try:
        prepared = prepare_plan(opts)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(ExitCode.ERROR)
    if not prepared.plans:
        console.print("[yellow]No audiobook files with metadata found.[/yellow]")
        raise typer.Exit(ExitCode.SUCCESS)
    return prepared


@app.callback()
def callback(
    no_rich: bool = typer.Option(
        False,
        "--no-rich",
        help=(
            "Disable Rich coloured output and progress bars. "
            "Can also be set with the AUDIOSHELF_NO_RICH environment variable."
        ),
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress"),
) -> None:
    """Top-level CLI callback adding global options."""
    if no_rich:
        import os

        os.environ["AUDIOSHELF_NO_RICH"] = "1"
    if verbose or debug_enabled():
        setup_logger(logging.DEBUG if debug_enabled() else logging.INFO)


@app.command()
def plan(  # noqa: PLR0913
    root: ROOT_PATH,
    pattern: PATTERN = None,
    metadata_file: METADATA_FILE = None,
    include_series: INCLUDE_SERIES = None,
    create_directories: CREATE_DIRECTORIES = None,
    duplicate_method: DUPLICATE_METHOD = None,
    recursive: RECURSIVE = True,
    json_output: JSON_OUTPUT = False,
) -> None:
    """Preview the renames for a directory and report duplicates."""
    opts = PlanCommandOptions(
        root=root,
        pattern=pattern,
        metadata_file=metadata_file,
        include_series=include_series,
        create_directories=create_directories,
        duplicate_method=duplicate_method,
        recursive=recursive,
    )
    with ConsoleManager() as console:
        prepared = _prepare_or_exit(opts, console)
        if json_output:
            _write_json(
                {
                    "pattern": prepared.pattern,
                    "options": prepared.options.model_dump(mode="json"),
                    "plans": [p.model_dump(mode="json") for p in prepared.plans],
                    "duplicates": [
                        g.model_dump(mode="json") for g in prepared.groups
                    ],
                }
            )
            return
        render_plan(prepared.plans, console=console)
        render_duplicates(prepared.groups, console=console)


@app.command()
def rename(  # noqa: PLR0913
    root: ROOT_PATH,
    pattern: PATTERN = None,
    metadata_file: METADATA_FILE = None,
    include_series: INCLUDE_SERIES = None,
    create_directories: CREATE_DIRECTORIES = None,
    duplicate_method: DUPLICATE_METHOD = None,
    resolution: RESOLUTION = None,
    recursive: RECURSIVE = True,
    dry_run: DRY_RUN = False,
    json_output: JSON_OUTPUT = False,
) -> None:
    """Rename the audiobook files in a directory."""
    opts = PlanCommandOptions(
        root=root,
        pattern=pattern,
        metadata_file=metadata_file,
        include_series=include_series,
        create_directories=create_directories,
        duplicate_method=duplicate_method,
        recursive=recursive,
    )
    with ConsoleManager() as console:
        prepared = _prepare_or_exit(opts, console)
        try:
            strategy = resolve_resolution(resolution.value if resolution else None)
        except ValueError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            raise typer.Exit(ExitCode.ERROR)

        if needs_manual_resolution(prepared.groups, strategy):
            render_duplicates(prepared.groups, console=console)
            console.print(
                "\n[bold yellow]Warning:[/bold yellow] duplicates need a decision. "
                "Re-run with --resolve keep-first, keep-all or skip-all."
            )
            raise typer.Exit(ExitCode.MANUAL_NEEDED)

        plans = resolve(prepared.groups, strategy, prepared.plans)
        if not plans:
            console.print("[yellow]Nothing left to rename.[/yellow]")
            raise typer.Exit(ExitCode.SUCCESS)

        executor = BatchExecutor(FilesystemRenamer(dry_run=dry_run))
        outcome = _run_with_progress(executor, plans, console, not json_output)

        if json_output:
            _write_json(
                {
                    "outcome": outcome.model_dump(mode="json"),
                    "plans": [p.model_dump(mode="json") for p in executor.results()],
                }
            )
        else:
            render_plan(executor.results(), console=console, title="Rename Results")
            render_outcome(outcome, console=console)

        if outcome.error:
            raise typer.Exit(ExitCode.ERROR)


def _run_with_progress(
    executor: BatchExecutor,
    plans: list[RenamePlan],
    console: Console,
    show_progress: bool,
) -> BatchOutcome:
    with create_rename_progress(console, enabled=show_progress) as progress:
        task = progress.add_task("Renaming...", total=len(plans))

        async def drive() -> BatchOutcome:
            executor.start(plans)
            while executor.state is BatchState.RUNNING:
                outcome = await executor.step()
                progress.update(task, completed=outcome.processed)
            return executor.outcome

        return asyncio.run(drive())


@app.command()
def patterns() -> None:
    """List the naming pattern presets."""
    with ConsoleManager() as console:
        table = Table(title="Naming Patterns")
        table.add_column("Preset", style="bold")
        table.add_column("Pattern", style="green")
        for name, preset in PATTERN_PRESETS.items():
            table.add_row(name, preset)
        console.print(table)


@app.command()
def version() -> None:
    """Show the version of audioshelf."""
    from audioshelf.__about__ import __version__

    with ConsoleManager() as console:
        console.print(f"AudioShelf version: [bold]{__version__}[/bold]")


def main() -> None:
    """Main entry point for the CLI."""
    app()
