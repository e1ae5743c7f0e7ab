"""Console utilities & context manager for CLI commands.

This module centralises Rich configuration for CLI commands:

* A ``ConsoleManager`` context manager yielding a pre-configured
  :class:`rich.console.Console`.
* Opt-out via the ``--no-rich`` flag (sets env var ``AUDIOSHELF_NO_RICH``) or
  the environment variable being set externally.
* :func:`create_rename_progress` for the per-file rename progress bar.
"""

from __future__ import annotations

import os
from contextlib import AbstractContextManager
from typing import Any, Dict

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TextColumn,
    TimeElapsedColumn,
)
from rich.traceback import install as install_rich_traceback

__all__ = [
    "ConsoleManager",
    "create_rename_progress",
    "rich_enabled",
]

# ENV VAR used to disable rich output entirely (useful for piping or testing)
_ENV_DISABLE_RICH = "AUDIOSHELF_NO_RICH"


def rich_enabled() -> bool:
    """Return False when ``AUDIOSHELF_NO_RICH`` disables styled output."""
    return os.getenv(_ENV_DISABLE_RICH, "0").lower() not in {"1", "true", "yes"}


class ConsoleManager(AbstractContextManager):
    """Yield the Console every command prints through.

    Args:
        record: Keep a copy of everything printed so it can be read back with
            ``console.export_text()``.
        force_use: Force styled output on (True) or off (False). ``None``
            defers to :func:`rich_enabled`.
        **console_kwargs: Passed through to :class:`rich.console.Console`.
    """

    def __init__(
        self,
        *,
        record: bool = False,
        force_use: bool | None = None,
        **console_kwargs: Any,
    ) -> None:
        self._record = record
        self._force_use = force_use
        self._console_kwargs: Dict[str, Any] = console_kwargs
        self.console: Console | None = None

    def _styled(self) -> bool:
        return rich_enabled() if self._force_use is None else self._force_use

    def __enter__(self) -> Console:
        kwargs = dict(self._console_kwargs)
        if not self._styled():
            # Plain output for pipes and log files: no colour, no cursor codes.
            kwargs.setdefault("color_system", None)
            kwargs.setdefault("force_terminal", False)
        self.console = Console(record=self._record, **kwargs)
        install_rich_traceback(show_locals=False, console=self.console)
        return self.console

    def __exit__(self, exc_type, exc_val, exc_tb):  # type: ignore[override]
        if self.console is not None:
            self.console.file.flush()
        # typer.Exit and real errors both propagate to the caller.
        return False


def create_rename_progress(
    target: Console, *, enabled: bool = True
) -> Progress:
    """Return the progress bar used while a rename batch runs.

    Columns: description, bar, ``processed/total``, elapsed time.
    """
    return Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=target,
        disable=not (enabled and rich_enabled()),
    )
