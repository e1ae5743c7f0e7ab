"""Command-line interface for audioshelf.

- app: The Typer application object with the plan, rename, patterns and version
  commands.
- main: console-script entry point.
"""

from audioshelf.cli.commands import app, main

__all__ = ["app", "main"]
