from __future__ import annotations

from rich.console import Console
from rich.progress import Progress

from audioshelf.cli.console import ConsoleManager, create_rename_progress, rich_enabled


def test_console_manager_yields_console_and_spins():  # noqa: D103
    with ConsoleManager(record=True) as console:  # type: Console
        assert isinstance(console, Console)
        console.print("Start")
        with console.status("Renaming..."):
            console.print("Working")
        console.print("Done")

        output = console.export_text()

    # We're not testing Rich control characters, just logical content.
    for expected in ("Start", "Working", "Done"):
        assert expected in output


def test_console_manager_pretty_traceback():  # noqa: D103
    with ConsoleManager(record=True) as console:
        try:
            1 / 0
        except ZeroDivisionError:
            # Use Rich helper to print the pretty traceback into the console.
            console.print_exception()

        output = console.export_text()

    # Rich pretty-traceback should contain exception class name.
    assert "ZeroDivisionError" in output


def test_console_manager_plain_when_disabled(monkeypatch):  # noqa: D103
    monkeypatch.setenv("AUDIOSHELF_NO_RICH", "1")
    assert not rich_enabled()
    with ConsoleManager() as console:
        assert console.color_system is None


def test_rename_progress_counts(monkeypatch):  # noqa: D103
    with ConsoleManager(record=True) as console:
        progress = create_rename_progress(console, enabled=False)
        assert isinstance(progress, Progress)
        with progress:
            task = progress.add_task("Renaming...", total=3)
            progress.update(task, completed=2)
            assert progress.tasks[0].completed == 2
