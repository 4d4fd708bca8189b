"""Run command implementation.

Snapshots a directory, runs a command in it, and restores the directory
afterwards, even when the command fails or is interrupted.
"""

from pathlib import Path
from typing import Annotated

import typer

from filecleaner.cli.commands.config import get_effective_config
from filecleaner.core.cleaner import DirectoryCleaner
from filecleaner.core.errors import CleanerError
from filecleaner.filesystem.models import CleanAction
from filecleaner.utils.formatting import (
    console,
    create_action_table,
    format_action_row,
    print_error,
    print_info,
    print_success,
)
from filecleaner.utils.shell import run_interactive

# Exit code reported when the command cannot be started at all
_COMMAND_NOT_RUN = 127


def _run_wrapped(command: list[str], cwd: str | None) -> int:
    """Run the wrapped command, translating launch failures to an exit code."""
    try:
        return run_interactive(command, cwd=cwd)
    except OSError as e:
        print_error(f"Failed to run '{command[0]}': {e}")
        return _COMMAND_NOT_RUN


def _finish(cleaner: DirectoryCleaner, dry_run: bool) -> list[CleanAction]:
    """Clean the directory (or plan the clean) and return the repairs.

    Raises:
        typer.Exit: If cleaning fails.
    """
    try:
        if dry_run:
            return cleaner.pending()
        cleaner.close()
        return list(cleaner.actions)
    except CleanerError as e:
        print_error(f"Cleanup of {cleaner.path} failed: {e}")
        raise typer.Exit(code=1) from e


def _show_actions(actions: list[CleanAction], root: Path, dry_run: bool) -> None:
    """Print a summary of the repairs."""
    if not actions:
        print_success(f"{root} is clean. Nothing to restore.")
        return

    title = "Pending cleanup" if dry_run else "Cleanup"
    table = create_action_table(title=f"{title}: {root}")
    for action in actions:
        table.add_row(*format_action_row(action))
    console.print(table)

    if dry_run:
        print_info(f"[DRY-RUN] {len(actions)} repairs would be applied. Nothing was changed.")
    else:
        print_success(f"Applied {len(actions)} repairs.")


def run_and_clean(
    ctx: typer.Context,
    root: Annotated[
        Path,
        typer.Argument(help="Directory to snapshot and restore."),
    ],
    command: Annotated[
        list[str],
        typer.Argument(help="Command to run, after '--'."),
    ],
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Report what would be cleaned without changing anything.",
        ),
    ] = False,
    cwd: Annotated[
        Path | None,
        typer.Option(
            "--cwd",
            help="Working directory for the command (defaults to the current one).",
        ),
    ] = None,
) -> None:
    """Run a command, then restore ROOT to its state before the run.

    Files and directories created under ROOT are deleted and changed
    permission bits are restored. The command's exit code is passed through.

    Examples:
        filecleaner run tests/data -- pytest -q
        filecleaner run --dry-run build -- make
    """
    config = get_effective_config(ctx)

    try:
        cleaner = DirectoryCleaner(root, config)
    except CleanerError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_info(f"Tracking {len(cleaner)} paths under {cleaner.path}")

    try:
        exit_code = _run_wrapped(command, str(cwd) if cwd is not None else None)
    finally:
        actions = _finish(cleaner, dry_run)

    _show_actions(actions, cleaner.path, dry_run)

    if exit_code != 0:
        raise typer.Exit(code=exit_code)
