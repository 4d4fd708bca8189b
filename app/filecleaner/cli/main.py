"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer

from filecleaner import __version__
from filecleaner.cli.commands import config, run

# Create main Typer app
app = typer.Typer(
    name="filecleaner",
    help="Run a command and restore a directory to its state before the run.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"filecleaner version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log every permission change and deletion.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to the cleaner config file.",
        ),
    ] = None,
) -> None:
    """filecleaner - keep directories clean across test runs.

    Snapshot a directory, run a command that writes into it, and put the
    directory back: new entries are deleted and changed permissions
    are restored.
    """
    if verbose:
        logging.basicConfig(level=logging.INFO, format="# %(message)s")

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config_path


# Register commands
app.command(
    name="run",
    context_settings={"allow_extra_args": False, "ignore_unknown_options": True},
)(run.run_and_clean)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
