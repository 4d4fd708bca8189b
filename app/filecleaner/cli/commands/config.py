"""Config command implementation.

Shows the effective cleaner configuration and writes a default config file.
"""

from pathlib import Path
from typing import Annotated

import typer

from filecleaner.core.config import (
    CleanerConfig,
    CleanerConfigError,
    get_default_config,
    load_cleaner_config,
    load_or_default_config,
    save_cleaner_config,
)
from filecleaner.core.paths import get_config_path
from filecleaner.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
)

app = typer.Typer(
    help="Show or create the cleaner configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


def get_effective_config(ctx: typer.Context) -> CleanerConfig:
    """Load the configuration selected by the global --config option.

    An explicit --config path must exist; without one, the default config
    file is used if present, otherwise built-in defaults.

    Args:
        ctx: Typer context carrying the global options.

    Returns:
        Validated CleanerConfig.

    Raises:
        typer.Exit: If the configuration cannot be loaded.
    """
    obj = ctx.obj or {}
    config_path: Path | None = obj.get("config_path")

    try:
        if config_path is not None:
            return load_cleaner_config(config_path)
        return load_or_default_config()
    except CleanerConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective cleaner configuration."""
    config = get_effective_config(ctx)

    ignore = ", ".join(config.ignore) if config.ignore else "[muted](none)[/]"
    console.print(f"[bold_header]ignore[/]          {ignore}")
    console.print(f"[bold_header]directory_mode[/]  {config.directory_mode:04o}")
    console.print(f"[bold_header]file_mode[/]       {config.file_mode:04o}")


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing config file.",
        ),
    ] = False,
) -> None:
    """Write a config file with default settings.

    Examples:
        filecleaner config init                  # Default location
        filecleaner --config my.toml config init # Custom path
    """
    obj = ctx.obj or {}
    output_path: Path = obj.get("config_path") or get_config_path()

    if output_path.exists() and not force:
        print_error(f"Config already exists: {output_path}")
        print_info("Use --force to overwrite.")
        raise typer.Exit(code=1)

    try:
        saved_path = save_cleaner_config(get_default_config(), output_path)
    except CleanerConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config created: {saved_path}")
