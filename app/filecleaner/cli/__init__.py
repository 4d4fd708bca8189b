"""CLI package for filecleaner.

This package contains the Typer application and all subcommands.
"""

from filecleaner.cli.main import app

__all__ = ["app"]
