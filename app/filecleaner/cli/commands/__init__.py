"""CLI commands for filecleaner.

This package contains all subcommand implementations.
"""

from filecleaner.cli.commands import config, run

__all__ = ["config", "run"]
