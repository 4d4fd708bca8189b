"""Utility modules for filecleaner.

This module exports commonly used utility functions.
"""

from filecleaner.utils.formatting import (
    console,
    create_action_table,
    err_console,
    print_error,
    print_info,
    print_success,
)
from filecleaner.utils.shell import run_interactive

__all__ = [
    "console",
    "create_action_table",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "run_interactive",
]
