"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from filecleaner.filesystem.models import ActionKind, CleanAction


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


THEME = Theme(
    {
        "text": "#ffffff",
        "muted": "#b2bec3",
        "bold_header": "bold #69B9A1",
        "border": "#29526d",
        "success": "#03b971",
        "error": "bold #f53263",
        "info": "#0ec1c8",
        "removed": "#f53263",
        "changed": "#0e8ac8",
    }
)

# Shared console instances
console = Console(theme=THEME, color_system=_detect_color_system())
err_console = Console(theme=THEME, stderr=True, color_system=_detect_color_system())


def create_action_table(title: str = "Cleanup") -> Table:
    """Create a pre-configured table for displaying cleanup repairs.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for repair display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Action", no_wrap=True)
    table.add_column("Type", style="muted")
    table.add_column("Mode", style="info", justify="right")
    table.add_column("Path", style="text", overflow="fold")
    return table


def format_action_row(action: CleanAction) -> tuple[str, str, str, str]:
    """Format a repair as a table row with proper styling.

    Args:
        action: The repair to format.

    Returns:
        Tuple of (action, type, mode, path) with Rich markup.
    """
    if action.kind == ActionKind.REMOVE:
        label = "[removed]remove[/]"
    else:
        label = "[changed]restore mode[/]"
    mode = action.mode_octal or "-"
    return (label, action.path_type.value, mode, action.path)


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
