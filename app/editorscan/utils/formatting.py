"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from editorscan.core.theme import get_theme

if TYPE_CHECKING:
    from editorscan.models.diagnosis import ErrorSeverity
    from editorscan.models.editor import EditorConfig


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def create_editor_table(title: str = "Discovered Editors") -> Table:
    """Create a pre-configured table for displaying editors.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for editor display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],
    )
    # Status column: icon only, no header text
    table.add_column("", width=2, justify="center")
    table.add_column("Editor", no_wrap=True)
    table.add_column("Type", style="muted")
    table.add_column("Version", style="muted")
    table.add_column("Path", style="text", overflow="fold")
    return table


def format_editor_row(editor: EditorConfig) -> tuple[str, str, str, str, str]:
    """Format an editor as a table row with proper styling.

    The default editor gets a filled circle; auto-discovered and manual
    entries get distinct colors.

    Args:
        editor: The editor to format.

    Returns:
        Tuple of (icon, name, type, version, path) with Rich markup.
    """
    if editor.is_default:
        style = "editor_default"
        icon = f"[{style}]●[/]"  # Filled circle
    elif editor.is_auto_discovered:
        style = "editor_discovered"
        icon = f"[{style}]○[/]"  # Empty circle
    else:
        style = "editor_manual"
        icon = f"[{style}]○[/]"

    name = f"[{style}]{editor.display_name}[/]"
    editor_type = f"[muted]{editor.id}[/]"
    version = f"[muted]{editor.version or '-'}[/]"
    path = f"[editor.path]{editor.executable_path}[/]"
    return (icon, name, editor_type, version, path)


def severity_style(severity: ErrorSeverity) -> str:
    """Return the theme style name for a severity level."""
    return f"severity_{severity.value}"


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
