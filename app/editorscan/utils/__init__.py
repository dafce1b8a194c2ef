"""Utility modules for editorscan.

This module exports commonly used utility functions.
"""

from editorscan.utils.formatting import (
    console,
    create_editor_table,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from editorscan.utils.shell import CommandResult, command_exists, run_command, spawn_detached

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "create_editor_table",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
    "spawn_detached",
]
