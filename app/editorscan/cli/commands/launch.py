"""Open command implementation.

Opens a file or project folder in a discovered editor.
"""

import shlex
from pathlib import Path
from typing import Annotated

import typer

from editorscan.cli.display import print_error_report
from editorscan.cli.types import TierChoice, get_engine, parse_editor_type, require_settings
from editorscan.core.launch import (
    build_file_command,
    build_project_command,
    default_config,
    launch_detached,
)
from editorscan.diagnostics.advisor import ErrorAdvisor
from editorscan.models.diagnosis import ErrorContext, OperationType
from editorscan.models.editor import EditorConfig, EditorType
from editorscan.models.tier import DiscoveryTier
from editorscan.utils.formatting import console, print_error, print_success, print_warning


def _select_editor(
    editors: list[EditorConfig], editor_type: EditorType | None
) -> EditorConfig | None:
    """Pick the requested editor type, or the first (default-first) editor."""
    if editor_type is None:
        return editors[0] if editors else None
    for editor in editors:
        if editor.id == editor_type.id:
            return editor
    return None


def open_file(
    target: Annotated[
        Path,
        typer.Argument(help="File or project folder to open."),
    ],
    line: Annotated[
        int,
        typer.Option("--line", "-l", min=0, help="Line to jump to (1-based)."),
    ] = 0,
    column: Annotated[
        int,
        typer.Option("--column", "-c", min=0, help="Column to jump to (1-based)."),
    ] = 0,
    editor_id: Annotated[
        str | None,
        typer.Option(
            "--editor",
            "-e",
            help="Editor to use (e.g. vscode, cursor). Defaults to the configured editor.",
        ),
    ] = None,
    tier: Annotated[
        TierChoice | None,
        typer.Option(
            "--tier",
            "-t",
            help="Discovery tier used to locate the editor.",
            case_sensitive=False,
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Print the command instead of running it."),
    ] = False,
) -> None:
    """Open a file or folder in a VS Code-family editor.

    Examples:
        editorscan open src/app.py --line 42
        editorscan open src/app.py --line 42 --column 7 --editor cursor
        editorscan open . --dry-run
    """
    settings = require_settings()
    editor_type = parse_editor_type(editor_id or settings.default_editor)
    selected_tier = tier.to_tier() if tier is not None else DiscoveryTier(settings.default_tier)

    engine = get_engine(settings)
    config = _select_editor(engine.discover_with_strategy(selected_tier), editor_type)
    if config is None:
        fallback = editor_type or EditorType.VSCODE
        if not fallback.executable_names:
            print_error(f"No {fallback.display_name} editor was discovered.")
            raise typer.Exit(code=1)
        command = fallback.executable_names[0]
        print_warning(
            f"{fallback.display_name} was not discovered; relying on '{command}' in PATH."
        )
        config = default_config(fallback)

    target_path = str(target)
    if target.is_dir():
        operation = OperationType.PROJECT_OPEN
        argv = build_project_command(config, target_path)
    else:
        operation = OperationType.FILE_OPEN
        argv = build_file_command(config, target_path, line, column)

    if dry_run:
        console.print(shlex.join(argv), highlight=False, soft_wrap=True)
        return

    try:
        pid = launch_detached(argv)
    except OSError as e:
        context = ErrorContext(
            operation=operation,
            file_path=target_path if operation is OperationType.FILE_OPEN else None,
            project_path=target_path if operation is OperationType.PROJECT_OPEN else None,
            error=e,
        )
        print_error_report(ErrorAdvisor().advise_failure(e, config, context))
        raise typer.Exit(code=1) from e

    print_success(f"Opened {target_path} in {config.display_name} (pid {pid})")
