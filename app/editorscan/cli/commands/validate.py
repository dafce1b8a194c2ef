"""Validate command implementation.

Checks whether a path can be used as an editor executable.
"""

from datetime import datetime
from typing import Annotated

import typer

from editorscan.cli.display import print_error_report, print_validation_result
from editorscan.cli.types import parse_editor_type
from editorscan.diagnostics.advisor import ErrorAdvisor
from editorscan.models.editor import EditorConfig, EditorType
from editorscan.models.validation import Invalid
from editorscan.validation.validator import PathValidator
from editorscan.utils.formatting import console


def validate_path(
    path: Annotated[
        str,
        typer.Argument(help="Path to the editor executable or application bundle."),
    ],
    editor_id: Annotated[
        str | None,
        typer.Option(
            "--type",
            "-t",
            help="Editor the path should belong to (e.g. vscode, cursor).",
        ),
    ] = None,
    details: Annotated[
        bool,
        typer.Option(
            "--details",
            help="Show filesystem details for the path.",
        ),
    ] = False,
) -> None:
    """Validate an editor path without running it.

    Exits with status 1 when the path cannot be used. A path that exists
    but looks like a different editor is reported as a warning.

    Examples:
        editorscan validate /usr/bin/code
        editorscan validate /Applications/Cursor.app --type cursor
    """
    expected = parse_editor_type(editor_id)
    validator = PathValidator()
    result = validator.validate(path, expected)

    print_validation_result(path, result)

    if details:
        info = validator.path_info(path)
        if info is not None:
            modified = datetime.fromtimestamp(info.last_modified / 1000)
            stamp = modified.isoformat(timespec="seconds")
            console.print(
                f"[muted]directory={info.is_directory} executable={info.is_executable} "
                f"size={info.size} modified={stamp}[/]",
                highlight=False,
            )

    if isinstance(result, Invalid):
        editor_type = expected or EditorType.detect_from_path(path)
        config = EditorConfig(
            id=editor_type.id,
            display_name=editor_type.display_name,
            executable_path=path,
        )
        report = ErrorAdvisor().advise_validation(result, config)
        if report is not None:
            print_error_report(report)
        raise typer.Exit(code=1)
