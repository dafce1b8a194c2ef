"""Diagnose command implementation.

Explains an editor failure message and suggests how to recover.
"""

import json
from typing import Annotated

import typer

from editorscan.cli.display import print_error_report
from editorscan.cli.types import OutputFormat, parse_editor_type
from editorscan.diagnostics.advisor import ErrorAdvisor
from editorscan.models.diagnosis import ErrorContext, OperationType
from editorscan.models.editor import EditorConfig, EditorType
from editorscan.utils.formatting import console


def diagnose_failure(
    message: Annotated[
        str,
        typer.Argument(help="Error message reported by the failed launch."),
    ],
    path: Annotated[
        str,
        typer.Option(
            "--path",
            "-p",
            help="Executable path of the editor that failed.",
        ),
    ] = "",
    editor_id: Annotated[
        str | None,
        typer.Option(
            "--type",
            "-t",
            help="Editor type. Detected from --path when omitted.",
        ),
    ] = None,
    operation: Annotated[
        OperationType,
        typer.Option(
            "--operation",
            "-o",
            help="Operation that failed.",
            case_sensitive=False,
        ),
    ] = OperationType.FILE_OPEN,
    file_path: Annotated[
        str | None,
        typer.Option(
            "--file",
            help="File the editor was asked to open.",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Classify an editor failure and print a recovery plan.

    Examples:
        editorscan diagnose "Cannot run program cursor" --path /usr/bin/cursor
        editorscan diagnose "Access denied" --path C:\\Code\\Code.exe --type vscode
        editorscan diagnose "spawn failed" --file ./main.py --format json
    """
    editor_type = parse_editor_type(editor_id) or EditorType.detect_from_path(path)
    config = EditorConfig(
        id=editor_type.id,
        display_name=editor_type.display_name,
        executable_path=path,
    )
    error = OSError(message)
    context = ErrorContext(
        operation=operation,
        file_path=file_path,
        project_path=file_path if operation is OperationType.PROJECT_OPEN else None,
        error=error,
    )

    report = ErrorAdvisor().advise_failure(error, config, context)

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(report.to_dict()))
        return

    print_error_report(report)
