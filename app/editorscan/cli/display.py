"""Shared Rich display functions for error reports and validation results.

Provides reusable printers used by the validate, diagnose and open
commands.
"""

from rich.panel import Panel
from rich.text import Text

from editorscan.diagnostics.advisor import action_labels, render_message
from editorscan.models.diagnosis import ErrorReport
from editorscan.models.validation import Invalid, Valid, ValidationResult, Warning
from editorscan.utils.formatting import (
    console,
    print_error,
    print_success,
    print_warning,
    severity_style,
)


def print_error_report(report: ErrorReport) -> None:
    """Print a diagnosis with its recovery plan as a bordered panel.

    The border takes the severity color; the subtitle lists the actions
    a user could take next.

    Args:
        report: Advisor output to render.
    """
    diagnosis = report.diagnosis
    title = f"{report.error_type.value.replace('_', ' ').title()} ({diagnosis.severity.value})"
    panel = Panel(
        Text(render_message(diagnosis, report.recovery)),
        title=title,
        title_align="left",
        subtitle=" | ".join(action_labels(report.recovery)),
        subtitle_align="right",
        border_style=severity_style(diagnosis.severity),
    )
    console.print(panel)


def print_validation_result(path: str, result: ValidationResult) -> None:
    """Print a one-line verdict for a validated path, plus any suggestion."""
    match result:
        case Valid():
            print_success(f"Valid path: {path}")
        case Warning(message=message):
            print_warning(f"{path}: {message}")
        case Invalid(reason=reason, suggestion=suggestion):
            print_error(f"{path}: {reason}")
            if suggestion:
                console.print(f"[muted]Suggestion:[/] {suggestion}", highlight=False)
