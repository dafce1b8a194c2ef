"""Config commands.

Shows and edits the settings file that tunes discovery.
"""

import json
from typing import Annotated

import typer
from rich.table import Table

from editorscan.cli.types import OutputFormat, require_settings
from editorscan.core.config import ConfigError, save_settings, update_setting
from editorscan.core.paths import get_config_path, get_theme_path
from editorscan.utils.formatting import console, print_error, print_success

app = typer.Typer(
    help="Show and edit editorscan settings.",
    no_args_is_help=True,
)


@app.command()
def show(
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Show the effective settings (defaults merged with the config file)."""
    settings = require_settings()

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(settings.model_dump()))
        return

    table = Table(
        title="Settings",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Key", no_wrap=True)
    table.add_column("Value")
    table.add_column("Description", style="muted")

    for key, field in type(settings).model_fields.items():
        value = getattr(settings, key)
        if isinstance(value, list):
            shown = ", ".join(value) or "-"
        elif value is None:
            shown = "-"
        else:
            shown = str(value)
        table.add_row(key, shown, field.description or "")

    console.print(table)


@app.command()
def path() -> None:
    """Print the locations of the settings and theme files."""
    config_path = get_config_path()
    theme_path = get_theme_path()
    for label, file_path in (("config:", config_path), ("theme: ", theme_path)):
        suffix = "" if file_path.exists() else " (not created)"
        console.print(f"{label} {file_path}{suffix}", soft_wrap=True)


@app.command("set")
def set_value(
    key: Annotated[str, typer.Argument(help="Setting name, e.g. default_tier.")],
    value: Annotated[
        str,
        typer.Argument(help="New value. Lists are comma-separated; 'none' clears."),
    ],
) -> None:
    """Change one setting and save the config file."""
    settings = require_settings()
    try:
        updated = update_setting(settings, key, value)
        saved_path = save_settings(updated)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Set {key} in {saved_path}")
