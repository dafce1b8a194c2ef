"""Discover command implementation.

Lists the editors installed on this machine.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from editorscan.cli.types import OutputFormat, TierChoice, get_engine, require_settings
from editorscan.core.platform import HostOS
from editorscan.models.report import DiscoveryReport
from editorscan.models.tier import DiscoveryTier
from editorscan.utils.formatting import (
    console,
    create_editor_table,
    err_console,
    format_editor_row,
    print_error,
    print_info,
    print_warning,
)

app = typer.Typer(
    help="Discover installed editors.",
    invoke_without_command=True,
)


def _print_debug(message: str) -> None:
    err_console.print(f"[dim]{message}[/]", highlight=False)


@app.callback(invoke_without_command=True)
def discover_editors(
    ctx: typer.Context,
    tier: Annotated[
        TierChoice | None,
        typer.Option(
            "--tier",
            "-t",
            help="Discovery tier: fast, comprehensive, or smart. Defaults to the configured tier.",
            case_sensitive=False,
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
    export_path: Annotated[
        Path | None,
        typer.Option(
            "--export",
            "-e",
            help="Export discovery results to JSON file.",
        ),
    ] = None,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug",
            "-d",
            help="Print discovery progress to stderr.",
        ),
    ] = False,
) -> None:
    """Discover and display installed editors.

    Examples:
        editorscan discover                    # Comprehensive discovery, show table
        editorscan discover --tier fast        # PATH lookup only
        editorscan discover --format json      # Output as JSON
        editorscan discover --export eds.json  # Export to JSON file
        editorscan discover --debug            # Show progress messages
    """
    # Skip if a subcommand is being invoked
    if ctx.invoked_subcommand is not None:
        return

    settings = require_settings()
    selected = tier.to_tier() if tier is not None else DiscoveryTier(settings.default_tier)
    engine = get_engine(settings)

    if engine.supported_sources_count() == 0:
        print_warning("No discovery sources are supported on this system.")

    editors = engine.discover_with_strategy(selected, _print_debug if debug else None)

    report = DiscoveryReport.create(
        editors,
        host_os=HostOS.current().value,
        tier=selected.value,
        sources=engine.supported_source_names(),
    )

    # Handle export (always JSON regardless of format option)
    if export_path is not None:
        export_path = export_path.resolve()
        if export_path.is_dir():
            print_error(f"Export path is a directory: {export_path}")
            raise typer.Exit(code=1)
        try:
            export_path.parent.mkdir(parents=True, exist_ok=True)
            export_path.write_text(json.dumps(report.to_dict(), indent=2))
            print_info(f"Discovery results exported to {export_path}")
        except OSError as e:
            print_error(f"Failed to export: {e}")
            raise typer.Exit(code=1) from e

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(report.to_dict()))
        return

    if not editors:
        print_info("No editors found.")
        return

    table = create_editor_table(f"Discovered Editors ({selected.display_name})")
    for editor in editors:
        table.add_row(*format_editor_row(editor))
    console.print(table)

    sources = engine.supported_sources_count()
    console.print(f"\n[dim]Found {len(editors)} editors using {sources} sources[/]")
