"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from editorscan import __version__
from editorscan.cli.commands import config, diagnose, discover, launch, validate
from editorscan.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="editorscan",
    help="Find, validate and troubleshoot VS Code-family editors.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"editorscan version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool, quiet: bool) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """editorscan - Find, validate and troubleshoot VS Code-family editors.

    Discovers VS Code, Cursor, Windsurf and related editors installed on
    this machine, checks configured paths and explains launch failures.
    """
    _configure_logging(verbose, quiet)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.add_typer(discover.app, name="discover")
app.add_typer(config.app, name="config")
# Commands taking a positional argument are plain commands, not groups
app.command(name="validate")(validate.validate_path)
app.command(name="diagnose")(diagnose.diagnose_failure)
app.command(name="open")(launch.open_file)


if __name__ == "__main__":
    app()
