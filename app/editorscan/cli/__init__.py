"""CLI package for editorscan.

This package contains the Typer application and all subcommands.
"""

from editorscan.cli.main import app

__all__ = ["app"]
