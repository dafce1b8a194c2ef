"""CLI commands for editorscan.

This package contains all subcommand implementations.
"""

from editorscan.cli.commands import config, diagnose, discover, launch, validate

__all__ = ["config", "diagnose", "discover", "launch", "validate"]
