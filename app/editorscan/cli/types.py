"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from enum import Enum

import typer

from editorscan.core.config import ConfigError, Settings, load_settings
from editorscan.discovery.engine import DiscoveryEngine
from editorscan.models.editor import EditorType
from editorscan.models.tier import DiscoveryTier
from editorscan.utils.formatting import print_error


class TierChoice(str, Enum):
    """Discovery tiers selectable on the command line."""

    FAST = "fast"
    COMPREHENSIVE = "comprehensive"
    SMART = "smart"

    def to_tier(self) -> DiscoveryTier:
        """Convert to the model enum."""
        return DiscoveryTier(self.value)


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def require_settings() -> Settings:
    """Load settings or exit with an error message.

    Raises:
        typer.Exit: If the settings file exists but cannot be used.
    """
    try:
        return load_settings()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def get_engine(settings: Settings) -> DiscoveryEngine:
    """Create a discovery engine tuned by settings."""
    return DiscoveryEngine(settings=settings)


def parse_editor_type(editor_id: str | None) -> EditorType | None:
    """Resolve an editor id option, exiting on unknown ids.

    Raises:
        typer.BadParameter: If editor_id is not a catalog id.
    """
    if editor_id is None:
        return None
    editor_type = EditorType.from_id(editor_id)
    if editor_type is None:
        valid = ", ".join(t.id for t in EditorType)
        raise typer.BadParameter(f"Unknown editor '{editor_id}'. Expected one of: {valid}")
    return editor_type
