"""Theme management for the editorscan CLI.

Colors come from the bundled data/theme.toml, optionally overridden by
the user's theme.toml in the config directory. Every color field is also
a Rich style of the same name.
"""

import functools
import logging
import sys
import tomllib
from importlib import resources
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints, ValidationError
from rich.theme import Theme

from editorscan.core.paths import get_theme_path

logger = logging.getLogger(__name__)

HexColor = Annotated[
    str,
    StringConstraints(strip_whitespace=True, pattern=r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$"),
]

# Styles rendered bold on top of their color
_BOLD_STYLES = frozenset({"error", "editor_default", "severity_high"})


class ThemeColors(BaseModel):
    """Hex colors (#RGB or #RRGGBB) for the editorscan CLI."""

    model_config = ConfigDict(extra="forbid")

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"

    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"

    # How an editor entered the list
    editor_default: HexColor = "#69B9A1"
    editor_discovered: HexColor = "#0e8ac8"
    editor_manual: HexColor = "#226666"

    # Diagnosis severity
    severity_high: HexColor = "#f53263"
    severity_medium: HexColor = "#faf870"
    severity_low: HexColor = "#b2bec3"


def get_bundled_theme_path() -> Path:
    """Return the path of the theme shipped with the package."""
    return Path(str(resources.files("editorscan.data").joinpath("theme.toml")))


def _read_colors(path: Path) -> dict[str, object]:
    """Return the [colors] table of a theme file, or {} if it cannot be used."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: 'colors' is not a table", path)
        return {}
    return colors


def load_theme() -> ThemeColors:
    """Load bundled colors with the user's overrides applied on top.

    An override file that fails validation is reported once on stderr and
    the built-in colors are used instead.
    """
    user_path = get_theme_path()
    merged = {**_read_colors(get_bundled_theme_path()), **_read_colors(user_path)}
    try:
        return ThemeColors.model_validate(merged)
    except ValidationError as e:
        logger.warning("Theme validation failed, using defaults: %s", e)
        print(f"Warning: Invalid theme configuration in {user_path}", file=sys.stderr)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors) -> Theme:
    """Convert colors to a Rich Theme, adding the derived table styles."""
    styles = {
        name: f"bold {color}" if name in _BOLD_STYLES else color
        for name, color in colors.model_dump().items()
    }
    styles["bold_header"] = f"bold {colors.header}"
    styles["dim"] = colors.muted
    styles["editor.path"] = colors.text
    return Theme(styles)


@functools.cache
def get_theme() -> Theme:
    """Return the Rich theme, loading it on first use."""
    return get_rich_theme(load_theme())
