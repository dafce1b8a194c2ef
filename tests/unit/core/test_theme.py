"""Unit tests for theme module.

Tests for theme loading, validation, and Rich theme generation.
"""

# pyright: reportPrivateUsage=false

from pathlib import Path
from unittest.mock import patch

import pytest
from editorscan.core.theme import (
    ThemeColors,
    _read_colors,
    get_bundled_theme_path,
    get_rich_theme,
    get_theme,
    load_theme,
)
from pydantic import ValidationError
from rich.theme import Theme


class TestThemeColors:
    """Tests for ThemeColors Pydantic model."""

    def test_default_values(self) -> None:
        """ThemeColors has sensible defaults."""
        colors = ThemeColors()
        assert colors.text == "#ffffff"
        assert colors.header == "#69B9A1"
        assert colors.severity_high == "#f53263"

    def test_valid_hex_colors(self) -> None:
        """ThemeColors accepts #RGB and #RRGGBB, ignoring surrounding blanks."""
        colors = ThemeColors(text="#AABBCC", muted=" #abc ")
        assert colors.text == "#AABBCC"
        assert colors.muted == "#abc"

    @pytest.mark.parametrize("color", ["ffffff", "#ff", "#gggggg", "#abcd"])
    def test_invalid_hex(self, color: str) -> None:
        """Anything but a 3 or 6 digit hex code is rejected."""
        with pytest.raises(ValidationError, match="editor_default"):
            ThemeColors(editor_default=color)

    def test_extra_fields_forbidden(self) -> None:
        """ThemeColors rejects unknown fields."""
        with pytest.raises(ValidationError):
            ThemeColors(package_manual="#ffffff")  # type: ignore[call-arg]


class TestReadColors:
    """Tests for _read_colors internal function."""

    def test_loads_valid_toml(self, tmp_path: Path) -> None:
        """Loads colors from valid TOML file."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[colors]\ntext = "#000000"\nheader = "#aabbcc"\n')

        assert _read_colors(theme_file) == {"text": "#000000", "header": "#aabbcc"}

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file contributes nothing."""
        assert _read_colors(tmp_path / "nonexistent.toml") == {}

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Malformed TOML contributes nothing."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text("not valid [ toml syntax")

        assert _read_colors(theme_file) == {}

    def test_colors_not_a_table(self, tmp_path: Path) -> None:
        """A scalar 'colors' key is ignored."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('colors = "#000000"\n')

        assert _read_colors(theme_file) == {}


class TestLoadTheme:
    """Tests for load_theme function."""

    def test_bundled_theme_exists(self) -> None:
        """The bundled theme ships with the package."""
        assert get_bundled_theme_path().is_file()

    def test_bundled_theme_matches_defaults(self, isolated_config: Path) -> None:
        """The shipped file and the model defaults agree."""
        assert load_theme() == ThemeColors()

    def test_user_theme_overrides_bundled(self, tmp_path: Path) -> None:
        """User theme overrides bundled theme values."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nheader = "#ff0000"\n')

        with patch("editorscan.core.theme.get_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors.header == "#ff0000"
        assert colors.success == "#03b971"

    def test_invalid_user_color_falls_back(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """An invalid override falls back to defaults and says so on stderr."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nheader = "red"\n')

        with patch("editorscan.core.theme.get_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors == ThemeColors()
        assert "Invalid theme configuration" in capsys.readouterr().err


class TestGetRichTheme:
    """Tests for get_rich_theme function."""

    def test_every_color_is_a_style(self) -> None:
        """Each color field becomes a style, plus the derived ones."""
        theme = get_rich_theme(ThemeColors())

        for name in (*ThemeColors.model_fields, "bold_header", "dim", "editor.path"):
            assert name in theme.styles

    def test_bold_styles(self) -> None:
        """Errors, default editors and high severity are bold."""
        theme = get_rich_theme(ThemeColors())

        assert theme.styles["severity_high"].bold
        assert theme.styles["editor_default"].bold
        assert not theme.styles["severity_low"].bold

    def test_uses_provided_colors(self) -> None:
        """Uses provided ThemeColors instance."""
        theme = get_rich_theme(ThemeColors(header="#123456"))
        assert theme.styles["header"].color is not None
        assert theme.styles["header"].color.name == "#123456"


class TestGetTheme:
    """Tests for get_theme caching function."""

    def test_caches_theme(self) -> None:
        """get_theme returns the cached instance until the cache is cleared."""
        get_theme.cache_clear()

        first = get_theme()

        assert isinstance(first, Theme)
        assert get_theme() is first
        get_theme.cache_clear()
        assert get_theme() is not first
