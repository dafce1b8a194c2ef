"""Unit tests for the config commands."""

import json
import tomllib
from pathlib import Path

from editorscan.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestConfigShow:
    """Tests for editorscan config show."""

    def test_show_defaults_json(self, isolated_config: Path) -> None:
        """Defaults are shown when no file exists."""
        result = runner.invoke(app, ["config", "show", "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["default_tier"] == "comprehensive"
        assert data["cache_ttl_seconds"] == 300
        assert data["default_editor"] is None

    def test_show_table(self, isolated_config: Path) -> None:
        """The table lists every setting."""
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        for key in ("default_tier", "probe_timeout_seconds", "cache_ttl_seconds"):
            assert key in result.stdout

    def test_show_file_values(self, isolated_config: Path) -> None:
        """Values from the file override defaults."""
        isolated_config.mkdir(parents=True)
        (isolated_config / "config.toml").write_text("probe_timeout_seconds = 5.0\n")

        result = runner.invoke(app, ["config", "show", "--format", "json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["probe_timeout_seconds"] == 5.0

    def test_show_invalid_file(self, isolated_config: Path) -> None:
        """Schema violations abort with an error."""
        isolated_config.mkdir(parents=True)
        (isolated_config / "config.toml").write_text("colour = 'blue'\n")

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 1
        assert "Invalid config content" in result.output


class TestConfigPath:
    """Tests for editorscan config path."""

    def test_paths_not_created(self, isolated_config: Path) -> None:
        """Missing files are marked."""
        result = runner.invoke(app, ["config", "path"])

        assert result.exit_code == 0
        assert "config:" in result.stdout
        assert "theme:" in result.stdout
        assert "(not created)" in result.stdout


class TestConfigSet:
    """Tests for editorscan config set."""

    def test_set_writes_file(self, isolated_config: Path) -> None:
        """A valid value is saved."""
        result = runner.invoke(app, ["config", "set", "default_tier", "smart"])

        assert result.exit_code == 0
        with open(isolated_config / "config.toml", "rb") as f:
            data = tomllib.load(f)
        assert data["default_tier"] == "smart"

    def test_set_list_value(self, isolated_config: Path) -> None:
        """List settings take comma-separated values."""
        result = runner.invoke(
            app, ["config", "set", "extra_search_paths", "/opt/a, /opt/b"]
        )

        assert result.exit_code == 0
        with open(isolated_config / "config.toml", "rb") as f:
            data = tomllib.load(f)
        assert data["extra_search_paths"] == ["/opt/a", "/opt/b"]

    def test_set_unknown_key(self, isolated_config: Path) -> None:
        """Unknown keys are rejected."""
        result = runner.invoke(app, ["config", "set", "colour", "blue"])

        assert result.exit_code == 1
        assert "Unknown setting" in result.output
        assert not (isolated_config / "config.toml").exists()

    def test_set_invalid_value(self, isolated_config: Path) -> None:
        """Values failing validation are rejected."""
        result = runner.invoke(app, ["config", "set", "default_editor", "emacs"])

        assert result.exit_code == 1
        assert "Invalid value" in result.output
