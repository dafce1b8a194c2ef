"""Unit tests for command-resolution strategies."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

from editorscan.core.platform import HostOS
from editorscan.discovery.commands import (
    EDITOR_COMMANDS,
    LinuxCommandStrategy,
    MacOSCommandStrategy,
    WindowsCommandStrategy,
    default_strategies,
    enhanced_search_path,
)
from editorscan.utils.shell import CommandResult

NOT_FOUND = CommandResult(stdout="", stderr="", returncode=1)


def _which(found: dict[str, str]) -> object:
    """Build a run_command side effect resolving only the given commands."""

    def side_effect(args: list[str], **kwargs: object) -> CommandResult:
        path = found.get(args[1])
        if path is None:
            return NOT_FOUND
        return CommandResult(stdout=f"{path}\n", stderr="", returncode=0)

    return side_effect


class TestLinuxCommandStrategy:
    """Tests for LinuxCommandStrategy."""

    def test_name(self) -> None:
        """Name combines host and lookup tool."""
        assert LinuxCommandStrategy().name == "Linux which"

    def test_probes_every_command(self) -> None:
        """Every catalog command is probed with which and the timeout."""
        with patch("editorscan.discovery.commands.run_command") as mock_run:
            mock_run.return_value = NOT_FOUND
            LinuxCommandStrategy(timeout=1.5).discover()

        probed = [c.args[0] for c in mock_run.call_args_list]
        assert probed == [["which", command] for command in EDITOR_COMMANDS]
        assert all(c.kwargs["timeout"] == 1.5 for c in mock_run.call_args_list)

    def test_discovers_resolved_commands(self) -> None:
        """Resolved commands become auto-discovered editors."""
        found = {"code": "/usr/bin/code", "cursor": "/usr/local/bin/cursor"}
        with patch("editorscan.discovery.commands.run_command", side_effect=_which(found)):
            editors = LinuxCommandStrategy().discover()

        assert [(e.id, e.executable_path) for e in editors] == [
            ("vscode", "/usr/bin/code"),
            ("cursor", "/usr/local/bin/cursor"),
        ]
        assert all(e.is_auto_discovered for e in editors)
        assert all(e.last_validated > 0 for e in editors)

    def test_not_found_message_ignored(self) -> None:
        """Output containing the not-found marker contributes nothing."""
        result = CommandResult(stdout="windsurf not found", stderr="", returncode=0)
        with patch("editorscan.discovery.commands.run_command", return_value=result):
            assert LinuxCommandStrategy().discover() == []

    def test_timeout_is_swallowed(self) -> None:
        """A probe timeout is reported to debug and never raised."""
        messages: list[str] = []
        with patch(
            "editorscan.discovery.commands.run_command",
            side_effect=subprocess.TimeoutExpired(cmd="which", timeout=2.0),
        ):
            editors = LinuxCommandStrategy().discover(messages.append)

        assert editors == []
        assert any("timed out" in m for m in messages)

    def test_missing_lookup_tool(self) -> None:
        """A missing which binary yields no editors."""
        with patch(
            "editorscan.discovery.commands.run_command",
            side_effect=FileNotFoundError("which"),
        ):
            assert LinuxCommandStrategy().discover() == []

    def test_duplicate_paths_collapsed(self) -> None:
        """Two commands resolving to the same file are reported once."""
        found = {"code": "/usr/bin/launcher", "trae": "/usr/bin/launcher"}
        with patch("editorscan.discovery.commands.run_command", side_effect=_which(found)):
            editors = LinuxCommandStrategy().discover()

        assert len(editors) == 1
        assert editors[0].id == "vscode"

    def test_debug_messages_in_order(self) -> None:
        """Progress strings start with the plan and end with the count."""
        messages: list[str] = []
        with patch(
            "editorscan.discovery.commands.run_command",
            side_effect=_which({"cursor": "/usr/bin/cursor"}),
        ):
            LinuxCommandStrategy().discover(messages.append)

        assert messages[0] == (
            "Linux which: testing 6 commands: code, cursor, windsurf, antigravity, catpaw, trae"
        )
        assert messages[1] == "Linux which: executing 'which code'"
        assert "Linux which: found Cursor at /usr/bin/cursor" in messages
        assert messages[-1] == "Linux which: discovery completed, found 1 editors"

    @patch("editorscan.discovery.commands.HostOS.current", return_value=HostOS.LINUX)
    def test_is_supported(self, mock_current: MagicMock) -> None:
        """Only the strategy for the running host is supported."""
        assert LinuxCommandStrategy().is_supported()
        assert not MacOSCommandStrategy().is_supported()
        assert not WindowsCommandStrategy().is_supported()


class TestWindowsCommandStrategy:
    """Tests for WindowsCommandStrategy."""

    def test_uses_where(self) -> None:
        """Probes run through where."""
        with patch("editorscan.discovery.commands.run_command", return_value=NOT_FOUND) as m:
            WindowsCommandStrategy().discover()

        assert m.call_args_list[0].args[0] == ["where", "code"]

    def test_takes_first_existing_line(self, tmp_path: Path) -> None:
        """Only the first line of where output is used, and it must exist."""
        first = tmp_path / "code.cmd"
        first.write_text("")
        output = f"{first}\r\n{tmp_path / 'Code.exe'}\r\n"

        def side_effect(args: list[str], **kwargs: object) -> CommandResult:
            if args[1] == "code":
                return CommandResult(stdout=output, stderr="", returncode=0)
            return NOT_FOUND

        with patch("editorscan.discovery.commands.run_command", side_effect=side_effect):
            editors = WindowsCommandStrategy().discover()

        assert [e.executable_path for e in editors] == [str(first)]

    def test_missing_first_line_skipped(self, tmp_path: Path) -> None:
        """A reported path that does not exist is dropped."""
        missing = tmp_path / "gone.exe"
        result = CommandResult(stdout=f"{missing}\r\n", stderr="", returncode=0)
        with patch("editorscan.discovery.commands.run_command", return_value=result):
            assert WindowsCommandStrategy().discover() == []

    def test_could_not_find_marker(self) -> None:
        """where's not-found message contributes nothing."""
        result = CommandResult(
            stdout="INFO: Could not find files for the given pattern(s).",
            stderr="",
            returncode=0,
        )
        with patch("editorscan.discovery.commands.run_command", return_value=result):
            assert WindowsCommandStrategy().discover() == []


class TestMacOSCommandStrategy:
    """Tests for MacOSCommandStrategy."""

    def test_probe_env_adds_extra_paths(self, tmp_path: Path) -> None:
        """Existing extra directories are prepended to PATH for probes."""
        extra = tmp_path / "tools"
        extra.mkdir()
        with (
            patch.dict("os.environ", {"PATH": "/usr/bin:/bin"}),
            patch("editorscan.discovery.commands.MACOS_EXTRA_PATHS", ()),
            patch("editorscan.discovery.commands.run_command", return_value=NOT_FOUND) as m,
        ):
            MacOSCommandStrategy(extra_paths=[str(extra)]).discover()

        env = m.call_args.kwargs["env"]
        assert env["PATH"] == f"{extra}:/usr/bin:/bin"

    def test_probe_env_inherited_when_unchanged(self, tmp_path: Path) -> None:
        """No env override when nothing new would be added."""
        with (
            patch.dict("os.environ", {"PATH": "/usr/bin"}),
            patch("editorscan.discovery.commands.MACOS_EXTRA_PATHS", ()),
            patch("editorscan.discovery.commands.run_command", return_value=NOT_FOUND) as m,
        ):
            MacOSCommandStrategy(extra_paths=[str(tmp_path / "missing")]).discover()

        assert m.call_args.kwargs["env"] is None

    def test_unset_path_stays_unset(self, tmp_path: Path) -> None:
        """Without PATH and without extra directories, lookups never get PATH=''."""
        with (
            patch.dict("os.environ", {}, clear=True),
            patch("editorscan.discovery.commands.MACOS_EXTRA_PATHS", ()),
            patch("editorscan.discovery.commands.run_command", return_value=NOT_FOUND) as m,
        ):
            MacOSCommandStrategy(extra_paths=[str(tmp_path / "missing")]).discover()

        assert m.call_args.kwargs["env"] is None


class TestEnhancedSearchPath:
    """Tests for enhanced_search_path function."""

    def test_prepends_existing_candidates(self, tmp_path: Path) -> None:
        """Existing candidates come first, in order."""
        a = tmp_path / "a"
        b = tmp_path / "b"
        a.mkdir()
        b.mkdir()

        result = enhanced_search_path("/usr/bin", (str(b), str(tmp_path / "nope"), str(a)))

        assert result == f"{b}:{a}:/usr/bin"

    def test_skips_already_present(self, tmp_path: Path) -> None:
        """Directories already on PATH are not repeated."""
        assert enhanced_search_path(str(tmp_path), (str(tmp_path),)) == str(tmp_path)

    def test_unset_path(self, tmp_path: Path) -> None:
        """An unset PATH becomes just the candidates."""
        assert enhanced_search_path(None, (str(tmp_path),)) == str(tmp_path)
        assert enhanced_search_path(None, ()) is None


class TestDefaultStrategies:
    """Tests for default_strategies function."""

    def test_one_per_host(self) -> None:
        """One strategy exists for each host OS."""
        names = [s.name for s in default_strategies()]
        assert names == ["macOS which", "Windows where", "Linux which"]
