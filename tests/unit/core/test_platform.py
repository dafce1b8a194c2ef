"""Unit tests for host OS detection."""

from unittest.mock import patch

import pytest
from editorscan.core.platform import HostOS


class TestHostOS:
    """Tests for HostOS enum."""

    @pytest.mark.parametrize(
        ("platform", "expected"),
        [
            ("darwin", HostOS.MACOS),
            ("win32", HostOS.WINDOWS),
            ("cygwin", HostOS.WINDOWS),
            ("linux", HostOS.LINUX),
            ("freebsd14", HostOS.LINUX),
        ],
    )
    def test_current(self, platform: str, expected: HostOS) -> None:
        """current() maps sys.platform to a host family."""
        with patch("editorscan.core.platform.sys.platform", platform):
            assert HostOS.current() is expected

    def test_lookup_command(self) -> None:
        """Windows uses where, everything else which."""
        assert HostOS.WINDOWS.lookup_command == "where"
        assert HostOS.MACOS.lookup_command == "which"
        assert HostOS.LINUX.lookup_command == "which"

    def test_path_separator(self) -> None:
        """PATH separator differs on Windows."""
        assert HostOS.WINDOWS.path_separator == ";"
        assert HostOS.LINUX.path_separator == ":"

    def test_display_name(self) -> None:
        """Display names use marketing spelling."""
        assert HostOS.MACOS.display_name == "macOS"
        assert HostOS.WINDOWS.display_name == "Windows"
        assert HostOS.LINUX.display_name == "Linux"
