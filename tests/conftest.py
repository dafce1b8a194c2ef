"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from editorscan.models.editor import EditorConfig

MakeExecutable = Callable[..., Path]


@pytest.fixture
def make_executable(tmp_path: Path) -> MakeExecutable:
    """Factory creating an executable script below tmp_path."""

    def _make(relative: str, *, mode: int = 0o755, content: str = "#!/bin/sh\n") -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        path.chmod(mode)
        return path

    return _make


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at a temporary directory.

    Returns:
        The editorscan config directory inside tmp_path (not created).
    """
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home / "editorscan"


@pytest.fixture
def sample_editors() -> list[EditorConfig]:
    """Editors as discovery would report them, unsorted."""
    return [
        EditorConfig(
            id="cursor",
            display_name="Cursor",
            executable_path="/usr/bin/cursor",
            is_auto_discovered=True,
        ),
        EditorConfig(
            id="windsurf",
            display_name="Windsurf",
            executable_path="/usr/bin/windsurf",
            is_auto_discovered=True,
        ),
        EditorConfig(
            id="vscode",
            display_name="Visual Studio Code",
            executable_path="/usr/bin/code",
            version="1.85.0",
            is_default=True,
            is_auto_discovered=True,
        ),
    ]


@pytest.fixture
def mock_dpkg_output() -> str:
    """Sample dpkg -l output with two editor packages."""
    return """Desired=Unknown/Install/Remove/Purge/Hold
| Status=Not/Inst/Conf-files/Unpacked/halF-conf/Half-inst/trig-aWait/Trig-pend
||/ Name           Version      Architecture Description
+++-==============-============-============-=================================
ii  code           1.85.0-1702  amd64        Code editing. Redefined.
ii  curl           8.5.0-2      amd64        command line tool for transferring data
ii  cursor         0.42.3       amd64        The AI Code Editor
rc  windsurf       1.0.0        amd64        removed package"""


@pytest.fixture
def mock_uninstall_output() -> str:
    """Sample ``reg query ... /s`` output for the Uninstall key."""
    return r"""
HKEY_LOCAL_MACHINE\SOFTWARE\Microsoft\Windows\CurrentVersion\Uninstall\{771FD6B0}_is1
    DisplayName    REG_SZ    Microsoft Visual Studio Code
    InstallLocation    REG_SZ    C:\Program Files\Microsoft VS Code\

HKEY_LOCAL_MACHINE\SOFTWARE\Microsoft\Windows\CurrentVersion\Uninstall\7-Zip
    DisplayName    REG_SZ    7-Zip 23.01 (x64)
    InstallLocation    REG_SZ    C:\Program Files\7-Zip\

HKEY_LOCAL_MACHINE\SOFTWARE\Microsoft\Windows\CurrentVersion\Uninstall\Cursor
    DisplayName    REG_SZ    Cursor 0.42.3
    InstallLocation    REG_SZ    C:\Users\dev\AppData\Local\Programs\cursor"""

