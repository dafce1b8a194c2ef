"""Host operating system detection.

Discovery sources, validation rules and recovery suggestions all vary by
host. Everything that needs to know the host takes a HostOS so tests can
pretend to be any platform.
"""

import sys
from enum import Enum


class HostOS(Enum):
    """Operating system families with distinct editor layouts."""

    MACOS = "macos"
    WINDOWS = "windows"
    LINUX = "linux"

    @classmethod
    def current(cls) -> "HostOS":
        """Detect the running host.

        Anything that is neither macOS nor Windows is treated as Linux,
        which covers the BSDs well enough for which-based probing.
        """
        if sys.platform == "darwin":
            return cls.MACOS
        if sys.platform.startswith(("win", "cygwin")):
            return cls.WINDOWS
        return cls.LINUX

    @property
    def display_name(self) -> str:
        """Return the marketing name of the OS."""
        return {HostOS.MACOS: "macOS", HostOS.WINDOWS: "Windows", HostOS.LINUX: "Linux"}[self]

    @property
    def path_separator(self) -> str:
        """Return the PATH list separator used on this host."""
        return ";" if self is HostOS.WINDOWS else ":"

    @property
    def lookup_command(self) -> str:
        """Return the command that resolves a name against PATH."""
        return "where" if self is HostOS.WINDOWS else "which"
