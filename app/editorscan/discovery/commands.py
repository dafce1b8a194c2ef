"""Command-resolution strategies.

Each strategy asks the host's lookup tool (``which`` or ``where``) for the
launcher of every catalog editor. A probe that times out, exits non-zero,
prints nothing or prints the tool's not-found message contributes nothing.
"""

import logging
import os
import subprocess
from pathlib import Path

from editorscan.core.config import DEFAULT_PROBE_TIMEOUT
from editorscan.core.platform import HostOS
from editorscan.discovery.base import CommandStrategy, DebugCallback, dedupe_by_path
from editorscan.models.editor import EditorConfig, EditorType
from editorscan.utils.shell import run_command

logger = logging.getLogger(__name__)

# Launcher command -> editor, probed in this order
EDITOR_COMMANDS: dict[str, EditorType] = {
    "code": EditorType.VSCODE,
    "cursor": EditorType.CURSOR,
    "windsurf": EditorType.WINDSURF,
    "antigravity": EditorType.ANTIGRAVITY,
    "catpaw": EditorType.CATPAW,
    "trae": EditorType.TRAE,
}

# Bundle names under /Applications whose CLI shim lives in Contents/Resources/app/bin
_MACOS_BUNDLES: tuple[str, ...] = (
    "Visual Studio Code",
    "Cursor",
    "Windsurf",
    "AntiGravity",
    "CatPaw",
    "Trae",
)

MACOS_EXTRA_PATHS: tuple[str, ...] = (
    "/opt/homebrew/bin",
    "/usr/local/bin",
    *(f"/Applications/{bundle}.app/Contents/Resources/app/bin" for bundle in _MACOS_BUNDLES),
)


def _emit(debug: DebugCallback | None, message: str) -> None:
    logger.debug(message)
    if debug is not None:
        debug(message)


class _LookupStrategy(CommandStrategy):
    """Shared probe loop for which/where based strategies."""

    host: HostOS
    lookup_command: str
    not_found_marker: str

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_PROBE_TIMEOUT,
        extra_paths: tuple[str, ...] | list[str] = (),
    ) -> None:
        """Initialize the strategy.

        Args:
            timeout: Seconds each probe may take before it is abandoned.
            extra_paths: Directories to search in addition to PATH.
        """
        self._timeout = timeout
        self._extra_paths = tuple(extra_paths)

    @property
    def name(self) -> str:
        """Return the strategy name, e.g. 'Linux which'."""
        return f"{self.host.display_name} {self.lookup_command}"

    def is_supported(self) -> bool:
        """Check whether the running host matches this strategy."""
        return HostOS.current() is self.host

    def discover(self, debug: DebugCallback | None = None) -> list[EditorConfig]:
        """Probe every catalog command with the host's lookup tool."""
        commands = ", ".join(EDITOR_COMMANDS)
        _emit(debug, f"{self.name}: testing {len(EDITOR_COMMANDS)} commands: {commands}")
        env = self._probe_environment()
        discovered: list[EditorConfig] = []

        for command, editor_type in EDITOR_COMMANDS.items():
            _emit(debug, f"{self.name}: executing '{self.lookup_command} {command}'")
            path = self._probe(command, env, debug)
            if path is None:
                continue
            config = EditorConfig(
                id=editor_type.id,
                display_name=editor_type.display_name,
                executable_path=path,
                is_auto_discovered=True,
            )
            config.mark_validated()
            discovered.append(config)
            _emit(debug, f"{self.name}: found {editor_type.display_name} at {path}")

        discovered = self._finalize(discovered)
        _emit(debug, f"{self.name}: discovery completed, found {len(discovered)} editors")
        return discovered

    def _probe(
        self, command: str, env: dict[str, str] | None, debug: DebugCallback | None
    ) -> str | None:
        """Resolve one command, returning its path or None."""
        try:
            result = run_command([self.lookup_command, command], timeout=self._timeout, env=env)
        except subprocess.TimeoutExpired:
            _emit(debug, f"{self.name}: '{command}' timed out after {self._timeout}s")
            return None
        except (OSError, subprocess.SubprocessError) as e:
            _emit(debug, f"{self.name}: '{command}' failed: {e}")
            return None

        output = result.stdout.strip()
        if not result.success or not output or self.not_found_marker in output:
            _emit(debug, f"{self.name}: '{command}' not found (exit {result.returncode})")
            return None
        return self._select_path(output, debug)

    def _probe_environment(self) -> dict[str, str] | None:
        """Return the environment for probes, or None to inherit ours."""
        return None

    def _select_path(self, output: str, debug: DebugCallback | None) -> str | None:
        """Pick the executable path out of the lookup tool's output."""
        return output

    def _finalize(self, discovered: list[EditorConfig]) -> list[EditorConfig]:
        return discovered


class MacOSCommandStrategy(_LookupStrategy):
    """Resolves editor launchers with ``which`` on macOS.

    GUI-launched processes on macOS often inherit a minimal PATH, so the
    probes search Homebrew prefixes and each editor's bundled CLI folder
    as well.
    """

    host = HostOS.MACOS
    lookup_command = "which"
    not_found_marker = "not found"

    def _probe_environment(self) -> dict[str, str] | None:
        inherited = os.environ.get("PATH")
        combined = enhanced_search_path(inherited, (*self._extra_paths, *MACOS_EXTRA_PATHS))
        if combined is None or combined == inherited:
            return None
        return {**os.environ, "PATH": combined}


class WindowsCommandStrategy(_LookupStrategy):
    """Resolves editor launchers with ``where`` on Windows."""

    host = HostOS.WINDOWS
    lookup_command = "where"
    not_found_marker = "Could not find"

    def _select_path(self, output: str, debug: DebugCallback | None) -> str | None:
        # where lists every match, one per line
        first = output.splitlines()[0].strip()
        if not Path(first).exists():
            _emit(debug, f"{self.name}: reported path {first} does not exist")
            return None
        return first

    def _finalize(self, discovered: list[EditorConfig]) -> list[EditorConfig]:
        return dedupe_by_path(discovered)


class LinuxCommandStrategy(_LookupStrategy):
    """Resolves editor launchers with ``which`` on Linux."""

    host = HostOS.LINUX
    lookup_command = "which"
    not_found_marker = "not found"

    def _finalize(self, discovered: list[EditorConfig]) -> list[EditorConfig]:
        return dedupe_by_path(discovered)


def enhanced_search_path(inherited: str | None, candidates: tuple[str, ...]) -> str | None:
    """Prepend existing candidate directories to a PATH value.

    Args:
        inherited: Current PATH, or None if unset.
        candidates: Directories to add, in priority order.

    Returns:
        The new PATH. Equal to ``inherited`` (possibly None) when no candidate
        qualifies.
    """
    existing = inherited.split(":") if inherited else []
    additions: list[str] = []
    for candidate in candidates:
        if candidate in existing or candidate in additions:
            continue
        if Path(candidate).exists():
            additions.append(candidate)
    if not additions:
        return inherited
    return ":".join(additions + existing)


def default_strategies(
    *,
    timeout: float = DEFAULT_PROBE_TIMEOUT,
    extra_paths: tuple[str, ...] | list[str] = (),
) -> list[CommandStrategy]:
    """Return one strategy per supported host OS."""
    return [
        MacOSCommandStrategy(timeout=timeout, extra_paths=extra_paths),
        WindowsCommandStrategy(timeout=timeout, extra_paths=extra_paths),
        LinuxCommandStrategy(timeout=timeout, extra_paths=extra_paths),
    ]
