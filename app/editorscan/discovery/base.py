"""Abstract interfaces for editor discovery sources.

Two kinds of sources exist. Command strategies ask the shell to resolve
the editors' launcher commands (``which code``). Application services walk
the places where editors get installed: bundle folders, registries,
desktop entries and package databases.

Neither kind raises from its discovery entry point. Anything that goes
wrong inside a source is logged and contributes zero editors.
"""

import logging
import os
import re
import subprocess
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from pathlib import Path

from editorscan.models.editor import EditorAppMetadata, EditorConfig, EditorType
from editorscan.utils.shell import run_command

logger = logging.getLogger(__name__)

DebugCallback = Callable[[str], None]

# Upper bound for helper commands run by application services
SERVICE_COMMAND_TIMEOUT = 10.0

_VERSION_PATTERN = re.compile(r"(\d+\.\d+(?:\.\d+)?)")


def dedupe_by_path(editors: Iterable[EditorConfig]) -> list[EditorConfig]:
    """Drop later entries whose executable path was already seen.

    Args:
        editors: Editors in priority order.

    Returns:
        New list keeping the first entry per executable path.
    """
    seen: set[str] = set()
    unique: list[EditorConfig] = []
    for editor in editors:
        if editor.executable_path in seen:
            continue
        seen.add(editor.executable_path)
        unique.append(editor)
    return unique


def is_executable_file(path: Path) -> bool:
    """Check that path is a regular file the current user may execute."""
    try:
        return path.is_file() and os.access(path, os.X_OK)
    except OSError:
        return False


class CommandStrategy(ABC):
    """Abstract base class for command-resolution strategies.

    Each host OS gets one strategy. It probes the fixed command catalog
    (``code``, ``cursor``, ...) and reports every command the shell can
    resolve.

    Example:
        >>> strategy = LinuxCommandStrategy()
        >>> if strategy.is_supported():
        ...     for editor in strategy.discover():
        ...         print(editor.display_name, editor.executable_path)
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the strategy's human-readable name."""

    @abstractmethod
    def is_supported(self) -> bool:
        """Check whether this strategy applies to the running host."""

    @abstractmethod
    def discover(self, debug: DebugCallback | None = None) -> list[EditorConfig]:
        """Probe every catalog command.

        Args:
            debug: Optional sink for progress strings, called in order.

        Returns:
            Auto-discovered editors, possibly empty. Never raises.
        """

    def validate_path(self, path: str) -> EditorConfig | None:
        """Build a manual config for an existing executable.

        Args:
            path: User-supplied executable path.

        Returns:
            EditorConfig typed from the path text, or None if the file is
            missing or not executable.
        """
        if not path or not is_executable_file(Path(path)):
            return None
        editor_type = EditorType.detect_from_path(path)
        config = EditorConfig(
            id=editor_type.id,
            display_name=editor_type.display_name,
            executable_path=path,
            is_auto_discovered=False,
        )
        config.mark_validated()
        return config


class ApplicationService(ABC):
    """Abstract base class for application-directory services.

    Services look where installers put editors rather than asking the
    shell. They are slower than command strategies and only run in the
    COMPREHENSIVE and SMART tiers.
    """

    #: Nominal cost of one scan, in seconds
    estimated_time_seconds: float = 3.0

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the service's human-readable name."""

    @abstractmethod
    def is_supported(self) -> bool:
        """Check whether this service applies to the running host."""

    @abstractmethod
    def discover_editors(self) -> list[EditorConfig]:
        """Scan for installed editors.

        Returns:
            Editors deduplicated by executable path. Never raises.
        """

    def create_editor_config(self, metadata: EditorAppMetadata) -> EditorConfig | None:
        """Convert metadata into a config if its executable exists."""
        if not Path(metadata.executable_path).exists():
            logger.debug(
                "Skipping %s: %s does not exist", metadata.app_name, metadata.executable_path
            )
            return None
        return metadata.to_editor_config()

    def safe_scan_directory(
        self,
        directory: str | Path,
        predicate: Callable[[Path], bool] | None = None,
    ) -> list[Path]:
        """List a directory's entries, tolerating every kind of failure.

        Args:
            directory: Directory to list.
            predicate: Optional filter applied to each entry.

        Returns:
            Matching entries, or an empty list if the directory is missing,
            unreadable or not a directory.
        """
        path = Path(directory)
        try:
            if not path.is_dir() or not os.access(path, os.R_OK):
                return []
            entries = sorted(path.iterdir())
        except OSError as e:
            logger.debug("Cannot list %s: %s", path, e)
            return []
        if predicate is None:
            return entries
        return [entry for entry in entries if _safe_predicate(predicate, entry)]

    def execute_command(
        self, args: list[str], *, timeout: float = SERVICE_COMMAND_TIMEOUT
    ) -> list[str]:
        """Run a helper command and return its non-blank output lines.

        Args:
            args: Command and arguments.
            timeout: Maximum time in seconds to wait.

        Returns:
            Output lines of a successful run, else an empty list.
        """
        try:
            result = run_command(args, timeout=timeout)
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug("Command %s failed: %s", args[0], e)
            return []
        if not result.success:
            logger.debug("Command %s exited with %d", args[0], result.returncode)
            return []
        return [line for line in result.stdout.splitlines() if line.strip()]

    def extract_version(self, executable: str) -> str | None:
        """Ask an executable for its version.

        Runs ``<executable> --version`` and pulls the first dotted number
        from the first line, so "code 1.85.0" and "Version 1.85" both work.
        """
        lines = self.execute_command([executable, "--version"])
        if not lines:
            return None
        match = _VERSION_PATTERN.search(lines[0])
        return match.group(1) if match else None


def _safe_predicate(predicate: Callable[[Path], bool], entry: Path) -> bool:
    try:
        return predicate(entry)
    except OSError:
        return False
