"""Windows application discovery.

Finds editors in the Program Files folders, in the per-user Programs
folder, and through the Uninstall and App Paths registry keys.
"""

import logging
import os
from pathlib import Path, PureWindowsPath

from editorscan.core.platform import HostOS
from editorscan.discovery.base import ApplicationService, dedupe_by_path
from editorscan.discovery.matching import display_name_from, is_editor_directory, is_known_editor
from editorscan.models.editor import EditorAppMetadata, EditorConfig

logger = logging.getLogger(__name__)

UNINSTALL_KEYS: tuple[str, ...] = (
    r"HKEY_LOCAL_MACHINE\SOFTWARE\Microsoft\Windows\CurrentVersion\Uninstall",
    r"HKEY_CURRENT_USER\SOFTWARE\Microsoft\Windows\CurrentVersion\Uninstall",
    r"HKEY_LOCAL_MACHINE\SOFTWARE\WOW6432Node\Microsoft\Windows\CurrentVersion\Uninstall",
)

APP_PATHS_KEYS: tuple[str, ...] = (
    r"HKEY_LOCAL_MACHINE\SOFTWARE\Microsoft\Windows\CurrentVersion\App Paths",
    r"HKEY_CURRENT_USER\SOFTWARE\Microsoft\Windows\CurrentVersion\App Paths",
)

# Levels of directories searched below an install folder, itself included
MAX_SEARCH_DEPTH = 3


def registry_value(line: str) -> str | None:
    """Return the data part of a ``reg query`` REG_SZ line."""
    _, sep, value = line.partition("REG_SZ")
    if not sep:
        return None
    return value.strip() or None


def parse_uninstall_output(lines: list[str]) -> list[tuple[str, str | None]]:
    """Pair DisplayName and InstallLocation per registry key block.

    Blocks start at lines beginning with ``HKEY_``. The last block is
    flushed at the end of the output like any other.

    Args:
        lines: Output of ``reg query <key> /s``.

    Returns:
        ``(display_name, install_location)`` for every block that has a
        display name.
    """
    entries: list[tuple[str, str | None]] = []
    current_key: str | None = None
    display_name: str | None = None
    install_location: str | None = None

    def flush() -> None:
        if current_key is not None and display_name is not None:
            entries.append((display_name, install_location))

    for line in lines:
        if line.startswith("HKEY_"):
            flush()
            current_key = line.strip()
            display_name = None
            install_location = None
        elif "DisplayName" in line:
            display_name = registry_value(line)
        elif "InstallLocation" in line:
            install_location = registry_value(line)
    flush()
    return entries


def _default_program_dirs() -> list[Path]:
    dirs = [
        os.environ.get("ProgramFiles", r"C:\Program Files"),
        os.environ.get("ProgramFiles(x86)", r"C:\Program Files (x86)"),
    ]
    local = os.environ.get("LOCALAPPDATA")
    if local:
        dirs.append(os.path.join(local, "Programs"))
    return [Path(d) for d in dirs]


class WindowsApplicationService(ApplicationService):
    """Discovers editors installed on Windows.

    Install folders are picked with a broad vendor list and searched a few
    levels deep for ``.exe`` files; only executables on the editor
    whitelist are kept.
    """

    def __init__(
        self,
        *,
        host: HostOS | None = None,
        program_dirs: list[Path] | None = None,
        query_registry: bool = True,
    ) -> None:
        """Initialize the service.

        Args:
            host: Host to act as. Defaults to the running OS.
            program_dirs: Folders holding install directories. Defaults to
                Program Files, Program Files (x86) and LOCALAPPDATA\\Programs.
            query_registry: Whether to consult the registry as well.
        """
        self._host = host or HostOS.current()
        self._program_dirs = program_dirs if program_dirs is not None else _default_program_dirs()
        self._query_registry = query_registry

    @property
    def name(self) -> str:
        """Return the service name."""
        return "Windows Application Discovery"

    def is_supported(self) -> bool:
        """Check for a Windows host."""
        return self._host is HostOS.WINDOWS

    def discover_editors(self) -> list[EditorConfig]:
        """Scan install folders and the registry for editors."""
        if not self.is_supported():
            return []

        editors: list[EditorConfig] = []
        for directory in self._program_dirs:
            editors.extend(self._scan_program_dir(directory))
        if self._query_registry:
            for key in UNINSTALL_KEYS:
                editors.extend(self._query_uninstall_key(key))
            for key in APP_PATHS_KEYS:
                editors.extend(self._query_app_paths_key(key))

        logger.debug("%s found %d editors", self.name, len(editors))
        return dedupe_by_path(editors)

    def _scan_program_dir(self, directory: Path) -> list[EditorConfig]:
        app_dirs = self.safe_scan_directory(
            directory,
            lambda entry: entry.is_dir() and is_editor_directory(entry.name),
        )
        configs = (self._config_from_install_dir(app_dir) for app_dir in app_dirs)
        return [config for config in configs if config is not None]

    def _config_from_install_dir(self, directory: Path) -> EditorConfig | None:
        executable = next(
            (exe for exe in find_executables(directory) if is_known_editor(exe.name)),
            None,
        )
        if executable is None:
            return None
        return self.create_editor_config(
            EditorAppMetadata(
                app_name=directory.name,
                app_path=str(directory),
                executable_path=str(executable),
                version=self.extract_version(str(executable)),
                display_name=display_name_from(directory.name),
                install_location=str(directory),
            )
        )

    def _query_uninstall_key(self, key: str) -> list[EditorConfig]:
        output = self.execute_command(["reg", "query", key, "/s"])
        editors: list[EditorConfig] = []
        for display_name, location in parse_uninstall_output(output):
            if not is_known_editor(display_name) or not location:
                continue
            config = self._config_from_install_dir(Path(location))
            if config is not None:
                editors.append(config)
        return editors

    def _query_app_paths_key(self, key: str) -> list[EditorConfig]:
        editors: list[EditorConfig] = []
        for line in self.execute_command(["reg", "query", key]):
            if ".exe" not in line or not is_known_editor(line):
                continue
            exe_path = registry_value(line)
            if exe_path is None or not Path(exe_path).exists():
                continue
            app_name = PureWindowsPath(exe_path).stem
            config = self.create_editor_config(
                EditorAppMetadata(
                    app_name=app_name,
                    app_path=exe_path,
                    executable_path=exe_path,
                    version=self.extract_version(exe_path),
                    display_name=display_name_from(app_name),
                )
            )
            if config is not None:
                editors.append(config)
        return editors


def find_executables(directory: Path, max_depth: int = MAX_SEARCH_DEPTH) -> list[Path]:
    """Collect ``.exe`` files up to ``max_depth`` directory levels deep.

    Args:
        directory: Install folder to search.
        max_depth: Number of levels searched, the folder itself being one.

    Returns:
        Executables in breadth order of discovery, sorted per directory.
    """
    if max_depth <= 0:
        return []
    try:
        entries = sorted(directory.iterdir())
    except OSError:
        return []

    found: list[Path] = []
    for entry in entries:
        try:
            if entry.is_file() and entry.suffix.lower() == ".exe":
                found.append(entry)
            elif entry.is_dir() and max_depth > 1:
                found.extend(find_executables(entry, max_depth - 1))
        except OSError:
            continue
    return found
