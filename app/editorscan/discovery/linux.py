"""Linux application discovery.

Finds editors through desktop entries, well-known binary folders,
/opt installs and the dpkg package database.
"""

import logging
import os
import re
import shutil
from dataclasses import dataclass
from pathlib import Path

from editorscan.core.platform import HostOS
from editorscan.discovery.base import ApplicationService, dedupe_by_path, is_executable_file
from editorscan.discovery.matching import display_name_from, is_known_editor
from editorscan.models.editor import EditorAppMetadata, EditorConfig

logger = logging.getLogger(__name__)

_HOME = os.path.expanduser("~")

DESKTOP_DIRS: tuple[str, ...] = (
    "/usr/share/applications",
    "/usr/local/share/applications",
    f"{_HOME}/.local/share/applications",
    "/var/lib/flatpak/exports/share/applications",
    f"{_HOME}/.local/share/flatpak/exports/share/applications",
)

BINARY_DIRS: tuple[str, ...] = (
    "/usr/bin",
    "/usr/local/bin",
    "/snap/bin",
    f"{_HOME}/.local/bin",
    "/var/lib/flatpak/exports/bin",
)

OPT_DIRS: tuple[str, ...] = ("/opt",)

# Where dpkg-installed launchers are looked up by package name
PACKAGE_BIN_DIRS: tuple[str, ...] = ("/usr/bin", "/usr/local/bin")

# Package listings that are queried but not yet mapped to executables
UNPARSED_PACKAGE_QUERIES: tuple[list[str], ...] = (
    ["rpm", "-qa"],
    ["pacman", "-Q"],
    ["snap", "list"],
    ["flatpak", "list", "--app"],
)

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True, slots=True)
class DesktopEntry:
    """Fields read from a .desktop file."""

    name: str | None = None
    exec: str | None = None
    comment: str | None = None
    icon: str | None = None
    categories: str | None = None


_DESKTOP_KEYS: dict[str, str] = {
    "Name=": "name",
    "Exec=": "exec",
    "Comment=": "comment",
    "Icon=": "icon",
    "Categories=": "categories",
}


def parse_desktop_entry(content: str) -> DesktopEntry:
    """Extract the interesting keys from desktop entry text.

    Keys are matched by line prefix, so localized variants such as
    ``Name[de]=`` are ignored and the last plain occurrence wins.
    """
    fields: dict[str, str] = {}
    for line in content.splitlines():
        for prefix, attr in _DESKTOP_KEYS.items():
            if line.startswith(prefix):
                fields[attr] = line[len(prefix):]
                break
    return DesktopEntry(**fields)


def exec_target(exec_line: str) -> str | None:
    """Resolve the program of a desktop Exec line to a path.

    Absolute programs are returned as-is; bare names are looked up on PATH.
    """
    program = exec_line.strip().split(" ")[0].strip('"')
    if not program:
        return None
    if program.startswith("/"):
        return program
    return shutil.which(program)


def parse_dpkg_output(lines: list[str]) -> list[tuple[str, str]]:
    """Return ``(package, version)`` for installed editor packages in ``dpkg -l``."""
    packages: list[tuple[str, str]] = []
    for line in lines:
        if not line.startswith("ii"):
            continue
        parts = _WHITESPACE.split(line.strip())
        if len(parts) >= 3 and is_known_editor(parts[1]):
            packages.append((parts[1], parts[2]))
    return packages


def _dirs_or_default(dirs: list[Path] | None, defaults: tuple[str, ...]) -> list[Path]:
    return dirs if dirs is not None else [Path(d) for d in defaults]


class LinuxApplicationService(ApplicationService):
    """Discovers editors installed on Linux.

    Only dpkg is understood among the package managers. rpm, pacman, snap
    and flatpak are queried too, but nothing is taken from their listings
    yet; the folder scans cover the launchers those packages install.
    """

    def __init__(
        self,
        *,
        host: HostOS | None = None,
        desktop_dirs: list[Path] | None = None,
        binary_dirs: list[Path] | None = None,
        opt_dirs: list[Path] | None = None,
        package_bin_dirs: list[Path] | None = None,
        query_packages: bool = True,
    ) -> None:
        """Initialize the service.

        Args:
            host: Host to act as. Defaults to the running OS.
            desktop_dirs: Folders holding .desktop files.
            binary_dirs: Folders holding launchers.
            opt_dirs: Folders holding self-contained installs with a bin/.
            package_bin_dirs: Folders where package launchers are looked up.
            query_packages: Whether to ask package managers as well.
        """
        self._host = host or HostOS.current()
        self._desktop_dirs = _dirs_or_default(desktop_dirs, DESKTOP_DIRS)
        self._binary_dirs = _dirs_or_default(binary_dirs, BINARY_DIRS)
        self._opt_dirs = _dirs_or_default(opt_dirs, OPT_DIRS)
        self._package_bin_dirs = _dirs_or_default(package_bin_dirs, PACKAGE_BIN_DIRS)
        self._query_packages = query_packages

    @property
    def name(self) -> str:
        """Return the service name."""
        return "Linux Application Discovery"

    def is_supported(self) -> bool:
        """Check for a Linux host."""
        return self._host is HostOS.LINUX

    def discover_editors(self) -> list[EditorConfig]:
        """Scan desktop entries, binary folders and packages for editors."""
        if not self.is_supported():
            return []

        editors: list[EditorConfig] = []
        for directory in self._desktop_dirs:
            editors.extend(self._scan_desktop_dir(directory))
        for directory in self._binary_dirs:
            editors.extend(self._scan_binary_dir(directory))
        for directory in self._opt_dirs:
            editors.extend(self._scan_opt_dir(directory))
        if self._query_packages:
            editors.extend(self._query_package_managers())

        logger.debug("%s found %d editors", self.name, len(editors))
        return dedupe_by_path(editors)

    def _scan_desktop_dir(self, directory: Path) -> list[EditorConfig]:
        files = self.safe_scan_directory(
            directory,
            lambda entry: entry.is_file() and entry.name.endswith(".desktop"),
        )
        return [config for f in files if (config := self._config_from_desktop_file(f)) is not None]

    def _config_from_desktop_file(self, desktop_file: Path) -> EditorConfig | None:
        try:
            content = desktop_file.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.debug("Cannot read %s: %s", desktop_file, e)
            return None

        entry = parse_desktop_entry(content)
        if entry.name is None or entry.exec is None or not is_known_editor(entry.name):
            return None
        executable = exec_target(entry.exec)
        if executable is None or not Path(executable).exists():
            return None
        return self.create_editor_config(
            EditorAppMetadata(
                app_name=desktop_file.stem,
                app_path=str(desktop_file),
                executable_path=executable,
                version=self.extract_version(executable),
                display_name=entry.name,
                description=entry.comment,
                install_location=str(Path(executable).parent),
            )
        )

    def _scan_binary_dir(self, directory: Path) -> list[EditorConfig]:
        executables = self.safe_scan_directory(
            directory,
            lambda entry: is_executable_file(entry) and is_known_editor(entry.name),
        )
        editors: list[EditorConfig] = []
        for executable in executables:
            config = self.create_editor_config(
                EditorAppMetadata(
                    app_name=executable.name,
                    app_path=str(executable),
                    executable_path=str(executable),
                    version=self.extract_version(str(executable)),
                    display_name=display_name_from(executable.name),
                    install_location=str(executable.parent),
                )
            )
            if config is not None:
                editors.append(config)
        return editors

    def _scan_opt_dir(self, directory: Path) -> list[EditorConfig]:
        app_dirs = self.safe_scan_directory(
            directory,
            lambda entry: entry.is_dir() and is_known_editor(entry.name),
        )
        editors: list[EditorConfig] = []
        for app_dir in app_dirs:
            executables = self.safe_scan_directory(
                app_dir / "bin",
                lambda entry: is_executable_file(entry) and is_known_editor(entry.name),
            )
            if not executables:
                continue
            executable = executables[0]
            config = self.create_editor_config(
                EditorAppMetadata(
                    app_name=app_dir.name,
                    app_path=str(app_dir),
                    executable_path=str(executable),
                    version=self.extract_version(str(executable)),
                    display_name=display_name_from(app_dir.name),
                    install_location=str(app_dir),
                )
            )
            if config is not None:
                editors.append(config)
        return editors

    def _query_package_managers(self) -> list[EditorConfig]:
        editors = self._query_dpkg()
        for args in UNPARSED_PACKAGE_QUERIES:
            lines = self.execute_command(args)
            # TODO: map rpm/pacman/snap/flatpak package names to launcher paths
            logger.debug("%s listed %d packages, none mapped to launchers", args[0], len(lines))
        return editors

    def _query_dpkg(self) -> list[EditorConfig]:
        editors: list[EditorConfig] = []
        for package, version in parse_dpkg_output(self.execute_command(["dpkg", "-l"])):
            config = self._config_from_package(package, version)
            if config is not None:
                editors.append(config)
        return editors

    def _config_from_package(self, package: str, version: str) -> EditorConfig | None:
        for directory in self._package_bin_dirs:
            executable = directory / package
            if is_executable_file(executable):
                return self.create_editor_config(
                    EditorAppMetadata(
                        app_name=package,
                        app_path=str(executable),
                        executable_path=str(executable),
                        version=version,
                        display_name=display_name_from(package),
                    )
                )
        return None
