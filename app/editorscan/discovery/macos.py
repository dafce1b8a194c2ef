"""macOS application discovery.

Finds editor bundles in the Applications folders and through Spotlight,
reading version and naming details from each bundle's Info.plist.
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

from editorscan.core.platform import HostOS
from editorscan.discovery.base import ApplicationService, dedupe_by_path, is_executable_file
from editorscan.discovery.matching import is_known_editor
from editorscan.models.editor import EditorAppMetadata, EditorConfig

logger = logging.getLogger(__name__)

MDFIND_QUERY = "kMDItemContentType=com.apple.application-bundle"


@dataclass(frozen=True, slots=True)
class BundleInfo:
    """Fields read from a bundle's Info.plist."""

    bundle_id: str | None = None
    display_name: str | None = None
    version: str | None = None
    description: str | None = None


def plist_value(content: str, key: str) -> str | None:
    """Extract the string value that follows ``<key>key</key>`` in a plist.

    Only XML plists with string values are understood, which covers the
    handful of keys read here.
    """
    pattern = rf"<key>{re.escape(key)}</key>\s*<string>([^<]+)</string>"
    match = re.search(pattern, content)
    return match.group(1).strip() if match else None


def read_bundle_info(bundle: Path) -> BundleInfo:
    """Read naming and version details from a bundle's Info.plist."""
    plist = bundle / "Contents" / "Info.plist"
    try:
        content = plist.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return BundleInfo()
    return BundleInfo(
        bundle_id=plist_value(content, "CFBundleIdentifier"),
        display_name=(
            plist_value(content, "CFBundleDisplayName") or plist_value(content, "CFBundleName")
        ),
        version=(
            plist_value(content, "CFBundleShortVersionString")
            or plist_value(content, "CFBundleVersion")
        ),
        description=plist_value(content, "CFBundleGetInfoString"),
    )


def find_bundle_executable(bundle: Path) -> Path | None:
    """Return the first executable file in ``Contents/MacOS``."""
    macos_dir = bundle / "Contents" / "MacOS"
    try:
        if not macos_dir.is_dir():
            return None
        for candidate in sorted(macos_dir.iterdir()):
            if is_executable_file(candidate):
                return candidate
    except OSError as e:
        logger.debug("Cannot inspect %s: %s", macos_dir, e)
    return None


class MacOSApplicationService(ApplicationService):
    """Discovers editor bundles on macOS.

    Scans /Applications and ~/Applications for whitelisted ``.app``
    bundles, then asks Spotlight for bundles installed elsewhere.
    """

    def __init__(
        self,
        *,
        host: HostOS | None = None,
        search_dirs: list[Path] | None = None,
        use_spotlight: bool = True,
    ) -> None:
        """Initialize the service.

        Args:
            host: Host to act as. Defaults to the running OS.
            search_dirs: Folders holding bundles. Defaults to the system and
                user Applications folders.
            use_spotlight: Whether to query mdfind as well.
        """
        self._host = host or HostOS.current()
        self._search_dirs = search_dirs or [
            Path("/Applications"),
            Path(os.path.expanduser("~/Applications")),
        ]
        self._use_spotlight = use_spotlight

    @property
    def name(self) -> str:
        """Return the service name."""
        return "macOS Application Discovery"

    def is_supported(self) -> bool:
        """Check for a macOS host."""
        return self._host is HostOS.MACOS

    def discover_editors(self) -> list[EditorConfig]:
        """Scan the Applications folders and Spotlight for editor bundles."""
        if not self.is_supported():
            return []

        editors: list[EditorConfig] = []
        for directory in self._search_dirs:
            editors.extend(self._scan_applications(directory))
        if self._use_spotlight:
            editors.extend(self._query_spotlight())

        logger.debug("%s found %d editors", self.name, len(editors))
        return dedupe_by_path(editors)

    def _scan_applications(self, directory: Path) -> list[EditorConfig]:
        bundles = self.safe_scan_directory(
            directory,
            lambda entry: (
                entry.is_dir() and entry.name.endswith(".app") and is_known_editor(entry.name)
            ),
        )
        configs = (self._config_from_bundle(bundle) for bundle in bundles)
        return [config for config in configs if config is not None]

    def _query_spotlight(self) -> list[EditorConfig]:
        editors: list[EditorConfig] = []
        for line in self.execute_command(["mdfind", MDFIND_QUERY]):
            bundle = Path(line.strip())
            if not bundle.name.endswith(".app") or not is_known_editor(bundle.name):
                continue
            if not bundle.exists():
                continue
            config = self._config_from_bundle(bundle)
            if config is not None:
                editors.append(config)
        return editors

    def _config_from_bundle(self, bundle: Path) -> EditorConfig | None:
        executable = find_bundle_executable(bundle)
        if executable is None:
            logger.debug("No executable inside %s", bundle)
            return None
        info = read_bundle_info(bundle)
        return self.create_editor_config(
            EditorAppMetadata(
                app_name=bundle.name,
                app_path=str(bundle),
                executable_path=str(executable),
                version=info.version,
                bundle_id=info.bundle_id,
                display_name=info.display_name or bundle.name.removesuffix(".app"),
                description=info.description,
                install_location=str(bundle),
            )
        )
