"""Editor models for discovery and configuration.

This module defines the catalog of supported editors and the
data structures that describe a located editor executable.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EditorType(Enum):
    """Catalog of known editors.

    Every member except CUSTOM belongs to the VS Code family and accepts
    the same command line conventions.
    """

    VSCODE = ("vscode", "Visual Studio Code", ("code", "Code.exe"))
    CURSOR = ("cursor", "Cursor", ("cursor", "Cursor.exe"))
    WINDSURF = ("windsurf", "Windsurf", ("windsurf", "Windsurf.exe"))
    ANTIGRAVITY = ("antigravity", "AntiGravity", ("antigravity", "AntiGravity.exe"))
    CATPAW = ("catpaw", "CatPaw", ("catpaw", "CatPaw.exe"))
    TRAE = ("trae", "Trae", ("trae", "Trae.exe"))
    CUSTOM = ("custom", "Custom Editor", ())

    def __init__(
        self, editor_id: str, display_name: str, executable_names: tuple[str, ...]
    ) -> None:
        self.id = editor_id
        self.display_name = display_name
        self.executable_names = executable_names

    def matches(self, path: str) -> bool:
        """Check whether a path looks like it belongs to this editor.

        Args:
            path: Executable path, bundle name or any free-form label.

        Returns:
            True if the lower-cased text satisfies this type's rule.
        """
        lower = path.lower()
        if self is EditorType.CUSTOM:
            return True
        if self is EditorType.VSCODE:
            return (
                "visual studio code" in lower
                or "vscode" in lower
                or (
                    "code" in lower
                    and ("visual" in lower or lower.endswith("code") or lower.endswith("code.exe"))
                )
            )
        return self.id in lower

    @classmethod
    def detect_from_path(cls, path: str) -> "EditorType":
        """Return the first non-custom type matching path, else CUSTOM."""
        for editor_type in cls:
            if editor_type is not cls.CUSTOM and editor_type.matches(path):
                return editor_type
        return cls.CUSTOM

    @classmethod
    def from_id(cls, editor_id: str) -> "EditorType | None":
        """Look up a type by its identifier (case-insensitive)."""
        wanted = editor_id.lower()
        for editor_type in cls:
            if editor_type.id == wanted:
                return editor_type
        return None

    @classmethod
    def known(cls) -> list["EditorType"]:
        """Return all catalog members except CUSTOM."""
        return [t for t in cls if t is not cls.CUSTOM]


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(slots=True)
class EditorConfig:
    """A located or manually entered editor.

    Only ``executable_path`` and ``last_validated`` change after creation;
    everything else is fixed by whoever built the config.

    Attributes:
        id: Editor type identifier (e.g., 'vscode', 'cursor').
        display_name: Human-readable name.
        executable_path: Path to the executable or application bundle.
        version: Version string if known.
        is_default: Whether this entry is the preferred editor.
        is_auto_discovered: Whether discovery (not the user) produced it.
        last_validated: Epoch milliseconds of the last validation.
        custom_args: Extra arguments appended to every launch.
    """

    id: str
    display_name: str
    executable_path: str
    version: str | None = field(default=None)
    is_default: bool = field(default=False)
    is_auto_discovered: bool = field(default=False)
    last_validated: int = field(default=0)
    custom_args: list[str] = field(default_factory=lambda: [])

    def is_valid(self) -> bool:
        """Check that an executable path is present."""
        return bool(self.executable_path.strip())

    @property
    def editor_type(self) -> EditorType:
        """Resolve the catalog entry for this config's id."""
        return EditorType.from_id(self.id) or EditorType.CUSTOM

    @property
    def display_text(self) -> str:
        """Return the display name decorated with version and origin."""
        text = self.display_name
        if self.version:
            text += f" ({self.version})"
        if self.is_auto_discovered:
            text += " (Auto-discovered)"
        return text

    def mark_validated(self) -> None:
        """Stamp the config with the current time."""
        self.last_validated = _now_ms()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "display_name": self.display_name,
            "executable_path": self.executable_path,
            "version": self.version,
            "is_default": self.is_default,
            "is_auto_discovered": self.is_auto_discovered,
            "last_validated": self.last_validated,
            "custom_args": list(self.custom_args),
        }


@dataclass(frozen=True, slots=True)
class EditorAppMetadata:
    """Describes an application found by a filesystem or registry scan.

    Instances are short-lived: each is converted into an EditorConfig once
    and then discarded.

    Attributes:
        app_name: Bundle, directory or file name of the application.
        app_path: Location used for type detection.
        executable_path: Path of the runnable binary.
        version: Version string if known.
        bundle_id: macOS bundle identifier.
        display_name: Preferred display name.
        description: Free-form description.
        install_location: Installation root.
    """

    app_name: str
    app_path: str
    executable_path: str
    version: str | None = field(default=None)
    bundle_id: str | None = field(default=None)
    display_name: str | None = field(default=None)
    description: str | None = field(default=None)
    install_location: str | None = field(default=None)

    def detect_editor_type(self) -> EditorType:
        """Detect the editor type from the application path."""
        return EditorType.detect_from_path(self.app_path)

    def to_editor_config(self) -> EditorConfig:
        """Convert into an auto-discovered EditorConfig.

        VS Code entries are flagged as default so that they sort first.
        """
        editor_type = self.detect_editor_type()
        return EditorConfig(
            id=editor_type.id,
            display_name=self.display_name or editor_type.display_name,
            executable_path=self.executable_path,
            version=self.version,
            is_default=editor_type is EditorType.VSCODE,
            is_auto_discovered=True,
            last_validated=_now_ms(),
        )
