"""Editor path validation.

Checks a candidate editor path in a fixed order and stops at the first
failing check: blank, missing, directory, not executable, wrong editor.
Nothing is ever executed, so validating cannot start the editor.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from editorscan.core.platform import HostOS
from editorscan.discovery.macos import find_bundle_executable
from editorscan.models.editor import EditorType
from editorscan.models.validation import Invalid, Valid, ValidationResult, Warning

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PathInfo:
    """Filesystem facts about a path.

    Attributes:
        exists: Whether the path exists.
        is_directory: Whether it is a directory.
        is_executable: Whether the host would run it.
        size: Size in bytes for files, else 0.
        last_modified: Modification time in epoch milliseconds.
    """

    exists: bool
    is_directory: bool
    is_executable: bool
    size: int
    last_modified: int


class PathValidator:
    """Validates user-supplied editor paths for a given host.

    Example:
        >>> validator = PathValidator()
        >>> match validator.validate("/usr/bin/code", EditorType.VSCODE):
        ...     case Invalid(reason=reason):
        ...         print(reason)
    """

    def __init__(self, host: HostOS | None = None) -> None:
        """Initialize the validator.

        Args:
            host: Host whose rules apply. Defaults to the running OS.
        """
        self._host = host or HostOS.current()

    def validate(self, path: str, expected_type: EditorType | None = None) -> ValidationResult:
        """Validate a path, optionally against an expected editor.

        Args:
            path: Path to check.
            expected_type: Editor the user said the path belongs to.

        Returns:
            Exactly one of Valid, Invalid or Warning. Never raises.
        """
        try:
            return self._validate(path, expected_type)
        except Exception as e:
            logger.warning("Validation failed for path %s: %s", path, e)
            return Invalid(f"Validation failed: {e}", "Please check the path and try again")

    def _validate(self, path: str, expected_type: EditorType | None) -> ValidationResult:
        if not path.strip():
            return Invalid(
                "Path cannot be empty",
                "Please enter a valid path to the editor executable",
            )

        target = Path(path)
        if not target.exists():
            return Invalid(
                f"File does not exist: {path}",
                self._missing_path_suggestion(expected_type),
            )

        if target.is_dir() and not self._is_app_bundle(path):
            return Invalid(
                "Path points to a directory, not an executable file",
                "Please select the executable file inside the directory",
            )

        if not self.is_executable(path):
            return Warning("File may not be executable")

        return self._check_compatibility(path, expected_type)

    def _is_app_bundle(self, path: str) -> bool:
        return self._host is HostOS.MACOS and path.endswith(".app")

    def is_executable(self, path: str) -> bool:
        """Check whether the host would run path.

        macOS bundles count when their ``Contents/MacOS`` holds an
        executable. On Windows a readable ``.exe`` is enough.
        """
        if self._is_app_bundle(path):
            return find_bundle_executable(Path(path)) is not None
        if self._host is HostOS.WINDOWS:
            runnable = path.lower().endswith(".exe") or os.access(path, os.X_OK)
            return os.access(path, os.R_OK) and runnable
        return os.path.isfile(path) and os.access(path, os.X_OK)

    def _check_compatibility(
        self, path: str, expected_type: EditorType | None
    ) -> ValidationResult:
        if expected_type is None or expected_type is EditorType.CUSTOM:
            return Valid()
        detected = EditorType.detect_from_path(path)
        if detected is expected_type:
            return Valid()
        if detected is EditorType.CUSTOM:
            return Warning("Could not determine editor type from path")
        return Warning(
            f"Path appears to be for {detected.display_name}, "
            f"but {expected_type.display_name} was expected"
        )

    def _missing_path_suggestion(self, expected_type: EditorType | None) -> str:
        lookup = self._host.lookup_command
        where = "Command Prompt" if self._host is HostOS.WINDOWS else "terminal"

        suggestions = [
            "Verify the path is correct",
            f"Use '{lookup} <command>' in {where} to find executable paths",
        ]
        if expected_type is not None and expected_type.executable_names:
            suggestions.extend(
                f"Try '{lookup} {name}' in {where}" for name in expected_type.executable_names
            )
        else:
            suggestions.append(
                f"Try '{lookup} code' for VS Code, '{lookup} cursor' for Cursor, etc."
            )
        suggestions.append("Use the 'Refresh' button to auto-discover installed editors")
        suggestions.append("Ensure the editor is installed and added to your system PATH")
        return "; ".join(suggestions)

    def quick_validate(self, path: str) -> bool:
        """Check only that path is non-blank and exists."""
        try:
            return bool(path.strip()) and os.path.exists(path)
        except ValueError:
            return False

    def path_info(self, path: str) -> PathInfo | None:
        """Describe a path without running it.

        Returns:
            PathInfo, or None if the path does not exist or cannot be read.
        """
        try:
            stat = os.stat(path)
        except (OSError, ValueError):
            return None
        is_dir = os.path.isdir(path)
        return PathInfo(
            exists=True,
            is_directory=is_dir,
            is_executable=self.is_executable(path),
            size=0 if is_dir else stat.st_size,
            last_modified=int(stat.st_mtime * 1000),
        )
