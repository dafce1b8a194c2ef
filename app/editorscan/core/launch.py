"""Editor command lines.

All VS Code-family editors take a file and an optional position as
``--goto file:line[:column]``. Editors outside the family only get the
plain path. Launching is fire-and-forget: the editor process is started
and then left alone.
"""

import logging

from editorscan.core.platform import HostOS
from editorscan.models.editor import EditorConfig, EditorType
from editorscan.utils.shell import spawn_detached

logger = logging.getLogger(__name__)

# Binary name inside <Bundle>.app/Contents/MacOS for each known editor
_MACOS_BINARIES: dict[EditorType, str] = {
    EditorType.VSCODE: "Visual Studio Code",
    EditorType.CURSOR: "Cursor",
    EditorType.WINDSURF: "Windsurf",
    EditorType.ANTIGRAVITY: "AntiGravity",
    EditorType.CATPAW: "CatPaw",
    EditorType.TRAE: "Trae",
}


def resolve_executable(config: EditorConfig, host: HostOS | None = None) -> str:
    """Return the path to run for config.

    A macOS ``.app`` bundle path is turned into the binary inside it;
    every other path is returned unchanged.
    """
    host = host or HostOS.current()
    path = config.executable_path
    binary = _MACOS_BINARIES.get(config.editor_type)
    if host is HostOS.MACOS and path.endswith(".app") and binary is not None:
        return f"{path}/Contents/MacOS/{binary}"
    return path


def build_file_command(
    config: EditorConfig,
    file_path: str,
    line: int = 0,
    column: int = 0,
    host: HostOS | None = None,
) -> list[str]:
    """Build the argv that opens file_path, optionally at a position.

    Args:
        config: Editor to launch.
        file_path: File to open.
        line: 1-based line, or 0 for none.
        column: 1-based column, or 0 for none. Ignored without a line.
        host: Host whose bundle layout applies.

    Returns:
        Command and arguments, ending with the config's custom arguments.
    """
    argv = [resolve_executable(config, host)]
    if config.editor_type is EditorType.CUSTOM or line <= 0:
        argv.append(file_path)
    elif column > 0:
        argv += ["--goto", f"{file_path}:{line}:{column}"]
    else:
        argv += ["--goto", f"{file_path}:{line}"]
    argv.extend(config.custom_args)
    return argv


def build_project_command(
    config: EditorConfig, project_path: str, host: HostOS | None = None
) -> list[str]:
    """Build the argv that opens a project folder."""
    return [resolve_executable(config, host), project_path, *config.custom_args]


def default_config(editor_type: EditorType) -> EditorConfig:
    """Return a config that relies on the editor's launcher being on PATH."""
    return EditorConfig(
        id=editor_type.id,
        display_name=editor_type.display_name,
        executable_path=editor_type.executable_names[0] if editor_type.executable_names else "",
        is_default=editor_type is EditorType.VSCODE,
    )


def launch_detached(argv: list[str]) -> int:
    """Start an editor and return its PID without waiting for it.

    Raises:
        FileNotFoundError: If the executable does not exist.
        PermissionError: If the executable may not be run.
        OSError: For any other failure to start the process.
    """
    logger.debug("Launching %s", argv)
    return spawn_detached(argv)
