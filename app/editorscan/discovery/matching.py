"""Name matching shared by all discovery sources.

Filesystem and registry scans see thousands of names. The whitelist here
decides which of them are VS Code-family editors; everything else is
ignored before any further I/O happens.
"""

# Substrings that identify a VS Code fork on their own
_FORK_MARKERS: tuple[str, ...] = ("cursor", "windsurf", "antigravity", "catpaw", "trae")

# Names that end in "code" but belong to unrelated tools
_CODE_EXCLUSIONS: tuple[str, ...] = ("findinput", "tool")

# Program Files subdirectories worth descending into on Windows. Broader
# than the whitelist so that vendor folders like "Microsoft VS Code" are
# reached; executables found inside are still whitelist-checked.
WINDOWS_EDITOR_DIRECTORIES: tuple[str, ...] = (
    "visual studio code",
    "vscode",
    "microsoft vs code",
    "cursor",
    "windsurf",
    "zed",
    "intellij",
    "jetbrains",
    "webstorm",
    "pycharm",
    "phpstorm",
    "clion",
    "goland",
    "rider",
    "rubymine",
    "fleet",
    "sublime text",
    "atom",
    "notepad++",
    "brackets",
    "vim",
    "emacs",
)


def is_known_editor(name: str) -> bool:
    """Check whether a file, bundle or package name is a supported editor.

    Args:
        name: Bare name or full path, any case.

    Returns:
        True if the name identifies VS Code or one of its forks.

    Example:
        >>> is_known_editor("Visual Studio Code.app")
        True
        >>> is_known_editor("my-code-tool.exe")
        False
    """
    lower = name.lower()
    if "visual studio code" in lower or "vscode" in lower:
        return True
    looks_like_code = (
        lower == "code"
        or lower.endswith(("/code", "\\code", "code.exe"))
    )
    if looks_like_code and not any(x in lower for x in _CODE_EXCLUSIONS):
        return True
    return any(marker in lower for marker in _FORK_MARKERS)


def is_editor_directory(name: str) -> bool:
    """Check whether a Windows install folder may contain an editor."""
    lower = name.lower()
    return any(candidate in lower for candidate in WINDOWS_EDITOR_DIRECTORIES)


def display_name_from(raw: str) -> str:
    """Turn a file or package name into a display name.

    Dashes and underscores become spaces and every word is capitalized,
    so "cursor-nightly" becomes "Cursor Nightly".
    """
    words = raw.replace("-", " ").replace("_", " ").split(" ")
    return " ".join(word.capitalize() for word in words)
