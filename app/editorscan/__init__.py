"""editorscan - locate, validate and diagnose VS Code family editors."""

__version__ = "0.3.0"
