"""Editor path validation."""

from editorscan.validation.validator import PathInfo, PathValidator

__all__ = ["PathInfo", "PathValidator"]
