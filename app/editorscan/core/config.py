"""Settings for editor discovery.

This module provides the settings model and I/O functions that tune
discovery: which tier runs by default, how long command probes may take,
how long Smart-tier results stay fresh, and where else to look for
editor binaries.

Settings are stored in ~/.config/editorscan/config.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Literal

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from editorscan.core.paths import get_config_path
from editorscan.models.editor import EditorType

logger = logging.getLogger(__name__)

TierName = Literal["fast", "comprehensive", "smart"]

DEFAULT_PROBE_TIMEOUT = 2.0
DEFAULT_CACHE_TTL = 300


class Settings(BaseModel):
    """Discovery settings.

    Attributes:
        default_tier: Tier used when the caller does not choose one.
        probe_timeout_seconds: Wait limit for each which/where probe.
        cache_ttl_seconds: How long Smart-tier results are reused (0 disables).
        extra_search_paths: Directories prepended to the probe PATH.
        default_editor: Editor id preferred by ``open`` when several are found.
    """

    model_config = ConfigDict(extra="forbid")

    default_tier: Annotated[
        TierName,
        Field(description="Discovery tier used by default"),
    ] = "comprehensive"
    probe_timeout_seconds: Annotated[
        float,
        Field(ge=0.1, le=30.0, description="Command probe timeout (0.1-30s)"),
    ] = DEFAULT_PROBE_TIMEOUT
    cache_ttl_seconds: Annotated[
        int,
        Field(ge=0, le=86400, description="Smart-tier cache lifetime (0-86400s)"),
    ] = DEFAULT_CACHE_TTL
    extra_search_paths: Annotated[
        list[str],
        Field(description="Additional directories searched by command probes"),
    ] = []
    default_editor: Annotated[
        str | None,
        Field(description="Preferred editor id (None = first discovered)"),
    ] = None

    @field_validator("default_editor")
    @classmethod
    def validate_editor_id(cls, v: str | None) -> str | None:
        """Ensure the preferred editor is a catalog id."""
        if v is None:
            return None
        editor_type = EditorType.from_id(v)
        if editor_type is None:
            valid = ", ".join(t.id for t in EditorType)
            msg = f"unknown editor id '{v}' (expected one of: {valid})"
            raise ValueError(msg)
        return editor_type.id


class ConfigError(Exception):
    """Base exception for settings errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the settings file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the settings file cannot be parsed."""


def load_settings(path: Path | None = None, *, missing_ok: bool = True) -> Settings:
    """Load settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default path.
        missing_ok: Return defaults instead of raising when the file is absent.

    Returns:
        Validated Settings object.

    Raises:
        ConfigNotFoundError: If the file doesn't exist and missing_ok is False.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        if missing_ok:
            logger.debug("No settings at %s, using defaults", config_path)
            return Settings()
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return Settings.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: The Settings object to save.
        path: Path to save the settings. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = _settings_to_dict(settings)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _settings_to_dict(settings: Settings) -> dict[str, object]:
    """Convert Settings to a dictionary for TOML serialization.

    TOML has no null, so unset optional values are left out.
    """
    result: dict[str, object] = {
        "default_tier": settings.default_tier,
        "probe_timeout_seconds": settings.probe_timeout_seconds,
        "cache_ttl_seconds": settings.cache_ttl_seconds,
    }
    if settings.extra_search_paths:
        result["extra_search_paths"] = list(settings.extra_search_paths)
    if settings.default_editor is not None:
        result["default_editor"] = settings.default_editor
    return result


def update_setting(settings: Settings, key: str, raw_value: str) -> Settings:
    """Return a copy of settings with one field replaced from a string.

    List fields take a comma-separated value; an empty string or "none"
    clears the preferred editor.

    Args:
        settings: Current settings.
        key: Field name.
        raw_value: Value as typed on the command line.

    Returns:
        New validated Settings object.

    Raises:
        ConfigError: If the key is unknown or the value is invalid.
    """
    if key not in Settings.model_fields:
        valid = ", ".join(Settings.model_fields)
        raise ConfigError(f"Unknown setting '{key}' (expected one of: {valid})")

    value: object = raw_value
    if key == "extra_search_paths":
        value = [p.strip() for p in raw_value.split(",") if p.strip()]
    elif key == "default_editor" and raw_value.strip().lower() in ("", "none"):
        value = None

    data = settings.model_dump()
    data[key] = value
    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid value for '{key}': {e}") from e


def get_default_settings() -> Settings:
    """Create default Settings.

    Returns:
        Settings with default values.
    """
    return Settings()
