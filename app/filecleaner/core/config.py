"""Cleaner configuration and settings.

This module provides the configuration model and I/O functions for
directory cleaners: which paths to leave alone, and which modes to
grant to unwritable entries before deleting them.

Configuration is stored in ~/.config/filecleaner/config.toml
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from filecleaner.core.paths import get_config_path
from filecleaner.filesystem.state import DEFAULT_DIRECTORY_MODE, DEFAULT_FILE_MODE

_MAX_MODE = 0o7777


class CleanerConfig(BaseModel):
    """Configuration for directory cleaners.

    Attributes:
        ignore: Glob patterns, relative to the cleaner root, for paths
            that are never snapshotted, restored, or removed.
        directory_mode: Mode granted to an unwritable directory before removal.
        file_mode: Mode granted to an unwritable file before removal.
    """

    model_config = ConfigDict(extra="forbid")

    ignore: Annotated[
        list[str],
        Field(description="Glob patterns relative to the root to leave untouched"),
    ] = []
    directory_mode: Annotated[
        int,
        Field(ge=0, le=_MAX_MODE, description="Mode granted to directories before removal"),
    ] = DEFAULT_DIRECTORY_MODE
    file_mode: Annotated[
        int,
        Field(ge=0, le=_MAX_MODE, description="Mode granted to files before removal"),
    ] = DEFAULT_FILE_MODE

    @field_validator("directory_mode", "file_mode", mode="before")
    @classmethod
    def parse_octal_mode(cls, v: object) -> object:
        """Accept modes written as octal strings such as "0755" or "0o755"."""
        if isinstance(v, str):
            try:
                return int(v.strip().removeprefix("0o"), 8)
            except ValueError:
                msg = f"invalid octal mode '{v}'"
                raise ValueError(msg) from None
        return v

    @field_validator("ignore")
    @classmethod
    def validate_patterns(cls, v: list[str]) -> list[str]:
        """Reject empty and absolute ignore patterns."""
        for pattern in v:
            if not pattern.strip():
                msg = "ignore patterns cannot be empty"
                raise ValueError(msg)
            if pattern.startswith("/"):
                msg = f"ignore pattern '{pattern}' must be relative to the cleaner root"
                raise ValueError(msg)
        return v


class CleanerConfigError(Exception):
    """Base exception for cleaner configuration errors."""


class CleanerConfigNotFoundError(CleanerConfigError):
    """Raised when the config file is not found."""


class CleanerConfigParseError(CleanerConfigError):
    """Raised when the config file cannot be parsed."""


def load_cleaner_config(path: Path | None = None) -> CleanerConfig:
    """Load cleaner configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated CleanerConfig object.

    Raises:
        CleanerConfigNotFoundError: If the config file doesn't exist.
        CleanerConfigParseError: If the TOML syntax is invalid.
        CleanerConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise CleanerConfigNotFoundError(f"Cleaner config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise CleanerConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise CleanerConfigError(f"Failed to read cleaner config: {e}") from e

    try:
        return CleanerConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise CleanerConfigError(f"Invalid cleaner config content: {e}") from e


def load_or_default_config(path: Path | None = None) -> CleanerConfig:
    """Load cleaner configuration, falling back to defaults if absent.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Loaded CleanerConfig, or the default one if the file doesn't exist.

    Raises:
        CleanerConfigParseError: If the TOML syntax is invalid.
        CleanerConfigError: If the content doesn't match the schema.
    """
    try:
        return load_cleaner_config(path)
    except CleanerConfigNotFoundError:
        return get_default_config()


def save_cleaner_config(config: CleanerConfig, path: Path | None = None) -> Path:
    """Save cleaner configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The CleanerConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        CleanerConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config_to_dict(config)

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
        # os.replace() is atomic on POSIX
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise CleanerConfigError(f"Failed to write cleaner config: {e}") from e

    return config_path


def config_to_dict(config: CleanerConfig) -> dict[str, object]:
    """Convert CleanerConfig to a dictionary for TOML serialization.

    Modes are written as octal strings so the file stays readable.

    Args:
        config: The CleanerConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    return {
        "ignore": list(config.ignore),
        "directory_mode": f"{config.directory_mode:04o}",
        "file_mode": f"{config.file_mode:04o}",
    }


def get_default_config() -> CleanerConfig:
    """Create a default CleanerConfig.

    Returns:
        CleanerConfig with default settings.
    """
    return CleanerConfig()
