"""Configuration loading from shivanosh.toml.

Resolution order: SHIVANOSH_CONFIG environment variable, explicit path,
then shivanosh.toml in the working directory or home directory. With no
file at all the defaults apply.

Example shivanosh.toml:

    [shivanosh]
    extension = ".shivanosh"
    stop_on_error = true
    log_level = "INFO"
"""

from __future__ import annotations

import logging
import os
from typing import Any, cast

from pydantic import BaseModel, ValidationError, field_validator

# TOML loading for Python 3.11+ and older
try:
    import tomllib  # type: ignore[import-not-found, unused-ignore]
except ImportError:
    import tomli as tomllib  # type: ignore[import-not-found, no-redef, unused-ignore]

from shivanosh.core.errors import ConfigError
from shivanosh.core.header import FILE_EXTENSION

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SHIVANOSH_CONFIG"
CONFIG_FILENAME = "shivanosh.toml"
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ShivanoshConfig(BaseModel):
    """Settings for the file and batch helpers.

    Attributes:
        extension: Suffix given to converted files
        stop_on_error: Abort a batch conversion at the first failure
        log_level: Logging level name used by the command-line tool
    """

    extension: str = FILE_EXTENSION
    stop_on_error: bool = True
    log_level: str = "WARNING"

    @field_validator("extension")
    @classmethod
    def normalize_extension(cls, value: str) -> str:
        if not value.startswith("."):
            value = "." + value
        if value == ".":
            raise ValueError("Extension must not be empty")
        if "/" in value or "\\" in value:
            raise ValueError(f"Extension must not contain path separators: {value!r}")
        return value

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in _LOG_LEVELS:
            raise ValueError(f"Unsupported log level: {value!r}")
        return normalized


def _resolve_config_path(config_path: str | None) -> str | None:
    """Resolve configuration path from env, explicit path, or defaults."""
    env_config = os.environ.get(CONFIG_ENV_VAR)
    if env_config:
        return env_config
    if config_path:
        return config_path
    candidates = [
        CONFIG_FILENAME,
        os.path.expanduser(f"~/{CONFIG_FILENAME}"),
    ]
    for candidate in candidates:
        if os.path.exists(candidate):
            return candidate
    return None


def load_config(config_path: str | None = None) -> ShivanoshConfig:
    """Load settings, falling back to defaults when no file is found.

    Args:
        config_path: Path to shivanosh.toml (auto-detected if None)

    Raises:
        FileNotFoundError: If an explicitly requested file does not exist
        ConfigError: If the file is not valid TOML or has invalid values
    """
    resolved_path = _resolve_config_path(config_path)
    if resolved_path is None:
        return ShivanoshConfig()
    if not os.path.exists(resolved_path):
        raise FileNotFoundError(
            f"Config file not found at {resolved_path}. "
            f"Set {CONFIG_ENV_VAR} or create {CONFIG_FILENAME}"
        )

    with open(resolved_path, "rb") as f:
        try:
            raw = cast(dict[str, Any], tomllib.load(f))
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Failed to parse {resolved_path}: {e}") from e

    section = raw.get("shivanosh", {})
    if not isinstance(section, dict):
        raise ConfigError(f"[shivanosh] in {resolved_path} must be a table")
    try:
        config = ShivanoshConfig(**section)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {resolved_path}: {e}") from e

    logger.debug("Loaded configuration from %s", resolved_path)
    return config
