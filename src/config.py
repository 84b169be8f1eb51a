"""Unified configuration loaded from .blogcms.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from blogcms.shared.errors import ConfigError
from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".blogcms.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG_PATH = Path.home() / ".config" / "blogcms" / "config.toml"

STORAGE_BACKENDS = ("json", "memory")
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class StorageConfig(BaseModel):
    """[storage] section."""

    backend: str = "json"
    directory: str = "./data"

    @field_validator("backend")
    @classmethod
    def _check_backend(cls, value: str) -> str:
        if value not in STORAGE_BACKENDS:
            raise ValueError(
                f"unknown storage backend {value!r}, expected one of {STORAGE_BACKENDS}"
            )
        return value


class LoggingConfig(BaseModel):
    """[logging] section."""

    level: str = "WARNING"

    @field_validator("level", mode="before")
    @classmethod
    def _check_level(cls, value: object) -> object:
        """Normalise to an upper-case stdlib level name."""
        if isinstance(value, str):
            value = value.strip().upper()
            if value not in LOG_LEVELS:
                raise ValueError(f"unknown log level {value!r}, expected one of {LOG_LEVELS}")
        return value


class BlogCmsConfig(BaseModel):
    """Top-level configuration model."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(path: str | Path | None = None) -> BlogCmsConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .blogcms.toml in CWD
    3. ~/.config/blogcms/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged BlogCmsConfig.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG_PATH.exists():
            data = _load_toml(GLOBAL_CONFIG_PATH)
            logger.info("Loaded config from %s", GLOBAL_CONFIG_PATH)

    config = _validate(data) if data else BlogCmsConfig()

    return _apply_env_vars(config)


def merge_cli_overrides(config: BlogCmsConfig, **cli_kwargs: object) -> BlogCmsConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "storage_backend": ("storage", "backend"),
        "storage_directory": ("storage", "directory"),
        "log_level": ("logging", "level"),
    }

    for key, value in cli_kwargs.items():
        if value is None:
            continue
        if key not in mapping:
            logger.debug("Ignoring unknown CLI override: %s", key)
            continue
        section, field = mapping[key]
        data[section][field] = value

    return _validate(data)


def _validate(data: dict[str, object]) -> BlogCmsConfig:
    """Build a BlogCmsConfig, reporting bad values as ConfigError."""
    try:
        return BlogCmsConfig.model_validate(data)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ConfigError(f"Invalid configuration: {problems}") from exc


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: BlogCmsConfig) -> BlogCmsConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "BLOGCMS_STORAGE_BACKEND": ("storage", "backend"),
        "BLOGCMS_STORE_DIR": ("storage", "directory"),
        "BLOGCMS_LOG_LEVEL": ("logging", "level"),
    }

    changed = False
    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value:
            data[section][field] = value
            changed = True

    if changed:
        return _validate(data)
    return config
