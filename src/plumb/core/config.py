"""
Configuration models and loading for plumb.

Two separate concerns live here:

- RepositoryConfig: the repository's own ``config`` file, an INI document
  with a ``[core]`` section. Modeled as an explicit typed section with
  documented defaults rather than a free-form key/value map.
- PlumbSettings: tool settings (compression level, fsync, logging),
  loaded from an optional YAML file plus PLUMB_* environment variables.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

import configparser
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from plumb.contracts.errors import RepositoryConfigError

# Only format version 0 is understood: loose objects, no extensions.
SUPPORTED_REPOSITORY_FORMAT_VERSION = 0

_CORE_SECTION = "core"


class RepositoryConfig(BaseModel):
    """The ``[core]`` section of a repository config file.

    Example file:
        [core]
        repositoryformatversion = 0
        filemode = false
        bare = false
    """

    model_config = {"frozen": True}

    repositoryformatversion: int = Field(default=0, ge=0, description="Repository layout version")
    filemode: bool = Field(default=False, description="Track executable bit of work tree files")
    bare: bool = Field(default=False, description="Repository has no work tree")

    @field_validator("repositoryformatversion")
    @classmethod
    def validate_format_version(cls, v: int) -> int:
        if v != SUPPORTED_REPOSITORY_FORMAT_VERSION:
            raise ValueError(f"Unsupported repositoryformatversion {v}")
        return v

    def to_ini(self) -> str:
        """Render as INI text. Booleans are written lowercase."""
        lines = [f"[{_CORE_SECTION}]"]
        for key, value in self.model_dump().items():
            if isinstance(value, bool):
                value = "true" if value else "false"
            lines.append(f"{key} = {value}")
        return "\n".join(lines) + "\n"

    def save(self, path: Path) -> None:
        """Write the config file, replacing any existing one."""
        path.write_text(self.to_ini(), encoding="utf-8")

    @classmethod
    def load(cls, path: Path) -> "RepositoryConfig":
        """Read and validate a repository config file.

        Keys outside the ``[core]`` section are ignored.

        Raises:
            RepositoryConfigError: If the file is missing, is not valid INI,
                lacks a [core] section, or holds invalid values
        """
        parser = configparser.ConfigParser()
        try:
            with path.open(encoding="utf-8") as f:
                parser.read_file(f)
        except OSError as e:
            raise RepositoryConfigError(f"Unable to read repository config ({e.strerror or e})", path) from e
        except configparser.Error as e:
            raise RepositoryConfigError(f"Unable to parse repository config ({e.message})", path) from e

        if not parser.has_section(_CORE_SECTION):
            raise RepositoryConfigError("Repository config has no [core] section", path)

        core = parser[_CORE_SECTION]
        raw: dict[str, Any] = {}
        try:
            if "repositoryformatversion" in core:
                raw["repositoryformatversion"] = core.getint("repositoryformatversion")
            for key in ("filemode", "bare"):
                if key in core:
                    raw[key] = core.getboolean(key)
        except ValueError as e:
            raise RepositoryConfigError(f"Invalid value in repository config ({e})", path) from e

        try:
            return cls(**raw)
        except ValidationError as e:
            messages = "; ".join(err["msg"] for err in e.errors())
            raise RepositoryConfigError(f"Invalid repository config ({messages})", path) from e


class ObjectStoreSettings(BaseModel):
    """Object store configuration."""

    model_config = {"frozen": True}

    compression_level: int = Field(
        default=1,
        ge=0,
        le=9,
        description="zlib level; low by default, favoring speed over ratio",
    )
    fsync: bool = Field(default=True, description="fsync staged object files before the atomic rename")


class PlumbSettings(BaseModel):
    """Top-level tool settings.

    All settings are validated and frozen after construction.
    """

    model_config = {"frozen": True}

    log_level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    json_logs: bool = Field(default=False, description="Emit structured JSON logs")
    object_store: ObjectStoreSettings = Field(
        default_factory=ObjectStoreSettings,
        description="Object store configuration",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        normalized = v.upper()
        if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log_level {v!r}")
        return normalized


def _lowercase_keys(value: Any) -> Any:
    """Recursively lowercase mapping keys (Dynaconf upper-cases them)."""
    if isinstance(value, dict):
        return {str(k).lower(): _lowercase_keys(v) for k, v in value.items()}
    return value


def load_settings(config_path: Path | None = None) -> PlumbSettings:
    """Load settings from an optional YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (PLUMB_*) - highest priority
    2. Settings file, if given
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: PLUMB_OBJECT_STORE__COMPRESSION_LEVEL for nested keys.

    Args:
        config_path: Path to YAML settings file, or None for env/defaults only

    Returns:
        Validated PlumbSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config_path is given but doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Settings file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="PLUMB",
        settings_files=[str(config_path)] if config_path is not None else [],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Keep only known top-level keys; Dynaconf adds its own internals
    raw_config = _lowercase_keys(dynaconf_settings.as_dict())
    known = {k: v for k, v in raw_config.items() if k in PlumbSettings.model_fields}

    return PlumbSettings(**known)
