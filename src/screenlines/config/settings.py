"""screenlines configuration settings."""

from __future__ import annotations

import json
import os
import tomllib
from pathlib import Path
from typing import Any, cast

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from screenlines.exceptions import ConfigurationError, check_config_keys

PAIRING_NEAREST = "nearest"
PAIRING_GREEDY = "greedy"


class ScreenLinesSettings(BaseSettings):
    """screenlines configuration settings.

    Settings are loaded with the following precedence (highest to lowest):
    1. Explicit overrides passed by the caller (``cli_args``)
    2. Config file values (YAML, TOML, or JSON), later files override earlier
    3. Environment variables (prefixed with SCREENLINES_)
       Example: export SCREENLINES_MULTILINE_PAIRING=greedy
    4. .env file (in current directory or specified path)
    5. Default values (defined in field declarations below)
    """

    model_config = SettingsConfigDict(
        env_prefix="SCREENLINES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Parser settings
    multiline_pairing: str = Field(
        default=PAIRING_NEAREST,
        description=(
            "How orphaned open/close delimiters are paired into multiline "
            "ranges (nearest, greedy)"
        ),
        pattern="^(?i)(nearest|greedy)$",
    )
    honor_escaped_markers: bool = Field(
        default=False,
        description=(
            "Treat a backslash before a leading forced marker as an escape "
            "that turns the line into plain action"
        ),
    )

    # Debug settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # Logging settings
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        pattern="^(?i)(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    log_format: str = Field(
        default="console",
        description="Log output format (console, json, structured)",
        pattern="^(?i)(console|json|structured)$",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional log file path",
    )

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path | None:
        """Expand environment variables and ``~`` and resolve the path."""
        if v is None:
            return None
        if isinstance(v, str):
            expanded = os.path.expandvars(v)
            return Path(expanded).expanduser().resolve()
        if isinstance(v, Path):
            return v.resolve()

        if isinstance(v, (dict, list, set, tuple)):  # noqa: UP038
            raise ValueError(
                f"Path fields cannot accept {type(v).__name__} types. "
                f"Expected str or Path, got: {v!r}"
            )
        return Path(str(v)).resolve()

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        """Normalize log level to uppercase for case-insensitive handling."""
        if isinstance(v, str):
            return v.upper()
        raise ValueError(f"log_level must be a string, got {type(v).__name__}")

    @field_validator("log_format", "multiline_pairing", mode="before")
    @classmethod
    def normalize_lowercase(cls, v: Any) -> str:
        """Normalize enumerated string options to lowercase."""
        if isinstance(v, str):
            return v.strip().lower()
        raise ValueError(f"Expected a string, got {type(v).__name__}")

    @classmethod
    def from_env(cls) -> ScreenLinesSettings:
        """Create settings from environment variables."""
        return cls()

    @classmethod
    def from_file(cls, config_path: Path | str) -> ScreenLinesSettings:
        """Load settings from a configuration file.

        Args:
            config_path: Path to configuration file (YAML, TOML, or JSON).

        Returns:
            Settings loaded from the file.

        Raises:
            ConfigurationError: If file format is not supported.
            FileNotFoundError: If config file doesn't exist.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        suffix = config_path.suffix.lower()

        if suffix in {".yml", ".yaml"}:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        elif suffix == ".toml":
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        elif suffix == ".json":
            with config_path.open(encoding="utf-8") as f:
                data = json.load(f)
        else:
            raise ConfigurationError(
                message=f"Unsupported configuration file format: {suffix}",
                hint="Use one of the supported formats: .yml, .yaml, .toml, or .json",
                details={
                    "file": str(config_path),
                    "detected_format": suffix,
                    "supported_formats": [".yml", ".yaml", ".toml", ".json"],
                },
            )

        check_config_keys(data)

        return cls(**data)

    @classmethod
    def from_multiple_sources(
        cls,
        config_files: list[Path | str] | None = None,
        env_file: Path | str | None = None,
        cli_args: dict[str, Any] | None = None,
    ) -> ScreenLinesSettings:
        """Load settings with proper precedence from multiple sources.

        Args:
            config_files: List of config files to load (later files override earlier).
            env_file: Path to .env file (default: .env in current directory).
            cli_args: Dictionary of explicit overrides, highest precedence.

        Returns:
            Merged settings from all sources.
        """
        data: dict[str, Any] = {}

        if config_files:
            for config_file in config_files:
                try:
                    file_settings = cls.from_file(config_file)
                except FileNotFoundError:
                    # Imported here to avoid a cycle during module initialization
                    from screenlines.config.logging import get_logger as _get_logger

                    _get_logger("screenlines.config.settings").warning(
                        "Configuration file not found, using defaults",
                        config_file=str(config_file),
                    )
                    continue
                data.update(file_settings.model_dump(exclude_unset=True))

        if env_file:
            settings = cast(
                "ScreenLinesSettings", cast(Any, cls)(_env_file=env_file, **data)
            )
        else:
            settings = cls(**data)

        if cli_args:
            cli_data = {k: v for k, v in cli_args.items() if v is not None}
            if cli_data:
                updated_data = settings.model_dump()
                updated_data.update(cli_data)
                settings = cls(**updated_data)

        return settings


# Global settings instance
_settings: ScreenLinesSettings | None = None
# Cache for config file paths that exist
_config_paths_cache: list[Path | str] | None = None


def _get_config_paths() -> list[Path | str]:
    """Get list of config file paths to check.

    Returns paths in priority order (later files override earlier).
    """
    global _config_paths_cache

    if _config_paths_cache is not None:
        return _config_paths_cache

    potential_paths = [
        Path("/etc/screenlines/config.yaml"),
        Path("/etc/screenlines/config.json"),
        Path("/etc/screenlines/config.toml"),
        Path.home() / ".screenlines" / "config.yaml",
        Path.home() / ".screenlines" / "config.json",
        Path.home() / ".screenlines" / "config.toml",
        Path.home() / ".config" / "screenlines" / "config.yaml",
        Path.home() / ".config" / "screenlines" / "config.json",
        Path.home() / ".config" / "screenlines" / "config.toml",
        Path.cwd() / ".screenlines" / "config.yaml",
        Path.cwd() / ".screenlines" / "config.json",
        Path.cwd() / ".screenlines" / "config.toml",
        Path.cwd() / "screenlines.yaml",
        Path.cwd() / "screenlines.json",
        Path.cwd() / "screenlines.toml",
    ]

    existing_paths: list[Path | str] = []
    for path in potential_paths:
        try:
            if path.exists() and path.is_file():
                existing_paths.append(path)
        except OSError:
            continue

    _config_paths_cache = existing_paths
    return existing_paths


def get_settings() -> ScreenLinesSettings:
    """Get the global settings instance.

    Returns:
        Global ScreenLinesSettings instance.
    """
    global _settings
    if _settings is None:
        config_paths = _get_config_paths()

        if config_paths:
            _settings = ScreenLinesSettings.from_multiple_sources(
                config_files=config_paths
            )
        else:
            _settings = ScreenLinesSettings.from_env()
    return _settings


def set_settings(settings: ScreenLinesSettings) -> None:
    """Set the global settings instance.

    Args:
        settings: Settings instance to use globally.
    """
    global _settings
    _settings = settings


def clear_settings_cache() -> None:
    """Clear the global settings cache.

    This forces get_settings() to re-read from environment variables
    and configuration files on the next call.
    """
    global _settings, _config_paths_cache
    _settings = None
    _config_paths_cache = None


def reset_settings() -> None:
    """Reset the global settings instance."""
    clear_settings_cache()
