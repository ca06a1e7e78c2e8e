"""Configuration loading and management for archmap.

Configuration sources are merged in priority order:
    1. Defaults (defined in Settings)
    2. Global config (~/.archmap.toml)
    3. Project config (./archmap.toml)
    4. Explicit config file
    5. Environment variables (ARCHMAP_* prefix)
    6. Keyword overrides (typically CLI flags)

Example:
    >>> settings = load_settings(verbose=True, community_max_passes=50)
    >>> settings.verbosity
    'verbose'
    >>> settings.max_passes
    50
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

GLOBAL_CONFIG_NAME = ".archmap.toml"
PROJECT_CONFIG_NAME = "archmap.toml"
ENV_PREFIX = "ARCHMAP_"


@dataclass(frozen=True)
class Settings:
    """Settings for one analysis run.

    Attributes:
        Scanning:
            dialect: Name of the source dialect whose patterns are used
            exclude_dirs: Directory names never descended into
            allow_hidden_dirs: Descend into directories starting with "."
            follow_symlinks: Descend into symlinked directories

        Metrics:
            instability_precision: Decimal places kept for instability

        Community detection:
            community_max_passes: Safety bound on detector passes (0 = unbounded)

        Output control:
            verbosity: Logging verbosity level
            log_file: Also append log records to this file
    """

    dialect: str = "php"
    exclude_dirs: list[str] = field(default_factory=list)
    allow_hidden_dirs: bool = False
    follow_symlinks: bool = False

    instability_precision: int = 3

    community_max_passes: int = 1000

    verbosity: Verbosity = "normal"
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if not self.dialect:
            raise ValueError("dialect must not be empty")
        if self.instability_precision < 0:
            raise ValueError("instability_precision must be non-negative")
        if self.community_max_passes < 0:
            raise ValueError("community_max_passes must be non-negative")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError("verbosity must be one of quiet, normal, verbose")

    @property
    def max_passes(self) -> Optional[int]:
        """Detector pass bound, or None when unbounded."""
        return self.community_max_passes or None


DEFAULT_SETTINGS = Settings()


def load_settings(config_file: Optional[Path] = None, **overrides) -> Settings:
    """Load settings with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``verbose``
            and ``quiet`` booleans are folded into ``verbosity``; ``None``
            values are ignored.

    Returns:
        Validated Settings instance

    Raises:
        ConfigurationError: If a config file is missing or unreadable
        InvalidConfigError: If a value fails validation
    """
    merged: dict = {}

    global_config = Path.home() / GLOBAL_CONFIG_NAME
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    overrides = {k: v for k, v in overrides.items() if v is not None}
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"
    merged.update(overrides)

    unknown = sorted(set(merged) - set(Settings.__dataclass_fields__))
    if unknown:
        raise InvalidConfigError(unknown[0], merged[unknown[0]], "unknown setting")

    try:
        return Settings(**merged)
    except ValueError as e:
        raise InvalidConfigError("settings", merged, str(e))


def _load_env_vars() -> dict[str, Any]:
    """Load settings from ARCHMAP_* environment variables.

    List-valued fields accept a comma-separated string.
    """
    type_hints = get_type_hints(Settings)
    result: dict[str, Any] = {}

    for field_name in Settings.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        try:
            result[field_name] = _parse_env_value(env_value, type_hints[field_name])
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type."""
    origin = getattr(type_hint, "__origin__", None)

    if origin is list:
        return [part.strip() for part in value.split(",") if part.strip()]

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    # str and Literal (verbosity)
    return value


def _load_toml_file(path: Path) -> dict:
    """Load a TOML file and return the parsed dict.

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    try:
        import tomllib
    except ModuleNotFoundError:
        # Python < 3.11
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")
