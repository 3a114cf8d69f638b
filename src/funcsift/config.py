"""Configuration loading and management for funcsift.

Configuration sources are merged in priority order:
    1. Defaults (defined in ExtractionConfig)
    2. Global config (~/.funcsift.toml)
    3. Project config (./funcsift.toml)
    4. Explicit config file
    5. Environment variables (FUNCSIFT_* prefix)
    6. CLI overrides (passed as kwargs)

A config file may carry a ``[types]`` table; it becomes the default type
universe for the CLI.

Example:
    >>> config = load_config(verbose=True, header_workers=4)
    >>> config.verbosity
    'verbose'
    >>> config.header_workers
    4
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

_VERBOSITIES = ("quiet", "normal", "verbose")

ENV_PREFIX = "FUNCSIFT_"
GLOBAL_CONFIG_NAME = ".funcsift.toml"
PROJECT_CONFIG_NAME = "funcsift.toml"

# Thread pool size when header_workers / type_workers are unset
DEFAULT_WORKERS = min(os.cpu_count() or 4, 8)


@dataclass(frozen=True)
class ExtractionConfig:
    """Configuration for one extraction run.

    Attributes:
        Concurrency:
            header_workers: Worker threads for parsing a file's headers (None = auto)
            type_workers: Worker threads for one header's type checks (None = auto)
            parallel: Fan out header parsing and type checks onto thread pools

        Header grammar:
            min_prefix_tokens: Tokens required before the function name
            comment_marker: Inline comment start stripped from header lines
            language: Force a language instead of detecting it from the extension

        Header supplier:
            ctags_binary: Executable used to list function headers
            ctags_timeout_seconds: Timeout for one ctags invocation

        Output control:
            verbosity: Logging verbosity level

        Type universe:
            types: Default type universe (type name -> desired)
    """

    # Concurrency
    header_workers: Optional[int] = None
    type_workers: Optional[int] = None
    parallel: bool = True

    # Header grammar
    min_prefix_tokens: int = 3
    comment_marker: str = "//"
    language: Optional[str] = None

    # Header supplier
    ctags_binary: str = "ctags"
    ctags_timeout_seconds: int = 30

    # Output control
    verbosity: Verbosity = "normal"

    # Type universe
    types: dict[str, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.header_workers is not None and self.header_workers < 1:
            raise InvalidConfigError("header_workers", self.header_workers, "must be at least 1")
        if self.type_workers is not None and self.type_workers < 1:
            raise InvalidConfigError("type_workers", self.type_workers, "must be at least 1")

        if self.min_prefix_tokens < 0:
            raise InvalidConfigError(
                "min_prefix_tokens", self.min_prefix_tokens, "must be non-negative"
            )
        if not self.comment_marker:
            raise InvalidConfigError("comment_marker", self.comment_marker, "must not be empty")

        if self.ctags_timeout_seconds < 1:
            raise InvalidConfigError(
                "ctags_timeout_seconds", self.ctags_timeout_seconds, "must be at least 1"
            )

        if self.verbosity not in _VERBOSITIES:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"must be one of {', '.join(_VERBOSITIES)}"
            )

        for name, flag in self.types.items():
            if not isinstance(flag, bool):
                raise InvalidConfigError(f"types.{name}", flag, "must be true or false")


def load_config(config_file: Optional[Path] = None, **overrides) -> ExtractionConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``verbose`` and
            ``quiet`` booleans are mapped onto ``verbosity``; None values are ignored.

    Returns:
        Validated ExtractionConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing, or a value is invalid
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / GLOBAL_CONFIG_NAME
    if global_config.exists():
        _merge_file(merged, global_config, "global")

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        _merge_file(merged, project_config, "project")

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        _merge_file(merged, config_file, "explicit")

    merged.update(_load_env_vars())

    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return ExtractionConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _merge_file(merged: dict[str, Any], path: Path, label: str) -> None:
    try:
        data = _load_toml_file(path)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid {label} config '{path}': {e}")

    # [types] tables accumulate across files instead of replacing each other
    types = data.pop("types", None)
    if types is not None:
        if not isinstance(types, dict):
            raise InvalidConfigError("types", types, f"must be a table in {path}")
        merged["types"] = {**merged.get("types", {}), **types}

    merged.update(data)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from FUNCSIFT_* environment variables.

    Supported environment variables:
        FUNCSIFT_HEADER_WORKERS: int
        FUNCSIFT_TYPE_WORKERS: int
        FUNCSIFT_PARALLEL: bool (true/false/1/0)
        FUNCSIFT_MIN_PREFIX_TOKENS: int
        FUNCSIFT_COMMENT_MARKER: str
        FUNCSIFT_LANGUAGE: str
        FUNCSIFT_CTAGS_BINARY: str
        FUNCSIFT_CTAGS_TIMEOUT_SECONDS: int
        FUNCSIFT_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any FUNCSIFT_* vars found.
    """
    type_hints = get_type_hints(ExtractionConfig)

    result: dict[str, Any] = {}

    for field_name in ExtractionConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Returns:
        Parsed value or None if the field cannot be set from the environment

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    # The type universe is too structured for a single variable
    if origin is dict or type_hint is dict:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    with open(path, "rb") as f:
        return tomllib.load(f)
