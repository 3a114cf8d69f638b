"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console

from ..config import ExtractionConfig, load_config
from ..exceptions import ConfigurationError
from ..extraction.universe import TypeUniverse

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    language: Optional[str] = None,
    workers: Optional[int] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> ExtractionConfig:
    """Build settings from CLI options."""
    overrides = {}
    if language is not None:
        overrides["language"] = language
    if workers is not None:
        overrides["header_workers"] = workers
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    return load_config(config_file=config, **overrides)


def build_universe(
    settings: ExtractionConfig,
    types_file: Optional[Path] = None,
    desired: Optional[Sequence[str]] = None,
    undesired: Optional[Sequence[str]] = None,
) -> TypeUniverse:
    """Config [types], then --types file, then --desired/--undesired flags.

    Raises:
        ConfigurationError: If the resulting universe is empty
    """
    universe = TypeUniverse(settings.types)
    if types_file is not None:
        universe = universe.merged(TypeUniverse.from_toml(types_file))
    universe = universe.merged(TypeUniverse.from_lists(desired or (), undesired or ()))

    if not universe.desired:
        raise ConfigurationError(
            "No desired types given. Use --desired, --types FILE, or a [types] table in funcsift.toml"
        )
    return universe
