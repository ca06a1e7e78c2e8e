"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import Settings, load_settings

console = Console()


def resolve_settings(
    config: Optional[Path] = None,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Path] = None,
    **overrides,
) -> Settings:
    """Build settings from CLI options."""
    if log_file is not None:
        overrides["log_file"] = str(log_file)
    return load_settings(config_file=config, verbose=verbose, quiet=quiet, **overrides)
