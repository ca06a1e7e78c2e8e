"""Exception hierarchy for archmap."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    InvalidAnalysisError,
    UnsupportedDialectError,
)
from .base import ArchmapError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "ArchmapError",
    "AnalysisError",
    "FileAccessError",
    "InvalidAnalysisError",
    "UnsupportedDialectError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
