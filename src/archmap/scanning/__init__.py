"""Lexical layer: dialects, scrubbing, symbol extraction, directory walking."""

from .dialects import DIALECTS, PHP, DialectConfig, get_dialect
from .scrubber import scrub
from .symbols import (
    FileSymbols,
    analyze_source,
    compute_cyclomatic_complexity,
    count_effective_loc,
    extract_symbols,
)
from .walker import ROOT_KEY, SourceDirectory, iter_source_directories, read_source

__all__ = [
    "DIALECTS",
    "PHP",
    "ROOT_KEY",
    "DialectConfig",
    "FileSymbols",
    "SourceDirectory",
    "analyze_source",
    "compute_cyclomatic_complexity",
    "count_effective_loc",
    "extract_symbols",
    "get_dialect",
    "iter_source_directories",
    "read_source",
    "scrub",
]
