"""Directory aggregation: per-directory metrics and relation sets.

Each directory is folded into its own DirectoryRecord by a call that only
sees that directory and the shared resolver; ``aggregate`` collects the
records in walk order.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..config import DEFAULT_SETTINGS, Settings
from ..exceptions import FileAccessError
from ..logging_config import get_logger
from ..scanning.dialects import DialectConfig
from ..scanning.symbols import analyze_source
from ..scanning.walker import ROOT_KEY, SourceDirectory, iter_source_directories, read_source
from .models import DirectoryRecord
from .resolver import NamespaceResolver

logger = get_logger(__name__)

# Targets that never become a relation: unresolved, the root sentinel, "current dir"
_NON_TARGETS = frozenset({"", ".", ROOT_KEY})


def is_relation_target(target: Optional[str], own_key: str) -> bool:
    """True if ``target`` counts as a dependency of directory ``own_key``."""
    return target is not None and target not in _NON_TARGETS and target != own_key


class DirectoryAggregator:
    """Walks a tree and builds one DirectoryRecord per source directory."""

    def __init__(
        self,
        root: Path,
        resolver: NamespaceResolver,
        dialect: DialectConfig,
        settings: Optional[Settings] = None,
    ):
        self.root = root
        self.resolver = resolver
        self.dialect = dialect
        self.settings = settings or DEFAULT_SETTINGS

    def aggregate(self) -> dict[str, DirectoryRecord]:
        """Walk the tree and return records keyed by directory key.

        Coupling metrics are left at zero; they need the complete mapping.
        """
        records: dict[str, DirectoryRecord] = {}
        for directory in iter_source_directories(self.root, self.dialect, self.settings):
            records[directory.key] = self.process_directory(directory)
        logger.debug(f"Aggregated {len(records)} directories under {self.root}")
        return records

    def process_directory(self, directory: SourceDirectory) -> DirectoryRecord:
        """Build the record of one directory from its files."""
        record = DirectoryRecord(path=directory.key)

        for path in directory.files:
            try:
                text = read_source(path)
            except FileAccessError as e:
                logger.debug(f"Skipping unreadable file {path}: {e.reason}")
                continue

            symbols = analyze_source(text, self.dialect)
            record.add_file(symbols)

            for reference in symbols.references:
                target = self.resolver.resolve(reference)
                if is_relation_target(target, directory.key):
                    record.relations.add(target)

        record.finalize()
        logger.debug(
            f"{directory.key}: {record.file_count} files, {len(record.relations)} relations"
        )
        return record
