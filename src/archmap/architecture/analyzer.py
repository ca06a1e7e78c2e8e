"""TreeAnalyzer: extraction stage of an analysis run.

Orchestrates:
1. Root validation
2. Namespace map pre-walk
3. Directory aggregation (scrub, extract, resolve per file)
4. Coupling metrics
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from ..config import DEFAULT_SETTINGS, Settings
from ..exceptions import InvalidPathError
from ..logging_config import get_logger
from ..scanning.dialects import get_dialect
from .aggregator import DirectoryAggregator
from .metrics import compute_coupling_metrics
from .models import DirectoryRecord
from .resolver import NamespaceResolver, build_namespace_map

logger = get_logger(__name__)


class TreeAnalyzer:
    """Extracts DirectoryRecords from a local source tree."""

    def __init__(
        self,
        source: Union[str, Path],
        root_dir: Optional[str] = None,
        settings: Optional[Settings] = None,
    ):
        self.source = Path(source).expanduser()
        self.root_dir = _check_root_dir(root_dir)
        self.settings = settings or DEFAULT_SETTINGS
        self.dialect = get_dialect(self.settings.dialect)

    @property
    def start_path(self) -> Path:
        """Effective analysis root: the source, or its sub-directory ``root_dir``."""
        return self.source / self.root_dir if self.root_dir else self.source

    def analyze(self) -> dict[str, DirectoryRecord]:
        """Run the extraction and return records keyed by directory key.

        Raises:
            InvalidPathError: If the source or the root directory is not a directory
        """
        if not self.source.is_dir():
            raise InvalidPathError(self.source, "source directory does not exist")

        start = self.start_path
        if not start.is_dir():
            raise InvalidPathError(
                start, f"root directory '{self.root_dir}' does not exist in the project"
            )

        logger.debug(f"Analyzing {start} ({self.dialect.name})")

        namespace_map = build_namespace_map(start, self.dialect, self.settings)
        resolver = NamespaceResolver(namespace_map, start, self.dialect)

        records = DirectoryAggregator(start, resolver, self.dialect, self.settings).aggregate()
        compute_coupling_metrics(records, self.settings.instability_precision)

        logger.debug(
            f"Extraction complete: {len(records)} directories, "
            f"{sum(len(r.relations) for r in records.values())} relations"
        )
        return records


def _check_root_dir(root_dir: Optional[str]) -> Optional[str]:
    """Reject root directories that would leave the project tree.

    Raises:
        InvalidPathError: If ``root_dir`` is absolute or contains ".."
    """
    if not root_dir:
        return root_dir
    relative = Path(root_dir)
    if relative.is_absolute() or relative.anchor or ".." in relative.parts:
        raise InvalidPathError(relative, "root directory must be a path inside the project")
    return root_dir


def analyze_tree(
    source: Union[str, Path],
    root_dir: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> dict[str, DirectoryRecord]:
    """Analyze ``source`` (optionally only its ``root_dir`` sub-tree)."""
    return TreeAnalyzer(source, root_dir, settings).analyze()
