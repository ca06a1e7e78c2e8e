"""Public API for archmap.

Example:
    >>> from archmap import analyze_tree, detect
    >>>
    >>> records = analyze_tree("/path/to/project", root_dir="src")
    >>> records["Domain"].metrics.instability
    0.25
    >>> result = detect(records)
    >>> result.groups
    {'Domain': ['Domain', 'Infrastructure'], ...}
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping, Optional, Union

from .architecture.analyzer import TreeAnalyzer
from .architecture.models import DirectoryRecord
from .config import DEFAULT_SETTINGS, Settings
from .graph.algorithms import detect_communities
from .graph.builder import build_directory_graph
from .graph.models import CommunityResult, DirectoryGraph
from .logging_config import get_logger

logger = get_logger(__name__)


def analyze_tree(
    source: Union[str, Path],
    root_dir: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> dict[str, DirectoryRecord]:
    """Extract per-directory records from a local source tree.

    Args:
        source: Project directory
        root_dir: Optional sub-directory of ``source`` to use as the analysis root
        settings: Settings (defaults if omitted)

    Returns:
        Directory key -> DirectoryRecord, the root keyed as "/"

    Raises:
        InvalidPathError: If ``source`` or ``root_dir`` is not a directory
    """
    return TreeAnalyzer(source, root_dir, settings).analyze()


def detect(
    relations: Union[
        DirectoryGraph, Mapping[str, Union[DirectoryRecord, Iterable[str]]]
    ],
    settings: Optional[Settings] = None,
    max_passes: Optional[int] = None,
    initial: Optional[Mapping[str, str]] = None,
) -> CommunityResult:
    """Cluster directories into communities.

    Args:
        relations: A DirectoryGraph, the records from ``analyze_tree``, or
            directory key -> target keys
        settings: Settings supplying the default pass bound
        max_passes: Pass bound overriding ``settings``
        initial: Optional starting labels

    Returns:
        CommunityResult
    """
    settings = settings or DEFAULT_SETTINGS
    if max_passes is None:
        max_passes = settings.max_passes

    if isinstance(relations, DirectoryGraph):
        graph = relations
    else:
        graph = build_directory_graph(relations)

    logger.debug(f"Detecting communities on {len(graph.nodes)} directories")
    return detect_communities(graph, max_passes=max_passes, initial=initial)
