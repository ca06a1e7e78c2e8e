"""Directory graph construction from relation sets."""

from typing import Iterable, Mapping, Union

from ..architecture.models import DirectoryRecord
from ..scanning.walker import ROOT_KEY
from .models import DirectoryGraph

_EXCLUDED = frozenset({"", ".", ROOT_KEY})


def build_directory_graph(
    relations: Mapping[str, Union[DirectoryRecord, Iterable[str]]],
) -> DirectoryGraph:
    """Build the symmetric directory graph from directed relations.

    Every key of ``relations`` becomes a node. For each relation A -> B both
    A -> B and B -> A are added if absent, so the result reads as an
    undirected graph. Targets without a key of their own are appended as
    nodes in the order they are met. Self-loops and the root sentinel are
    skipped.

    Args:
        relations: Directory key -> DirectoryRecord, or -> iterable of target keys
    """
    adjacency: dict[str, list[str]] = {node: [] for node in relations}

    for node, value in relations.items():
        targets = value.relations if isinstance(value, DirectoryRecord) else value
        # Sets have no stable order; sorting keeps runs reproducible
        for target in sorted(targets):
            if target == node or target in _EXCLUDED:
                continue
            _add_edge(adjacency, node, target)
            _add_edge(adjacency, target, node)

    return DirectoryGraph(adjacency=adjacency)


def _add_edge(adjacency: dict[str, list[str]], src: str, dst: str) -> None:
    neighbors = adjacency.setdefault(src, [])
    if dst not in neighbors:
        neighbors.append(dst)
