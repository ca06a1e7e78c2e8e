"""Data models for directory-level community detection.

  DirectoryGraph  - symmetric adjacency between directory keys (input)
  CommunityResult - labels, groups and the community-level summary (output)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass
class DirectoryGraph:
    """Undirected directory graph stored as a symmetric adjacency.

    adjacency[A] contains B if and only if adjacency[B] contains A. Node
    order and neighbour order are insertion order and drive the detector's
    iteration order.
    """

    adjacency: dict[str, list[str]] = field(default_factory=dict)

    @property
    def nodes(self) -> list[str]:
        return list(self.adjacency)


@dataclass
class CommunityResult:
    """Outcome of one detector run.

    Labels are representative node names, not indices: a community is named
    after the directory whose label its members adopted.
    """

    graph: DirectoryGraph
    labels: dict[str, str] = field(default_factory=dict)
    groups: dict[str, list[str]] = field(default_factory=dict)
    # community -> community -> number of adjacency edges between them
    community_dependencies: dict[str, dict[str, int]] = field(default_factory=dict)
    # community -> communities it has at least one edge to
    community_graph: dict[str, list[str]] = field(default_factory=dict)
    total_edges: float = 0.0  # m, fixed for the whole run
    total_nodes: int = 0
    modularity: float = 0.0
    passes: int = 0
    moves: int = 0
    converged: bool = True

    def display_numbers(self) -> dict[str, int]:
        """Sequential 1-based numbers for presenting community labels."""
        return {label: i for i, label in enumerate(self.groups, start=1)}

    def to_dict(self) -> dict[str, Any]:
        return {
            "graph": self.graph.adjacency,
            "communities": self.labels,
            "communities_by_group": self.groups,
            "community_dependencies": self.community_dependencies,
            "community_graph": self.community_graph,
            "total_edges": _plain_number(self.total_edges),
            "total_nodes": self.total_nodes,
            "modularity": round(self.modularity, 4),
            "passes": self.passes,
            "moves": self.moves,
            "converged": self.converged,
        }


def _plain_number(value: float) -> Union[int, float]:
    return int(value) if float(value).is_integer() else value
