"""Community detection: greedy local modularity moves over a directory graph.

This is one level of Louvain-style local moving, without the coarsening
phase. ``m`` is taken from the input graph once and never recomputed, and
node moves apply immediately, so the final partition depends on node order.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Mapping, Optional

from ..logging_config import get_logger
from .models import CommunityResult, DirectoryGraph

logger = get_logger(__name__)


def total_edges(adjacency: Mapping[str, list[str]]) -> float:
    """m: half the sum of all adjacency-list lengths."""
    return sum(len(neighbors) for neighbors in adjacency.values()) / 2


def community_volumes(
    adjacency: Mapping[str, list[str]], labels: Mapping[str, str]
) -> dict[str, int]:
    """Sum of node degrees per community label."""
    volumes: dict[str, int] = defaultdict(int)
    for node, neighbors in adjacency.items():
        volumes[labels[node]] += len(neighbors)
    return volumes


def modularity_gain(
    node: str,
    community: str,
    labels: Mapping[str, str],
    adjacency: Mapping[str, list[str]],
    m: float,
    volumes: Optional[Mapping[str, int]] = None,
) -> float:
    """Local modularity contribution of grouping ``node`` with ``community``.

        gain = sum_in / 2m - k_i * sum_tot / 4m^2

    sum_in counts the node's neighbours labelled ``community``; sum_tot is
    the community's volume, including the node itself when it already
    carries that label. Requires m > 0.
    """
    if volumes is None:
        volumes = community_volumes(adjacency, labels)

    neighbors = adjacency[node]
    sum_in = sum(1 for n in neighbors if labels[n] == community)
    sum_tot = volumes.get(community, 0)
    k_i = len(neighbors)

    return sum_in / (2 * m) - (k_i * sum_tot) / (4 * m * m)


def _local_moving_pass(
    adjacency: Mapping[str, list[str]],
    labels: dict[str, str],
    volumes: dict[str, int],
    m: float,
) -> int:
    """One pass over all nodes; returns the number of nodes moved.

    Only the communities of current neighbours are candidates. Staying put
    has gain 0, so a node moves only for a strictly positive best gain, and
    only if that best is not its own community.
    """
    moves = 0

    for node, neighbors in adjacency.items():
        current = labels[node]
        best_comm = current
        best_gain = 0.0

        for neighbor in neighbors:
            target = labels[neighbor]
            gain = modularity_gain(node, target, labels, adjacency, m, volumes)
            if gain > best_gain:
                best_gain = gain
                best_comm = target

        if best_comm != current:
            ki = len(neighbors)
            volumes[current] -= ki
            volumes[best_comm] += ki
            labels[node] = best_comm
            moves += 1

    return moves


def detect_communities(
    graph: DirectoryGraph,
    max_passes: Optional[int] = None,
    initial: Optional[Mapping[str, str]] = None,
) -> CommunityResult:
    """Partition ``graph`` by greedy local modularity moves.

    Repeats full passes until one pass moves nothing.

    Args:
        graph: Symmetric directory graph
        max_passes: Stop after this many passes even if nodes still move
            (None = run until stable)
        initial: Starting labels; nodes missing from it start as singletons

    Returns:
        CommunityResult; ``converged`` is False if ``max_passes`` cut the run short
    """
    adjacency = graph.adjacency
    labels: dict[str, str] = {node: node for node in graph.nodes}
    if initial:
        labels.update({node: initial[node] for node in adjacency if node in initial})

    m = total_edges(adjacency)
    volumes = community_volumes(adjacency, labels)

    passes = 0
    moves = 0
    converged = False
    while max_passes is None or passes < max_passes:
        passes += 1
        moved = _local_moving_pass(adjacency, labels, volumes, m)
        moves += moved
        logger.debug(f"Pass {passes}: {moved} moves")
        if moved == 0:
            converged = True
            break

    if not converged:
        logger.warning(
            f"Community detection stopped after {passes} passes without converging"
        )

    groups = group_by_community(labels)
    dependencies = count_community_dependencies(adjacency, labels, groups)

    return CommunityResult(
        graph=graph,
        labels=labels,
        groups=groups,
        community_dependencies=dependencies,
        community_graph=build_community_graph(dependencies),
        total_edges=m,
        total_nodes=len(adjacency),
        modularity=compute_modularity(adjacency, labels, m),
        passes=passes,
        moves=moves,
        converged=converged,
    )


def group_by_community(labels: Mapping[str, str]) -> dict[str, list[str]]:
    """Community label -> members, both in node order."""
    groups: dict[str, list[str]] = {}
    for node, label in labels.items():
        groups.setdefault(label, []).append(node)
    return groups


def count_community_dependencies(
    adjacency: Mapping[str, list[str]],
    labels: Mapping[str, str],
    groups: Mapping[str, list[str]],
) -> dict[str, dict[str, int]]:
    """Tally adjacency edges whose endpoints sit in different communities.

    Returns a full community x community matrix; each undirected edge is
    counted once in each direction and the diagonal stays 0.
    """
    matrix: dict[str, dict[str, int]] = {a: {b: 0 for b in groups} for a in groups}

    for node, neighbors in adjacency.items():
        source = labels[node]
        for neighbor in neighbors:
            target = labels[neighbor]
            if source != target:
                matrix[source][target] += 1

    return matrix


def build_community_graph(
    dependencies: Mapping[str, Mapping[str, int]],
) -> dict[str, list[str]]:
    """Simplified directed community graph: keep the positive tallies."""
    return {
        source: [target for target, count in row.items() if source != target and count > 0]
        for source, row in dependencies.items()
    }


def compute_modularity(
    adjacency: Mapping[str, list[str]],
    labels: Mapping[str, str],
    m: float,
) -> float:
    """Compute modularity Q = sum_c [L_c/m - (sigma_c/2m)^2].

    Where:
      L_c = number of edges inside community c
      sigma_c = sum of degrees of nodes in community c
      m = total edge count

    Each undirected edge appears twice in a symmetric adjacency, so the
    inside-edge tally is halved.
    """
    if m == 0:
        return 0.0

    inside = sum(
        1
        for node, neighbors in adjacency.items()
        for neighbor in neighbors
        if labels[node] == labels[neighbor]
    )
    e_in = inside / 2

    sigma = community_volumes(adjacency, labels)
    null_term = sum(s * s for s in sigma.values()) / (4.0 * m * m)
    return e_in / m - null_term
