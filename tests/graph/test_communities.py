"""Tests for greedy modularity community detection."""

import pytest

from archmap.graph.algorithms import (
    build_community_graph,
    community_volumes,
    compute_modularity,
    count_community_dependencies,
    detect_communities,
    group_by_community,
    modularity_gain,
    total_edges,
)
from archmap.graph.builder import build_directory_graph
from archmap.graph.models import DirectoryGraph


@pytest.fixture
def two_clusters():
    """Edges A-B, A-C, B-D, E-F; C, D and F have no relations of their own."""
    return build_directory_graph(
        {"A": ["B", "C"], "B": ["D"], "C": [], "D": [], "E": ["F"], "F": []}
    )


# ── building blocks ───────────────────────────────────────────────


class TestTotalEdges:
    def test_half_of_adjacency_lengths(self, two_clusters):
        assert total_edges(two_clusters.adjacency) == 4

    def test_empty(self):
        assert total_edges({}) == 0


class TestModularityGain:
    def test_formula(self, two_clusters):
        adjacency = two_clusters.adjacency
        labels = {node: node for node in adjacency}
        m = total_edges(adjacency)

        # sum_in=1, k_i=2, sum_tot=deg(B)=2: 1/8 - 2*2/64
        assert modularity_gain("A", "B", labels, adjacency, m) == pytest.approx(0.0625)
        # sum_tot=deg(C)=1: 1/8 - 2*1/64
        assert modularity_gain("A", "C", labels, adjacency, m) == pytest.approx(0.09375)

    def test_non_neighbor_community(self, two_clusters):
        adjacency = two_clusters.adjacency
        labels = {node: node for node in adjacency}
        gain = modularity_gain("A", "E", labels, adjacency, 4)
        assert gain < 0

    def test_own_community_includes_node(self, two_clusters):
        adjacency = two_clusters.adjacency
        labels = {node: node for node in adjacency}
        labels["A"] = "C"
        volumes = community_volumes(adjacency, labels)
        assert volumes["C"] == 3
        # C evaluating its own community: sum_tot counts A and C
        assert modularity_gain("C", "C", labels, adjacency, 4, volumes) == pytest.approx(
            1 / 8 - 3 / 64
        )


# ── detection ─────────────────────────────────────────────────────


class TestDetectCommunities:
    def test_two_clusters(self, two_clusters):
        result = detect_communities(two_clusters)

        assert result.groups == {"D": ["A", "B", "C", "D"], "F": ["E", "F"]}
        assert result.labels == {"A": "D", "B": "D", "C": "D", "D": "D", "E": "F", "F": "F"}
        assert result.converged
        assert result.passes == 3
        assert result.moves == 5

    def test_no_inter_community_edges(self, two_clusters):
        result = detect_communities(two_clusters)
        assert result.community_dependencies == {"D": {"D": 0, "F": 0}, "F": {"D": 0, "F": 0}}
        assert result.community_graph == {"D": [], "F": []}

    def test_summary_fields(self, two_clusters):
        result = detect_communities(two_clusters)
        assert result.total_edges == 4
        assert result.total_nodes == 6
        # 4/4 - (6^2 + 2^2) / (4 * 4^2)
        assert result.modularity == pytest.approx(0.375)

    def test_idempotent_on_own_output(self, two_clusters):
        first = detect_communities(two_clusters)
        second = detect_communities(two_clusters, initial=first.labels)
        assert second.moves == 0
        assert second.passes == 1
        assert second.labels == first.labels

    def test_pass_bound(self, two_clusters):
        result = detect_communities(two_clusters, max_passes=1)
        assert not result.converged
        assert result.passes == 1
        assert result.groups == {"C": ["A", "C"], "D": ["B", "D"], "F": ["E", "F"]}

    def test_pass_bound_logs_warning(self, two_clusters, caplog):
        with caplog.at_level("WARNING", logger="archmap"):
            detect_communities(two_clusters, max_passes=1)
        assert "without converging" in caplog.text

    def test_triangle_never_settles(self, caplog):
        # With m fixed and moves applied immediately, every node of a
        # triangle chases a neighbour's label on every pass
        graph = build_directory_graph(
            {"Domain": [], "Http": ["Domain", "Infrastructure"], "Infrastructure": ["Domain"]}
        )
        with caplog.at_level("WARNING", logger="archmap"):
            result = detect_communities(graph, max_passes=50)

        assert not result.converged
        assert result.passes == 50
        assert result.moves == 3 * result.passes
        assert "stopped after 50 passes without converging" in caplog.text

    def test_empty_graph(self):
        result = detect_communities(DirectoryGraph())
        assert result.groups == {}
        assert result.total_edges == 0
        assert result.modularity == 0.0
        assert result.converged

    def test_isolated_nodes_stay_singletons(self):
        graph = build_directory_graph({"a": [], "b": []})
        result = detect_communities(graph)
        assert result.labels == {"a": "a", "b": "b"}
        assert result.moves == 0

    def test_input_graph_untouched(self, two_clusters):
        before = {k: list(v) for k, v in two_clusters.adjacency.items()}
        detect_communities(two_clusters)
        assert two_clusters.adjacency == before


class TestCommunitySummary:
    def test_group_by_community_preserves_node_order(self):
        labels = {"a": "x", "b": "y", "c": "x"}
        assert group_by_community(labels) == {"x": ["a", "c"], "y": ["b"]}

    def test_dependencies_counted_both_ways(self):
        adjacency = {"a": ["b", "c"], "b": ["a"], "c": ["a"]}
        labels = {"a": "a", "b": "a", "c": "c"}
        groups = group_by_community(labels)
        matrix = count_community_dependencies(adjacency, labels, groups)
        assert matrix == {"a": {"a": 0, "c": 1}, "c": {"a": 1, "c": 0}}
        assert build_community_graph(matrix) == {"a": ["c"], "c": ["a"]}

    def test_modularity_single_community(self):
        adjacency = {"a": ["b"], "b": ["a"]}
        # 1/1 - (2/2)^2
        assert compute_modularity(adjacency, {"a": "a", "b": "a"}, 1) == pytest.approx(0.0)

    def test_to_dict_keys(self, two_clusters):
        data = detect_communities(two_clusters).to_dict()
        assert data["communities_by_group"] == {"D": ["A", "B", "C", "D"], "F": ["E", "F"]}
        assert data["total_edges"] == 4
        assert isinstance(data["total_edges"], int)
        assert data["graph"]["A"] == ["B", "C"]
        assert set(data) >= {
            "graph",
            "communities",
            "communities_by_group",
            "community_dependencies",
            "community_graph",
            "total_edges",
            "total_nodes",
        }

    def test_display_numbers(self, two_clusters):
        result = detect_communities(two_clusters)
        assert result.display_numbers() == {"D": 1, "F": 2}
