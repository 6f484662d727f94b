from __future__ import annotations

import math

import pytest

from src import Edge, InfluenceGraph


@pytest.mark.parametrize("weight", [-0.1, math.nan, math.inf])
def test_add_edge_rejects_invalid_weight(weight: float) -> None:
    graph = InfluenceGraph()
    with pytest.raises(ValueError):
        graph.add_edge("A", "B", weight, "x")
    assert graph.edges == ()
    assert len(graph) == 0


def test_add_edge_creates_endpoints() -> None:
    graph = InfluenceGraph()
    edge = graph.add_edge("A", "B", 0.5, "x")

    assert edge == Edge("A", "B", 0.5, "x")
    assert graph.nodes == ["A", "B"]
    assert "A" in graph and graph.has_node("B")
    assert not graph.has_node("C")


def test_parallel_edges_are_kept() -> None:
    graph = InfluenceGraph.from_edges(
        [
            ("A", "B", 0.5, "x"),
            ("A", "B", 0.5, "x"),
            ("A", "B", 0.7, "y"),
        ]
    )
    assert graph.number_of_edges() == 3
    assert graph.to_networkx().number_of_edges("A", "B") == 3


def test_adjacency_follows_insertion_order() -> None:
    graph = InfluenceGraph.from_edges(
        [
            ("B", "C", 0.1, "x"),
            ("A", "C", 0.2, "y"),
            ("B", "A", 0.3, "z"),
        ]
    )
    adj = graph.adjacency()

    assert list(adj) == ["B", "A"]
    assert [edge.target for edge in adj["B"]] == ["C", "A"]
    assert "C" not in adj
    assert graph.out_edges("C") == []
    assert graph.out_edges("missing") == []


def test_communities_sorted_and_distinct() -> None:
    graph = InfluenceGraph.from_edges(
        [
            ("A", "B", 0.1, "sports"),
            ("B", "C", 0.2, "music"),
            ("C", "A", 0.3, "sports"),
        ]
    )
    assert graph.communities == ["music", "sports"]


def test_labels_default_to_node_id() -> None:
    graph = InfluenceGraph()
    graph.add_node("u1", label="Alice")
    graph.add_edge("u1", "u2", 0.4, "x")

    assert graph.label("u1") == "Alice"
    assert graph.label("u2") == "u2"
    with pytest.raises(KeyError):
        graph.label("u3")


def test_isolated_node_has_no_edges() -> None:
    graph = InfluenceGraph()
    graph.add_node("solo")

    assert graph.nodes == ["solo"]
    assert graph.adjacency() == {}


def test_copy_is_independent() -> None:
    graph = InfluenceGraph.from_edges([("A", "B", 0.5, "x")])
    clone = graph.copy()
    clone.add_edge("B", "C", 0.5, "x")

    assert len(graph) == 2
    assert graph.number_of_edges() == 1
    assert len(clone) == 3
    assert clone.number_of_edges() == 2


def test_from_edges_accepts_edge_records() -> None:
    edges = [Edge("A", "B", 0.5, "x"), Edge("B", "C", 0.25, "y")]
    graph = InfluenceGraph.from_edges(edges)
    assert graph.edges == tuple(edges)
    assert repr(graph) == "InfluenceGraph(nodes=3, edges=2)"
