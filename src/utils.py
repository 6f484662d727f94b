from __future__ import annotations

import random
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import networkx as nx

from .influence_graph import Edge, InfluenceGraph
from .path_finder import NO_PATH_INFLUENCE, PathResult, find_max_influence_path


# ----------------------------------------------------------------------
# Presentation helpers
# ----------------------------------------------------------------------


def format_influence(influence: float, digits: int = 3) -> str:
    """Format an influence score, 'N/A' for the no-path sentinel."""
    if influence == NO_PATH_INFLUENCE:
        return "N/A"
    return f"{influence:.{digits}f}"


def path_to_string(path: Sequence[str], arrow: str = "→") -> str:
    """Turn a path into 'A → B → C'. Good for debug prints and captions."""
    if not path:
        return "No path"
    return f" {arrow} ".join(str(node) for node in path)


def path_edges(path: Sequence[str]) -> List[Tuple[str, str]]:
    """Consecutive (u, v) pairs along a path."""
    return list(zip(path, path[1:]))


def is_path_edge(path: Sequence[str], u: str, v: str) -> bool:
    """True if u is immediately followed by v somewhere on the path."""
    return (u, v) in set(path_edges(path))


# ----------------------------------------------------------------------
# Scoring and reference search
# ----------------------------------------------------------------------


def _parallel_edges(graph: InfluenceGraph, u: str, v: str) -> List[Edge]:
    return [edge for edge in graph.out_edges(u) if edge.target == v]


def score_path(
    graph: InfluenceGraph,
    path: Sequence[str],
    penalty: float,
    communities: Optional[Sequence[str]] = None,
) -> float:
    """
    Influence of one concrete route.

    With communities given, each hop uses the heaviest parallel edge in that
    community. Without them, the best parallel edge choice for the whole route
    is taken (tracking the trailing community hop by hop).
    Returns -1.0 if some hop has no matching edge.
    """
    if not path:
        return NO_PATH_INFLUENCE
    if len(path) == 1:
        return 1.0

    hops = path_edges(path)
    if communities is not None:
        if len(communities) != len(hops):
            raise ValueError("communities must have one entry per hop")
        influence = 1.0
        previous = ""
        for (u, v), community in zip(hops, communities):
            weights = [e.weight for e in _parallel_edges(graph, u, v) if e.community == community]
            if not weights:
                return NO_PATH_INFLUENCE
            influence *= max(weights)
            if previous and previous != community:
                influence *= penalty
            previous = community
        return influence

    # best[c] = best influence so far given the last hop used community c
    best: Dict[str, float] = {"": 1.0}
    for u, v in hops:
        options = _parallel_edges(graph, u, v)
        if not options:
            return NO_PATH_INFLUENCE
        step: Dict[str, float] = {}
        for last, value in best.items():
            for edge in options:
                candidate = value * edge.weight
                if last and last != edge.community:
                    candidate *= penalty
                if candidate > step.get(edge.community, -1.0):
                    step[edge.community] = candidate
        best = step
    return max(best.values())


def brute_force_max_influence(
    graph: InfluenceGraph,
    source: str,
    destination: str,
    penalty: float,
) -> PathResult:
    """
    Exhaustive reference: best simple path over every parallel-edge choice.

    Only usable on small graphs. Mirrors the search's convention that a route
    worth 0 never beats the 0 baseline, so such routes count as unreachable.
    """
    if source == destination:
        return PathResult(path=(source,), influence=1.0)
    if not graph.has_node(source) or not graph.has_node(destination):
        return PathResult.unreachable()

    simple = nx.DiGraph()
    simple.add_nodes_from(graph.nodes)
    simple.add_edges_from((edge.source, edge.target) for edge in graph.edges)
    best_path: Tuple[str, ...] = ()
    best_influence = 0.0
    for candidate in nx.all_simple_paths(simple, source, destination):
        influence = score_path(graph, candidate, penalty)
        if influence > best_influence:
            best_influence = influence
            best_path = tuple(candidate)

    if not best_path:
        return PathResult.unreachable()
    return PathResult(path=best_path, influence=best_influence)


# ----------------------------------------------------------------------
# Graph builders
# ----------------------------------------------------------------------


def build_chain_graph(
    n: int,
    weight: float = 0.9,
    communities: Sequence[str] = ("c0",),
    label_prefix: str = "v",
) -> InfluenceGraph:
    """Path graph v0 -> v1 -> ...; edge i uses communities[i % len(communities)]."""
    if n <= 0:
        raise ValueError("Number of nodes must be positive")
    if not communities:
        raise ValueError("At least one community label is required")

    graph = InfluenceGraph()
    nodes = [f"{label_prefix}{i}" for i in range(n)]
    for node in nodes:
        graph.add_node(node)
    for i in range(n - 1):
        graph.add_edge(nodes[i], nodes[i + 1], weight, communities[i % len(communities)])
    return graph


def build_random_community_graph(
    num_nodes: int,
    edge_prob: float,
    communities: Sequence[str] = ("tech", "sports", "music"),
    weight_range: Tuple[float, float] = (0.1, 1.0),
    parallel_prob: float = 0.0,
    acyclic: bool = False,
    seed: Optional[int] = None,
    label_prefix: str = "u",
) -> InfluenceGraph:
    """
    Random Erdos–Renyi style interaction graph with community labels.

    acyclic=True only keeps edges i -> j with i < j (a DAG).
    parallel_prob adds a second edge, in a random community, to a fraction of pairs.
    """
    if num_nodes <= 0:
        raise ValueError("Number of nodes must be positive")
    if not (0.0 <= edge_prob <= 1.0):
        raise ValueError("edge_prob must be between 0 and 1")
    if not communities:
        raise ValueError("At least one community label is required")

    rng = random.Random(seed)
    graph = InfluenceGraph()
    w_low, w_high = weight_range

    nodes = [f"{label_prefix}{i}" for i in range(num_nodes)]
    for node in nodes:
        graph.add_node(node)

    for i in range(num_nodes):
        for j in range(num_nodes):
            if i == j or (acyclic and j < i):
                continue
            if rng.random() <= edge_prob:
                graph.add_edge(nodes[i], nodes[j], rng.uniform(w_low, w_high), rng.choice(communities))
                if rng.random() < parallel_prob:
                    graph.add_edge(
                        nodes[i], nodes[j], rng.uniform(w_low, w_high), rng.choice(communities)
                    )

    return graph


def trend_propagation_example() -> InfluenceGraph:
    """Toy network used in the dashboard and the demo script."""
    edges: Iterable[Tuple[str, str, float, str]] = [
        ("Alice", "Bob", 0.8, "tech"),
        ("Bob", "Charlie", 0.7, "entertainment"),
        ("Alice", "Dana", 0.6, "tech"),
        ("Dana", "Charlie", 0.9, "tech"),
        ("Charlie", "Eve", 0.85, "entertainment"),
        ("Dana", "Eve", 0.4, "sports"),
        ("Bob", "Frank", 0.5, "tech"),
        ("Frank", "Eve", 0.95, "tech"),
    ]
    return InfluenceGraph.from_edges(edges)


if __name__ == "__main__":
    # Tiny smoke checks for the helpers.
    example = trend_propagation_example()
    result = find_max_influence_path(example, "Alice", "Eve", penalty=0.9)
    print("Example path:", path_to_string(result.path))
    print("Example influence:", format_influence(result.influence))
    print("Brute force:", brute_force_max_influence(example, "Alice", "Eve", penalty=0.9))

    chain = build_chain_graph(n=4, weight=0.5, communities=("x", "y"))
    print("Chain edges:", [(e.source, e.target, e.community) for e in chain.edges])

    random_graph = build_random_community_graph(num_nodes=6, edge_prob=0.4, seed=3210)
    print("Random graph:", random_graph)
