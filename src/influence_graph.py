from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

import networkx as nx


@dataclass(frozen=True)
class Edge:
    """One directed interaction: source influences target inside a community."""

    source: str
    target: str
    weight: float
    community: str


class InfluenceGraph:
    """
    Directed, weighted, community-labelled interaction graph.

    - Edges are directed: source influences target.
    - Weights are nonnegative (usually an interaction frequency in (0, 1]).
    - Parallel edges between the same pair are kept as separate options,
      so the backing store is a networkx MultiDiGraph.
    Edge insertion order is preserved and drives adjacency order.
    """

    def __init__(self) -> None:
        """Create an empty graph."""
        self.G: nx.MultiDiGraph = nx.MultiDiGraph()
        self._edges: List[Edge] = []

    @classmethod
    def from_edges(cls, edges: Iterable[Edge | Tuple[Any, Any, float, str]]) -> "InfluenceGraph":
        """Build a graph from Edge records or (source, target, weight, community) tuples."""
        graph = cls()
        graph.add_edges_from(edges)
        return graph

    # ------------------------------------------------------------------
    # Graph construction
    # ------------------------------------------------------------------

    def add_node(self, node: str, label: Optional[str] = None) -> None:
        """
        Add a node with an optional display label.

        Nodes also appear implicitly when an edge references them, so this is
        only needed for isolated nodes or custom labels.
        """
        if node in self.G:
            if label is not None:
                self.G.nodes[node]["label"] = label
            return
        self.G.add_node(node, label=label if label is not None else str(node))

    def add_edge(self, source: str, target: str, weight: float, community: str) -> Edge:
        """
        Add a directed edge with a nonnegative weight and a community label.

        Endpoints are created on demand.
        """
        weight = float(weight)
        if math.isnan(weight) or math.isinf(weight):
            raise ValueError(f"Weight for edge ({source!r}, {target!r}) must be finite")
        if weight < 0:
            raise ValueError("Weights must be nonnegative in this model")

        for node in (source, target):
            if node not in self.G:
                self.add_node(node)

        edge = Edge(source=source, target=target, weight=weight, community=str(community))
        self.G.add_edge(source, target, weight=weight, community=edge.community)
        self._edges.append(edge)
        return edge

    def add_edges_from(self, edges: Iterable[Edge | Tuple[Any, Any, float, str]]) -> None:
        """Add several edges at once."""
        for edge in edges:
            if isinstance(edge, Edge):
                self.add_edge(edge.source, edge.target, edge.weight, edge.community)
            else:
                source, target, weight, community = edge
                self.add_edge(source, target, weight, community)

    # ------------------------------------------------------------------
    # Basic accessors
    # ------------------------------------------------------------------

    @property
    def nodes(self) -> List[str]:
        """Nodes in insertion order."""
        return list(self.G.nodes())

    @property
    def edges(self) -> Tuple[Edge, ...]:
        """All edges in insertion order."""
        return tuple(self._edges)

    @property
    def communities(self) -> List[str]:
        """Sorted list of distinct community labels."""
        return sorted({edge.community for edge in self._edges})

    def has_node(self, node: Any) -> bool:
        """True if the node appears in the graph."""
        return node in self.G

    def label(self, node: str) -> str:
        """Display label for a node."""
        if node not in self.G:
            raise KeyError(f"Node {node!r} is not in the graph")
        return self.G.nodes[node].get("label") or str(node)

    def out_edges(self, node: str) -> List[Edge]:
        """Outgoing edges of a node in insertion order. Unknown nodes have none."""
        return [edge for edge in self._edges if edge.source == node]

    def adjacency(self) -> Dict[str, List[Edge]]:
        """
        Project the edge list into an adjacency map {source: [Edge, ...]}.

        Only nodes with outgoing edges get a key. Order follows edge insertion,
        so the projection is deterministic for a given edge sequence.
        """
        adj: Dict[str, List[Edge]] = {}
        for edge in self._edges:
            adj.setdefault(edge.source, []).append(edge)
        return adj

    def number_of_edges(self) -> int:
        """Edge count, parallel edges included."""
        return len(self._edges)

    def to_networkx(self) -> nx.MultiDiGraph:
        """Return the backing networkx graph (not a copy)."""
        return self.G

    def copy(self) -> "InfluenceGraph":
        """Independent copy of this graph."""
        new = InfluenceGraph()
        new.G = self.G.copy()
        new._edges = list(self._edges)
        return new

    def __len__(self) -> int:
        return self.G.number_of_nodes()

    def __contains__(self, node: Any) -> bool:
        return node in self.G

    def __repr__(self) -> str:
        return f"InfluenceGraph(nodes={len(self)}, edges={len(self._edges)})"
