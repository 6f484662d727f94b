from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .influence_graph import Edge, InfluenceGraph

logger = logging.getLogger(__name__)

NO_PATH_INFLUENCE = -1.0
SEARCH_MODES = ("greedy", "history")

# Search state key in history mode: (node, community of the edge used to reach it).
State = Tuple[str, str]


@dataclass(frozen=True)
class PathResult:
    """
    Outcome of one max-influence search.

    path: nodes from source to destination inclusive, empty if unreachable.
    influence: product of edge weights times penalty per community switch,
      or -1.0 when no path exists.
    communities: community label of each traversed edge (len(path) - 1 items).
    expanded: how many frontier entries were expanded before stopping.
    """

    path: Tuple[str, ...]
    influence: float
    communities: Tuple[str, ...] = ()
    expanded: int = 0

    @property
    def found(self) -> bool:
        """True when the destination was reached."""
        return bool(self.path)

    @property
    def switches(self) -> int:
        """Number of community switches along the returned path."""
        return sum(
            1 for prev, curr in zip(self.communities, self.communities[1:]) if prev != curr
        )

    @property
    def hops(self) -> List[Tuple[str, str, str]]:
        """Traversed hops as (source, target, community) triples."""
        return [
            (u, v, community)
            for (u, v), community in zip(zip(self.path, self.path[1:]), self.communities)
        ]

    @classmethod
    def unreachable(cls, expanded: int = 0) -> "PathResult":
        """The 'no path' result."""
        return cls(path=(), influence=NO_PATH_INFLUENCE, communities=(), expanded=expanded)


class InfluencePathFinder:
    """
    Maximum-influence path search on a community-labelled graph.

    Influence multiplies along edges and is scaled by `penalty` every time the
    path moves to an edge whose community differs from the edge used to reach
    the current node. With weights and penalty in [0, 1] influence can only
    shrink along a path, so extracting the largest frontier value first is
    the max-product analogue of Dijkstra.

    Two modes:
    - "greedy": one state per node. The switch penalty for u -> v looks at the
      community on u's current best path only. Matches the reference analyzer.
    - "history": one state per (node, last community). Exact optimum over
      walks, at the cost of up to |communities| states per node.

    Weights above 1 are allowed. A node whose value improves after it was
    expanded is pushed and expanded again, but an improvement never relinks
    one of the relaxing node's own ancestors, so predecessor links stay a tree.

    Frontier ties are broken by node id (smallest first), then insertion order.
    The graph is only read; every call builds its own tables.
    """

    def __init__(self, graph: InfluenceGraph) -> None:
        self.graph = graph

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def find(
        self,
        source: str,
        destination: str,
        penalty: float,
        mode: str = "greedy",
    ) -> PathResult:
        """Return the best path from source to destination under the given penalty."""
        if mode not in SEARCH_MODES:
            raise ValueError(f"Unknown search mode {mode!r}; expected one of {SEARCH_MODES}")

        adjacency = self.graph.adjacency()
        logger.debug(
            "Searching %s -> %s (penalty=%s, mode=%s, nodes=%d, edges=%d)",
            source,
            destination,
            penalty,
            mode,
            len(self.graph.nodes),
            len(self.graph.edges),
        )

        if mode == "greedy":
            result = self._search_greedy(adjacency, source, destination, penalty)
        else:
            result = self._search_history(adjacency, source, destination, penalty)

        if result.found:
            logger.debug(
                "Best path %s with influence %.6f after %d expansions",
                " -> ".join(result.path),
                result.influence,
                result.expanded,
            )
        else:
            logger.debug(
                "No path from %s to %s after %d expansions", source, destination, result.expanded
            )
        return result

    # ------------------------------------------------------------------
    # Search variants
    # ------------------------------------------------------------------

    def _search_greedy(
        self,
        adjacency: Dict[str, List[Edge]],
        source: str,
        destination: str,
        penalty: float,
    ) -> PathResult:
        """Best-first search with one (influence, predecessor, community) record per node."""
        best_influence: Dict[str, float] = {source: 1.0}
        predecessor: Dict[str, Optional[str]] = {source: None}
        last_community: Dict[str, str] = {source: ""}

        counter = itertools.count()
        frontier: List[Tuple[float, str, int]] = [(-1.0, source, next(counter))]
        expanded = 0

        while frontier:
            negative, node, _ = heapq.heappop(frontier)
            influence = -negative

            # Lazy deletion: a better value for this node was pushed later.
            if influence < best_influence.get(node, 0.0):
                continue
            expanded += 1

            if node == destination:
                path = _walk_back(predecessor, destination)
                communities = tuple(last_community[n] for n in path[1:])
                return PathResult(
                    path=path,
                    influence=influence,
                    communities=communities,
                    expanded=expanded,
                )

            trailing = last_community.get(node, "")
            for edge in adjacency.get(node, ()):
                candidate = influence * edge.weight
                if trailing and trailing != edge.community:
                    candidate *= penalty
                if candidate > best_influence.get(edge.target, 0.0):
                    if _is_ancestor(predecessor, edge.target, node):
                        continue
                    best_influence[edge.target] = candidate
                    predecessor[edge.target] = node
                    last_community[edge.target] = edge.community
                    heapq.heappush(frontier, (-candidate, edge.target, next(counter)))

        return PathResult.unreachable(expanded=expanded)

    def _search_history(
        self,
        adjacency: Dict[str, List[Edge]],
        source: str,
        destination: str,
        penalty: float,
    ) -> PathResult:
        """Best-first search over (node, last community) states."""
        start: State = (source, "")
        best_influence: Dict[State, float] = {start: 1.0}
        predecessor: Dict[State, Optional[State]] = {start: None}

        counter = itertools.count()
        frontier: List[Tuple[float, str, str, int]] = [(-1.0, source, "", next(counter))]
        expanded = 0

        while frontier:
            negative, node, community, _ = heapq.heappop(frontier)
            influence = -negative
            state: State = (node, community)

            if influence < best_influence.get(state, 0.0):
                continue
            expanded += 1

            if node == destination:
                states = _walk_back(predecessor, state)
                path = tuple(n for n, _ in states)
                communities = tuple(c for _, c in states[1:])
                return PathResult(
                    path=path,
                    influence=influence,
                    communities=communities,
                    expanded=expanded,
                )

            for edge in adjacency.get(node, ()):
                candidate = influence * edge.weight
                if community and community != edge.community:
                    candidate *= penalty
                next_state: State = (edge.target, edge.community)
                if candidate > best_influence.get(next_state, 0.0):
                    if _is_ancestor(predecessor, next_state, state):
                        continue
                    best_influence[next_state] = candidate
                    predecessor[next_state] = state
                    heapq.heappush(
                        frontier,
                        (-candidate, edge.target, edge.community, next(counter)),
                    )

        return PathResult.unreachable(expanded=expanded)


def _is_ancestor(predecessor: Dict, candidate, node) -> bool:
    """
    True if candidate lies on the predecessor chain ending at node.

    Relinking an ancestor under node would close a loop in the predecessor
    tree. That only happens when a cycle multiplies influence above 1.
    """
    current = node
    while current is not None:
        if current == candidate:
            return True
        current = predecessor.get(current)
    return False


def _walk_back(predecessor: Dict, end) -> Tuple:
    """Follow predecessor links from end back to the start, returned in forward order."""
    chain = []
    current = end
    while current is not None:
        chain.append(current)
        current = predecessor.get(current)
    chain.reverse()
    return tuple(chain)


def find_max_influence_path(
    graph: InfluenceGraph,
    source: str,
    destination: str,
    penalty: float,
    mode: str = "greedy",
) -> PathResult:
    """
    Convenience wrapper: InfluencePathFinder(graph).find(...).

    Returns PathResult(path=(), influence=-1.0) when destination is unreachable.
    """
    return InfluencePathFinder(graph).find(source, destination, penalty, mode=mode)


def compare_modes(
    graph: InfluenceGraph,
    source: str,
    destination: str,
    penalty: float,
    modes: Sequence[str] = SEARCH_MODES,
) -> Dict[str, PathResult]:
    """Run the same query in several modes, keyed by mode name."""
    finder = InfluencePathFinder(graph)
    return {mode: finder.find(source, destination, penalty, mode=mode) for mode in modes}


if __name__ == "__main__":
    graph = InfluenceGraph.from_edges(
        [
            ("Alice", "Bob", 0.8, "tech"),
            ("Bob", "Charlie", 0.7, "entertainment"),
        ]
    )
    result = find_max_influence_path(graph, "Alice", "Charlie", penalty=0.9)
    print("Path:", result.path)
    print("Influence:", result.influence)
    print("Switches:", result.switches)
