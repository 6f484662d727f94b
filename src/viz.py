from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set, Tuple

import matplotlib.pyplot as plt
import networkx as nx
import numpy as np
from pyvis.network import Network

from .influence_graph import InfluenceGraph
from .utils import path_edges

# Purple marks the chosen route, teal/grey everything else.
PATH_NODE_COLOR = "#C084FC"
PATH_NODE_BORDER = "#9333EA"
PATH_NODE_HIGHLIGHT = "#E9D5FF"
NODE_COLOR = "#A5F3FC"
NODE_BORDER = "#06B6D4"
NODE_HIGHLIGHT = "#CFFAFE"
PATH_EDGE_COLOR = "#9333EA"
EDGE_COLOR = "#CBD5E1"
EDGE_FONT_COLOR = "#64748B"
LABEL_COLOR = "#1E293B"


@dataclass
class LayoutCache:
    """Store node positions so multiple plots share a layout."""

    positions: Dict[str, Tuple[float, float]]


def edge_label(weight: float, community: str) -> str:
    """Edge caption like '0.80 (tech)'."""
    return f"{weight:.2f} ({community})"


def _simple_view(graph: InfluenceGraph) -> nx.DiGraph:
    """
    Collapse parallel edges into one DiGraph edge per ordered pair.

    The collapsed edge keeps the heaviest weight and a label listing every
    parallel edge, one per line.
    """
    view = nx.DiGraph()
    for node in graph.nodes:
        view.add_node(node)
    for edge in graph.edges:
        text = edge_label(edge.weight, edge.community)
        if view.has_edge(edge.source, edge.target):
            data = view[edge.source][edge.target]
            data["weight"] = max(data["weight"], edge.weight)
            data["label"] = f"{data['label']}\n{text}"
        else:
            view.add_edge(edge.source, edge.target, weight=edge.weight, label=text)
    return view


def compute_layout(
    graph: InfluenceGraph,
    layout_cache: Optional[LayoutCache] = None,
    layout: str = "spring",
    seed: int = 3210,
) -> LayoutCache:
    """Get or build node positions for plotting."""
    if layout_cache is not None:
        if set(layout_cache.positions.keys()) == set(graph.nodes):
            return layout_cache

    view = _simple_view(graph)

    if layout == "spring":
        pos = nx.spring_layout(view, seed=seed)
    elif layout == "kamada_kawai":
        try:
            pos = nx.kamada_kawai_layout(view)
        except ImportError:
            # Kamada-Kawai needs SciPy; fall back to spring if it's missing.
            pos = nx.spring_layout(view, seed=seed)
    elif layout == "circular":
        pos = nx.circular_layout(view)
    elif layout == "shell":
        pos = nx.shell_layout(view)
    else:
        raise ValueError(f"Unknown layout '{layout}'")

    return LayoutCache(positions={node: (float(x), float(y)) for node, (x, y) in pos.items()})


def draw_path_matplotlib(
    graph: InfluenceGraph,
    path: Sequence[str] = (),
    title: Optional[str] = None,
    layout_cache: Optional[LayoutCache] = None,
    layout: str = "spring",
    show_edge_labels: bool = True,
    ax: Optional[plt.Axes] = None,
) -> Tuple[plt.Figure, plt.Axes, LayoutCache]:
    """
    Draw the interaction graph with the chosen route highlighted.
    """
    path_nodes: Set[str] = set(path)
    route: Set[Tuple[str, str]] = set(path_edges(path))

    layout_cache = compute_layout(graph, layout_cache=layout_cache, layout=layout)
    positions = layout_cache.positions
    view = _simple_view(graph)

    if ax is None:
        fig, ax = plt.subplots(figsize=(7.0, 5.0))
    else:
        fig = ax.figure

    node_colors: List[str] = []
    node_edge_colors: List[str] = []
    for node in view.nodes():
        on_path = node in path_nodes
        node_colors.append(PATH_NODE_COLOR if on_path else NODE_COLOR)
        node_edge_colors.append(PATH_NODE_BORDER if on_path else NODE_BORDER)

    edge_list = list(view.edges())
    edge_colors = [PATH_EDGE_COLOR if e in route else EDGE_COLOR for e in edge_list]
    edge_widths = [3.0 if e in route else 1.0 for e in edge_list]

    nx.draw_networkx_edges(
        view,
        positions,
        ax=ax,
        edgelist=edge_list,
        edge_color=edge_colors,
        width=edge_widths,
        arrows=True,
        arrowsize=14,
        node_size=900,
        connectionstyle="arc3,rad=0.08",
    )

    nx.draw_networkx_nodes(
        view,
        positions,
        ax=ax,
        node_color=node_colors,
        node_size=900,
        edgecolors=node_edge_colors,
        linewidths=2.0,
    )

    labels = {node: graph.label(node) for node in view.nodes()}
    nx.draw_networkx_labels(
        view,
        positions,
        labels=labels,
        font_size=10,
        font_color=LABEL_COLOR,
        ax=ax,
    )

    if show_edge_labels and edge_list:
        # Offset labels slightly toward the target so opposite edges don't collide.
        for u, v in edge_list:
            (x1, y1), (x2, y2) = positions[u], positions[v]
            mid = np.array([x1 + 0.55 * (x2 - x1), y1 + 0.55 * (y2 - y1)])
            color = PATH_EDGE_COLOR if (u, v) in route else EDGE_FONT_COLOR
            ax.text(
                mid[0],
                mid[1],
                view[u][v]["label"],
                fontsize=7,
                color=color,
                ha="center",
                va="center",
                bbox=dict(
                    boxstyle="round,pad=0.15",
                    fc="white",
                    ec="none",
                    alpha=0.8,
                ),
            )

    ax.set_axis_off()
    if title is not None:
        ax.set_title(title)

    fig.tight_layout()
    return fig, ax, layout_cache


def build_pyvis_network(
    graph: InfluenceGraph,
    path: Sequence[str] = (),
    height: str = "500px",
) -> Network:
    """
    Build a pyvis Network for the interaction graph, route highlighted.
    """
    path_nodes: Set[str] = set(path)
    route: Set[Tuple[str, str]] = set(path_edges(path))

    net = Network(directed=True, notebook=False, height=height, width="100%")
    net.barnes_hut(
        gravity=-2000,
        spring_length=220,
        spring_strength=0.03,
    )

    for node in graph.nodes:
        on_path = node in path_nodes
        border = PATH_NODE_BORDER if on_path else NODE_BORDER
        label = graph.label(node)
        net.add_node(
            n_id=node,
            label=label,
            title=f"User: {label}" + ("<br>On optimal path" if on_path else ""),
            color={
                "background": PATH_NODE_COLOR if on_path else NODE_COLOR,
                "border": border,
                "highlight": {
                    "background": PATH_NODE_HIGHLIGHT if on_path else NODE_HIGHLIGHT,
                    "border": border,
                },
            },
            borderWidth=2,
            shape="dot",
            size=28,
            font={"size": 14, "face": "Inter", "color": LABEL_COLOR},
        )

    for edge in graph.edges:
        on_route = (edge.source, edge.target) in route
        color = PATH_EDGE_COLOR if on_route else EDGE_COLOR
        net.add_edge(
            edge.source,
            edge.target,
            label=edge_label(edge.weight, edge.community),
            title=f"Weight: {edge.weight:g}<br>Community: {edge.community}",
            color=color,
            width=3 if on_route else 1,
            smooth={"type": "cubicBezier", "roundness": 0.4},
            font={
                "size": 12,
                "color": PATH_EDGE_COLOR if on_route else EDGE_FONT_COLOR,
                "strokeWidth": 0,
                "face": "Inter",
            },
        )

    return net


if __name__ == "__main__":
    from .path_finder import find_max_influence_path
    from .utils import trend_propagation_example

    graph = trend_propagation_example()
    result = find_max_influence_path(graph, "Alice", "Eve", penalty=0.9)
    print("Path:", result.path, "influence:", result.influence)

    fig, _, _ = draw_path_matplotlib(graph, result.path, title="Alice -> Eve")
    plt.show()

    net = build_pyvis_network(graph, result.path)
    net.write_html("example_path.html")
