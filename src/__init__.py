# src/__init__.py
from __future__ import annotations

"""
Top level package for the social media influence analyzer.

This package exposes the main building blocks of the codebase so that
notebooks, scripts, the Streamlit app and tests can import them with:

    from src import (
        InfluenceGraph,
        InfluencePathFinder,
        find_max_influence_path,
        parse_edge_lines,
    )

and so on.
"""

from .influence_graph import Edge, InfluenceGraph
from .path_finder import (
    NO_PATH_INFLUENCE,
    SEARCH_MODES,
    InfluencePathFinder,
    PathResult,
    compare_modes,
    find_max_influence_path,
)
from .parsing import (
    GraphInputError,
    InputIssue,
    ParseResult,
    PathQuery,
    build_query,
    format_edge_lines,
    parse_edge_lines,
    validate_query,
)
from .config import AnalyzerConfig
from .logging_config import setup_logging
from .viz import (
    LayoutCache,
    build_pyvis_network,
    compute_layout,
    draw_path_matplotlib,
)
from .utils import (
    brute_force_max_influence,
    build_chain_graph,
    build_random_community_graph,
    format_influence,
    is_path_edge,
    path_edges,
    path_to_string,
    score_path,
    trend_propagation_example,
)

__all__ = [
    "Edge",
    "InfluenceGraph",
    "NO_PATH_INFLUENCE",
    "SEARCH_MODES",
    "InfluencePathFinder",
    "PathResult",
    "compare_modes",
    "find_max_influence_path",
    "GraphInputError",
    "InputIssue",
    "ParseResult",
    "PathQuery",
    "build_query",
    "format_edge_lines",
    "parse_edge_lines",
    "validate_query",
    "AnalyzerConfig",
    "setup_logging",
    "LayoutCache",
    "build_pyvis_network",
    "compute_layout",
    "draw_path_matplotlib",
    "brute_force_max_influence",
    "build_chain_graph",
    "build_random_community_graph",
    "format_influence",
    "is_path_edge",
    "path_edges",
    "path_to_string",
    "score_path",
    "trend_propagation_example",
]
