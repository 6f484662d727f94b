from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd
import streamlit as st

from src import SEARCH_MODES, AnalyzerConfig, InfluenceGraph, PathResult, is_path_edge

EDGES_PLACEHOLDER = "Example:\nAlice Bob 0.8 tech\nBob Charlie 0.7 entertainment"


@dataclass
class GraphConfiguration:
    """Raw sidebar inputs. Validation happens in src.parsing."""

    edges_text: str
    source: str
    destination: str
    penalty: float
    weight_type: str
    mode: str
    submitted: bool


def input_mode_selector(key: str = "input_mode") -> str:
    """Toggle between preset scenarios and typed-in edges."""
    return st.radio(
        "Input",
        options=["Preset scenario", "Custom edges"],
        index=0,
        key=f"{key}_radio",
    )


def render_graph_configuration(
    config: AnalyzerConfig,
    default_edges: str = "",
    default_source: str = "",
    default_destination: str = "",
    key_prefix: str = "graph_config",
) -> GraphConfiguration:
    """
    Sidebar form mirroring the original configuration panel.

    Values are only acted on when the form is submitted.
    """
    weight_keys = list(config.weight_types.keys())

    with st.form(key=f"{key_prefix}_form"):
        cols = st.columns(2)
        weight_type = cols[0].selectbox(
            "Weight Type",
            options=weight_keys,
            index=weight_keys.index(config.default_weight_type),
            format_func=lambda k: config.weight_types[k],
            key=f"{key_prefix}_weight_type",
        )
        penalty = cols[1].number_input(
            "Community Switch Penalty (0-1)",
            min_value=0.0,
            max_value=1.0,
            value=float(config.default_penalty),
            step=0.1,
            key=f"{key_prefix}_penalty",
        )

        mode = st.selectbox(
            "Search mode",
            options=list(SEARCH_MODES),
            index=list(SEARCH_MODES).index(config.search_mode),
            help=(
                "greedy: one record per user, penalty judged on the current best route. "
                "history: tracks the last community too, exact but larger."
            ),
            key=f"{key_prefix}_mode",
        )

        edges_text = st.text_area(
            "Edges Configuration (format: source target weight community)",
            value=default_edges,
            height=180,
            placeholder=EDGES_PLACEHOLDER,
            key=f"{key_prefix}_edges",
        )

        cols = st.columns(2)
        source = cols[0].text_input("Source User", value=default_source, key=f"{key_prefix}_source")
        destination = cols[1].text_input(
            "Destination User",
            value=default_destination,
            key=f"{key_prefix}_destination",
        )

        submitted = st.form_submit_button("Calculate Optimal Path", use_container_width=True)

    return GraphConfiguration(
        edges_text=edges_text,
        source=source,
        destination=destination,
        penalty=float(penalty),
        weight_type=weight_type,
        mode=mode,
        submitted=submitted,
    )


def hop_table(graph: InfluenceGraph, result: PathResult, penalty: float) -> pd.DataFrame:
    """
    One row per traversed hop with the running influence.

    Penalty is shown on hops whose community differs from the previous hop.
    """
    rows: List[Dict[str, Any]] = []
    running = 1.0
    previous = ""
    for u, v, community in result.hops:
        weights = [e.weight for e in graph.out_edges(u) if e.target == v and e.community == community]
        weight = max(weights) if weights else float("nan")
        switched = bool(previous) and previous != community
        running *= weight * (penalty if switched else 1.0)
        rows.append(
            {
                "from": u,
                "to": v,
                "community": community,
                "weight": weight,
                "switch": "yes" if switched else "",
                "influence so far": running,
            }
        )
        previous = community
    return pd.DataFrame(rows, columns=["from", "to", "community", "weight", "switch", "influence so far"])


def edge_table(graph: InfluenceGraph, path: Optional[Iterable[str]] = None) -> pd.DataFrame:
    """All edges as a DataFrame, flagging the ones on the route."""
    route = list(path or [])
    return pd.DataFrame(
        [
            {
                "source": e.source,
                "target": e.target,
                "weight": e.weight,
                "community": e.community,
                "on path": is_path_edge(route, e.source, e.target),
            }
            for e in graph.edges
        ],
        columns=["source", "target", "weight", "community", "on path"],
    )
