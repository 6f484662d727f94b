from __future__ import annotations

import importlib.util
import logging
from pathlib import Path
import sys

# Make sure src is on the path before importing project modules.
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import streamlit as st

from src import (
    AnalyzerConfig,
    GraphInputError,
    InfluencePathFinder,
    build_query,
    compare_modes,
    format_influence,
    path_to_string,
    setup_logging,
)
from web.streamlit_app.components.controls import (
    GraphConfiguration,
    edge_table,
    hop_table,
    input_mode_selector,
    render_graph_configuration,
)
from web.streamlit_app.components.plots import show_path_plot, show_pyvis_network
from web.streamlit_app.state.examples import PresetDefinition, get_presets

logger = logging.getLogger(__name__)

LAST_CONFIGURATION_KEY = "last_configuration"


@st.cache_resource
def _configure() -> AnalyzerConfig:
    """Load config and set up logging once per server process."""
    config = AnalyzerConfig.from_env()
    setup_logging(level=config.log_level)
    logger.info("Analyzer config loaded: %s", config)
    return config


def _composition_markdown(nodes, path) -> str:
    """Every user as an inline code chip, users on the route in bold."""
    on_path = set(path)
    chips = []
    for node in sorted(nodes, key=str):
        chips.append(f"**`{node}`**" if node in on_path else f"`{node}`")
    return " ".join(chips)


def main() -> None:
    """Streamlit dashboard for the social media influence analyzer."""
    st.set_page_config(
        page_title="Social Media Influence Analyzer",
        page_icon="📈",
        layout="wide",
    )
    config = _configure()

    st.title("Social Media Influence Analyzer")
    st.markdown("Visualize and analyze trend propagation paths across social networks.")

    preset: PresetDefinition | None = None

    # Sidebar controls
    with st.sidebar:
        st.header("Graph Configuration")

        input_mode = input_mode_selector()
        if input_mode == "Preset scenario":
            preset = st.selectbox(
                "Preset scenario",
                options=get_presets(),
                format_func=lambda p: p.name,
                key="preset_selector",
            )
            st.caption(preset.description)
            form_values: GraphConfiguration = render_graph_configuration(
                config,
                default_edges=preset.edges_text,
                default_source=preset.source,
                default_destination=preset.destination,
                key_prefix=f"preset_{preset.key}",
            )
            state_key = f"{LAST_CONFIGURATION_KEY}_{preset.key}"
        else:
            form_values = render_graph_configuration(config, key_prefix="custom")
            state_key = f"{LAST_CONFIGURATION_KEY}_custom"

    if form_values.submitted:
        st.session_state[state_key] = form_values

    configuration: GraphConfiguration | None = st.session_state.get(state_key)
    if configuration is None:
        if preset is not None:
            st.subheader(preset.name)
            st.caption(preset.notes)
        st.info("Fill in the edges, pick a source and destination, then press Calculate Optimal Path.")
        return

    try:
        query = build_query(
            configuration.edges_text,
            configuration.source,
            configuration.destination,
            configuration.penalty,
        )
    except GraphInputError as exc:
        st.error(f"Found {len(exc.issues)} problem(s) in the input:")
        for issue in exc.issues:
            st.markdown(f"- {issue}")
        return

    finder = InfluencePathFinder(query.graph)
    result = finder.find(
        query.source,
        query.destination,
        query.penalty,
        mode=configuration.mode,
    )
    weight_label = config.weight_label(configuration.weight_type)

    if preset is not None:
        st.subheader(preset.name)
        st.caption(preset.notes)

    col_graph, col_results = st.columns([3, 2])

    with col_graph:
        st.markdown("**Network Pathway Visualization**")
        interactive_tab, static_tab = st.tabs(["Interactive", "Static"])
        with interactive_tab:
            show_pyvis_network(query.graph, path=result.path)
        with static_tab:
            layout_options = {
                "Spring": "spring",
                "Circle": "circular",
                "Shell": "shell",
            }
            if importlib.util.find_spec("scipy") is not None:
                layout_options["Kamada-Kawai"] = "kamada_kawai"
            default_layout = next(
                (i for i, name in enumerate(layout_options.values()) if name == config.layout),
                0,
            )
            layout_choice = st.selectbox(
                "Layout for the plot",
                options=list(layout_options.keys()),
                index=default_layout,
            )
            show_path_plot(
                query.graph,
                path=result.path,
                title=f"{query.source} → {query.destination}",
                layout=layout_options[layout_choice],
            )
        st.caption("Purple = users and edges on the optimal path. Edge labels show weight (community).")

    with col_results:
        st.markdown("**Analysis Results**")
        if not result.found:
            st.warning("No path found between specified nodes.")
        else:
            cols = st.columns(3)
            cols[0].metric(
                f"Maximum {weight_label}",
                format_influence(result.influence, digits=config.influence_digits),
            )
            cols[1].metric("Optimal Path Length", len(result.path))
            cols[2].metric("Community switches", result.switches)

            st.markdown("**Connection Path**")
            st.markdown(" → ".join(f"`{node}`" for node in result.path))
            st.dataframe(
                hop_table(query.graph, result, query.penalty),
                hide_index=True,
                use_container_width=True,
            )

        st.markdown("**Network Composition**")
        st.markdown(_composition_markdown(query.graph.nodes, result.path))
        st.caption(
            f"{len(query.graph.nodes)} users, {len(query.graph.edges)} interactions, "
            f"communities: {', '.join(query.graph.communities)}"
        )

        with st.expander("Compare search modes", expanded=False):
            rows = []
            for mode, outcome in compare_modes(
                query.graph, query.source, query.destination, query.penalty
            ).items():
                rows.append(
                    {
                        "mode": mode,
                        "influence": format_influence(outcome.influence, digits=config.influence_digits),
                        "path": path_to_string(outcome.path),
                        "switches": outcome.switches,
                        "expanded": outcome.expanded,
                    }
                )
            st.dataframe(rows, hide_index=True, use_container_width=True)
            st.caption(
                "Greedy judges the switch penalty on each user's current best route only; "
                "history mode also tracks the last community and can find better routes."
            )

    with st.expander("All interactions", expanded=False):
        st.dataframe(edge_table(query.graph, result.path), hide_index=True, use_container_width=True)


if __name__ == "__main__":
    main()
