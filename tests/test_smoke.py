# tests/test_smoke.py
from __future__ import annotations

import logging

import matplotlib
import pytest

matplotlib.use("Agg")  # use non interactive backend for tests

from src import (
    AnalyzerConfig,
    NO_PATH_INFLUENCE,
    build_pyvis_network,
    build_query,
    compute_layout,
    draw_path_matplotlib,
    find_max_influence_path,
    format_influence,
    is_path_edge,
    path_to_string,
    setup_logging,
    trend_propagation_example,
)
from src.viz import EDGE_COLOR, PATH_EDGE_COLOR, edge_label
from web.streamlit_app.components.controls import edge_table
from web.streamlit_app.state.examples import get_preset_by_key, get_presets


def test_matplotlib_path_render_does_not_crash(tmp_path):
    """
    Make sure draw_path_matplotlib runs without raising and returns
    a valid figure object. Save it to disk to check pipeline end to end.
    """
    graph = trend_propagation_example()
    result = find_max_influence_path(graph, "Alice", "Eve", 0.9)

    fig, ax, layout_cache = draw_path_matplotlib(
        graph,
        path=result.path,
        title="Alice to Eve",
    )

    assert fig is not None
    assert ax is not None
    assert set(layout_cache.positions) == set(graph.nodes)
    out_file = tmp_path / "trend_path.png"
    fig.savefig(out_file)
    assert out_file.exists()


def test_matplotlib_render_without_path(tmp_path):
    graph = trend_propagation_example()
    fig, _, _ = draw_path_matplotlib(graph, layout="circular", show_edge_labels=False)
    out_file = tmp_path / "no_path.png"
    fig.savefig(out_file)
    assert out_file.exists()


def test_layout_cache_is_reused():
    graph = trend_propagation_example()
    first = compute_layout(graph)
    second = compute_layout(graph, layout_cache=first)
    assert second is first


def test_unknown_layout_raises():
    with pytest.raises(ValueError):
        compute_layout(trend_propagation_example(), layout="hexagonal")


def test_pyvis_network_highlights_route():
    graph = trend_propagation_example()
    result = find_max_influence_path(graph, "Alice", "Eve", 0.9)
    net = build_pyvis_network(graph, result.path)

    assert len(net.nodes) == len(graph.nodes)
    assert len(net.edges) == len(graph.edges)

    for edge in net.edges:
        on_route = is_path_edge(result.path, edge["from"], edge["to"])
        assert edge["color"] == (PATH_EDGE_COLOR if on_route else EDGE_COLOR)


def test_edge_label_format():
    assert edge_label(0.8, "tech") == "0.80 (tech)"


def test_presentation_helpers():
    assert format_influence(NO_PATH_INFLUENCE) == "N/A"
    assert format_influence(0.4284) == "0.428"
    assert format_influence(0.5, digits=1) == "0.5"
    assert path_to_string(()) == "No path"
    assert path_to_string(("A", "B", "C")) == "A → B → C"


def test_config_defaults_and_env():
    config = AnalyzerConfig()
    assert config.default_penalty == 0.9
    assert config.weight_label() == "Interaction Frequency"
    assert config.weight_label("engagement") == "Engagement Score"

    from_env = AnalyzerConfig.from_env(
        {
            "INFLUENCE_PENALTY": "0.5",
            "INFLUENCE_SEARCH_MODE": "history",
            "INFLUENCE_LOG_LEVEL": "debug",
        }
    )
    assert from_env.default_penalty == 0.5
    assert from_env.search_mode == "history"
    assert from_env.log_level == "DEBUG"
    assert from_env.layout == "spring"


@pytest.mark.parametrize(
    "environ",
    [
        {"INFLUENCE_PENALTY": "lots"},
        {"INFLUENCE_PENALTY": "1.5"},
        {"INFLUENCE_SEARCH_MODE": "exhaustive"},
        {"INFLUENCE_LAYOUT": "hexagonal"},
        {"INFLUENCE_WEIGHT_TYPE": "likes"},
    ],
)
def test_config_rejects_bad_env(environ):
    with pytest.raises(ValueError):
        AnalyzerConfig.from_env(environ)


def test_config_constraints_on_direct_construction():
    assert AnalyzerConfig(log_level="warning").log_level == "WARNING"
    with pytest.raises(ValueError):
        AnalyzerConfig(influence_digits=-1)
    with pytest.raises(ValueError):
        AnalyzerConfig(default_penalty=-0.1)
    with pytest.raises(ValueError):
        AnalyzerConfig(weight_types={"likes": "Likes"})
    custom = AnalyzerConfig(weight_types={"likes": "Likes"}, default_weight_type="likes")
    assert custom.weight_label() == "Likes"


def test_edge_table_flags_route_edges():
    graph = trend_propagation_example()
    result = find_max_influence_path(graph, "Alice", "Eve", 0.9)
    table = edge_table(graph, result.path)

    assert len(table) == len(graph.edges)
    flagged = table[table["on path"]]
    assert list(zip(flagged["source"], flagged["target"])) == [
        ("Alice", "Dana"),
        ("Dana", "Charlie"),
        ("Charlie", "Eve"),
    ]
    assert not edge_table(graph)["on path"].any()


def test_setup_logging_installs_one_handler():
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    try:
        setup_logging(level="debug", use_rich=False)
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1

        setup_logging(level="WARNING")
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)


def test_search_logs_at_debug(caplog):
    caplog.set_level(logging.DEBUG, logger="src.path_finder")
    find_max_influence_path(trend_propagation_example(), "Alice", "Eve", 0.9)
    assert any(record.name == "src.path_finder" for record in caplog.records)


def test_presets_parse_and_have_paths():
    """Every sidebar preset must survive the same validation as custom input."""
    presets = get_presets()
    assert len({preset.key for preset in presets}) == len(presets)

    for preset in presets:
        query = build_query(preset.edges_text, preset.source, preset.destination, 0.9)
        result = find_max_influence_path(query.graph, query.source, query.destination, query.penalty)
        assert result.found, preset.key


def test_unknown_preset_key():
    assert get_preset_by_key("trend_propagation").source == "Alice"
    with pytest.raises(KeyError):
        get_preset_by_key("missing")
