from __future__ import annotations

import pytest

from src import (
    GraphInputError,
    build_query,
    find_max_influence_path,
    format_edge_lines,
    parse_edge_lines,
    trend_propagation_example,
    validate_query,
)

EXAMPLE_TEXT = "Alice Bob 0.8 tech\nBob Charlie 0.7 entertainment"


def test_parse_placeholder_example() -> None:
    parsed = parse_edge_lines(EXAMPLE_TEXT)

    assert parsed.ok
    assert parsed.parsed_lines == 2
    assert parsed.graph.nodes == ["Alice", "Bob", "Charlie"]
    assert [(e.source, e.target, e.weight, e.community) for e in parsed.graph.edges] == [
        ("Alice", "Bob", 0.8, "tech"),
        ("Bob", "Charlie", 0.7, "entertainment"),
    ]


def test_parse_accumulates_every_bad_line() -> None:
    """
    Claim: each bad line yields exactly one issue, and good lines after it still parse.
    """
    text = "\n".join(
        [
            "A B 0.5 x",
            "just three tokens",
            "C D abc y",
            "E F -1 z",
            "G H 0.3 w",
            "I J inf k",
            "K L 0.2 v extra",
        ]
    )
    parsed = parse_edge_lines(text)

    assert [(issue.line_number, issue.field) for issue in parsed.issues] == [
        (2, "line"),
        (3, "weight"),
        (4, "weight"),
        (6, "weight"),
        (7, "line"),
    ]
    assert [(e.source, e.target) for e in parsed.graph.edges] == [("A", "B"), ("G", "H")]
    assert parsed.parsed_lines == 2
    assert not parsed.ok


def test_parse_skips_blank_lines_but_keeps_line_numbers() -> None:
    text = "\nA B 0.5 x\n   \nbad\n"
    parsed = parse_edge_lines(text)

    assert len(parsed.graph.edges) == 1
    assert [issue.line_number for issue in parsed.issues] == [4]


def test_hash_prefixed_ids_are_ordinary_users() -> None:
    """
    Claim: a leading '#' is part of the id. Hashtag-style users parse as edges
    and a short '#' line is reported like any other bad line.
    """
    parsed = parse_edge_lines("#AI Bob 0.8 tech\nBob Carl 0.7 tech\n# note")

    assert [(e.source, e.target) for e in parsed.graph.edges] == [("#AI", "Bob"), ("Bob", "Carl")]
    assert [(issue.line_number, issue.field) for issue in parsed.issues] == [(3, "line")]


def test_parse_tolerates_extra_whitespace() -> None:
    parsed = parse_edge_lines("  A\tB   0.25  x  ")

    assert parsed.ok
    assert parsed.graph.edges[0].weight == pytest.approx(0.25)


def test_parse_keeps_parallel_edges() -> None:
    parsed = parse_edge_lines("A B 0.5 x\nA B 0.7 y")
    assert len(parsed.graph.edges) == 2
    assert len(parsed.graph.nodes) == 2


def test_validate_query_reports_each_field() -> None:
    graph = parse_edge_lines(EXAMPLE_TEXT).graph
    issues = validate_query(graph, "", "Zoe", 1.5)

    assert sorted(issue.field for issue in issues) == ["destination", "penalty", "source"]
    assert all(issue.line_number is None for issue in issues)


@pytest.mark.parametrize("penalty", ["abc", None, -0.1, 1.01, float("nan")])
def test_validate_query_rejects_bad_penalty(penalty) -> None:
    graph = parse_edge_lines(EXAMPLE_TEXT).graph
    issues = validate_query(graph, "Alice", "Charlie", penalty)

    assert [issue.field for issue in issues] == ["penalty"]


@pytest.mark.parametrize("penalty", [0, 0.0, "0.5", 1, "1.0"])
def test_validate_query_accepts_penalty_bounds(penalty) -> None:
    graph = parse_edge_lines(EXAMPLE_TEXT).graph
    assert validate_query(graph, "Alice", "Charlie", penalty) == []


def test_build_query_raises_with_all_issues() -> None:
    text = "A B 0.5 x\nbroken"
    with pytest.raises(GraphInputError) as excinfo:
        build_query(text, "A", "Nope", 2)

    fields = [issue.field for issue in excinfo.value.issues]
    assert fields == ["line", "penalty", "destination"]
    assert isinstance(excinfo.value, ValueError)
    assert "line 2" in str(excinfo.value)


def test_build_query_requires_edges() -> None:
    with pytest.raises(GraphInputError) as excinfo:
        build_query("", "A", "B", 0.9)

    fields = [issue.field for issue in excinfo.value.issues]
    assert fields == ["edges", "source", "destination"]


def test_build_query_feeds_path_finder() -> None:
    query = build_query(EXAMPLE_TEXT, " Alice ", "Charlie", "0.9")

    assert query.source == "Alice"
    assert query.penalty == pytest.approx(0.9)

    result = find_max_influence_path(query.graph, query.source, query.destination, query.penalty)
    assert result.path == ("Alice", "Bob", "Charlie")
    assert result.influence == pytest.approx(0.504)


def test_format_edge_lines_reparses_to_same_edges() -> None:
    graph = trend_propagation_example()
    reparsed = parse_edge_lines(format_edge_lines(graph))

    assert reparsed.ok
    assert reparsed.graph.edges == graph.edges
