from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .influence_graph import InfluenceGraph

logger = logging.getLogger(__name__)

EDGE_FIELDS = ("source", "target", "weight", "community")


@dataclass(frozen=True)
class InputIssue:
    """
    One problem found in user input.

    line_number: 1-based line in the edge text, or None for query fields.
    field: which input the issue belongs to ("line", "weight", "penalty", ...).
    """

    line_number: Optional[int]
    field: str
    message: str

    def __str__(self) -> str:
        if self.line_number is None:
            return f"{self.field}: {self.message}"
        return f"line {self.line_number}: {self.message}"


class GraphInputError(ValueError):
    """Raised when edge text or query parameters fail validation. Carries every issue."""

    def __init__(self, issues: List[InputIssue]) -> None:
        self.issues = list(issues)
        summary = "; ".join(str(issue) for issue in self.issues)
        super().__init__(f"{len(self.issues)} input issue(s): {summary}")


@dataclass
class ParseResult:
    """Graph built from the lines that parsed, plus issues for the ones that did not."""

    graph: InfluenceGraph
    issues: List[InputIssue] = field(default_factory=list)
    parsed_lines: int = 0

    @property
    def ok(self) -> bool:
        return not self.issues


@dataclass(frozen=True)
class PathQuery:
    """A validated request ready for the path finder."""

    graph: InfluenceGraph
    source: str
    destination: str
    penalty: float


def _parse_weight(token: str) -> Optional[float]:
    """Parse a finite float, or return None."""
    try:
        value = float(token)
    except ValueError:
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def parse_edge_lines(text: str) -> ParseResult:
    """
    Parse 'source target weight community' records, one per line.

    Blank lines are skipped. A bad line adds one issue and is left out of the
    graph; the remaining lines are still parsed.
    """
    graph = InfluenceGraph()
    issues: List[InputIssue] = []
    parsed = 0

    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue

        tokens = line.split()
        if len(tokens) != len(EDGE_FIELDS):
            issues.append(
                InputIssue(
                    line_number,
                    "line",
                    f"expected 4 fields (source target weight community), got {len(tokens)}",
                )
            )
            logger.debug("Rejected line %d: %r", line_number, raw)
            continue

        source, target, weight_token, community = tokens
        weight = _parse_weight(weight_token)
        if weight is None:
            issues.append(
                InputIssue(line_number, "weight", f"weight {weight_token!r} is not a finite number")
            )
            logger.debug("Rejected line %d: bad weight %r", line_number, weight_token)
            continue
        if weight < 0:
            issues.append(
                InputIssue(line_number, "weight", f"weight {weight_token!r} must be nonnegative")
            )
            logger.debug("Rejected line %d: negative weight %r", line_number, weight_token)
            continue

        graph.add_edge(source, target, weight, community)
        parsed += 1

    if issues:
        logger.info("Parsed %d edge line(s), rejected %d", parsed, len(issues))
    else:
        logger.debug("Parsed %d edge line(s)", parsed)
    return ParseResult(graph=graph, issues=issues, parsed_lines=parsed)


def validate_query(
    graph: InfluenceGraph,
    source: Any,
    destination: Any,
    penalty: Any,
) -> List[InputIssue]:
    """
    Check the query parameters against a parsed graph.

    Every failing field gets its own issue. Nothing is raised here.
    """
    issues: List[InputIssue] = []

    try:
        penalty_value = float(penalty)
    except (TypeError, ValueError):
        issues.append(InputIssue(None, "penalty", f"penalty {penalty!r} is not a number"))
    else:
        if math.isnan(penalty_value) or not (0.0 <= penalty_value <= 1.0):
            issues.append(InputIssue(None, "penalty", "penalty must be between 0 and 1"))

    for name, node in (("source", source), ("destination", destination)):
        node_id = "" if node is None else str(node).strip()
        if not node_id:
            issues.append(InputIssue(None, name, f"{name} is required"))
        elif not graph.has_node(node_id):
            issues.append(InputIssue(None, name, f"{name} {node_id!r} does not appear in any edge"))

    return issues


def build_query(text: str, source: Any, destination: Any, penalty: Any) -> PathQuery:
    """
    Parse edge text and validate the query in one go.

    Raises GraphInputError listing every line and field that failed.
    """
    parsed = parse_edge_lines(text)
    issues = list(parsed.issues)
    if not parsed.graph.edges and not parsed.issues:
        issues.append(InputIssue(None, "edges", "at least one edge is required"))
    issues.extend(validate_query(parsed.graph, source, destination, penalty))
    if issues:
        raise GraphInputError(issues)

    return PathQuery(
        graph=parsed.graph,
        source=str(source).strip(),
        destination=str(destination).strip(),
        penalty=float(penalty),
    )


def format_edge_lines(graph: InfluenceGraph) -> str:
    """Render a graph back into the line format accepted by parse_edge_lines."""
    return "\n".join(
        f"{edge.source} {edge.target} {edge.weight!r} {edge.community}" for edge in graph.edges
    )
