from __future__ import annotations

from dataclasses import dataclass
from typing import List

from src import InfluenceGraph, format_edge_lines, trend_propagation_example


@dataclass
class PresetDefinition:
    """Metadata and edge text for the Streamlit preset selector."""

    key: str
    name: str
    description: str
    notes: str
    edges_text: str
    source: str
    destination: str


# ---------------------------------------------------------------------------
# Builders for each scenario
# ---------------------------------------------------------------------------


def build_community_bridge() -> InfluenceGraph:
    """
    Two tight communities joined by one strong and one weak bridge.

    The strong bridge forces a switch; the weak one stays inside 'tech'.
    Lowering the penalty flips which route wins.
    """
    return InfluenceGraph.from_edges(
        [
            ("Ana", "Ben", 0.9, "tech"),
            ("Ben", "Cleo", 0.9, "tech"),
            ("Cleo", "Dev", 0.95, "music"),
            ("Ben", "Dev", 0.7, "tech"),
            ("Dev", "Eli", 0.9, "music"),
            ("Eli", "Fay", 0.9, "music"),
        ]
    )


def build_parallel_channels() -> InfluenceGraph:
    """Same pair of users linked in several communities at once."""
    return InfluenceGraph.from_edges(
        [
            ("Gus", "Hana", 0.6, "sports"),
            ("Gus", "Hana", 0.5, "news"),
            ("Hana", "Ivo", 0.9, "news"),
            ("Hana", "Ivo", 0.4, "sports"),
            ("Ivo", "Jun", 0.8, "news"),
        ]
    )


def get_presets() -> List[PresetDefinition]:
    """Canonical presets shown in the sidebar."""
    return [
        PresetDefinition(
            key="trend_propagation",
            name="Trend propagation",
            description="Small follower network spanning tech, entertainment and sports.",
            notes="The heaviest first hop is not on the best route once the switch penalty is applied.",
            edges_text=format_edge_lines(trend_propagation_example()),
            source="Alice",
            destination="Eve",
        ),
        PresetDefinition(
            key="community_bridge",
            name="Community bridge",
            description="Two communities joined by a strong cross-community bridge and a weaker in-community one.",
            notes="Try penalties 0.9 and 0.5: greedy mode drops to the in-community bridge, history mode keeps the strong one.",
            edges_text=format_edge_lines(build_community_bridge()),
            source="Ana",
            destination="Fay",
        ),
        PresetDefinition(
            key="parallel_channels",
            name="Parallel channels",
            description="Users that interact in several communities; each edge is a separate option.",
            notes="At penalty 0.5 greedy mode commits to the heavier sports edge; history mode takes the lighter news edge and avoids the switch.",
            edges_text=format_edge_lines(build_parallel_channels()),
            source="Gus",
            destination="Jun",
        ),
    ]


def get_preset_by_key(key: str) -> PresetDefinition:
    """Look up a preset definition by key."""
    for preset in get_presets():
        if preset.key == key:
            return preset
    raise KeyError(f"Unknown preset key: {key}")
