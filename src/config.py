from __future__ import annotations

import os
from typing import Dict, Literal, Mapping, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

SearchMode = Literal["greedy", "history"]
LayoutName = Literal["spring", "kamada_kawai", "circular", "shell"]


def _default_weight_types() -> Dict[str, str]:
    return {
        "frequency": "Interaction Frequency",
        "engagement": "Engagement Score",
    }


class AnalyzerConfig(BaseModel):
    """
    Defaults shared by the dashboard and the demo script.

    weight_types maps a short key to the label shown next to the score
    ("Maximum Interaction Frequency").
    """

    default_penalty: float = Field(0.9, ge=0.0, le=1.0, description="Community switch penalty")
    weight_types: Dict[str, str] = Field(default_factory=_default_weight_types)
    default_weight_type: str = "frequency"
    search_mode: SearchMode = "greedy"
    influence_digits: int = Field(3, ge=0, description="Decimals shown for influence scores")
    layout: LayoutName = "spring"
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @model_validator(mode="after")
    def check_default_weight_type(self) -> "AnalyzerConfig":
        if self.default_weight_type not in self.weight_types:
            raise ValueError(f"Unknown weight type {self.default_weight_type!r}")
        return self

    def weight_label(self, key: Optional[str] = None) -> str:
        """Human label for a weight type key (default type if None)."""
        return self.weight_types[key or self.default_weight_type]

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AnalyzerConfig":
        """Create config from environment variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        return cls(
            default_penalty=env.get("INFLUENCE_PENALTY", "0.9"),
            default_weight_type=env.get("INFLUENCE_WEIGHT_TYPE", "frequency"),
            search_mode=env.get("INFLUENCE_SEARCH_MODE", "greedy"),
            layout=env.get("INFLUENCE_LAYOUT", "spring"),
            log_level=env.get("INFLUENCE_LOG_LEVEL", "INFO"),
        )
