"""Default dimensions and initial population settings."""
from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_DEPTH = 80
DEFAULT_WIDTH = 120

# Life events kept for querying; totals are unaffected by the limit.
DEFAULT_CHRONICLE_CAPACITY = 10_000

# Checked in this order for every cell while populating.
BEAR_CREATION_PROBABILITY = 0.01
FOX_CREATION_PROBABILITY = 0.02
RABBIT_CREATION_PROBABILITY = 0.08


def _default_probabilities() -> dict[str, float]:
    return {
        "bear": BEAR_CREATION_PROBABILITY,
        "fox": FOX_CREATION_PROBABILITY,
        "rabbit": RABBIT_CREATION_PROBABILITY,
    }


@dataclass(frozen=True)
class PopulationConfig:
    """Per-cell creation probability for each species, tried in insertion order."""

    creation_probabilities: dict[str, float] = field(default_factory=_default_probabilities)

    def __post_init__(self) -> None:
        for name, p in self.creation_probabilities.items():
            if not 0.0 <= p <= 1.0:
                raise ValueError(
                    f"Creation probability for {name!r} must be within [0, 1], got {p}"
                )
