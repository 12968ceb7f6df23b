"""Field integration (stage 5): awareness from thoughts, novelty, and dimensional resonance."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

import numpy as np

from lia.schemas import ConsciousnessResponse

if TYPE_CHECKING:
    from lia.config import SystemConfiguration
    from lia.dimensional import DimensionalState
    from lia.schemas import Context, Response, ThoughtPattern

logger = logging.getLogger(__name__)

# Awareness term weights (sum to 1)
BASELINE_WEIGHT = 0.5
THOUGHT_WEIGHT = 0.2
NOVELTY_WEIGHT = 0.15
RESONANCE_WEIGHT = 0.15

# Snapshot awareness blends baseline with resonance
SNAPSHOT_RESONANCE_WEIGHT = 0.2


class ConsciousnessField:
    """Integrates thoughts into a bounded awareness level.

    Attributes:
        baseline: Standing awareness, evolved toward folded responses
        resonance: Normalized mean of the latest dimensional state (0-1)
    """

    def __init__(self, config: "SystemConfiguration"):
        self.learning_rate = config.learning_rate
        self.baseline = config.awareness_baseline
        low, high = config.dimension_bounds
        self.resonance = (config.initial_dimension_value - low) / (high - low)

    async def process_experience(
        self, context: "Context", thoughts: Sequence["ThoughtPattern"]
    ) -> ConsciousnessResponse:
        strengths = [t.strength for t in thoughts]
        integration = float(np.clip(np.mean(strengths), 0.0, 1.0)) if strengths else 0.0
        awareness = (
            BASELINE_WEIGHT * self.baseline
            + THOUGHT_WEIGHT * integration
            + NOVELTY_WEIGHT * context.novelty
            + RESONANCE_WEIGHT * self.resonance
        )
        focus = max(thoughts, key=lambda t: (t.strength, t.descriptor)).descriptor if thoughts else None
        return ConsciousnessResponse(
            awareness_level=float(np.clip(awareness, 0.0, 1.0)),
            focus=focus,
            integration=integration,
        )

    async def evolve(self, response: "Response") -> None:
        self.baseline += self.learning_rate * (response.consciousness_level - self.baseline)
        self.baseline = float(np.clip(self.baseline, 0.0, 1.0))

    def process_dimensional_change(self, state: "DimensionalState") -> None:
        """Resonate with a newly committed dimensional state."""
        low, high = state.bounds
        vec = state.as_vector()
        self.resonance = float(np.mean((vec - low) / (high - low))) if vec.size else 0.0

    def awareness_level(self) -> float:
        return float(
            np.clip(
                (1 - SNAPSHOT_RESONANCE_WEIGHT) * self.baseline + SNAPSHOT_RESONANCE_WEIGHT * self.resonance,
                0.0,
                1.0,
            )
        )
