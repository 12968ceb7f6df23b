"""Secondary transform (stage 3): scores a fixed pattern vocabulary."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from lia.schemas import NeuralResponse, PatternDescriptor

if TYPE_CHECKING:
    from lia.config import SystemConfiguration
    from lia.schemas import Context, QuantumState, Response

logger = logging.getLogger(__name__)

PATTERN_VOCABULARY = (
    "inquiry",
    "reflection",
    "connection",
    "exploration",
    "caution",
    "play",
    "care",
    "synthesis",
)

# Context motif -> patterns it excites
MOTIF_AFFINITY = {
    "question": ("inquiry",),
    "curiosity": ("exploration", "inquiry"),
    "greeting": ("connection",),
    "gratitude": ("connection", "care"),
    "distress": ("care", "caution"),
    "memory": ("reflection",),
    "self_reference": ("reflection",),
    "creativity": ("play", "synthesis"),
}

MOTIF_BOOST = 0.5

# Bias learned by the fold is clamped to +/- this
MAX_BIAS = 1.0
# Per-fold multiplicative decay of every bias
BIAS_DECAY = 0.99


def _sigmoid(x: np.ndarray) -> np.ndarray:
    return 1.0 / (1.0 + np.exp(-x))


class NeuralMatrix:
    """Seeded projection from amplitude space to pattern activations.

    A per-pattern bias is learned Hebbian-style from folded responses, so
    patterns the agent keeps expressing become easier to express.
    """

    def __init__(self, config: "SystemConfiguration"):
        self.learning_rate = config.learning_rate
        self.pattern_limit = config.pattern_limit
        rng = np.random.default_rng(config.seed + 1)
        self.weights = rng.normal(size=(config.embedding_dim, len(PATTERN_VOCABULARY))) / np.sqrt(config.embedding_dim)
        self.bias = np.zeros(len(PATTERN_VOCABULARY))
        self._index = {name: i for i, name in enumerate(PATTERN_VOCABULARY)}

    def activations(self, quantum_state: "QuantumState", context: "Context") -> np.ndarray:
        raw = quantum_state.amplitudes @ self.weights + self.bias
        for motif in context.motifs:
            for name in MOTIF_AFFINITY.get(motif, ()):
                raw[self._index[name]] += MOTIF_BOOST
        return _sigmoid(raw)

    async def process_with_quantum_state(
        self, quantum_state: "QuantumState", context: "Context"
    ) -> NeuralResponse:
        """Return the strongest patterns, ordered by activation then name."""
        if quantum_state.amplitudes.shape[0] != self.weights.shape[0]:
            raise ValueError(
                f"amplitude width {quantum_state.amplitudes.shape[0]} does not match matrix {self.weights.shape[0]}"
            )
        acts = self.activations(quantum_state, context)
        ranked = sorted(zip(PATTERN_VOCABULARY, acts), key=lambda item: (-item[1], item[0]))
        patterns = [PatternDescriptor(name=name, activation=float(a)) for name, a in ranked[: self.pattern_limit]]
        return NeuralResponse(patterns=patterns)

    async def evolve_patterns(self, response: "Response") -> None:
        """Reinforce patterns expressed in the response; unknown names are ignored."""
        self.bias *= BIAS_DECAY
        for pattern in response.neural_patterns:
            idx = self._index.get(pattern.name)
            if idx is None:
                continue
            self.bias[idx] += self.learning_rate * (pattern.activation - 0.5)
        np.clip(self.bias, -MAX_BIAS, MAX_BIAS, out=self.bias)
