"""Primary transform (stage 2): coherence of a context against an internal basis.

The core keeps a unit basis vector and a standing coherence. Each context
is superposed onto the basis; the resulting amplitude spread and the
context/basis alignment set the per-call coherence, which is damped by a
fixed decoherence factor.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from lia.perception.text import cosine_similarity
from lia.schemas import QuantumState

if TYPE_CHECKING:
    from lia.config import SystemConfiguration
    from lia.schemas import Context, Response

logger = logging.getLogger(__name__)

INITIAL_COHERENCE = 0.5

# Weights of the coherence terms; they sum to 1 so the result stays in [0, 1]
STANDING_WEIGHT = 0.6
ALIGNMENT_WEIGHT = 0.2
FOCUS_WEIGHT = 0.2

# How much of the basis is mixed into the superposition at full coherence
BASIS_MIX = 0.5


def shannon_entropy(amplitudes: np.ndarray) -> float:
    """Entropy of the squared (probability) amplitudes, natural log."""
    probs = amplitudes ** 2
    total = probs.sum()
    if total == 0:
        return 0.0
    probs = probs[probs > 0] / total
    return float(-(probs * np.log(probs)).sum())


class QuantumCore:
    """Stateful primary transform with an EMA-evolved standing coherence."""

    def __init__(self, config: "SystemConfiguration"):
        self.decoherence = config.decoherence
        self.learning_rate = config.learning_rate
        rng = np.random.default_rng(config.seed)
        basis = rng.normal(size=config.embedding_dim)
        self.basis = basis / np.linalg.norm(basis)
        self._coherence = INITIAL_COHERENCE
        self.cycles = 0

    async def process(self, context: "Context") -> QuantumState:
        """Superpose the context onto the basis and measure its coherence.

        Raises:
            ValueError: If the context embedding width does not match the basis
        """
        if context.embedding.shape != self.basis.shape:
            raise ValueError(
                f"embedding shape {context.embedding.shape} does not match basis {self.basis.shape}"
            )

        mix = BASIS_MIX * self._coherence
        superposed = (1 - mix) * context.embedding + mix * self.basis
        norm = np.linalg.norm(superposed)
        amplitudes = superposed / norm if norm > 0 else self.basis.copy()

        entropy = shannon_entropy(amplitudes)
        max_entropy = np.log(len(amplitudes)) if len(amplitudes) > 1 else 1.0
        focus = 1.0 - entropy / max_entropy
        alignment = abs(cosine_similarity(context.embedding, self.basis))

        coherence = (1 - self.decoherence) * (
            STANDING_WEIGHT * self._coherence + ALIGNMENT_WEIGHT * alignment + FOCUS_WEIGHT * focus
        )
        coherence = float(np.clip(coherence, 0.0, 1.0))
        logger.debug("Quantum coherence %.3f (entropy=%.3f)", coherence, entropy)
        return QuantumState(coherence=coherence, amplitudes=amplitudes, entropy=entropy)

    async def evolve(self, response: "Response") -> None:
        """Pull the standing coherence toward the response's coherence and awareness."""
        target = (response.quantum_coherence + response.consciousness_level) / 2
        self._coherence = float(np.clip(self._coherence + self.learning_rate * (target - self._coherence), 0.0, 1.0))
        self.cycles += 1

    def coherence(self) -> float:
        return self._coherence
