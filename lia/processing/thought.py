"""Thought generation (stage 4)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from lia.schemas import ThoughtPattern

if TYPE_CHECKING:
    from lia.config import SystemConfiguration
    from lia.schemas import NeuralResponse, QuantumState


class QuantumThoughtProcessor:
    """Turns neural patterns into thoughts weighted by coherence.

    Stateless: strength = activation * (0.5 + 0.5 * coherence), so an
    incoherent transform halves every thought's strength.
    """

    def __init__(self, config: "SystemConfiguration"):
        self.thought_limit = config.thought_limit
        self.threshold = config.thought_threshold

    async def generate_thoughts(
        self, neural_response: "NeuralResponse", quantum_state: "QuantumState"
    ) -> list[ThoughtPattern]:
        gain = 0.5 + 0.5 * quantum_state.coherence
        thoughts = [
            ThoughtPattern(descriptor=p.name, strength=p.activation * gain)
            for p in neural_response.patterns
        ]
        thoughts = [t for t in thoughts if t.strength >= self.threshold]
        thoughts.sort(key=lambda t: (-t.strength, t.descriptor))
        return thoughts[: self.thought_limit]
